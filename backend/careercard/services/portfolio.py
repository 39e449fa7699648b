"""
Portfolio import - page text for the LLM plus GitHub code samples.

All requests go through the application's shared httpx.AsyncClient, which
carries the User-Agent header and the fetch timeout.
"""
import logging
import re
from typing import List, Optional
from urllib.parse import urlparse
import httpx
from bs4 import BeautifulSoup

from ..errors import UpstreamError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
CODE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".py", ".go", ".rs", ".java", ".kt", ".swift", ".cs")

MAX_REPOS = 5
MAX_FILES_PER_REPO = 3
MAX_FILE_CHARS = 2000
MAX_PAGE_CHARS = 15_000


def github_username(portfolio_url: str) -> Optional[str]:
    """Return the account name for github.com URLs, None for any other host."""
    parsed = urlparse(portfolio_url)
    host = (parsed.hostname or "").lower()
    if host != "github.com" and not host.endswith(".github.com"):
        return None
    segments = [segment for segment in parsed.path.split("/") if segment]
    return segments[0] if segments else None


async def fetch_github_code_samples(client: httpx.AsyncClient, username: str) -> List[dict]:
    """
    Collect a few source files from the user's most recently updated repos.

    Anything the code host refuses or fails on is skipped; this never raises
    for upstream problems.
    """
    code_files: List[dict] = []

    try:
        repos_response = await client.get(
            f"{GITHUB_API_URL}/users/{username}/repos",
            params={"sort": "updated", "per_page": 10},
        )
    except httpx.HTTPError as e:
        logger.warning("GitHub repo listing failed for %s: %s", username, e)
        return code_files

    if not repos_response.is_success:
        logger.warning("GitHub repo listing for %s returned %s", username, repos_response.status_code)
        return code_files

    try:
        repos = repos_response.json()
    except ValueError:
        return code_files
    if not isinstance(repos, list):
        return code_files

    for repo in repos[:MAX_REPOS]:
        repo_name = repo.get("name") if isinstance(repo, dict) else None
        if not repo_name:
            continue
        try:
            contents_response = await client.get(f"{GITHUB_API_URL}/repos/{username}/{repo_name}/contents")
            if not contents_response.is_success:
                continue
            contents = contents_response.json()
            if not isinstance(contents, list):
                continue

            files = [
                item for item in contents
                if isinstance(item, dict)
                and item.get("type") == "file"
                and str(item.get("name", "")).endswith(CODE_EXTENSIONS)
                and item.get("download_url")
            ][:MAX_FILES_PER_REPO]

            for item in files:
                file_response = await client.get(item["download_url"])
                if not file_response.is_success:
                    continue
                file_name = item["name"]
                code_files.append({
                    "name": file_name,
                    "path": f"{repo_name}/{file_name}",
                    "language": file_name.rsplit(".", 1)[-1] if "." in file_name else "text",
                    "content": file_response.text[:MAX_FILE_CHARS],
                    "repo": repo_name,
                    "url": item.get("html_url"),
                })
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Error fetching GitHub contents for %s/%s: %s", username, repo_name, e)

    return code_files


def extract_visible_text(html: str) -> str:
    """Strip scripts, styles and markup, collapse whitespace, cap the length."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = re.sub(r"\s+", " ", soup.get_text(" ")).strip()
    return text[:MAX_PAGE_CHARS]


async def fetch_portfolio_text(client: httpx.AsyncClient, portfolio_url: str) -> str:
    """Fetch the portfolio page itself. Failing here fails the whole import."""
    try:
        response = await client.get(portfolio_url, follow_redirects=True)
    except httpx.TimeoutException:
        raise UpstreamError("Unable to fetch portfolio: request timed out", status_code=502)
    except httpx.HTTPError as e:
        raise UpstreamError(f"Unable to fetch portfolio: {e.__class__.__name__}", status_code=502)

    if not response.is_success:
        raise UpstreamError(f"Unable to fetch portfolio: {response.status_code}", status_code=502)

    return extract_visible_text(response.text)
