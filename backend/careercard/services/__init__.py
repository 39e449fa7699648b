from .auth import (
    verify_password,
    get_password_hash,
    authenticate_user,
    create_session,
    delete_session,
    get_current_user
)
from .gemini import (
    AIResult,
    GeminiClient,
    parse_ai_json
)
from .portfolio import (
    github_username,
    fetch_github_code_samples,
    fetch_portfolio_text,
    extract_visible_text
)
from .resume_parser import (
    analyze_resume,
    extract_experiences_and_projects,
    build_resume_card_data
)
from .text_extraction import (
    UnsupportedResumeFile,
    resume_file_to_text
)

__all__ = [
    # Auth
    "verify_password",
    "get_password_hash",
    "authenticate_user",
    "create_session",
    "delete_session",
    "get_current_user",
    # Gemini
    "AIResult",
    "GeminiClient",
    "parse_ai_json",
    # Portfolio import
    "github_username",
    "fetch_github_code_samples",
    "fetch_portfolio_text",
    "extract_visible_text",
    # Resume parsing
    "analyze_resume",
    "extract_experiences_and_projects",
    "build_resume_card_data",
    "UnsupportedResumeFile",
    "resume_file_to_text"
]
