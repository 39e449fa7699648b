"""
Gemini client for the AI import and scoring routes.

Every call returns an AIResult instead of raising: either the JSON object the
model produced, or a message describing what went wrong upstream. Routes call
unwrap() to turn a failure into an UpstreamError for the central handler.
"""
import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type
import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..errors import UpstreamError

logger = logging.getLogger(__name__)

DATA_URL_RE = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)


@dataclass
class AIResult:
    ok: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "AIResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "AIResult":
        return cls(ok=False, error=error)

    def expect(self, model: Type[BaseModel]) -> "AIResult":
        """Check a successful reply against the shape a route promises its caller."""
        if not self.ok:
            return self
        try:
            model.model_validate(self.data)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(part) for part in first["loc"]) or "response"
            return AIResult.failure(f"AI response did not match the expected shape: {where}: {first['msg']}")
        return self

    def unwrap(self) -> Dict[str, Any]:
        if not self.ok:
            raise UpstreamError(self.error or "AI request failed")
        return self.data


def parse_ai_json(text: Optional[str]) -> AIResult:
    """Parse the model's text reply into a JSON object."""
    if not text or not text.strip():
        return AIResult.failure("Unable to parse AI response payload")

    response_text = text.strip()
    # Clean up response if it has markdown code blocks
    if response_text.startswith("```json"):
        response_text = response_text[7:]
    if response_text.startswith("```"):
        response_text = response_text[3:]
    if response_text.endswith("```"):
        response_text = response_text[:-3]
    response_text = response_text.strip()

    try:
        parsed = json.loads(response_text)
    except json.JSONDecodeError as e:
        logger.warning("AI response was not valid JSON: %s", response_text[:200])
        return AIResult.failure(f"AI response was not valid JSON: {e.msg}")

    if not isinstance(parsed, dict):
        return AIResult.failure("AI response was not a JSON object")
    return AIResult.success(parsed)


def text_part(text: str) -> types.Part:
    return types.Part(text=text)


def image_part(data_url: str) -> types.Part:
    """Build an inline image part from a data: URL. Raises ValueError on bad input."""
    match = DATA_URL_RE.match(data_url.strip())
    if not match:
        raise ValueError("Invalid image data format")
    mime_type, payload = match.groups()
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Invalid image data format")
    return types.Part.from_bytes(data=data, mime_type=mime_type)


class GeminiClient:
    """
    Thin async wrapper around google-genai.
    Built once per application in the lifespan handler.
    """

    def __init__(self, api_key: str, model: str, timeout_seconds: float = 60.0):
        self.model = model
        self._client = None
        if api_key:
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
            )
        else:
            logger.warning("GEMINI_API_KEY not set - AI routes will fail until it is configured")

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(settings.gemini_api_key, settings.gemini_model, settings.ai_timeout_seconds)

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def generate_json(self, system_instruction: str, parts: List[types.Part]) -> AIResult:
        if self._client is None:
            return AIResult.failure("GEMINI_API_KEY is not configured")

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=[types.Content(role="user", parts=parts)],
                config=types.GenerateContentConfig(
                    system_instruction=system_instruction,
                    response_mime_type="application/json",
                    temperature=0.2,
                ),
            )
        except genai_errors.APIError as e:
            logger.warning("Gemini request failed: %s %s", e.code, e.message)
            return AIResult.failure(f"Gemini request failed: {e.code} {e.message}")
        except httpx.HTTPError as e:
            logger.warning("Gemini transport error: %s: %s", e.__class__.__name__, e)
            return AIResult.failure(f"Gemini request failed: {e.__class__.__name__} {e}".strip())

        return parse_ai_json(response.text)
