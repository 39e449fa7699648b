"""
AI route request bodies and the reply shapes checked before replies go back out
"""
from typing import Annotated, Any, Dict, List, Optional, Union
from pydantic import AfterValidator, ConfigDict, Field, StringConstraints

from .base import CamelModel
from .card import CareerCardData, check_url
from .resume import MAX_RESUME_CHARS


def _require_url(value: str) -> str:
    if not value:
        raise ValueError("Valid portfolio URL is required")
    return check_url(value)


# ============================================================================
# Requests
# ============================================================================

class ParseResumeRequest(CamelModel):
    resume_text: Optional[str] = Field(default=None, max_length=MAX_RESUME_CHARS)
    image_data: Optional[str] = None


class ParseResumeExperienceRequest(CamelModel):
    resume_text: Annotated[str, StringConstraints(min_length=20, max_length=MAX_RESUME_CHARS)]


class PortfolioRequest(CamelModel):
    portfolio_url: Annotated[str, StringConstraints(strip_whitespace=True, max_length=2000), AfterValidator(_require_url)]


class ScoreCardRequest(CamelModel):
    career_card_data: CareerCardData
    company_description: Annotated[str, StringConstraints(min_length=10, max_length=20_000)]
    role_description: Annotated[str, StringConstraints(min_length=10, max_length=20_000)]


# ============================================================================
# Reply shapes (extra keys pass through untouched)
# ============================================================================

class _LooseReply(CamelModel):
    model_config = ConfigDict(extra="allow")


class CardImportReply(_LooseReply):
    profile: Optional[Dict[str, Any]] = None
    experience: Optional[List[Any]] = None
    projects: Optional[List[Any]] = None
    frameworks: Optional[List[Any]] = None
    code_showcase: Optional[List[Any]] = None
    pastimes: Optional[List[Any]] = None
    styles_of_work: Optional[List[Any]] = None
    greatest_impacts: Optional[List[Any]] = None


class ExperienceImportReply(_LooseReply):
    experiences: List[Any] = Field(default_factory=list)
    projects: List[Any] = Field(default_factory=list)


class CategoryScore(_LooseReply):
    score: Union[int, float]
    feedback: str = ""


class ScoreReply(_LooseReply):
    overall_score: Union[int, float]
    category_scores: Optional[Dict[str, CategoryScore]] = None
    strengths: Optional[List[str]] = None
    improvements: Optional[List[str]] = None
    overall_feedback: Optional[str] = None


# ============================================================================
# Portfolio
# ============================================================================

class CodeFile(CamelModel):
    name: str
    path: str
    language: str
    content: str
    repo: str
    url: Optional[str] = None


class PortfolioResponse(CamelModel):
    success: bool = True
    data: Dict[str, Any]
    code_files: List[CodeFile] = Field(default_factory=list)
