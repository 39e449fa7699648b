"""
Career card payload schema and card API envelopes.

The payload is stored as JSON exactly as the client sent it (minus unknown
keys), so every field keeps its camelCase wire name.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional
from urllib.parse import urlparse
from pydantic import AfterValidator, Field, StringConstraints

from .base import CamelModel

ShortString = Annotated[str, StringConstraints(max_length=100)]
MediumString = Annotated[str, StringConstraints(max_length=500)]
LongString = Annotated[str, StringConstraints(max_length=2000)]
CodeString = Annotated[str, StringConstraints(max_length=50_000)]


def check_url(value: str) -> str:
    if value == "":
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL format")
    return value


# Either a URL or the empty string
UrlString = Annotated[str, StringConstraints(max_length=500), AfterValidator(check_url)]


class Theme(str, Enum):
    BLUE = "blue"
    PURPLE = "purple"
    GREEN = "green"
    ORANGE = "orange"
    PINK = "pink"
    SLATE = "slate"


class Proficiency(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


# ============================================================================
# Payload sections
# ============================================================================

class ProfileSection(CamelModel):
    name: ShortString
    title: ShortString
    location: ShortString = ""
    image_url: UrlString = ""
    portfolio_url: UrlString = ""


class ExperienceEntry(CamelModel):
    id: Optional[str] = None
    title: ShortString
    company: ShortString
    period: ShortString
    description: LongString


class ProjectEntry(CamelModel):
    id: Optional[str] = None
    name: ShortString
    description: LongString
    technologies: MediumString
    project_url: UrlString = ""


class GreatestImpactEntry(CamelModel):
    id: Optional[str] = None
    title: ShortString
    context: LongString
    outcome: LongString = ""


class StyleOfWorkEntry(CamelModel):
    id: Optional[str] = None
    question: MediumString
    selected_answer: MediumString


class FrameworkEntry(CamelModel):
    id: Optional[str] = None
    name: ShortString
    proficiency: Proficiency
    projects_built: ShortString = ""


class PastimeEntry(CamelModel):
    id: Optional[str] = None
    activity: ShortString
    description: LongString


class CodeShowcaseEntry(CamelModel):
    id: Optional[str] = None
    file_name: ShortString
    language: ShortString
    repo: ShortString = ""
    url: UrlString = ""
    caption: MediumString = ""
    code: CodeString


# List name -> maximum number of entries
LIST_LIMITS = {
    "experience": 20,
    "projects": 20,
    "greatestImpacts": 10,
    "stylesOfWork": 20,
    "frameworks": 30,
    "pastimes": 10,
    "codeShowcase": 10,
}


class CareerCardData(CamelModel):
    profile: ProfileSection
    theme: Optional[Theme] = None
    experience: List[ExperienceEntry] = Field(max_length=LIST_LIMITS["experience"])
    projects: List[ProjectEntry] = Field(max_length=LIST_LIMITS["projects"])
    greatest_impacts: List[GreatestImpactEntry] = Field(max_length=LIST_LIMITS["greatestImpacts"])
    styles_of_work: List[StyleOfWorkEntry] = Field(max_length=LIST_LIMITS["stylesOfWork"])
    frameworks: List[FrameworkEntry] = Field(max_length=LIST_LIMITS["frameworks"])
    pastimes: List[PastimeEntry] = Field(max_length=LIST_LIMITS["pastimes"])
    code_showcase: List[CodeShowcaseEntry] = Field(max_length=LIST_LIMITS["codeShowcase"])

    def to_storage(self) -> Dict[str, Any]:
        """
        Dump to the JSON stored in career_cards.card_data.

        Only fields the client actually sent are kept, and list entries
        without an id get a generated one.
        """
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        for key in LIST_LIMITS:
            for entry in data.get(key, []):
                if not entry.get("id"):
                    entry["id"] = str(uuid.uuid4())
        return data


def normalize_stored_card(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Fill lists added after a card was written so older payloads read cleanly."""
    normalized = dict(data or {})
    for key in LIST_LIMITS:
        normalized.setdefault(key, [])
    return normalized


# ============================================================================
# Request / Response envelopes
# ============================================================================

class CardWriteRequest(CamelModel):
    card_data: CareerCardData


class CardCreatedResponse(CamelModel):
    id: str
    edit_token: str
    created_at: datetime
    updated_at: datetime


class CardResponse(CamelModel):
    id: str
    card_data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime


class CardListResponse(CamelModel):
    cards: List[CardResponse]


class LatestCardResponse(CamelModel):
    id: Optional[str] = None
    card_data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
