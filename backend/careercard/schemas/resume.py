"""
Schemas for heuristic resume imports
"""
from typing import Any, Dict, List
from pydantic import Field

from .base import CamelModel

MAX_RESUME_CHARS = 100_000


class ParsedExperience(CamelModel):
    id: str
    title: str
    company: str = ""
    period: str = ""
    description: str = ""


class ParsedProject(CamelModel):
    id: str
    name: str
    description: str = ""
    technologies: str = ""  # comma-separated, as stored on the card
    project_url: str = ""


class ParsedFramework(CamelModel):
    id: str
    name: str
    proficiency: str


class ParsedResumeData(CamelModel):
    experiences: List[ParsedExperience] = Field(default_factory=list)
    projects: List[ParsedProject] = Field(default_factory=list)
    frameworks: List[ParsedFramework] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.experiences or self.projects or self.frameworks)


class ResumeTextRequest(CamelModel):
    resume_text: str = Field(max_length=MAX_RESUME_CHARS)


class ResumeImportResponse(ParsedResumeData):
    card_data: Dict[str, Any]
