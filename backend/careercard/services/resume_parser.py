"""
Heuristic resume parser.

Turns plain resume text (pasted, or extracted from a PDF) into career card
experience, project and framework entries using keyword tables and regexes.
No network or database access: the same text always yields the same entries
(apart from the generated ids). Malformed input never raises, the worst case
is an empty result.
"""
import re
import uuid
from typing import Dict, List, Optional, Tuple

from ..schemas.resume import ParsedExperience, ParsedFramework, ParsedProject, ParsedResumeData


# ============================================================================
# Keyword tables
# ============================================================================

GENERAL = "general"
EXPERIENCE = "experience"
PROJECTS = "projects"
SKILLS = "skills"

# Heading lines (lowercased, trailing colon removed) that switch sections.
# Headings of sections we don't extract from send lines back to "general".
SECTION_PATTERNS: Dict[str, List[re.Pattern]] = {
    EXPERIENCE: [
        re.compile(r"(work |professional |relevant )?experience"),
        re.compile(r"employment( history)?"),
        re.compile(r"work history"),
        re.compile(r"leadership( experience)?"),
        re.compile(r"volunteer(ing)?( experience)?"),
        re.compile(r"community( involvement)?"),
    ],
    PROJECTS: [
        re.compile(r"(personal |selected |academic |side )?projects"),
        re.compile(r"project experience"),
    ],
    SKILLS: [
        re.compile(r"(technical |core )?skills"),
        re.compile(r"skills (&|and) (tools|technologies)"),
        re.compile(r"tech(nical)? stack"),
        re.compile(r"(tools (&|and) )?technologies"),
    ],
    GENERAL: [
        re.compile(r"education"),
        re.compile(r"certifications?"),
        re.compile(r"(professional )?summary"),
        re.compile(r"objective"),
        re.compile(r"awards?( (&|and) honors)?"),
        re.compile(r"interests"),
    ],
}

ROLE_KEYWORDS = [
    "engineer", "developer", "designer", "manager", "lead", "consultant",
    "specialist", "architect", "intern", "analyst", "president", "founder",
    "co-founder", "volunteer", "director", "chair", "researcher",
    "instructor", "teacher", "assistant",
]

PROJECT_KEYWORDS = [
    "project", "built", "developed", "created", "designed", "launched",
    "implemented", "tool", "platform", "application", "app", "system",
    "automation", "framework", "hackathon", "challenge", "ctf", "prototype",
]

TECH_KEYWORDS = [
    "JavaScript", "TypeScript", "React", "Next.js", "Node.js", "Python",
    "Django", "Flask", "FastAPI", "Go", "Rust", "Java", "Spring", "Kotlin",
    "Swift", "C++", "C#", ".NET", "PHP", "Laravel", "Ruby", "Rails", "AWS",
    "Azure", "GCP", "Kubernetes", "Docker", "PostgreSQL", "MySQL", "MongoDB",
    "Redis", "GraphQL", "REST", "Tailwind CSS", "Sass", "HTML", "CSS", "SQL",
    "NoSQL", "Firebase", "Unity", "TensorFlow", "PyTorch", "Terraform",
]

DEFAULT_PROFICIENCY = "Intermediate"

_MONTH = (
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
)
DATE_RANGE_RE = re.compile(
    rf"\b((?:{_MONTH})\.?\s+\d{{4}}|Q[1-4]\s+\d{{4}}|\d{{4}})"
    r"\s*(?:-|–|to|through|present|current)\s*"
    rf"(Present|Current|(?:{_MONTH})\.?\s+\d{{4}}|\d{{4}})",
    re.IGNORECASE,
)

# Swallows a newline right before the glyph so line-leading bullets stay attached
BULLET_GLYPHS_RE = re.compile(r"\n?[ \t]*[•‣●○◉■][ \t]*")
BULLET_LINE_RE = re.compile(r"^[-•*]")
BULLET_PREFIX_RE = re.compile(r"^[-•*]\s*")
LEADERSHIP_RE = re.compile(r"\b(leadership|club|president|chair|captain|volunteer|mentor|head|director)\b", re.IGNORECASE)
COMPETITION_RE = re.compile(r"\b(ctf|hackathon|challenge|competition)\b", re.IGNORECASE)
TITLE_COMPANY_RE = re.compile(r"(.+?)(?:\s+at|\s+@|\s+-|\s+–|\s+\|)\s+(.+)", re.IGNORECASE)
COMPANY_LINE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9 &,.]{2,}$")
PROJECT_NAME_DELIMITER_RE = re.compile(r"(.+?)(?:\s+[–-]\s+|\s*:\s+)")

# Whole-token matching so "Java" does not fire on "JavaScript" or "Go" on "Google"
_TECH_PATTERNS = [
    (keyword, re.compile(rf"(?<![A-Za-z0-9+#.]){re.escape(keyword)}(?![A-Za-z0-9+#])", re.IGNORECASE))
    for keyword in TECH_KEYWORDS
]

MAX_NAME_CHARS = 100
MAX_DESCRIPTION_CHARS = 1990


# ============================================================================
# Public API
# ============================================================================

def analyze_resume(resume_text: Optional[str]) -> ParsedResumeData:
    """
    Split resume text into experience, project and framework entries.

    Section-scoped lines are tried first; when a section yields nothing the
    untagged ("general") lines are parsed instead, which recovers resumes
    that have no headings at all.
    """
    sections = split_into_sections(normalize_resume_text(resume_text or ""))

    experiences = parse_experience_blocks(sections[EXPERIENCE])
    if not experiences:
        experiences = parse_experience_blocks(sections[GENERAL])

    projects = parse_project_blocks(sections[PROJECTS])
    if not projects:
        projects = parse_project_blocks(sections[GENERAL])

    frameworks = parse_frameworks(sections[SKILLS])
    if not frameworks:
        frameworks = parse_frameworks(sections[GENERAL])

    return ParsedResumeData(experiences=experiences, projects=projects, frameworks=frameworks)


def extract_experiences_and_projects(resume_text: Optional[str]) -> dict:
    parsed = analyze_resume(resume_text)
    return {
        "experiences": [entry.model_dump(by_alias=True) for entry in parsed.experiences],
        "projects": [entry.model_dump(by_alias=True) for entry in parsed.projects],
    }


def build_resume_card_data(parsed: ParsedResumeData) -> dict:
    """Wrap parsed entries into a complete, blank career card payload."""
    return {
        "profile": {
            "name": "",
            "title": "",
            "location": "",
            "imageUrl": "",
            "portfolioUrl": "",
        },
        "theme": "blue",
        "experience": [entry.model_dump(by_alias=True) for entry in parsed.experiences[:20]],
        "projects": [entry.model_dump(by_alias=True) for entry in parsed.projects[:20]],
        "frameworks": [entry.model_dump(by_alias=True) for entry in parsed.frameworks[:30]],
        "greatestImpacts": [],
        "stylesOfWork": [],
        "pastimes": [],
        "codeShowcase": [],
    }


# ============================================================================
# Normalization & sections
# ============================================================================

def match_section_heading(line: str) -> Optional[str]:
    """Return the section a heading line opens, or None for ordinary lines."""
    normalized = re.sub(r"\s+", " ", line.strip().rstrip(":").strip()).lower()
    if not normalized:
        return None
    for section, patterns in SECTION_PATTERNS.items():
        if any(pattern.fullmatch(normalized) for pattern in patterns):
            return section
    return None


def normalize_resume_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = BULLET_GLYPHS_RE.sub("\n• ", text)

    # Pad headings with blank lines so they always start a new block
    lines = []
    for line in text.split("\n"):
        if match_section_heading(line):
            lines.extend(["", line.strip().rstrip(":").strip(), ""])
        else:
            lines.append(line)
    text = "\n".join(lines)

    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def split_into_sections(text: str) -> Dict[str, List[str]]:
    sections: Dict[str, List[str]] = {GENERAL: [], EXPERIENCE: [], PROJECTS: [], SKILLS: []}
    current = GENERAL

    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            # Blank lines carry block boundaries
            sections[current].append("")
            continue

        heading = match_section_heading(trimmed)
        if heading:
            current = heading
            continue

        sections[current].append(trimmed)

    return sections


# ============================================================================
# Block segmentation
# ============================================================================

def is_bullet_line(line: str) -> bool:
    return bool(BULLET_LINE_RE.match(line.strip()))


def is_period_line(line: str) -> bool:
    """True for lines holding nothing but a date range, e.g. "Jan 2020 - Present"."""
    match = DATE_RANGE_RE.search(line)
    return bool(match) and not _strip_period(line, match.group(0))


def is_entry_header(line: str, kind: str) -> bool:
    if is_bullet_line(line):
        return False

    if DATE_RANGE_RE.search(line):
        return True

    lower = line.lower()
    if kind == EXPERIENCE:
        if any(keyword in lower for keyword in ROLE_KEYWORDS):
            return True
        if LEADERSHIP_RE.search(line):
            return True
    else:
        if any(keyword in lower for keyword in PROJECT_KEYWORDS):
            return True
        if COMPETITION_RE.search(line):
            return True
        if (re.search(r"[-—]", line) or ":" in line) and len(line) < 140:
            return True

    return False


class _Block:
    """Lines of one entry plus what has been seen in them so far."""

    def __init__(self):
        self.lines: List[str] = []
        self.has_period = False
        self.only_periods = True
        self.has_body = False

    def add(self, line: str, period_line: bool):
        self.lines.append(line)
        self.has_period = self.has_period or bool(DATE_RANGE_RE.search(line))
        self.only_periods = self.only_periods and period_line
        self.has_body = self.has_body or is_bullet_line(line)

    def joins(self, period_line: bool) -> bool:
        # A bare date line belongs to the header lines above it while that
        # entry has neither dates nor bullets; a header line belongs to a
        # block holding a single date line.
        if period_line:
            return not self.has_period and not self.has_body
        return self.only_periods


def segment_entry_blocks(lines: List[str], kind: str) -> List[List[str]]:
    blocks: List[List[str]] = []
    current = _Block()

    for line in lines:
        trimmed = line.strip()
        if not trimmed or match_section_heading(trimmed):
            if current.lines:
                blocks.append(current.lines)
                current = _Block()
            continue

        period_line = is_period_line(trimmed)
        if current.lines and is_entry_header(trimmed, kind) and not current.joins(period_line):
            blocks.append(current.lines)
            current = _Block()

        current.add(trimmed, period_line)

    if current.lines:
        blocks.append(current.lines)
    return blocks


# ============================================================================
# Entry construction
# ============================================================================

def looks_like_experience(block_text: str) -> bool:
    lower = block_text.lower()
    return bool(DATE_RANGE_RE.search(block_text)) or any(keyword in lower for keyword in ROLE_KEYWORDS)


def looks_like_project(block_text: str) -> bool:
    lower = block_text.lower()
    return any(keyword in lower for keyword in PROJECT_KEYWORDS)


def parse_experience_blocks(lines: List[str]) -> List[ParsedExperience]:
    experiences = []
    for block in segment_entry_blocks(lines, EXPERIENCE):
        if not looks_like_experience("\n".join(block)):
            continue
        entry = build_experience(block)
        if entry:
            experiences.append(entry)
    return experiences


def parse_project_blocks(lines: List[str]) -> List[ParsedProject]:
    projects = []
    for block in segment_entry_blocks(lines, PROJECTS):
        if not looks_like_project("\n".join(block)):
            continue
        entry = build_project(block)
        if entry:
            projects.append(entry)
    return projects


def parse_frameworks(lines: List[str]) -> List[ParsedFramework]:
    return [
        ParsedFramework(id=str(uuid.uuid4()), name=name, proficiency=DEFAULT_PROFICIENCY)
        for name in extract_technologies(" ".join(lines))
    ]


def build_experience(block: List[str]) -> Optional[ParsedExperience]:
    lines = [line.strip() for line in block if line.strip()]
    if not lines:
        return None

    header = lines.pop(0)
    # First date range wins: the header's own, otherwise the first in the block
    match = DATE_RANGE_RE.search(header) or DATE_RANGE_RE.search("\n".join(lines))
    period = ""
    if match:
        period = _collapse_whitespace(match.group(0))
        header = _strip_period(header, match.group(0))
        lines = [line for line in lines if _strip_period(line, match.group(0))]

    if not header and lines:
        header = lines.pop(0)
    if not header:
        return None

    title, company, used_next_line = split_title_company(header, lines[0] if lines else None)
    if used_next_line:
        lines.pop(0)

    return ParsedExperience(
        id=str(uuid.uuid4()),
        title=_truncate(title or "Experience", MAX_NAME_CHARS),
        company=_truncate(company, MAX_NAME_CHARS),
        period=_truncate(period, MAX_NAME_CHARS),
        description=_truncate(_collapse_whitespace(" ".join(lines)), MAX_DESCRIPTION_CHARS),
    )


def build_project(block: List[str]) -> Optional[ParsedProject]:
    lines = [line.strip() for line in block if line.strip()]
    if not lines:
        return None

    name_line = lines[0]
    description = format_project_description(lines[1:])
    technologies = extract_technologies("\n".join(lines))

    return ParsedProject(
        id=str(uuid.uuid4()),
        name=format_project_name(name_line),
        description=description,
        technologies=", ".join(technologies),
    )


def split_title_company(header: str, possible_company: Optional[str] = None) -> Tuple[str, str, bool]:
    """
    Split "<title> at|@|-|| <company>" headers.

    Falls back to treating the following line as the company when it looks
    like a plain name. The third value says whether that line was consumed.
    """
    header = _collapse_whitespace(header)
    match = TITLE_COMPANY_RE.match(header)
    if match:
        return match.group(1).strip(), match.group(2).strip(), False

    if possible_company and COMPANY_LINE_RE.match(possible_company):
        return header.strip(), possible_company.strip(), True

    return header.strip(), "", False


def format_project_name(raw: str) -> str:
    without_bullet = _collapse_whitespace(BULLET_PREFIX_RE.sub("", raw))
    if not without_bullet:
        return "Project"

    delimiter = PROJECT_NAME_DELIMITER_RE.match(without_bullet)
    base = delimiter.group(1) if delimiter else without_bullet
    formatted = title_case(base.strip())

    if len(formatted) > MAX_NAME_CHARS:
        formatted = formatted[:97].strip() + "..."

    return formatted or "Project"


def format_project_description(lines: List[str]) -> str:
    formatted = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if BULLET_LINE_RE.match(line):
            line = "• " + BULLET_PREFIX_RE.sub("", line)
        formatted.append(line)

    description = "\n".join(formatted)
    if len(description) > MAX_DESCRIPTION_CHARS:
        description = description[:MAX_DESCRIPTION_CHARS].rstrip() + "..."
    return description


def extract_technologies(text: str) -> List[str]:
    """Vocabulary matches in order of first appearance in the text."""
    found = []
    for keyword, pattern in _TECH_PATTERNS:
        match = pattern.search(text)
        if match:
            found.append((match.start(), keyword))
    found.sort(key=lambda item: item[0])
    return [keyword for _, keyword in found]


def title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" "))


# ============================================================================
# Helpers
# ============================================================================

def _collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def _strip_period(line: str, period_text: str) -> str:
    """Remove a date range from a line along with the separators it leaves behind."""
    if period_text not in line:
        return line
    remainder = _collapse_whitespace(line.replace(period_text, " ", 1))
    return remainder.strip(" |,;()[]–-").strip()


def _truncate(value: str, limit: int) -> str:
    if len(value) > limit:
        return value[:limit - 3].rstrip() + "..."
    return value
