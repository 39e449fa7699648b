"""
System instructions for the Gemini-backed routes.
"""

CARD_SHAPE = """{
  "profile": {"name": string, "title": string, "location": string, "imageUrl": "", "portfolioUrl": string},
  "experience": [{"title": string, "company": string, "period": string, "description": string}],
  "projects": [{"name": string, "description": string, "technologies": "comma, separated, list", "projectUrl": string}],
  "frameworks": [{"name": string, "proficiency": "Beginner" | "Intermediate" | "Advanced" | "Expert", "projectsBuilt": string}],
  "codeShowcase": [{"fileName": string, "language": string, "code": string, "caption": string}],
  "pastimes": [{"activity": string, "description": string}],
  "stylesOfWork": [{"question": string, "selectedAnswer": string}],
  "greatestImpacts": [{"title": string, "context": string, "outcome": string}]
}"""

PARSE_RESUME_PROMPT = f"""You extract structured data for a career card.
Always respond with a single valid JSON object with exactly these keys:

{CARD_SHAPE}

Rules:
- Use empty strings or empty arrays for anything the source does not contain. Never invent facts.
- Keep names and titles under 100 characters and descriptions under 2000 characters.
- At most 20 experience entries, 20 projects, 30 frameworks, 10 pastimes, 10 greatestImpacts.
- Periods look like "Jan 2020 - Present".
"""

PARSE_RESUME_TEXT_INSTRUCTION = (
    "Resume text:\n{resume_text}\n\n"
    "Return structured JSON with profile, experience, frameworks, projects, codeShowcase, "
    "pastimes, stylesOfWork, greatestImpacts."
)

PARSE_RESUME_IMAGE_INSTRUCTION = (
    "Extract all visible information from this image and return the structured JSON "
    "described in the instructions."
)

PARSE_EXPERIENCE_PROMPT = """You extract work experience and project entries from resumes.
Always return a JSON object of the form:

{
  "experiences": [{"title": string, "company": string, "period": string, "description": string}],
  "projects": [{"name": string, "description": string, "technologies": "comma, separated, list"}]
}

Use empty arrays when nothing is found. Do not invent entries.
"""

PARSE_EXPERIENCE_INSTRUCTION = (
    "Extract structured work experience entries AND project entries from this resume text. "
    "Resume:\n{resume_text}"
)

PARSE_PORTFOLIO_PROMPT = """You analyze developer portfolios and return structured data.
Respond with a JSON object containing:

{
  "profile": {"name": string, "title": string, "location": string, "summary": string},
  "projects": [{"name": string, "description": string, "technologies": "comma, separated, list", "projectUrl": string}],
  "frameworks": [{"name": string, "proficiency": "Beginner" | "Intermediate" | "Advanced" | "Expert"}]
}
"""

PARSE_PORTFOLIO_INSTRUCTION = (
    "Portfolio URL: {portfolio_url}\n\nContent:\n{content}\n\n"
    "Summarize into structured JSON containing profile highlights, notable projects, "
    "and frameworks/technologies."
)

SCORE_CARD_PROMPT = """You are an interviewing assistant that scores how well a career card fits a company and role.
Respond with a JSON object:

{
  "overallScore": number,
  "categoryScores": {
    "technicalSkills": {"score": number, "feedback": string},
    "experience": {"score": number, "feedback": string},
    "culturalFit": {"score": number, "feedback": string},
    "projectAlignment": {"score": number, "feedback": string}
  },
  "strengths": [string],
  "improvements": [string],
  "overallFeedback": string
}

All scores are integers between 0 and 100. Feedback must be specific and actionable.
"""

SCORE_CARD_INSTRUCTION = (
    "Company description: {company_description}\n"
    "Role description: {role_description}\n"
    "Career card data: {card_json}"
)
