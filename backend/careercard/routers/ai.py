"""
Gemini-backed import and scoring routes.

Replies are passed through verbatim once they parse as a JSON object of the
expected shape; any upstream failure surfaces as {"error": ...} with status 500.
"""
import json
import logging
import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_ai_client, get_http_client
from ..schemas.ai import (
    ParseResumeRequest, ParseResumeExperienceRequest, PortfolioRequest, ScoreCardRequest,
    CardImportReply, ExperienceImportReply, ScoreReply, PortfolioResponse
)
from ..services.ai_prompts import (
    PARSE_RESUME_PROMPT, PARSE_RESUME_TEXT_INSTRUCTION, PARSE_RESUME_IMAGE_INSTRUCTION,
    PARSE_EXPERIENCE_PROMPT, PARSE_EXPERIENCE_INSTRUCTION,
    PARSE_PORTFOLIO_PROMPT, PARSE_PORTFOLIO_INSTRUCTION,
    SCORE_CARD_PROMPT, SCORE_CARD_INSTRUCTION
)
from ..services.auth import get_current_user
from ..services.gemini import GeminiClient, image_part, text_part
from ..services.portfolio import fetch_github_code_samples, fetch_portfolio_text, github_username

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/ai",
    tags=["AI"],
    dependencies=[Depends(get_current_user)]
)


@router.post("/parse-resume")
async def parse_resume(
    payload: ParseResumeRequest,
    ai: GeminiClient = Depends(get_ai_client)
):
    """Full career card from resume text or a screenshot of one (data: URL)"""
    has_text = bool(payload.resume_text and payload.resume_text.strip())
    has_image = bool(payload.image_data)
    if has_text == has_image:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide resume text or an image to parse"
        )

    if has_image:
        try:
            parts = [image_part(payload.image_data), text_part(PARSE_RESUME_IMAGE_INSTRUCTION)]
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        parts = [text_part(PARSE_RESUME_TEXT_INSTRUCTION.format(resume_text=payload.resume_text))]

    result = await ai.generate_json(PARSE_RESUME_PROMPT, parts)
    return result.expect(CardImportReply).unwrap()


@router.post("/parse-resume-experience")
async def parse_resume_experience(
    payload: ParseResumeExperienceRequest,
    ai: GeminiClient = Depends(get_ai_client)
):
    result = await ai.generate_json(
        PARSE_EXPERIENCE_PROMPT,
        [text_part(PARSE_EXPERIENCE_INSTRUCTION.format(resume_text=payload.resume_text))]
    )
    return result.expect(ExperienceImportReply).unwrap()


@router.post("/parse-portfolio", response_model=PortfolioResponse)
async def parse_portfolio(
    payload: PortfolioRequest,
    ai: GeminiClient = Depends(get_ai_client),
    http: httpx.AsyncClient = Depends(get_http_client)
):
    """
    Summarize a portfolio page with the model.

    GitHub profile URLs additionally pull a handful of source files from the
    user's recently updated repositories. Those lookups are best effort; the
    page fetch itself is not.
    """
    code_files = []
    username = github_username(payload.portfolio_url)
    if username:
        code_files = await fetch_github_code_samples(http, username)
        logger.info("Collected %d code samples for %s", len(code_files), username)

    content = await fetch_portfolio_text(http, payload.portfolio_url)

    result = await ai.generate_json(
        PARSE_PORTFOLIO_PROMPT,
        [text_part(PARSE_PORTFOLIO_INSTRUCTION.format(portfolio_url=payload.portfolio_url, content=content))]
    )
    return PortfolioResponse(data=result.unwrap(), code_files=code_files)


@router.post("/score-career-card")
async def score_career_card(
    payload: ScoreCardRequest,
    ai: GeminiClient = Depends(get_ai_client)
):
    card_json = json.dumps(payload.career_card_data.to_storage())
    result = await ai.generate_json(
        SCORE_CARD_PROMPT,
        [text_part(SCORE_CARD_INSTRUCTION.format(
            company_description=payload.company_description,
            role_description=payload.role_description,
            card_json=card_json,
        ))]
    )
    return result.expect(ScoreReply).unwrap()
