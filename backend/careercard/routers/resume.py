"""
Heuristic resume import. No LLM involved, so these work without an API key.
"""
import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ..config import Settings
from ..deps import get_app_settings
from ..schemas.resume import MAX_RESUME_CHARS, ParsedResumeData, ResumeTextRequest, ResumeImportResponse
from ..services.auth import get_current_user
from ..services.resume_parser import analyze_resume, build_resume_card_data
from ..services.text_extraction import UnsupportedResumeFile, resume_file_to_text

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/resume",
    tags=["Resume Import"],
    dependencies=[Depends(get_current_user)]
)


def _import_response(parsed: ParsedResumeData) -> ResumeImportResponse:
    if parsed.is_empty():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Could not find any experience, projects or skills in this resume"
        )
    return ResumeImportResponse(
        experiences=parsed.experiences,
        projects=parsed.projects,
        frameworks=parsed.frameworks,
        card_data=build_resume_card_data(parsed),
    )


@router.post("/parse-text", response_model=ResumeImportResponse)
async def parse_resume_text(payload: ResumeTextRequest):
    return _import_response(await run_in_threadpool(analyze_resume, payload.resume_text))


@router.post("/parse-file", response_model=ResumeImportResponse)
async def parse_resume_file(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_app_settings)
):
    """
    Import from an uploaded PDF or plain text resume.

    PDFs are read from their text layer only; scanned documents come back
    empty and are rejected like any other resume with nothing recognizable.
    Only the first MAX_RESUME_CHARS characters of the extracted text are parsed.
    """
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size must be less than {settings.max_upload_bytes // (1024 * 1024)}MB"
        )

    try:
        text = await run_in_threadpool(resume_file_to_text, file.filename, file.content_type, data)
    except UnsupportedResumeFile as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if len(text) > MAX_RESUME_CHARS:
        logger.info("Resume %s has %d characters, parsing the first %d", file.filename, len(text), MAX_RESUME_CHARS)
        text = text[:MAX_RESUME_CHARS]

    logger.info("Parsing uploaded resume %s (%d bytes)", file.filename, len(data))
    return _import_response(await run_in_threadpool(analyze_resume, text))
