"""
Resume API endpoints

Handles:
- Resume upload and parsing (PDF or TXT)
"""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from voiceinterview.api.dependencies import get_resume_parser
from voiceinterview.core.resume_parser import ResumeExtractionError, ResumeValidationError
from voiceinterview.models.resume import ParsedResume

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/parse", response_model=ParsedResume)
async def parse_resume(resume: UploadFile = File(...)) -> ParsedResume:
    """
    Parse an uploaded resume.

    Falls back to a heuristic parse when the model is unavailable, so a
    readable file always yields a result.
    """
    data = await resume.read()
    logger.info(f"Resume upload: {resume.filename} ({resume.content_type}, {len(data)} bytes)")

    try:
        parser = get_resume_parser()
        return await parser.parse_upload(resume.filename or "", resume.content_type, data)

    except (ResumeValidationError, ResumeExtractionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
