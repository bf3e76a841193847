"""
Resume Parser - turns an uploaded resume into a ParsedResume.

Pipeline:
    validate upload → extract text (PDF via pypdf, or plain text) → structure with the model

When the model is unavailable or returns unusable JSON, a heuristic parse
(email, phone, common skills) is returned so the interview can still start.
"""

import io
import json
import logging
import re

from pydantic import ValidationError
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from voiceinterview.config.settings import get_settings
from voiceinterview.core.llm_gateway import CompletionGateway, parse_json_object
from voiceinterview.models.resume import ParsedResume, PersonalInfo, ResumeFeedback
from voiceinterview.prompts.resume import ResumePrompts

logger = logging.getLogger(__name__)

PARSE_TEMPERATURE = 0.3

ALLOWED_CONTENT_TYPES = {"application/pdf", "text/plain"}
ALLOWED_EXTENSIONS = (".pdf", ".txt")

COMMON_SKILLS = [
    "JavaScript", "Python", "Java", "React", "Node.js", "HTML", "CSS",
    "TypeScript", "SQL", "Git", "Docker", "AWS", "MongoDB", "Express",
]

_EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_PHONE_PATTERN = re.compile(r"(?:\+?1[-.\s]?)?\(?\b\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b")


class ResumeValidationError(ValueError):
    """Raised when an upload is too large or not a PDF/TXT file."""
    pass


class ResumeExtractionError(ValueError):
    """Raised when no text can be extracted from an upload."""
    pass


class ResumeParser:
    """Validates, extracts and structures resumes."""

    def __init__(self, gateway: CompletionGateway):
        self.gateway = gateway
        self.settings = get_settings()
        self.prompts = ResumePrompts()

    # =========================================================================
    # UPLOAD HANDLING
    # =========================================================================

    def validate_file(self, filename: str, content_type: str | None, size: int) -> None:
        """
        Check upload size and type.

        Raises:
            ResumeValidationError: If the file is rejected
        """
        max_bytes = self.settings.max_resume_bytes
        if size > max_bytes:
            raise ResumeValidationError(
                f"File size must be less than {max_bytes // (1024 * 1024)}MB"
            )

        has_valid_type = content_type in ALLOWED_CONTENT_TYPES
        has_valid_extension = (filename or "").lower().endswith(ALLOWED_EXTENSIONS)
        if not has_valid_type and not has_valid_extension:
            raise ResumeValidationError("Please upload a PDF or TXT file")

    def extract_text(self, filename: str, content_type: str | None, data: bytes) -> str:
        """
        Extract plain text from a PDF or TXT upload.

        Raises:
            ResumeExtractionError: If the file cannot be read or holds no text
        """
        name = (filename or "").lower()

        if content_type == "application/pdf" or name.endswith(".pdf"):
            text = self._extract_pdf_text(data)
        elif content_type == "text/plain" or name.endswith(".txt"):
            text = data.decode("utf-8", errors="replace")
        else:
            raise ResumeExtractionError("Unsupported file type")

        if not text.strip():
            raise ResumeExtractionError("No text found in file")

        logger.info(f"Extracted {len(text)} characters from {filename}")
        return text

    def _extract_pdf_text(self, data: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PyPdfError, ValueError, OSError) as e:
            logger.error(f"PDF parsing failed: {e}")
            raise ResumeExtractionError(f"PDF parsing failed: {e}") from e
        return "\n".join(pages).strip()

    async def parse_upload(self, filename: str, content_type: str | None, data: bytes) -> ParsedResume:
        """Validate, extract and parse an uploaded resume."""
        self.validate_file(filename, content_type, len(data))
        text = self.extract_text(filename, content_type, data)
        return await self.parse(text)

    # =========================================================================
    # STRUCTURING
    # =========================================================================

    async def parse(self, resume_text: str) -> ParsedResume:
        """
        Structure resume text with the model.

        Args:
            resume_text: Plain resume text

        Returns:
            ParsedResume; raw_text is always the input text
        """
        try:
            response = await self.gateway.generate_completion(
                self.prompts.system_prompt(),
                self.prompts.user_prompt(resume_text),
                PARSE_TEMPERATURE,
                trace_name="parse_resume",
            )
        except Exception as e:
            logger.warning(f"Resume parsing call failed, using heuristic parse: {e}")
            return self.fallback_parse(resume_text)

        try:
            data = parse_json_object(response)
            data["raw_text"] = resume_text
            resume = ParsedResume.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to parse resume response: {e}")
            logger.debug(f"Raw resume response: {response}")
            return self.fallback_parse(resume_text)

        logger.info(
            f"Parsed resume for {resume.personal_info.name}: "
            f"{len(resume.experience)} positions, {len(resume.skills)} skills"
        )
        return resume

    def fallback_parse(self, resume_text: str) -> ParsedResume:
        """Heuristic parse without the model."""
        email = _EMAIL_PATTERN.search(resume_text)
        phone = _PHONE_PATTERN.search(resume_text)
        lowered = resume_text.lower()

        return ParsedResume(
            personal_info=PersonalInfo(
                email=email.group(0) if email else None,
                phone=phone.group(0).strip() if phone else None,
            ),
            skills=[skill for skill in COMMON_SKILLS if skill.lower() in lowered],
            raw_text=resume_text,
            feedback=ResumeFeedback(
                score=70,
                strengths=["Resume uploaded successfully", "Text extraction completed"],
                improvements=["Detailed analysis is unavailable right now"],
                formatting="Standard format detected",
                content_quality="Automatic analysis required for detailed feedback",
            ),
        )
