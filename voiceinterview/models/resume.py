"""
Resume models for VoiceInterview
"""

from pydantic import BaseModel, Field


class PersonalInfo(BaseModel):
    """Candidate contact details."""

    name: str = "Candidate"
    email: str | None = None
    phone: str | None = None


class WorkExperience(BaseModel):
    """A single position from the work history."""

    company: str = ""
    role: str = ""
    duration: str = ""
    responsibilities: list[str] = Field(default_factory=list)


class Education(BaseModel):
    """A single education entry."""

    institution: str = ""
    degree: str = ""
    year: str = ""


class ResumeFeedback(BaseModel):
    """Quality assessment of the resume itself."""

    score: int = Field(default=70, ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    formatting: str = ""
    content_quality: str = ""


class ResumeContext(BaseModel):
    """
    Compact resume summary passed to scoring and report prompts.

    `experience` is a human readable "role at company" list.
    """

    name: str = "Candidate"
    experience: str = ""
    skills: list[str] = Field(default_factory=list)


class ParsedResume(BaseModel):
    """Structured resume extracted from an uploaded file."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: list[WorkExperience] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    raw_text: str = ""
    feedback: ResumeFeedback | None = None

    def to_context(self) -> ResumeContext:
        """Summarize the resume for prompt building."""
        positions = [
            f"{exp.role} at {exp.company}"
            for exp in self.experience
            if exp.role or exp.company
        ]
        return ResumeContext(
            name=self.personal_info.name or "Candidate",
            experience=", ".join(positions),
            skills=list(self.skills),
        )
