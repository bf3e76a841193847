"""
AI prompt templates for VoiceInterview

Contains structured prompts for:
- Follow-up and topic transition questions
- Response scoring
- Final report feedback
- Resume parsing
"""

from voiceinterview.prompts.interviewer import InterviewerPrompts
from voiceinterview.prompts.scorer import ScorerPrompts
from voiceinterview.prompts.report import ReportPrompts
from voiceinterview.prompts.resume import ResumePrompts

__all__ = [
    "InterviewerPrompts",
    "ScorerPrompts",
    "ReportPrompts",
    "ResumePrompts",
]
