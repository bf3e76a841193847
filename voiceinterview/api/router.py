"""
Main API router for VoiceInterview

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from voiceinterview.api.endpoints import audio, interview, report, resume

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    resume.router,
    prefix="/resume",
    tags=["Resume"]
)

api_router.include_router(
    interview.router,
    prefix="/interview",
    tags=["Interview"]
)

api_router.include_router(
    audio.router,
    prefix="/audio",
    tags=["Audio"]
)

api_router.include_router(
    report.router,
    prefix="/report",
    tags=["Report"]
)
