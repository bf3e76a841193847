"""
API layer for VoiceInterview

Contains FastAPI routers for:
- Resume parsing
- Interview management
- Audio processing
- Report generation
"""

from voiceinterview.api.router import api_router

__all__ = ["api_router"]
