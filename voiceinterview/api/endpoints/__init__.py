"""
API endpoint modules for VoiceInterview
"""

from voiceinterview.api.endpoints import interview, audio, report, resume

__all__ = ["interview", "audio", "report", "resume"]
