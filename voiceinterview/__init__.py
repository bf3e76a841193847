"""
VoiceInterview - Conversational AI Voice Mock Interview Service

Parses a candidate's resume, runs a multi-turn spoken interview driven by
an LLM, scores every answer and compiles a final performance report.
"""

__version__ = "0.1.0"
__author__ = "VoiceInterview Team"
