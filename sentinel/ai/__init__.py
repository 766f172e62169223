"""
Sentinel Grid - AI Module

Gemini client and tactical briefings.
"""

from sentinel.ai.gemini_client import (
    GeminiClient,
    GeminiConfig,
    GeminiResponse,
    GeminiError,
    GeminiAPIError,
    load_gemini_config
)
from sentinel.ai.briefing import BriefingService, offline_report

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "GeminiResponse",
    "GeminiError",
    "GeminiAPIError",
    "load_gemini_config",
    "BriefingService",
    "offline_report",
]
