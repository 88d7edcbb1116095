"""
Servicios de texto generado (Gemini).
"""

from .service import GeminiService, get_ai_service, DESCRIPTION_FALLBACK, ANALYSIS_FALLBACK

__all__ = [
    "GeminiService",
    "get_ai_service",
    "DESCRIPTION_FALLBACK",
    "ANALYSIS_FALLBACK",
]
