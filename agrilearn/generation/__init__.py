"""
AgriLearn Generation - Gemini-backed lesson, quiz, Q&A and chat requests.

This module exports:
- GeminiClient: thin google-genai wrapper with status-aware errors
- GenerationService: prompt rendering and reply normalization
- extract_json: JSON object extraction from model replies
"""

from .client import GeminiClient, extract_json
from .service import GenerationService, TextGenerator

__all__ = [
    "GeminiClient",
    "extract_json",
    "GenerationService",
    "TextGenerator",
]
