"""
AgriLearn - Multilingual micro-lessons for farmers.

Packages:
- schemas: pydantic models for lessons, quizzes and assistant replies
- classroom: offline lesson cache, slide playback, quiz and session state
- generation: Gemini-backed lesson/quiz/Q&A/chat requests
- voice: narration and dictation capabilities
- viewer: HTML rendering helpers for the Streamlit app
"""

__version__ = "0.1.0"
