"""
AgriLearn Schemas - Pydantic models for the farmer education app.

This module exports all schema classes for:
- Localized: shared base/Hindi/Kannada value types and fallback rule
- Lesson: slides and lesson records
- Quiz: multiple-choice questions
- Assistant: generation requests, Q&A answers and chat replies
- Sync: deferred-sync queue items
"""

# Localized value types
from .localized import (
    BASE_LANGUAGE,
    SUPPORTED_LANGUAGES,
    LocalizedText,
    LocalizedList,
    resolve_text,
)

# Lesson schemas
from .lesson import (
    DEFAULT_SLIDE_SECONDS,
    Slide,
    Lesson,
    new_lesson_id,
)

# Quiz schemas
from .quiz import (
    OPTIONS_PER_QUESTION,
    QuizQuestion,
    Quiz,
)

# Assistant schemas
from .assistant import (
    LessonRequest,
    QuizRequest,
    QuestionRequest,
    ChatRequest,
    QAAnswer,
    ChatReply,
)

# Sync schemas
from .sync import (
    SyncItemType,
    SyncQueueItem,
)

__all__ = [
    # Localized
    'BASE_LANGUAGE',
    'SUPPORTED_LANGUAGES',
    'LocalizedText',
    'LocalizedList',
    'resolve_text',
    # Lesson
    'DEFAULT_SLIDE_SECONDS',
    'Slide',
    'Lesson',
    'new_lesson_id',
    # Quiz
    'OPTIONS_PER_QUESTION',
    'QuizQuestion',
    'Quiz',
    # Assistant
    'LessonRequest',
    'QuizRequest',
    'QuestionRequest',
    'ChatRequest',
    'QAAnswer',
    'ChatReply',
    # Sync
    'SyncItemType',
    'SyncQueueItem',
]
