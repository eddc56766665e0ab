"""
Request and reply schemas for the generation service.

Requests validate user input before anything is sent out; replies are the
normalized shapes the UI consumes.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .localized import LocalizedText


MAX_CROP_TYPE_CHARS = 100
MAX_QUESTION_CHARS = 500
MAX_CHAT_CHARS = 1000
MAX_FOLLOW_UPS = 3


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class LessonRequest(BaseModel):
    crop_type: str = Field(..., min_length=1, max_length=MAX_CROP_TYPE_CHARS)
    region: str = "India"
    season: Optional[str] = None  # None -> current season
    disease_history: list[str] = []
    lesson_type: str = "general"
    difficulty: str = "beginner"


class QuizRequest(BaseModel):
    crop_type: str = Field(..., min_length=1)
    lesson_type: str = "general"
    num_questions: int = Field(default=5, ge=1, le=20)


class QuestionRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=MAX_QUESTION_CHARS)
    crop_type: Optional[str] = None
    context: Optional[str] = None
    language: str = "en"

    @field_validator("question")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question must not be blank")
        return value


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    language: str = "en"

    @field_validator("message")
    @classmethod
    def _truncate(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message must not be blank")
        return value[:MAX_CHAT_CHARS]


# -----------------------------------------------------------------------------
# Replies
# -----------------------------------------------------------------------------

class QAAnswer(BaseModel):
    question: str
    answer: LocalizedText
    follow_up_suggestions: list[str] = []
    confidence: Optional[str] = None

    @classmethod
    def from_payload(cls, question: str, data: dict[str, Any]) -> "QAAnswer":
        answer = LocalizedText.from_flat(data, "answer")
        if answer is None or not answer.base:
            answer = LocalizedText(
                base="Sorry, I could not understand your question.",
                hi=answer.hi if answer else None,
                kn=answer.kn if answer else None,
            )
        confidence = data.get("confidence")
        suggestions = data.get("followUpSuggestions") or []
        if not isinstance(suggestions, list):
            suggestions = []
        return cls(
            question=question,
            answer=answer,
            follow_up_suggestions=[str(s) for s in suggestions][:MAX_FOLLOW_UPS],
            confidence=str(confidence) if confidence is not None else None,
        )


class ChatReply(BaseModel):
    response: LocalizedText

    @classmethod
    def from_payload(cls, payload: Any) -> "ChatReply":
        """
        Accept either `{en, hi, kn}` or a plain string.

        Absent translations default to the English text.
        """
        if isinstance(payload, dict):
            en = payload.get("en")
            if not isinstance(en, str) or not en:
                en = "I apologize, I could not process your request."
            return cls(response=LocalizedText(
                base=en,
                hi=payload.get("hi") or en,
                kn=payload.get("kn") or en,
            ))
        text = str(payload) if payload else "I apologize, I could not process your request."
        return cls(response=LocalizedText(base=text, hi=text, kn=text))
