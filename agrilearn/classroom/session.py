"""
EducationSession - Per-user state behind the education screens.

Holds the farmer's personalization choices and wires lesson generation,
offline caching, quizzes, voice Q&A and chat together. Every user-facing
outcome is returned as a Notice for the UI to display.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from agrilearn.errors import (
    AgriLearnError,
    ConfigurationError,
    CreditsExhaustedError,
    RateLimitedError,
)
from agrilearn.generation import GenerationService
from agrilearn.schemas import (
    ChatReply,
    ChatRequest,
    Lesson,
    LessonRequest,
    QAAnswer,
    QuestionRequest,
    QuizRequest,
    SyncItemType,
)
from agrilearn.utils.i18n import current_season, t
from agrilearn.voice import Narrator, SilentNarrator

from .offline_cache import OfflineCache
from .quiz_session import QuizSession


logger = logging.getLogger(__name__)

DEFAULT_CROP = "tomato"
DEFAULT_REGION = "karnataka"
DEFAULT_LESSON_TYPE = "general"
DEFAULT_DIFFICULTY = "beginner"


@dataclass
class Notice:
    """A short message for the user (kind: success, error or info)."""
    kind: str
    title: str
    description: str = ""


@dataclass
class ChatMessage:
    role: str  # "user" or "assistant"
    text: str = ""
    reply: Optional[ChatReply] = None

    def resolve(self, language: str) -> str:
        if self.reply is not None:
            return self.reply.response.resolve(language)
        return self.text


class EducationSession:
    def __init__(
        self,
        cache: OfflineCache,
        service: Optional[GenerationService],
        narrator: Optional[Narrator] = None,
        language: str = "en",
    ):
        """
        Args:
            cache: Offline lesson cache and sync queue
            service: Generation service; None when no API key is configured,
                in which case every generation request returns an error notice
            narrator: Speech output for quiz explanations and answers
            language: Initial UI language
        """
        self.cache = cache
        self.service = service
        self.narrator = narrator or SilentNarrator()
        self.language = language

        # Personalization
        self.crop = DEFAULT_CROP
        self.region = DEFAULT_REGION
        self.season = current_season()
        self.lesson_type = DEFAULT_LESSON_TYPE
        self.recent_diseases: list[str] = []

        self.session_lessons: list[Lesson] = []
        self.is_generating = False
        self.quiz_session: Optional[QuizSession] = None
        self.qa_history: list[QAAnswer] = []
        self.chat_history: list[ChatMessage] = []

    @property
    def is_online(self) -> bool:
        return self.cache.is_online

    def set_language(self, language: str):
        self.language = language
        if self.quiz_session is not None:
            self.quiz_session.set_language(language)

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    @property
    def lessons(self) -> list[Lesson]:
        """Lessons from this session followed by other cached lessons, unique by id."""
        merged: list[Lesson] = []
        seen: set[str] = set()
        for lesson in self.session_lessons:
            if lesson.id in seen:
                continue
            seen.add(lesson.id)
            merged.append(self.cache.get_cached_lesson(lesson.id) or lesson)
        for lesson in self.cache.cached_lessons:
            if lesson.id not in seen:
                seen.add(lesson.id)
                merged.append(lesson)
        return merged

    def generate_lesson(self) -> Optional[Notice]:
        """
        Generate a lesson for the current personalization.

        Returns:
            Notice describing the outcome, or None if a generation is
            already in progress
        """
        if not self.cache.is_online:
            return Notice(
                kind="error",
                title=t("connection_required", self.language),
                description=t("internet_needed_for_lesson", self.language),
            )
        if self.is_generating:
            logger.info("Lesson generation already in progress, ignoring request")
            return None

        self.is_generating = True
        try:
            request = LessonRequest(
                crop_type=self.crop,
                region=self.region,
                season=self.season,
                disease_history=list(self.recent_diseases),
                lesson_type=self.lesson_type,
                difficulty=DEFAULT_DIFFICULTY,
            )
            lesson = self._require_service().generate_lesson(request)
        except (AgriLearnError, ValidationError) as e:
            logger.error(f"Lesson generation error: {e}")
            return self._error_notice(e, "lesson_failed")
        finally:
            self.is_generating = False

        self.session_lessons = [lesson, *self.session_lessons]
        if not self.cache.cache_lesson(lesson):
            return Notice(
                kind="error",
                title=t("new_lesson_ready", self.language),
                description=t("save_failed", self.language),
            )
        return Notice(
            kind="success",
            title=t("new_lesson_ready", self.language),
            description=lesson.title.resolve(self.language),
        )

    def is_saved(self, lesson: Lesson) -> bool:
        return self.cache.is_cached(lesson.id)

    def save_lesson(self, lesson: Lesson) -> Notice:
        if self.cache.cache_lesson(lesson):
            return Notice(
                kind="success",
                title=t("saved", self.language),
                description=t("saved_for_later", self.language),
            )
        return Notice(
            kind="error",
            title=t("error", self.language),
            description=t("save_failed", self.language),
        )

    def complete_lesson(self, lesson: Lesson) -> Notice:
        """Record lesson completion for sync and drain the queue if online."""
        self.cache.add_to_sync_queue(SyncItemType.LESSON_PROGRESS, {
            "lessonId": lesson.id,
            "cropType": lesson.crop_type,
            "lessonType": lesson.lesson_type,
            "completedAt": datetime.now(timezone.utc).isoformat(),
        })
        self.cache.process_sync_queue()
        return Notice(kind="success", title=t("lesson_complete", self.language))

    # -------------------------------------------------------------------------
    # Quiz
    # -------------------------------------------------------------------------

    def start_quiz(self, num_questions: int = 5) -> Optional[Notice]:
        """Generate a quiz for the selected crop and lesson type and start it."""
        if not self.cache.is_online:
            return self._offline_notice()

        try:
            request = QuizRequest(
                crop_type=self.crop,
                lesson_type=self.lesson_type,
                num_questions=num_questions,
            )
            quiz = self._require_service().generate_quiz(request)
        except (AgriLearnError, ValidationError) as e:
            logger.error(f"Quiz generation error: {e}")
            return self._error_notice(e, "quiz_failed")

        self.quiz_session = QuizSession(quiz, language=self.language, narrator=self.narrator)
        return None

    def quiz_result_notice(self) -> Optional[Notice]:
        if self.quiz_session is None or not self.quiz_session.is_complete:
            return None
        info = self.quiz_session.score_info()
        return Notice(
            kind="info",
            title=f"{info['emoji']} {t('quiz_complete', self.language)}",
            description=f"{info['correct']}/{info['total']} ({info['percent']}%)",
        )

    # -------------------------------------------------------------------------
    # Q&A and chat
    # -------------------------------------------------------------------------

    def ask_question(self, text: str) -> Optional[Notice]:
        """
        Ask the farming assistant a question.

        The answer is prepended to `qa_history`, queued for sync and read
        aloud when narration is available.
        """
        if not self.cache.is_online:
            return self._offline_notice()

        try:
            request = QuestionRequest(
                question=text,
                crop_type=self.crop,
                language=self.language,
            )
            answer = self._require_service().answer_question(request)
        except (AgriLearnError, ValidationError) as e:
            logger.error(f"Q&A error: {e}")
            return self._error_notice(e, "answer_failed")

        self.qa_history = [answer, *self.qa_history]
        self.cache.add_to_sync_queue(SyncItemType.QA_HISTORY, {
            "question": answer.question,
            "answer": answer.answer.base,
            "cropType": self.crop,
        })
        self.cache.process_sync_queue()

        if self.narrator.is_supported:
            self.narrator.speak(answer.answer.resolve(self.language), self.language)
        return None

    def send_chat(self, text: str) -> Optional[Notice]:
        """Send a chat message; the exchange is appended to `chat_history`."""
        if not self.cache.is_online:
            return self._offline_notice()

        try:
            request = ChatRequest(message=text, language=self.language)
            reply = self._require_service().chat(request)
        except (AgriLearnError, ValidationError) as e:
            logger.error(f"Chat error: {e}")
            return self._error_notice(e, "answer_failed")

        self.chat_history.append(ChatMessage(role="user", text=request.message))
        self.chat_history.append(ChatMessage(role="assistant", reply=reply))
        return None

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_service(self) -> GenerationService:
        if self.service is None:
            raise ConfigurationError("Generation service is not configured")
        return self.service

    def _offline_notice(self) -> Notice:
        return Notice(
            kind="error",
            title=t("connection_required", self.language),
            description=t("internet_needed", self.language),
        )

    def _error_notice(self, error: Exception, fallback_key: str) -> Notice:
        if isinstance(error, RateLimitedError):
            key = "rate_limited"
        elif isinstance(error, CreditsExhaustedError):
            key = "credits_exhausted"
        else:
            key = fallback_key
        return Notice(
            kind="error",
            title=t("error", self.language),
            description=t(key, self.language),
        )
