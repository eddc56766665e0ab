"""
GenerationService - Lesson, quiz, Q&A and chat requests against Gemini.

Each operation renders a YAML prompt, sends it through the client, and
normalizes the reply. A reply that cannot be parsed as JSON degrades to a
usable fallback instead of failing the request.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from agrilearn.errors import GenerationError
from agrilearn.schemas import (
    ChatReply,
    ChatRequest,
    Lesson,
    LessonRequest,
    QAAnswer,
    QuestionRequest,
    Quiz,
    QuizQuestion,
    QuizRequest,
    new_lesson_id,
)
from agrilearn.utils.i18n import current_season
from agrilearn.utils.prompt_loader import load_prompt

from .client import extract_json


logger = logging.getLogger(__name__)

MAX_DISEASES_IN_CONTEXT = 3
FALLBACK_KEY_POINTS = [
    "Follow good farming practices",
    "Monitor crops regularly",
    "Seek expert help when needed",
]
FALLBACK_SLIDE_CHARS = 200
FALLBACK_SLIDE_SECONDS = 10


class TextGenerator(Protocol):
    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
    ) -> str:
        ...


class GenerationService:
    """Builds prompts, calls the model and normalizes its replies."""

    def __init__(self, client: TextGenerator, prompts_dir: Optional[Path] = None):
        self.client = client
        self.prompts_dir = prompts_dir

    def _run(self, prompt_name: str, **values) -> str:
        prompt = load_prompt(prompt_name, self.prompts_dir)
        return self.client.generate(
            prompt.system,
            prompt.render(**values),
            temperature=prompt.meta.temperature,
        )

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    def generate_lesson(self, request: LessonRequest) -> Lesson:
        """
        Generate a personalized lesson.

        The lesson gets a fresh id and carries the request's classification
        tags. An unparsable reply becomes a one-slide tips lesson built from
        the raw text.
        """
        season = request.season or current_season()
        diseases = request.disease_history
        if diseases:
            disease_context = (
                f"Recent disease detections: {', '.join(diseases[:MAX_DISEASES_IN_CONTEXT])}"
            )
            disease_note = (
                f"The farmer recently detected: {', '.join(diseases)}. "
                "Include prevention tips. "
            )
        else:
            disease_context = "No recent disease history"
            disease_note = ""

        logger.info(
            f"Generating lesson: crop={request.crop_type} region={request.region} "
            f"season={season} type={request.lesson_type}"
        )
        raw = self._run(
            "lesson",
            crop_type=request.crop_type,
            region=request.region,
            season=season,
            disease_context=disease_context,
            disease_note=disease_note,
            difficulty=request.difficulty,
            lesson_type=request.lesson_type,
        )

        data = extract_json(raw)
        if not isinstance(data, dict):
            logger.warning("Lesson reply was not JSON, using fallback lesson")
            data = _fallback_lesson(raw, request.crop_type, season)

        record = dict(data)
        record["id"] = new_lesson_id()
        record["title"] = data.get("title") or f"{request.crop_type} Lesson"
        record["content"] = data.get("content") or ""
        record["cropType"] = request.crop_type
        record["lessonType"] = request.lesson_type
        record["difficulty"] = request.difficulty
        record["region"] = request.region
        record["season"] = season

        try:
            lesson = Lesson.from_record(record)
        except (ValueError, TypeError, OverflowError) as e:
            raise GenerationError(f"Invalid lesson data: {e}") from e

        logger.info(f"Lesson generated: {lesson.title.base}")
        return lesson

    # -------------------------------------------------------------------------
    # Quizzes
    # -------------------------------------------------------------------------

    def generate_quiz(self, request: QuizRequest) -> Quiz:
        """Generate a multiple-choice quiz; an unparsable reply yields one stock question."""
        logger.info(f"Generating quiz: crop={request.crop_type} n={request.num_questions}")
        raw = self._run(
            "quiz",
            crop_type=request.crop_type,
            lesson_type=request.lesson_type or "general farming",
            num_questions=request.num_questions,
        )

        data = extract_json(raw)
        if not isinstance(data, dict):
            logger.warning("Quiz reply was not JSON, using fallback quiz")
            data = {"questions": [_fallback_question(request.crop_type)]}

        items = data.get("questions")
        if not isinstance(items, list):
            raise GenerationError("Invalid quiz data")

        questions = [
            QuizQuestion.from_payload(item, position)
            for position, item in enumerate(items)
            if isinstance(item, dict)
        ]
        if not questions:
            raise GenerationError("Quiz has no questions")

        return Quiz(
            crop_type=request.crop_type,
            lesson_type=request.lesson_type,
            questions=questions,
        )

    # -------------------------------------------------------------------------
    # Q&A and chat
    # -------------------------------------------------------------------------

    def answer_question(self, request: QuestionRequest) -> QAAnswer:
        """Answer a farming question in all three languages."""
        logger.info(f"Answering question: {request.question[:50]}")
        raw = self._run(
            "qa",
            question=request.question,
            crop_type=request.crop_type or "General farming",
            context=request.context or "None",
            language=request.language,
        )

        data = extract_json(raw)
        if not isinstance(data, dict):
            data = {
                "answer": raw,
                "answer_hi": raw,
                "answer_kn": raw,
                "confidence": "medium",
                "followUpSuggestions": [],
            }
        return QAAnswer.from_payload(request.question, data)

    def chat(self, request: ChatRequest) -> ChatReply:
        """Reply to a chat message; a plain-text reply is used for every language."""
        logger.info(f"Processing chat message: {request.message[:50]}")
        raw = self._run("chat", message=request.message, language=request.language)

        data = extract_json(raw)
        if not isinstance(data, dict):
            data = raw.strip()
        return ChatReply.from_payload(data)


def _fallback_lesson(raw: str, crop_type: str, season: str) -> dict[str, Any]:
    return {
        "title": f"{crop_type} Farming Tips for {season}",
        "title_hi": f"{season} के लिए {crop_type} खेती के टिप्स",
        "title_kn": f"{season}ಕ್ಕೆ {crop_type} ಕೃಷಿ ಸಲಹೆಗಳು",
        "content": raw,
        "content_hi": raw,
        "content_kn": raw,
        "keyPoints": list(FALLBACK_KEY_POINTS),
        "slides": [{
            "title": "Farming Tips",
            "text": raw[:FALLBACK_SLIDE_CHARS],
            "emoji": "🌱",
            "duration": FALLBACK_SLIDE_SECONDS,
        }],
    }


def _fallback_question(crop_type: str) -> dict[str, Any]:
    return {
        "question": f"What is the best time to water {crop_type} crops?",
        "question_hi": f"{crop_type} फसलों को पानी देने का सबसे अच्छा समय क्या है?",
        "question_kn": f"{crop_type} ಬೆಳೆಗಳಿಗೆ ನೀರು ಹಾಕಲು ಉತ್ತಮ ಸಮಯ ಯಾವುದು?",
        "options": ["Early morning", "Afternoon", "Evening", "Midnight"],
        "options_hi": ["सुबह जल्दी", "दोपहर", "शाम", "आधी रात"],
        "options_kn": ["ಬೆಳಿಗ್ಗೆ ಮುಂಜಾನೆ", "ಮಧ್ಯಾಹ್ನ", "ಸಂಜೆ", "ಮಧ್ಯರಾತ್ರಿ"],
        "correctIndex": 0,
        "explanation": "Early morning watering reduces water loss due to evaporation.",
        "explanation_hi": "सुबह पानी देने से वाष्पीकरण के कारण पानी की कम हानि होती है।",
        "explanation_kn": "ಬೆಳಿಗ್ಗೆ ನೀರುಹಾಕುವುದು ಆವಿಯಾಗುವಿಕೆಯಿಂದ ನೀರಿನ ನಷ್ಟವನ್ನು ಕಡಿಮೆ ಮಾಡುತ್ತದೆ.",
    }
