"""
Generation service tests.

A fake client stands in for Gemini; prompts are the shipped YAML templates.
"""

import json

import pytest

from agrilearn.errors import (
    ConfigurationError,
    CreditsExhaustedError,
    GenerationError,
    RateLimitedError,
)
from agrilearn.generation import GeminiClient, GenerationService, extract_json
from agrilearn.generation.client import _error_for_status
from agrilearn.schemas import ChatRequest, LessonRequest, QuestionRequest, QuizRequest
from agrilearn.utils.i18n import current_season


LESSON_REPLY = """Here is your lesson:
```json
{
  "title": "Tomato Blight Basics",
  "title_hi": "टमाटर झुलसा",
  "content": "Blight loves wet leaves.",
  "keyPoints": ["Water the soil, not the leaves", "Remove infected leaves"],
  "practicalTip": "Mulch around plants",
  "slides": [
    {"title": "What is blight?", "text": "A fungal disease.", "emoji": "🍅", "duration": 5},
    {"title": "Prevention", "text": "Keep leaves dry.", "duration": 0}
  ]
}
```"""


class TestExtractJson:
    """Test JSON extraction from model replies."""

    def test_plain_json(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_fenced_json(self):
        assert extract_json('```json\n{"a": 1}\n```') == {"a": 1}

    def test_json_inside_prose(self):
        assert extract_json('Sure! {"a": {"b": 2}} Hope this helps.') == {"a": {"b": 2}}

    def test_no_json(self):
        assert extract_json("Water your plants early.") is None
        assert extract_json("") is None

    def test_broken_json(self):
        assert extract_json('{"a": 1') is None


class TestErrorMapping:
    """Test HTTP status to error mapping."""

    def test_rate_limit(self):
        error = _error_for_status(429, "Too Many Requests")
        assert isinstance(error, RateLimitedError)
        assert error.status == 429

    def test_credits(self):
        assert isinstance(_error_for_status(402, "Payment Required"), CreditsExhaustedError)

    def test_other_status(self):
        error = _error_for_status(500, "boom")
        assert type(error) is GenerationError
        assert error.status == 500

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            GeminiClient(api_key=None)


class TestCurrentSeason:
    """Test the Indian season calendar."""

    @pytest.mark.parametrize("month,season", [
        (6, "kharif"), (10, "kharif"),
        (11, "rabi"), (1, "rabi"), (2, "rabi"),
        (3, "zaid"), (5, "zaid"),
    ])
    def test_months(self, month, season):
        assert current_season(month) == season


class TestGenerateLesson:
    """Test lesson generation."""

    def test_parses_lesson(self, fake_client):
        client = fake_client(LESSON_REPLY)
        service = GenerationService(client)
        lesson = service.generate_lesson(LessonRequest(
            crop_type="tomato",
            region="karnataka",
            season="kharif",
            lesson_type="disease",
        ))

        assert lesson.title.resolve("hi") == "टमाटर झुलसा"
        assert lesson.key_points.base[0] == "Water the soil, not the leaves"
        assert [s.duration for s in lesson.slides] == [5, 8]
        assert lesson.crop_type == "tomato"
        assert lesson.region == "karnataka"
        assert lesson.season == "kharif"
        assert lesson.lesson_type == "disease"
        assert lesson.difficulty == "beginner"
        assert lesson.id.isdigit()

    def test_prompt_carries_context(self, fake_client):
        client = fake_client(LESSON_REPLY)
        GenerationService(client).generate_lesson(LessonRequest(
            crop_type="chili",
            season="rabi",
            disease_history=["leaf curl", "anthracnose", "wilt", "mites"],
        ))

        call = client.calls[0]
        assert call["temperature"] == 0.7
        assert "Crop: chili" in call["user"]
        assert "Recent disease detections: leaf curl, anthracnose, wilt" in call["user"]
        assert "mites" in call["user"]
        assert "OUTPUT FORMAT" in call["system"]

    def test_default_season(self, fake_client):
        client = fake_client(LESSON_REPLY)
        lesson = GenerationService(client).generate_lesson(LessonRequest(crop_type="rice"))
        assert lesson.season == current_season()
        assert "No recent disease history" in client.calls[0]["user"]

    def test_unparsable_reply_uses_fallback(self, fake_client):
        raw = "Water early. " * 30
        lesson = GenerationService(fake_client(raw)).generate_lesson(
            LessonRequest(crop_type="tomato", season="zaid")
        )
        assert lesson.title.base == "tomato Farming Tips for zaid"
        assert lesson.content.base == raw
        assert lesson.key_points.base == [
            "Follow good farming practices",
            "Monitor crops regularly",
            "Seek expert help when needed",
        ]
        assert len(lesson.slides) == 1
        assert lesson.slides[0].text.base == raw[:200]
        assert lesson.slides[0].duration == 10

    def test_missing_title_defaults(self, fake_client):
        lesson = GenerationService(fake_client('{"content": "x"}')).generate_lesson(
            LessonRequest(crop_type="mango")
        )
        assert lesson.title.base == "mango Lesson"

    def test_infinite_slide_duration_defaults(self, fake_client):
        reply = '{"title": "Drip Irrigation", "slides": [{"text": "Lay pipes.", "duration": 1e999}]}'
        lesson = GenerationService(fake_client(reply)).generate_lesson(
            LessonRequest(crop_type="banana")
        )
        assert lesson.slides[0].duration == 8
        assert lesson.total_seconds == 8

    def test_client_error_propagates(self, fake_client):
        service = GenerationService(fake_client(error=RateLimitedError("slow down", status=429)))
        with pytest.raises(RateLimitedError):
            service.generate_lesson(LessonRequest(crop_type="tomato"))


class TestGenerateQuiz:
    """Test quiz generation."""

    def test_parses_and_normalizes(self, fake_client):
        reply = json.dumps({"questions": [
            {"question": "Q1?", "options": ["a", "b", "c", "d"], "correctIndex": 3},
            {"options": ["x"]},
            "not a question",
        ]})
        client = fake_client(reply)
        quiz = GenerationService(client).generate_quiz(QuizRequest(crop_type="rice"))

        assert len(quiz.questions) == 2
        assert quiz.questions[0].correct_index == 3
        assert quiz.questions[1].question.base == "Question 2"
        assert quiz.questions[1].options.base == ["x", "Option B", "Option C", "Option D"]
        assert "Generate 5 multiple-choice questions" in client.calls[0]["user"]

    def test_unparsable_reply_uses_watering_question(self, fake_client):
        quiz = GenerationService(fake_client("no json here")).generate_quiz(
            QuizRequest(crop_type="potato")
        )
        assert len(quiz.questions) == 1
        question = quiz.questions[0]
        assert question.question.base == "What is the best time to water potato crops?"
        assert question.options.resolve("kn")[0] == "ಬೆಳಿಗ್ಗೆ ಮುಂಜಾನೆ"
        assert question.correct_index == 0

    def test_questions_not_a_list(self, fake_client):
        with pytest.raises(GenerationError):
            GenerationService(fake_client('{"questions": "none"}')).generate_quiz(
                QuizRequest(crop_type="rice")
            )


class TestAnswerQuestion:
    """Test Q&A."""

    def test_parses_answer(self, fake_client):
        reply = json.dumps({
            "answer": "Spray neem oil.",
            "answer_kn": "ಬೇವಿನ ಎಣ್ಣೆ ಸಿಂಪಡಿಸಿ.",
            "followUpSuggestions": ["a?", "b?", "c?", "d?"],
            "confidence": "high",
        })
        client = fake_client(reply)
        answer = GenerationService(client).answer_question(
            QuestionRequest(question="How to control aphids?", crop_type="chili")
        )
        assert answer.answer.resolve("kn") == "ಬೇವಿನ ಎಣ್ಣೆ ಸಿಂಪಡಿಸಿ."
        assert len(answer.follow_up_suggestions) == 3
        assert client.calls[0]["temperature"] == 0.5
        assert "How to control aphids?" in client.calls[0]["user"]

    def test_numeric_confidence_accepted(self, fake_client):
        reply = json.dumps({"answer": "Spray neem oil.", "confidence": 0.8})
        answer = GenerationService(fake_client(reply)).answer_question(
            QuestionRequest(question="Aphids?")
        )
        assert answer.answer.base == "Spray neem oil."
        assert answer.confidence == "0.8"

    def test_plain_text_reply_in_all_languages(self, fake_client):
        answer = GenerationService(fake_client("Use neem oil.")).answer_question(
            QuestionRequest(question="Aphids?")
        )
        assert answer.answer.resolve("en") == "Use neem oil."
        assert answer.answer.resolve("hi") == "Use neem oil."
        assert answer.answer.resolve("kn") == "Use neem oil."


class TestChat:
    """Test chat replies."""

    def test_translated_reply(self, fake_client):
        reply = '```json\n{"en": "Rotate crops.", "hi": "फसल चक्र अपनाएं।", "kn": "ಬೆಳೆ ಸರದಿ."}\n```'
        result = GenerationService(fake_client(reply)).chat(ChatRequest(message="Soil tips?"))
        assert result.response.resolve("hi") == "फसल चक्र अपनाएं।"

    def test_plain_reply(self, fake_client):
        result = GenerationService(fake_client("Rotate crops.")).chat(ChatRequest(message="Soil?"))
        assert result.response.resolve("kn") == "Rotate crops."

    def test_long_message_truncated_before_sending(self, fake_client):
        client = fake_client("ok")
        GenerationService(client).chat(ChatRequest(message="x" * 2000))
        assert "x" * 1000 in client.calls[0]["user"]
        assert "x" * 1001 not in client.calls[0]["user"]
