"""
Quiz schemas for AgriLearn.

Each question always offers exactly four options. Generated payloads are
normalized on the way in: missing text is filled with placeholders and a
translated option list that is not exactly four long is dropped so the base
list is used wholesale.
"""

from typing import Any

from pydantic import BaseModel, Field

from .localized import LocalizedList, LocalizedText


OPTIONS_PER_QUESTION = 4
PLACEHOLDER_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]
PLACEHOLDER_EXPLANATION = "Learn more about this topic!"


class QuizQuestion(BaseModel):
    question: LocalizedText
    options: LocalizedList
    correct_index: int = Field(default=0, ge=0, lt=OPTIONS_PER_QUESTION)
    explanation: LocalizedText

    def is_correct(self, option_index: int) -> bool:
        return option_index == self.correct_index

    @classmethod
    def from_payload(cls, data: dict[str, Any], position: int = 0) -> "QuizQuestion":
        """
        Normalize one generated question.

        Args:
            data: Flat question record (`question`, `options_hi`, ...)
            position: 0-based index, used for the placeholder question text

        Returns:
            QuizQuestion whose options resolve to exactly four entries
        """
        question = LocalizedText.from_flat(data, "question")
        if question is None or not question.base:
            question = LocalizedText(
                base=f"Question {position + 1}",
                hi=question.hi if question else None,
                kn=question.kn if question else None,
            )

        options = LocalizedList.from_flat(data, "options")
        base_options = _fit_options(options.base)
        options = LocalizedList(
            base=base_options,
            hi=options.hi if options.hi and len(options.hi) == OPTIONS_PER_QUESTION else None,
            kn=options.kn if options.kn and len(options.kn) == OPTIONS_PER_QUESTION else None,
        )

        correct = data.get("correctIndex")
        if isinstance(correct, bool) or not isinstance(correct, int):
            correct = 0
        if not 0 <= correct < OPTIONS_PER_QUESTION:
            correct = 0

        explanation = LocalizedText.from_flat(data, "explanation")
        if explanation is None or not explanation.base:
            explanation = LocalizedText(
                base=PLACEHOLDER_EXPLANATION,
                hi=explanation.hi if explanation else None,
                kn=explanation.kn if explanation else None,
            )

        return cls(
            question=question,
            options=options,
            correct_index=correct,
            explanation=explanation,
        )


class Quiz(BaseModel):
    crop_type: str
    lesson_type: str = "general"
    questions: list[QuizQuestion] = []


def _fit_options(options: list[str]) -> list[str]:
    """Trim or pad a base option list to exactly four entries."""
    if not options:
        return list(PLACEHOLDER_OPTIONS)
    fitted = list(options[:OPTIONS_PER_QUESTION])
    while len(fitted) < OPTIONS_PER_QUESTION:
        fitted.append(PLACEHOLDER_OPTIONS[len(fitted)])
    return fitted
