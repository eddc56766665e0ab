"""
QuizSession - One pass through a generated quiz.

Flow per question: select an option, submit to reveal the result (and hear
the explanation), then move on. After the last question the session is
complete and `score_info()` reports the result.
"""

import logging
from typing import Optional

from agrilearn.schemas import Quiz, QuizQuestion
from agrilearn.voice import Narrator, SilentNarrator


logger = logging.getLogger(__name__)


def score_emoji(percent: int) -> str:
    if percent >= 80:
        return "🏆"
    if percent >= 60:
        return "👍"
    return "📚"


class QuizSession:
    def __init__(self, quiz: Quiz, language: str = "en", narrator: Optional[Narrator] = None):
        self.quiz = quiz
        self.language = language
        self.narrator = narrator or SilentNarrator()

        self.current_index = 0
        self.selected: Optional[int] = None
        self.show_result = False
        self.score = 0
        self.is_complete = False

    @property
    def total(self) -> int:
        return len(self.quiz.questions)

    @property
    def current_question(self) -> QuizQuestion:
        return self.quiz.questions[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.current_index + 1) / self.total * 100

    @property
    def question_text(self) -> str:
        return self.current_question.question.resolve(self.language)

    @property
    def current_options(self) -> list[str]:
        return self.current_question.options.resolve(self.language)

    @property
    def explanation(self) -> str:
        return self.current_question.explanation.resolve(self.language)

    @property
    def last_answer_correct(self) -> Optional[bool]:
        if not self.show_result or self.selected is None:
            return None
        return self.current_question.is_correct(self.selected)

    def select(self, option_index: int):
        """Choose an option; ignored once the result is showing."""
        if self.show_result or self.is_complete:
            return
        if 0 <= option_index < len(self.current_options):
            self.selected = option_index

    def submit(self) -> Optional[bool]:
        """
        Score the selected option and reveal the result.

        Returns:
            Whether the answer was correct, or None if nothing was submitted
        """
        if self.selected is None or self.show_result or self.is_complete:
            return None

        correct = self.current_question.is_correct(self.selected)
        if correct:
            self.score += 1
        self.show_result = True

        if self.narrator.is_supported:
            self.narrator.speak(self.explanation, self.language)
        return correct

    def next_question(self):
        """Advance to the next question, or complete after the last one."""
        if not self.show_result:
            return
        self.narrator.stop()
        if self.is_last:
            self.is_complete = True
            logger.info(f"Quiz complete: {self.score}/{self.total}")
            return
        self.current_index += 1
        self.selected = None
        self.show_result = False

    def speak_question(self):
        if self.narrator.is_supported:
            self.narrator.speak(self.question_text, self.language)

    def score_info(self) -> dict:
        percent = round(self.score / self.total * 100) if self.total else 0
        return {
            "correct": self.score,
            "total": self.total,
            "percent": percent,
            "emoji": score_emoji(percent),
        }

    def set_language(self, language: str):
        self.language = language
