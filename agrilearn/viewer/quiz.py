"""
Quiz renderer - Multiple-choice question and score display.

Provides:
- Question header with progress
- Result panel with explanation after an answer is submitted
- Final score box
"""

import html
from typing import Optional

from agrilearn.utils.i18n import t


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #f9fbe7;
        border: 1px solid #dce775;
        border-radius: 14px;
        padding: 1.2em 1.4em;
        margin: 0.8em 0;
    }
    .quiz-counter {
        color: #827717;
        font-size: 0.8em;
        letter-spacing: 0.05em;
        margin-bottom: 0.4em;
    }
    .quiz-question {
        font-size: 1.2em;
        font-weight: 650;
        color: #263238;
        line-height: 1.55;
    }
    .quiz-result {
        border-radius: 10px;
        padding: 0.9em 1.1em;
        margin-top: 0.8em;
    }
    .quiz-result.correct {
        background: #f1f8e9;
        border-left: 5px solid #7cb342;
    }
    .quiz-result.incorrect {
        background: #fff3e0;
        border-left: 5px solid #fb8c00;
    }
    .quiz-result-label {
        font-weight: 700;
        margin-bottom: 0.3em;
    }
    .quiz-score-box {
        background: linear-gradient(135deg, #f1f8e9 0%, #fffde7 100%);
        border-radius: 16px;
        padding: 1.6em 1em;
        margin-top: 1.2em;
        text-align: center;
    }
    .quiz-score-emoji {
        font-size: 3.2em;
    }
    .quiz-score-value {
        font-size: 2.4em;
        font-weight: 800;
        color: #558b2f;
    }
    .quiz-score-label {
        color: #6d6d6d;
        font-size: 0.95em;
    }
    </style>
    """


def render_quiz_question(question: str, index: int, total: int) -> str:
    """
    Render a quiz question header.

    Args:
        question: Question text in the display language
        index: 0-based question index
        total: Number of questions

    Returns:
        HTML string for the question
    """
    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-counter">{index + 1} / {total}</div>')
    parts.append(f'<div class="quiz-question">{html.escape(question)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_quiz_result(
    correct: Optional[bool],
    correct_option: str,
    explanation: str,
    language: str = "en",
) -> str:
    """Render the result panel shown after an answer is submitted."""
    if correct is None:
        return ""
    css_class = "correct" if correct else "incorrect"
    label = t("correct", language) if correct else t("incorrect", language)

    parts = [f'<div class="quiz-result {css_class}">']
    parts.append(f'<div class="quiz-result-label">{label}</div>')
    if not correct:
        parts.append(f'<div><strong>✔ {html.escape(correct_option)}</strong></div>')
    parts.append(f'<div>{html.escape(explanation)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(score_info: dict, language: str = "en") -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-emoji">{score_info.get('emoji', '')}</div>
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{t("your_score", language)}: {score_info['correct']} / {score_info['total']}</div>
    </div>
    """
