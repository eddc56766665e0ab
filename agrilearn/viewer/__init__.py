"""AgriLearn viewer - HTML renderers for the Streamlit app."""

from .lesson import get_player_css, render_slide, render_key_points, render_lesson_card
from .quiz import get_quiz_css, render_quiz_question, render_quiz_result, render_quiz_score

__all__ = [
    "get_player_css",
    "render_slide",
    "render_key_points",
    "render_lesson_card",
    "get_quiz_css",
    "render_quiz_question",
    "render_quiz_result",
    "render_quiz_score",
]
