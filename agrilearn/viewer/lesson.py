"""
Lesson renderer - Slide, key point and lesson card display.

Provides:
- Slide card with progress bar for the lesson player
- Key points and practical tip panel shown on the last slide
- Lesson cards for the lesson grid
"""

import html
from typing import Optional

from agrilearn.schemas import Lesson
from agrilearn.utils.i18n import LESSON_TYPES, catalog_label, t


def get_player_css() -> str:
    """Get CSS styles for the lesson player and lesson cards."""
    return """
    <style>
    .slide-card {
        background: linear-gradient(135deg, #e8f5e9 0%, #f1f8e9 100%);
        border-radius: 16px;
        padding: 2em 1.5em;
        margin: 1em 0;
        text-align: center;
        min-height: 220px;
    }
    .slide-emoji {
        font-size: 3.5em;
        margin-bottom: 0.3em;
    }
    .slide-title {
        font-weight: 700;
        font-size: 1.3em;
        color: #2e7d32;
        margin-bottom: 0.6em;
    }
    .slide-text {
        font-size: 1.15em;
        color: #333;
        line-height: 1.7;
    }
    .slide-progress {
        background: #e0e0e0;
        border-radius: 4px;
        height: 8px;
        overflow: hidden;
        margin: 0.5em 0;
    }
    .slide-progress-fill {
        background: #43a047;
        height: 100%;
    }
    .slide-counter {
        color: #666;
        font-size: 0.85em;
        text-align: right;
    }
    .key-points {
        background: #fffde7;
        border-left: 4px solid #fbc02d;
        border-radius: 8px;
        padding: 1em 1.2em;
        margin: 1em 0;
    }
    .key-points-title {
        font-weight: 600;
        color: #f57f17;
        margin-bottom: 0.5em;
    }
    .practical-tip {
        background: #e3f2fd;
        border-radius: 8px;
        padding: 0.8em 1em;
        margin-top: 0.8em;
        color: #0d47a1;
    }
    .lesson-card {
        border: 1px solid #c8e6c9;
        border-radius: 12px;
        padding: 1em;
        margin-bottom: 0.5em;
        background: white;
    }
    .lesson-card-title {
        font-weight: 600;
        color: #1b5e20;
        margin-bottom: 0.3em;
    }
    .lesson-card-meta {
        color: #777;
        font-size: 0.85em;
    }
    .lesson-card-tag {
        display: inline-block;
        background: #f1f8e9;
        color: #33691e;
        border-radius: 10px;
        padding: 0.1em 0.6em;
        margin-right: 0.4em;
        font-size: 0.8em;
    }
    </style>
    """


def render_slide(
    title: Optional[str],
    text: str,
    emoji: Optional[str],
    index: int,
    total: int,
    progress: float,
    language: str = "en",
) -> str:
    """
    Render the current slide of the lesson player.

    Args:
        title: Slide heading (optional)
        text: Slide body in the display language
        emoji: Slide emoji (optional)
        index: 0-based slide index
        total: Number of slides
        progress: Percent complete, 0-100

    Returns:
        HTML string for the slide
    """
    parts = ['<div class="slide-progress">']
    parts.append(f'<div class="slide-progress-fill" style="width: {progress:.0f}%"></div>')
    parts.append('</div>')
    parts.append(
        f'<div class="slide-counter">{t("slide_of", language)} {index + 1} / {total}</div>'
    )

    parts.append('<div class="slide-card">')
    if emoji:
        parts.append(f'<div class="slide-emoji">{html.escape(emoji)}</div>')
    if title:
        parts.append(f'<div class="slide-title">{html.escape(title)}</div>')
    parts.append(f'<div class="slide-text">{html.escape(text)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_key_points(
    key_points: list[str],
    practical_tip: Optional[str] = None,
    language: str = "en",
) -> str:
    """Render the key points panel, with the practical tip if there is one."""
    if not key_points and not practical_tip:
        return ""

    parts = ['<div class="key-points">']
    if key_points:
        parts.append(f'<div class="key-points-title">{t("key_points", language)}</div>')
        parts.append('<ul>')
        for point in key_points:
            parts.append(f'<li>{html.escape(point)}</li>')
        parts.append('</ul>')
    if practical_tip:
        parts.append(
            f'<div class="practical-tip"><strong>{t("practical_tip", language)}:</strong> '
            f'{html.escape(practical_tip)}</div>'
        )
    parts.append('</div>')
    return ''.join(parts)


def render_lesson_card(lesson: Lesson, language: str = "en", saved: bool = False) -> str:
    """Render a lesson summary card for the lesson grid."""
    slides = lesson.playback_slides()
    emoji = slides[0].emoji or "🌱"
    minutes = max(1, round(lesson.total_seconds / 60))

    parts = ['<div class="lesson-card">']
    parts.append(
        f'<div class="lesson-card-title">{html.escape(emoji)} '
        f'{html.escape(lesson.title.resolve(language))}</div>'
    )

    parts.append('<div>')
    if lesson.lesson_type:
        label = catalog_label(LESSON_TYPES, lesson.lesson_type, language)
        parts.append(f'<span class="lesson-card-tag">{html.escape(label)}</span>')
    if lesson.crop_type:
        parts.append(f'<span class="lesson-card-tag">{html.escape(lesson.crop_type)}</span>')
    if saved:
        parts.append(f'<span class="lesson-card-tag">{t("offline_ready", language)}</span>')
    parts.append('</div>')

    parts.append(
        f'<div class="lesson-card-meta">{len(slides)} · ~{minutes} min</div>'
    )
    parts.append('</div>')
    return ''.join(parts)
