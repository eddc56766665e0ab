"""AgriLearn utilities."""

from .prompt_loader import PromptTemplate, load_prompt, format_prompt, get_available_prompts
from .i18n import t, current_season, catalog_label

__all__ = [
    "PromptTemplate",
    "load_prompt",
    "format_prompt",
    "get_available_prompts",
    "t",
    "current_season",
    "catalog_label",
]
