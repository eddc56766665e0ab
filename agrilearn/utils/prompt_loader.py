"""
Prompt templates for the generation service.

Each template is a YAML file under agrilearn/prompts/ with a `meta` block
(name, version, temperature), a raw `system` prompt and a `user_template`
whose {placeholders} are filled per request.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


# Shipped inside the package so installed copies find them
PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class PromptMeta(BaseModel):
    name: Optional[str] = None
    version: Optional[int] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    description: Optional[str] = None


class PromptTemplate(BaseModel):
    meta: PromptMeta = PromptMeta()
    system: str = ""
    user_template: str

    def render(self, **values: Any) -> str:
        """Fill the user template; the system prompt is sent as written."""
        return format_prompt(self.user_template, **values)


def load_prompt(name: str, prompts_dir: Optional[Path] = None) -> PromptTemplate:
    """
    Load a prompt template by name.

    Args:
        name: File name without .yaml (e.g. "lesson")
        prompts_dir: Directory to search instead of the packaged prompts

    Raises:
        FileNotFoundError: If the template does not exist
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If required keys are missing
    """
    file_path = (prompts_dir or PROMPTS_DIR) / f"{name}.yaml"
    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return PromptTemplate.model_validate(data)


def format_prompt(template: str, **values: Any) -> str:
    """str.format the template; literal braces must be doubled ({{ and }})."""
    return template.format(**values)


def get_available_prompts(prompts_dir: Optional[Path] = None) -> list[str]:
    dir_path = prompts_dir or PROMPTS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
