"""
Gemini API client for lesson, quiz, Q&A and chat generation.

A failed call raises GenerationError (or a status-specific subclass) and is
not retried; the user re-triggers the action.
"""

import json
import logging
import os
import re
from typing import Any, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from agrilearn.config import DEFAULT_MODEL
from agrilearn.errors import (
    ConfigurationError,
    CreditsExhaustedError,
    GenerationError,
    RateLimitedError,
)


logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_CODE_FENCE = re.compile(r"```(?:json)?\n?")


class GeminiClient:
    """Wrapper for the Gemini API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY not set. Check your .env file.")

        self.client = genai.Client(api_key=self.api_key)
        self.temperature = temperature
        self.model_name = model

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Generate text using the Gemini API.

        Raises:
            RateLimitedError: On HTTP 429
            CreditsExhaustedError: On HTTP 402
            GenerationError: On any other failure or an empty response
        """
        full_prompt = f"{system_prompt}\n\n---\n\n{user_prompt}"

        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=full_prompt,
                config=genai_types.GenerateContentConfig(
                    temperature=self.temperature if temperature is None else temperature,
                )
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error: {e.code} {e.message}")
            raise _error_for_status(e.code, str(e)) from e
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise GenerationError(f"Gemini request failed: {e}") from e

        if response.text is None:
            if response.candidates and len(response.candidates) > 0:
                candidate = response.candidates[0]
                if candidate.content and candidate.content.parts:
                    text = candidate.content.parts[0].text
                    if text:
                        return text
            raise GenerationError("Empty response from API")

        return response.text


def _error_for_status(status: Optional[int], message: str) -> GenerationError:
    if status == 429:
        return RateLimitedError("Rate limit exceeded. Please try again later.", status=status)
    if status == 402:
        return CreditsExhaustedError("AI credits exhausted. Please try again later.", status=status)
    return GenerationError(f"AI gateway error: {message}", status=status)


def extract_json(text: str) -> Optional[Any]:
    """
    Pull the JSON object out of a model reply.

    Handles markdown code fences and prose around the object.

    Returns:
        Parsed object, or None if no valid JSON object is present
    """
    if not text:
        return None

    cleaned = _CODE_FENCE.sub("", text).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    match = _JSON_OBJECT.search(cleaned)
    if not match:
        return None
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
