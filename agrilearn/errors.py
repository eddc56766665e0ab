"""Exception types shared across AgriLearn."""

from typing import Optional


class AgriLearnError(Exception):
    """Base class for AgriLearn errors."""


class ConfigurationError(AgriLearnError):
    """Raised when a required setting (such as an API key) is missing."""


class GenerationError(AgriLearnError):
    """Raised when the generation service fails or returns nothing usable."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RateLimitedError(GenerationError):
    """The generation service rejected the call with HTTP 429."""


class CreditsExhaustedError(GenerationError):
    """The generation service rejected the call with HTTP 402."""


class DictationError(AgriLearnError):
    """Raised when the speech recognition service cannot be reached."""
