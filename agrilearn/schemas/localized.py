"""
Localized value types for AgriLearn.

Every user-facing string exists in a base (English) variant plus optional
Hindi and Kannada translations. The same fallback rule applies everywhere:
the selected translation is used when present and non-empty, otherwise the
base variant.

Records on the wire and on disk use flat keys (`title`, `title_hi`,
`title_kn`); the helpers here fold those into the value types and back.
"""

from typing import Any, Optional

from pydantic import BaseModel


BASE_LANGUAGE = "en"
SUPPORTED_LANGUAGES = ("en", "hi", "kn")
TRANSLATED_LANGUAGES = ("hi", "kn")


def resolve_text(
    base: Optional[str],
    hi: Optional[str] = None,
    kn: Optional[str] = None,
    language: str = BASE_LANGUAGE,
) -> str:
    """Pick the variant for `language`, falling back to the base text."""
    if language == "hi" and hi:
        return hi
    if language == "kn" and kn:
        return kn
    return base or ""


class LocalizedText(BaseModel):
    base: str = ""
    hi: Optional[str] = None
    kn: Optional[str] = None

    def resolve(self, language: str) -> str:
        return resolve_text(self.base, self.hi, self.kn, language)

    def is_empty(self) -> bool:
        return not (self.base or self.hi or self.kn)

    @classmethod
    def from_flat(cls, data: dict[str, Any], key: str) -> Optional["LocalizedText"]:
        """
        Read `key`, `key_hi` and `key_kn` from a flat record.

        Returns None when none of the three keys carries text.
        """
        base = _as_text(data.get(key))
        hi = _as_text(data.get(f"{key}_hi"))
        kn = _as_text(data.get(f"{key}_kn"))
        if base is None and hi is None and kn is None:
            return None
        return cls(base=base or "", hi=hi, kn=kn)

    def to_flat(self, key: str) -> dict[str, Any]:
        """Inverse of from_flat; absent translations are omitted."""
        flat: dict[str, Any] = {key: self.base}
        if self.hi:
            flat[f"{key}_hi"] = self.hi
        if self.kn:
            flat[f"{key}_kn"] = self.kn
        return flat


class LocalizedList(BaseModel):
    """
    A list of strings with optional translated lists.

    Translations replace the base list wholesale; an empty or missing
    translated list falls back to the complete base list.
    """
    base: list[str] = []
    hi: Optional[list[str]] = None
    kn: Optional[list[str]] = None

    def resolve(self, language: str) -> list[str]:
        if language == "hi" and self.hi:
            return list(self.hi)
        if language == "kn" and self.kn:
            return list(self.kn)
        return list(self.base)

    def is_empty(self) -> bool:
        return not (self.base or self.hi or self.kn)

    @classmethod
    def from_flat(cls, data: dict[str, Any], key: str) -> "LocalizedList":
        return cls(
            base=_as_list(data.get(key)) or [],
            hi=_as_list(data.get(f"{key}_hi")),
            kn=_as_list(data.get(f"{key}_kn")),
        )

    def to_flat(self, key: str) -> dict[str, Any]:
        flat: dict[str, Any] = {key: list(self.base)}
        if self.hi:
            flat[f"{key}_hi"] = list(self.hi)
        if self.kn:
            flat[f"{key}_kn"] = list(self.kn)
        return flat


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _as_list(value: Any) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    return [str(item) for item in value if item is not None]
