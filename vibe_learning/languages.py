"""Supported languages and their static display table."""

from enum import Enum

from .errors import InvalidPair


class Language(Enum):
    PORTUGUESE = "Portuguese"
    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    GERMAN = "German"
    ITALIAN = "Italian"
    JAPANESE = "Japanese"
    KOREAN = "Korean"
    CHINESE = "Chinese"
    RUSSIAN = "Russian"
    ARABIC = "Arabic"
    HINDI = "Hindi"

    @property
    def code(self) -> str:
        return LANGUAGE_TABLE[self][0]

    @property
    def flag(self) -> str:
        return LANGUAGE_TABLE[self][1]

    @property
    def label(self) -> str:
        return f"{self.flag} {self.value}"

    @classmethod
    def parse(cls, value: "Language | str") -> "Language":
        """Resolve a member, display name, member name or ISO code.

        Raises InvalidPair for anything outside the supported set.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for lang in cls:
                if key in (lang.value.lower(), lang.name.lower(), lang.code):
                    return lang
        raise InvalidPair(f"Unsupported language: {value!r}")


# ---------------------------------------------------------------------------
# Static table: language -> (ISO 639-1 code, flag)
# ---------------------------------------------------------------------------
LANGUAGE_TABLE: dict[Language, tuple[str, str]] = {
    Language.PORTUGUESE: ("pt", "\U0001f1e7\U0001f1f7"),
    Language.ENGLISH: ("en", "\U0001f1fa\U0001f1f8"),
    Language.SPANISH: ("es", "\U0001f1ea\U0001f1f8"),
    Language.FRENCH: ("fr", "\U0001f1eb\U0001f1f7"),
    Language.GERMAN: ("de", "\U0001f1e9\U0001f1ea"),
    Language.ITALIAN: ("it", "\U0001f1ee\U0001f1f9"),
    Language.JAPANESE: ("ja", "\U0001f1ef\U0001f1f5"),
    Language.KOREAN: ("ko", "\U0001f1f0\U0001f1f7"),
    Language.CHINESE: ("zh", "\U0001f1e8\U0001f1f3"),
    Language.RUSSIAN: ("ru", "\U0001f1f7\U0001f1fa"),
    Language.ARABIC: ("ar", "\U0001f1f8\U0001f1e6"),
    Language.HINDI: ("hi", "\U0001f1ee\U0001f1f3"),
}

SUPPORTED_LANGUAGES = list(Language)
