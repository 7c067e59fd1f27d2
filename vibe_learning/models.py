"""Domain model: user profile, dictionaries and word entries.

All three are frozen dataclasses holding tuples, so every change produces a
new value. ``to_dict``/``from_dict`` map to the stored JSON document, which
keeps the camelCase keys of the original web app's ``userData`` blob.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from . import config
from .errors import InvalidPair, ProfileFormatError
from .languages import Language


def new_id() -> str:
    return uuid.uuid4().hex


def now_timestamp() -> str:
    """Current time as a localized display string (``dd/mm/yyyy, HH:MM:SS``)."""
    tz = ZoneInfo(config.TIMEZONE) if config.TIMEZONE else None
    now = datetime.now(tz) if tz else datetime.now().astimezone()
    return now.strftime(config.TIMESTAMP_FORMAT)


def _require(data: dict, key: str, kind: type = str):
    if key not in data:
        raise ProfileFormatError(f"Missing field '{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise ProfileFormatError(f"Field '{key}' has the wrong type")
    return value


def _optional(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProfileFormatError(f"Field '{key}' has the wrong type")
    return value or None


@dataclass(frozen=True)
class WordEntry:
    id: str
    word: str
    translation: str
    dictionary_id: str
    timestamp: str
    phonetics: str | None = None
    meaning: str | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "word": self.word,
            "translation": self.translation,
            "timestamp": self.timestamp,
            "dictionaryId": self.dictionary_id,
        }
        # unset optionals are left out, like JSON.stringify drops undefined
        if self.meaning:
            data["meaning"] = self.meaning
        if self.phonetics:
            data["phonetics"] = self.phonetics
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WordEntry":
        if not isinstance(data, dict):
            raise ProfileFormatError("Word entry must be an object")
        return cls(
            id=_require(data, "id"),
            word=_require(data, "word"),
            translation=_require(data, "translation"),
            dictionary_id=_require(data, "dictionaryId"),
            timestamp=_optional(data, "timestamp") or "",
            phonetics=_optional(data, "phonetics"),
            meaning=_optional(data, "meaning"),
        )


@dataclass(frozen=True)
class Dictionary:
    id: str
    source_language: Language
    target_language: Language
    words: tuple[WordEntry, ...] = ()

    @property
    def title(self) -> str:
        return f"{self.source_language.value} → {self.target_language.value}"

    def covers(self, a: Language, b: Language) -> bool:
        """True if this dictionary is for the pair {a, b}, in either direction."""
        return {self.source_language, self.target_language} == {a, b}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sourceLanguage": self.source_language.value,
            "targetLanguage": self.target_language.value,
            "words": [w.to_dict() for w in self.words],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Dictionary":
        if not isinstance(data, dict):
            raise ProfileFormatError("Dictionary must be an object")
        try:
            source = Language.parse(_require(data, "sourceLanguage"))
            target = Language.parse(_require(data, "targetLanguage"))
        except InvalidPair as e:
            raise ProfileFormatError(e.message) from e
        if source == target:
            raise ProfileFormatError(f"Dictionary uses {source.value} on both sides")
        words = _require(data, "words", list)
        return cls(
            id=_require(data, "id"),
            source_language=source,
            target_language=target,
            words=tuple(WordEntry.from_dict(w) for w in words),
        )


@dataclass(frozen=True)
class UserProfile:
    name: str
    dictionaries: tuple[Dictionary, ...] = field(default_factory=tuple)

    @property
    def total_words(self) -> int:
        return sum(len(d.words) for d in self.dictionaries)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "dictionaries": [d.to_dict() for d in self.dictionaries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        if not isinstance(data, dict):
            raise ProfileFormatError("Profile must be an object")
        name = _require(data, "name")
        if not name.strip():
            raise ProfileFormatError("Profile name is blank")
        dictionaries = tuple(
            Dictionary.from_dict(d) for d in _require(data, "dictionaries", list)
        )
        pairs = [frozenset((d.source_language, d.target_language)) for d in dictionaries]
        if len(set(pairs)) != len(pairs):
            raise ProfileFormatError("Two dictionaries cover the same language pair")
        return cls(name=name, dictionaries=dictionaries)
