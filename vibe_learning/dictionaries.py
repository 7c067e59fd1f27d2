"""Dictionary store: pure functions over the user profile.

Nothing here does I/O. Every function returns a new value and raises a
VocabError subclass when a change is refused, leaving its inputs untouched.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime

from . import config
from .errors import DuplicatePair, InvalidPair, NotFound, ValidationError
from .languages import Language
from .models import Dictionary, UserProfile, WordEntry, new_id, now_timestamp

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordInput:
    """Fields of the add/edit word form."""
    word: str
    translation: str
    phonetics: str | None = None
    meaning: str | None = None


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def onboard(name: str) -> UserProfile:
    """Build the initial profile once the user picked a display name."""
    name = (name or "").strip()
    if not name:
        raise ValidationError("Please tell us what to call you.")
    return UserProfile(name=name, dictionaries=())


def word_count_label(count: int) -> str:
    return f"{count} word{'s' if count != 1 else ''}"

# ---------------------------------------------------------------------------
# Dictionaries
# ---------------------------------------------------------------------------

def get_dictionary(profile: UserProfile, dictionary_id: str) -> Dictionary:
    for dictionary in profile.dictionaries:
        if dictionary.id == dictionary_id:
            return dictionary
    raise NotFound(f"Dictionary {dictionary_id!r} does not exist.")


def create_dictionary(
    profile: UserProfile,
    source_language: Language | str,
    target_language: Language | str,
) -> tuple[UserProfile, Dictionary]:
    """Append a new, empty dictionary for the given pair.

    Returns the updated profile and the new dictionary.
    """
    source = Language.parse(source_language)
    target = Language.parse(target_language)
    if source == target:
        raise InvalidPair("Source and target languages must be different.")

    if any(d.covers(source, target) for d in profile.dictionaries):
        raise DuplicatePair(
            f"You already have a dictionary for {source.value} and {target.value}."
        )

    dictionary = Dictionary(
        id=new_id(),
        source_language=source,
        target_language=target,
        words=(),
    )
    log.info("Created dictionary %s (%s)", dictionary.id, dictionary.title)
    return replace(profile, dictionaries=profile.dictionaries + (dictionary,)), dictionary


def delete_dictionary(profile: UserProfile, dictionary_id: str) -> UserProfile:
    """Remove a dictionary and all its words. Irreversible."""
    get_dictionary(profile, dictionary_id)
    remaining = tuple(d for d in profile.dictionaries if d.id != dictionary_id)
    log.info("Deleted dictionary %s", dictionary_id)
    return replace(profile, dictionaries=remaining)


def replace_words(
    profile: UserProfile, dictionary_id: str, words: tuple[WordEntry, ...]
) -> UserProfile:
    get_dictionary(profile, dictionary_id)
    return replace(
        profile,
        dictionaries=tuple(
            replace(d, words=tuple(words)) if d.id == dictionary_id else d
            for d in profile.dictionaries
        ),
    )

# ---------------------------------------------------------------------------
# Words
# ---------------------------------------------------------------------------

def _clean_optional(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def validate_word_input(word_input: WordInput) -> WordInput:
    """Trim the form fields and check the required ones."""
    word = (word_input.word or "").strip()
    translation = (word_input.translation or "").strip()
    if not word:
        raise ValidationError("The word is required.")
    if not translation:
        raise ValidationError("The translation is required.")
    if len(word) > config.MAX_WORD_LENGTH:
        raise ValidationError(
            f"The word must be at most {config.MAX_WORD_LENGTH} characters."
        )
    return WordInput(
        word=word,
        translation=translation,
        phonetics=_clean_optional(word_input.phonetics),
        meaning=_clean_optional(word_input.meaning),
    )


def upsert_word(
    dictionary: Dictionary, word_input: WordInput, editing_id: str | None = None
) -> tuple[WordEntry, ...]:
    """Add a word (prepended) or edit one in place.

    Edit mode keeps the entry's id and position and stamps a fresh
    timestamp. An ``editing_id`` that matches nothing falls back to adding.
    """
    clean = validate_word_input(word_input)
    words = dictionary.words

    if editing_id is not None and any(w.id == editing_id for w in words):
        updated = WordEntry(
            id=editing_id,
            word=clean.word,
            translation=clean.translation,
            phonetics=clean.phonetics,
            meaning=clean.meaning,
            dictionary_id=dictionary.id,
            timestamp=now_timestamp(),
        )
        log.info("Edited word %s in dictionary %s", editing_id, dictionary.id)
        return tuple(updated if w.id == editing_id else w for w in words)

    entry = WordEntry(
        id=new_id(),
        word=clean.word,
        translation=clean.translation,
        phonetics=clean.phonetics,
        meaning=clean.meaning,
        dictionary_id=dictionary.id,
        timestamp=now_timestamp(),
    )
    log.info("Added word %s to dictionary %s", entry.id, dictionary.id)
    return (entry,) + words


def delete_word(dictionary: Dictionary, word_id: str) -> tuple[WordEntry, ...]:
    """Drop one entry; unknown ids leave the list as it is."""
    return tuple(w for w in dictionary.words if w.id != word_id)


def search_words(words: tuple[WordEntry, ...], term: str) -> tuple[WordEntry, ...]:
    """Case-insensitive substring filter on the source-language word."""
    if not term:
        return tuple(words)
    needle = term.lower()
    return tuple(w for w in words if needle in w.word.lower())


def _timestamp_key(entry: WordEntry) -> datetime:
    try:
        return datetime.strptime(entry.timestamp, config.TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.min


def last_update(dictionary: Dictionary) -> str | None:
    """Timestamp of the newest entry, or None for an empty dictionary."""
    return dictionary.words[0].timestamp if dictionary.words else None


def recent_words(profile: UserProfile, limit: int = 5) -> list[tuple[WordEntry, Dictionary]]:
    """Newest words across every dictionary, each paired with its owner.

    Entries whose timestamp cannot be parsed sort last; ties keep the
    dictionary and list order.
    """
    entries = [(w, d) for d in profile.dictionaries for w in d.words]
    entries.sort(key=lambda pair: _timestamp_key(pair[0]), reverse=True)
    return entries[:limit]
