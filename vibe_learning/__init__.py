"""Vibe Learning - personal vocabulary trainer for the terminal."""

__version__ = "1.0.0"

from .errors import (
    DuplicatePair,
    InvalidPair,
    NotFound,
    ProfileFormatError,
    SessionStateError,
    ValidationError,
    VocabError,
)
from .languages import Language
from .models import Dictionary, UserProfile, WordEntry
from .dictionaries import (
    WordInput,
    create_dictionary,
    delete_dictionary,
    delete_word,
    search_words,
    upsert_word,
)
from .quiz import QuizConfig, QuizMode, QuizSession, QuizSummary, start_session, submit_answer
from .storage import ProfileStorage, StatsStorage
from .store import ProfileStore

__all__ = [
    "DuplicatePair",
    "InvalidPair",
    "NotFound",
    "ProfileFormatError",
    "SessionStateError",
    "ValidationError",
    "VocabError",
    "Language",
    "Dictionary",
    "UserProfile",
    "WordEntry",
    "WordInput",
    "create_dictionary",
    "delete_dictionary",
    "delete_word",
    "search_words",
    "upsert_word",
    "QuizConfig",
    "QuizMode",
    "QuizSession",
    "QuizSummary",
    "start_session",
    "submit_answer",
    "ProfileStorage",
    "StatsStorage",
    "ProfileStore",
]
