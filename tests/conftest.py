from __future__ import annotations

import random
from pathlib import Path

import pytest

from vibe_learning.dictionaries import WordInput, create_dictionary, onboard, replace_words, upsert_word
from vibe_learning.languages import Language
from vibe_learning.models import Dictionary, UserProfile
from vibe_learning.storage import ProfileStorage, StatsStorage
from vibe_learning.store import ProfileStore


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty data directory for one test."""
    return tmp_path / "data"


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def profile() -> UserProfile:
    return onboard("Ana")


@pytest.fixture
def pt_en(profile: UserProfile) -> tuple[UserProfile, Dictionary]:
    """Profile holding one Portuguese -> English dictionary with three words."""
    profile, dictionary = create_dictionary(profile, Language.PORTUGUESE, Language.ENGLISH)
    for word, translation in [("casa", "house"), ("gato", "cat"), ("livro", "book")]:
        words = upsert_word(dictionary, WordInput(word=word, translation=translation))
        profile = replace_words(profile, dictionary.id, words)
        dictionary = profile.dictionaries[0]
    return profile, dictionary


@pytest.fixture
def storage(data_dir: Path) -> ProfileStorage:
    return ProfileStorage(data_dir / "userData.json")


@pytest.fixture
def stats(data_dir: Path) -> StatsStorage:
    return StatsStorage(data_dir / "dictionary_stats.json")


@pytest.fixture
def store(storage: ProfileStorage) -> ProfileStore:
    return ProfileStore(storage)
