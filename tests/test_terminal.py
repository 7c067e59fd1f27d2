"""Scripted terminal sessions driven through a recording console."""
from __future__ import annotations

import io
from typing import Iterable

import pytest
from rich.console import Console

from vibe_learning import terminal
from vibe_learning.dictionaries import WordInput
from vibe_learning.quiz import QuizSummary


@pytest.fixture
def screen(monkeypatch) -> Console:
    console = Console(file=io.StringIO(), width=120)
    monkeypatch.setattr(terminal, "console", console)
    return console


@pytest.fixture
def keyboard(monkeypatch):
    def feed(answers: Iterable[str]):
        it = iter(answers)
        monkeypatch.setattr("builtins.input", lambda *args: next(it))
    return feed


def test_first_run_creates_dictionary_and_trains(store, stats, screen, keyboard):
    keyboard([
        "Ana",                  # onboarding
        "n", "1", "1",          # new dictionary: Portuguese -> English
        "a", "casa", "house", "", "",
        "t", "", "1",           # train all words, typed mode
        "House", "",            # answer, see results
        "",                     # leave summary
        "b",
        "q",
    ])

    terminal.main(store, stats)

    profile = store.get()
    assert profile.name == "Ana"
    dictionary = profile.dictionaries[0]
    assert dictionary.title == "Portuguese → English"
    assert [w.word for w in dictionary.words] == ["casa"]
    assert stats.last(dictionary.id)["correctCount"] == 1

    output = screen.file.getvalue()
    assert "Training summary" in output
    assert "100%" in output


def test_duplicate_pair_is_reported_inline(store, stats, pt_en, screen, keyboard):
    store.set(pt_en[0])
    keyboard([
        "n", "2", "1",   # English -> Portuguese, already covered
        "",
        "b",
        "q",
    ])

    terminal.main(store, stats)

    assert len(store.get().dictionaries) == 1
    assert "already have a dictionary" in screen.file.getvalue()


def test_delete_dictionary_after_confirmation(store, stats, pt_en, screen, keyboard):
    profile, dictionary = pt_en
    store.set(profile)
    stats.record(dictionary.id, QuizSummary(1, 2, 3))
    keyboard(["1", "x", "y", "q"])

    terminal.main(store, stats)

    assert store.get().dictionaries == ()
    assert stats.last(dictionary.id) is None
    assert "3 words" in screen.file.getvalue()


def test_blank_word_is_refused(store, stats, pt_en, screen, keyboard):
    profile, dictionary = pt_en
    store.set(profile)
    keyboard(["1", "a", "", "house", "", "", "", "b", "q"])

    terminal.main(store, stats)

    assert store.get().dictionaries[0].words == dictionary.words
    assert "The word is required." in screen.file.getvalue()


def test_summary_panel_grades():
    console = Console(file=io.StringIO(), width=80)
    console.print(terminal.summary_panel(QuizSummary(1, 3, 4)))
    output = console.file.getvalue()
    assert "25%" in output
    assert "Keep practicing" in output


def test_home_lists_recent_words_and_last_update(store, stats, pt_en, screen, keyboard):
    profile, dictionary = pt_en
    store.set(profile)
    keyboard(["q"])

    terminal.main(store, stats)

    output = screen.file.getvalue()
    assert "Last update" in output
    assert dictionary.words[0].timestamp in output
    assert "Recent words" in output
    assert "PT → " in output
    assert "livro" in output


def test_edit_can_clear_an_optional_field(store, stats, pt_en, screen, keyboard):
    profile, dictionary = pt_en
    store.set(profile)
    livro = dictionary.words[0]
    store.upsert_word(
        dictionary.id,
        WordInput(word="livro", translation="book", meaning="something to read", phonetics="ˈlivɾu"),
        editing_id=livro.id,
    )
    keyboard([
        "1", "e", "1",
        "", "",         # keep word and translation
        "-",            # clear the meaning
        "",             # keep the phonetics
        "b", "q",
    ])

    terminal.main(store, stats)

    edited = store.get().dictionaries[0].words[0]
    assert edited.id == livro.id
    assert edited.word == "livro"
    assert edited.meaning is None
    assert edited.phonetics == "ˈlivɾu"
