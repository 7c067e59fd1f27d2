"""Tests for the quiz session engine."""
from __future__ import annotations

import random

import pytest

from vibe_learning.errors import SessionStateError, ValidationError
from vibe_learning.quiz import (
    Phase,
    QuizConfig,
    QuizMode,
    QuizSession,
    QuizSummary,
    clamp_count,
    normalize_answer,
    start_session,
    submit_answer,
)


# ═══════════════════════════════════════════════════════════════════════════════
# PURE HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

class TestClampAndSample:

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-3, 1), (1, 1), (2, 2), (3, 3), (5, 3)])
    def test_clamp(self, requested, expected):
        count, _ = clamp_count(requested, 3)
        assert count == expected

    def test_clamp_warns_only_when_adjusted(self):
        assert clamp_count(2, 3)[1] is None
        assert "maximum" in clamp_count(9, 3)[1]
        assert "greater than zero" in clamp_count(0, 3)[1]

    @pytest.mark.parametrize("requested", [-1, 0, 1, 2, 3, 4, 10])
    def test_sample_size_and_uniqueness(self, pt_en, rng, requested):
        _, dictionary = pt_en
        picked = start_session(dictionary.words, requested, rng)

        assert len(picked) == min(max(requested, 1), len(dictionary.words))
        assert len({w.id for w in picked}) == len(picked)
        assert set(picked) <= set(dictionary.words)

    def test_seeded_rng_is_deterministic(self, pt_en):
        _, dictionary = pt_en
        a = start_session(dictionary.words, 3, random.Random(7))
        b = start_session(dictionary.words, 3, random.Random(7))
        assert a == b

    def test_empty_word_list(self):
        with pytest.raises(ValidationError):
            start_session((), 3)

    def test_clamping_is_logged(self, pt_en, rng, caplog):
        _, dictionary = pt_en
        with caplog.at_level("WARNING", logger="vibe_learning"):
            start_session(dictionary.words, 99, rng)
        assert "maximum number of words is 3" in caplog.text


class TestAnswerComparison:

    def test_normalize(self):
        assert normalize_answer("  Casa ") == "casa"

    def test_no_accent_folding(self):
        assert normalize_answer("Água") != normalize_answer("agua")

    def test_submit_answer(self, pt_en):
        _, dictionary = pt_en
        words = dictionary.words
        house = next(i for i, w in enumerate(words) if w.translation == "house")

        assert submit_answer(words, house, "  HOUSE ").is_correct
        result = submit_answer(words, house, "hause")
        assert not result.is_correct
        assert result.correct_translation == "house"


# ═══════════════════════════════════════════════════════════════════════════════
# SESSION STATE MACHINE
# ═══════════════════════════════════════════════════════════════════════════════

class TestQuizSession:

    def test_starts_in_selecting(self):
        session = QuizSession()
        assert session.phase is Phase.SELECTING
        with pytest.raises(SessionStateError):
            session.current

    def test_full_typed_run(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(rng=rng)
        session.start(dictionary.words, 5, dictionary_id=dictionary.id)

        assert session.warning is not None
        assert len(session.words) == 3
        assert session.position == "Word 1 of 3"

        outcome = None
        for i in range(3):
            answer = session.current.translation if i != 1 else "wrong"
            session.submit(answer)
            assert session.phase is Phase.ANSWERED
            outcome = session.advance()

        assert isinstance(outcome, QuizSummary)
        assert session.phase is Phase.SUMMARY
        assert outcome == QuizSummary(correct_count=2, incorrect_count=1, total_words=3)
        assert outcome.correct_count + outcome.incorrect_count == 3
        assert outcome.percentage == 67

    def test_advance_clears_answer_state(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(rng=rng)
        session.start(dictionary.words, 3)
        session.submit("anything")

        assert session.advance() == 1
        assert session.phase is Phase.AWAITING_ANSWER
        assert session.answer == ""
        assert session.result is None

    def test_blank_answer_rejected(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(rng=rng)
        session.start(dictionary.words, 2)

        with pytest.raises(ValidationError):
            session.submit("   ")
        assert session.phase is Phase.AWAITING_ANSWER
        assert session.correct_count == session.incorrect_count == 0

    def test_cannot_answer_twice_or_skip(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(rng=rng)
        session.start(dictionary.words, 2)

        with pytest.raises(SessionStateError):
            session.advance()
        session.submit("x")
        with pytest.raises(SessionStateError):
            session.submit("y")
        assert session.incorrect_count == 1

    def test_flip_mode(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(QuizConfig(mode=QuizMode.FLIP), rng=rng)
        session.start(dictionary.words, 1)

        with pytest.raises(SessionStateError):
            session.grade(True)
        assert session.reveal() == session.current.translation
        result = session.grade(False)

        assert not result.is_correct
        summary = session.advance()
        assert summary == QuizSummary(0, 1, 1)

    def test_sample_size_from_config(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(QuizConfig(sample_size=2), rng=rng)
        assert len(session.start(dictionary.words)) == 2

    def test_shuffle_restarts(self, pt_en):
        _, dictionary = pt_en
        session = QuizSession(rng=random.Random(3))
        session.start(dictionary.words, 3, dictionary_id=dictionary.id)
        before = set(session.words)
        session.submit("x")
        session.advance()

        session.shuffle()

        assert set(session.words) == before
        assert session.index == 0
        assert session.correct_count == session.incorrect_count == 0
        assert session.phase is Phase.AWAITING_ANSWER
        assert session.dictionary_id == dictionary.id

    def test_shuffle_changes_order(self):
        from vibe_learning.models import WordEntry

        words = tuple(
            WordEntry(id=str(i), word=f"w{i}", translation=f"t{i}", dictionary_id="d", timestamp="")
            for i in range(20)
        )
        session = QuizSession(rng=random.Random(11))
        session.start(words, 20)
        first = session.words
        assert session.shuffle() != first

    def test_restart_on_other_dictionary_resets(self, pt_en, rng):
        profile, dictionary = pt_en
        session = QuizSession(rng=rng)
        session.start(dictionary.words, 3, dictionary_id=dictionary.id)
        session.submit("x")
        session.advance()

        other = dictionary.words[:1]
        session.start(other, 1, dictionary_id="other")

        assert session.dictionary_id == "other"
        assert session.index == 0
        assert session.correct_count == session.incorrect_count == 0
        assert session.summary is None
        assert session.answer == ""

    def test_reset(self, pt_en, rng):
        _, dictionary = pt_en
        session = QuizSession(rng=rng)
        session.start(dictionary.words, 3)
        session.reset()
        assert session.phase is Phase.SELECTING
        assert session.words == ()

    def test_summary_dict(self):
        assert QuizSummary(2, 1, 3).to_dict() == {"correctCount": 2, "incorrectCount": 1, "totalWords": 3}
        assert QuizSummary(0, 0, 0).percentage == 0
