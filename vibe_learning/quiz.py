"""Quiz session engine.

One session trains a random subset of a dictionary's words. The flow is
``SELECTING -> AWAITING_ANSWER -> ANSWERED -> ... -> SUMMARY``; every
transition is a synchronous response to one user action.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from .errors import SessionStateError, ValidationError
from .models import WordEntry

log = logging.getLogger(__name__)


class QuizMode(Enum):
    TYPED = "typed"   # user types the translation
    FLIP = "flip"     # user reveals the card and grades themself


class Phase(Enum):
    SELECTING = "selecting"
    AWAITING_ANSWER = "awaiting_answer"
    ANSWERED = "answered"
    SUMMARY = "summary"


@dataclass(frozen=True)
class QuizConfig:
    mode: QuizMode = QuizMode.TYPED
    sample_size: int | None = None  # None = every word


@dataclass(frozen=True)
class AnswerResult:
    is_correct: bool
    correct_translation: str


@dataclass(frozen=True)
class QuizSummary:
    correct_count: int
    incorrect_count: int
    total_words: int

    @property
    def percentage(self) -> int:
        if not self.total_words:
            return 0
        return round(self.correct_count / self.total_words * 100)

    def to_dict(self) -> dict:
        return {
            "correctCount": self.correct_count,
            "incorrectCount": self.incorrect_count,
            "totalWords": self.total_words,
        }

# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def clamp_count(requested: int, total: int) -> tuple[int, str | None]:
    """Clamp a requested word count into ``[1, total]``.

    Returns the count and a warning message when the request was adjusted.
    """
    if requested < 1:
        return min(1, total), "The number of words must be greater than zero."
    if requested > total:
        return total, f"The maximum number of words is {total}."
    return requested, None


def start_session(
    all_words: tuple[WordEntry, ...] | list[WordEntry],
    requested_count: int,
    rng: random.Random | None = None,
) -> tuple[WordEntry, ...]:
    """Draw a random subset (without replacement) in presentation order."""
    if not all_words:
        raise ValidationError("This dictionary has no words to train yet.")
    count, warning = clamp_count(requested_count, len(all_words))
    if warning:
        log.warning("Requested %s words out of %s: %s", requested_count, len(all_words), warning)
    pool = list(all_words)
    (rng or random).shuffle(pool)
    return tuple(pool[:count])


def normalize_answer(text: str) -> str:
    """Trim and lowercase. No accent folding, no fuzzy matching."""
    return (text or "").strip().lower()


def submit_answer(
    training_words: tuple[WordEntry, ...] | list[WordEntry], index: int, raw_answer: str
) -> AnswerResult:
    expected = training_words[index].translation
    return AnswerResult(
        is_correct=normalize_answer(raw_answer) == normalize_answer(expected),
        correct_translation=expected,
    )

# ---------------------------------------------------------------------------
# Session state machine
# ---------------------------------------------------------------------------

class QuizSession:
    """Holds the state of one training run.

    ``start`` always resets first, so moving to another dictionary (or
    re-entering the training screen) never carries tallies or answers over.
    """

    def __init__(self, config: QuizConfig | None = None, rng: random.Random | None = None):
        self.config = config or QuizConfig()
        self.rng = rng or random.Random()
        self.reset()

    def reset(self) -> None:
        self.phase = Phase.SELECTING
        self.dictionary_id: str | None = None
        self.words: tuple[WordEntry, ...] = ()
        self.index = 0
        self.correct_count = 0
        self.incorrect_count = 0
        self.answer = ""
        self.result: AnswerResult | None = None
        self.revealed = False
        self.summary: QuizSummary | None = None
        self.warning: str | None = None

    # -- queries ------------------------------------------------------------

    @property
    def mode(self) -> QuizMode:
        return self.config.mode

    @property
    def current(self) -> WordEntry:
        if self.phase not in (Phase.AWAITING_ANSWER, Phase.ANSWERED):
            raise SessionStateError("No card is being presented.")
        return self.words[self.index]

    @property
    def position(self) -> str:
        return f"Word {self.index + 1} of {len(self.words)}"

    @property
    def progress(self) -> float:
        if not self.words:
            return 0.0
        return (self.index + 1) / len(self.words)

    @property
    def is_last(self) -> bool:
        return self.index >= len(self.words) - 1

    # -- transitions --------------------------------------------------------

    def start(
        self,
        all_words: tuple[WordEntry, ...] | list[WordEntry],
        requested_count: int | None = None,
        dictionary_id: str | None = None,
    ) -> tuple[WordEntry, ...]:
        self.reset()
        if requested_count is None:
            requested_count = self.config.sample_size or len(all_words)
        if all_words:
            _, self.warning = clamp_count(requested_count, len(all_words))
        self.words = start_session(all_words, requested_count, self.rng)
        self.dictionary_id = dictionary_id
        self.phase = Phase.AWAITING_ANSWER
        log.info("Session started with %s words", len(self.words))
        return self.words

    def _record(self, result: AnswerResult) -> AnswerResult:
        if result.is_correct:
            self.correct_count += 1
        else:
            self.incorrect_count += 1
        self.result = result
        self.phase = Phase.ANSWERED
        return result

    def submit(self, raw_answer: str) -> AnswerResult:
        """Check a typed answer against the current card."""
        if self.phase != Phase.AWAITING_ANSWER:
            raise SessionStateError("This card was already answered.")
        if not (raw_answer or "").strip():
            raise ValidationError("Type an answer first.")
        self.answer = raw_answer
        return self._record(submit_answer(self.words, self.index, raw_answer))

    def reveal(self) -> str:
        """Flip the current card and return its translation."""
        if self.phase != Phase.AWAITING_ANSWER:
            raise SessionStateError("This card was already answered.")
        self.revealed = True
        return self.current.translation

    def grade(self, correct: bool) -> AnswerResult:
        """Self-assessment after a reveal."""
        if self.phase != Phase.AWAITING_ANSWER or not self.revealed:
            raise SessionStateError("Reveal the card before grading it.")
        return self._record(AnswerResult(bool(correct), self.current.translation))

    def advance(self) -> "int | QuizSummary":
        """Move to the next card, or finish with the summary."""
        if self.phase != Phase.ANSWERED:
            raise SessionStateError("Answer the card before moving on.")
        if self.is_last:
            self.summary = QuizSummary(
                correct_count=self.correct_count,
                incorrect_count=self.incorrect_count,
                total_words=len(self.words),
            )
            self.phase = Phase.SUMMARY
            log.info(
                "Session finished: %s correct, %s incorrect",
                self.correct_count, self.incorrect_count,
            )
            return self.summary
        self.index += 1
        self.answer = ""
        self.result = None
        self.revealed = False
        self.phase = Phase.AWAITING_ANSWER
        return self.index

    def shuffle(self) -> tuple[WordEntry, ...]:
        """Restart the same cards in a new random order."""
        if not self.words:
            raise SessionStateError("There is no session to shuffle.")
        pool = list(self.words)
        self.rng.shuffle(pool)
        words, dictionary_id = tuple(pool), self.dictionary_id
        self.reset()
        self.words, self.dictionary_id = words, dictionary_id
        self.phase = Phase.AWAITING_ANSWER
        return self.words
