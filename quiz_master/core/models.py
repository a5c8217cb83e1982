"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Difficulty(IntEnum):
    """Question difficulty as authored in the category files."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class LifelineKind(Enum):
    """The four lifelines, valued by their lifeline-menu number."""

    FILTER_OPTIONS = 1
    SKIP = 2
    REPLACE_QUESTION = 3
    EXTRA_TIME = 4

    @property
    def label(self) -> str:
        return _LIFELINE_LABELS[self]


_LIFELINE_LABELS = {
    LifelineKind.FILTER_OPTIONS: "50/50",
    LifelineKind.SKIP: "Skip",
    LifelineKind.REPLACE_QUESTION: "Replace",
    LifelineKind.EXTRA_TIME: "Extra Time",
}


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question with exactly four options.

    ``original_correct_index`` is the authored answer position and never
    changes. ``correct_index`` follows the current display order of
    ``options`` and is recomputed whenever the options are shuffled.
    ``option_order`` maps each displayed position to its authored position.
    """

    text: str
    options: tuple[str, str, str, str]
    original_correct_index: int
    correct_index: int
    difficulty: Difficulty
    source_index: int = -1  # position inside the loaded repository
    option_order: tuple[int, ...] = (0, 1, 2, 3)

    @property
    def correct_option_text(self) -> str:
        return self.options[self.correct_index]


@dataclass(slots=True)
class SessionTally:
    """Running totals for one session. ``score`` may go negative mid-session."""

    score: int = 0
    correct_count: int = 0
    wrong_count: int = 0
    streak: int = 0

    @property
    def display_score(self) -> int:
        return max(0, self.score)


@dataclass(frozen=True, slots=True)
class ScoreEntry:
    """One line of the high-score ledger."""

    name: str
    score: int
    datetime: str
