"""Applies question outcomes to the running session tally."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from quiz_master.constants.quiz_constants import CORRECT_POINTS, STREAK_BONUSES, WRONG_PENALTY
from quiz_master.core.models import SessionTally
from quiz_master.core.services.question_timer import QuestionOutcome, Resolution


class Grade(Enum):
    CORRECT = auto()
    WRONG = auto()
    TIMED_OUT = auto()
    SKIPPED = auto()


@dataclass(frozen=True, slots=True)
class ScoreChange:
    """What one resolved question did to the tally."""

    grade: Grade
    points: int
    streak_bonus: int = 0

    @property
    def total(self) -> int:
        return self.points + self.streak_bonus


def grade_outcome(outcome: QuestionOutcome) -> Grade:
    if outcome.resolution is Resolution.SKIPPED:
        return Grade.SKIPPED
    if outcome.resolution is Resolution.TIMED_OUT:
        return Grade.TIMED_OUT
    if outcome.answer_code - 1 == outcome.question.correct_index:
        return Grade.CORRECT
    return Grade.WRONG


def apply_outcome(tally: SessionTally, outcome: QuestionOutcome) -> ScoreChange:
    """Update ``tally`` in place; each outcome must be applied exactly once."""
    grade = grade_outcome(outcome)
    difficulty = int(outcome.question.difficulty)

    if grade is Grade.SKIPPED:
        return ScoreChange(grade, 0)

    if grade is Grade.CORRECT:
        points = CORRECT_POINTS[difficulty]
        tally.correct_count += 1
        tally.streak += 1
        bonus = STREAK_BONUSES.get(tally.streak, 0)
        tally.score += points + bonus
        return ScoreChange(grade, points, bonus)

    # Wrong answers and timeouts carry the same penalty.
    penalty = WRONG_PENALTY[difficulty]
    tally.wrong_count += 1
    tally.streak = 0
    tally.score -= penalty
    return ScoreChange(grade, -penalty)
