"""Persistence of resumable session progress in the plain-text save format.

Save file layout, one field per line:

    1  player name
    2  score correct wrong timestamp
    3  answer codes so far (0 = unanswered, skipped or timed out)
    4  question position markers so far
    5  remaining seconds for the in-flight question      (optional)
    6  category difficulty streak                        (optional)
    7  repository positions of the session's questions   (optional)
    8  lifeline flags, 1 = still available               (optional)
    9  option layout of the in-flight question           (optional)
   10  options still shown for the in-flight question    (optional)

Lines 1-4 are required. Every later line is optional and falls back to its
default when absent, blank or unreadable, so older save files keep loading.
Lines 9 and 10 are written at lifeline-menu checkpoints and cleared once the
question resolves, so a resume shows that question as the player left it.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from quiz_master.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS, OPTION_COUNT
from quiz_master.core.errors import CorruptSaveError
from quiz_master.core.models import Difficulty, LifelineKind, SessionTally

logger = logging.getLogger(__name__)

_NO_CATEGORY = "-"


class QuestionAttempt(BaseModel):
    """One resolved question: its position marker and the submitted answer code."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=0)
    answer: int = Field(ge=0, le=4)


class SessionProgress(BaseModel):
    """Snapshot of a session that can be written to disk and resumed.

    Answers and position markers are stored as one list of attempts, so the
    two projections written to the save file always have equal length.
    """

    model_config = ConfigDict(validate_assignment=True)

    player_name: str
    score: int = 0
    correct_count: int = Field(default=0, ge=0)
    wrong_count: int = Field(default=0, ge=0)
    timestamp: int = 0
    attempts: list[QuestionAttempt] = Field(default_factory=list)
    remaining_seconds_for_current: int = Field(default=0, ge=0)
    category: str | None = None
    difficulty: Difficulty | None = None
    streak: int = Field(default=0, ge=0)
    question_order: list[int] = Field(default_factory=list)
    lifelines_available: list[bool] = Field(
        default_factory=lambda: [True] * len(LifelineKind), min_length=4, max_length=4
    )
    current_option_order: list[int] = Field(default_factory=list)
    current_visible_options: list[int] = Field(default_factory=list)

    @property
    def answers(self) -> list[int]:
        return [attempt.answer for attempt in self.attempts]

    @property
    def question_indices(self) -> list[int]:
        return [attempt.position for attempt in self.attempts]

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)

    def record_attempt(self, position: int, answer: int) -> None:
        self.attempts = [*self.attempts, QuestionAttempt(position=position, answer=answer)]

    def clear_current_question(self) -> None:
        self.remaining_seconds_for_current = 0
        self.current_option_order = []
        self.current_visible_options = []

    def to_tally(self) -> SessionTally:
        return SessionTally(
            score=self.score,
            correct_count=self.correct_count,
            wrong_count=self.wrong_count,
            streak=self.streak,
        )

    def apply_tally(self, tally: SessionTally) -> None:
        self.score = tally.score
        self.correct_count = tally.correct_count
        self.wrong_count = tally.wrong_count
        self.streak = tally.streak


@dataclass(frozen=True, slots=True)
class _OptionalField:
    name: str
    parse: Callable[[str], dict[str, Any]]
    default: Callable[[], dict[str, Any]]


def _parse_int_list(line: str) -> list[int]:
    return [int(token) for token in line.split()]


def _parse_remaining(line: str) -> dict[str, Any]:
    return {"remaining_seconds_for_current": max(0, int(line.strip()))}


def _parse_session_descriptor(line: str) -> dict[str, Any]:
    category, difficulty, streak = line.split()
    difficulty_value = int(difficulty)
    return {
        "category": None if category == _NO_CATEGORY else category,
        "difficulty": Difficulty(difficulty_value) if difficulty_value else None,
        "streak": max(0, int(streak)),
    }


def _parse_question_order(line: str) -> dict[str, Any]:
    return {"question_order": _parse_int_list(line)}


def _parse_lifeline_flags(line: str) -> dict[str, Any]:
    flags = _parse_int_list(line)
    if len(flags) != len(LifelineKind):
        raise ValueError("expected one flag per lifeline")
    return {"lifelines_available": [bool(flag) for flag in flags]}


def _parse_option_order(line: str) -> dict[str, Any]:
    order = _parse_int_list(line)
    if sorted(order) != list(range(OPTION_COUNT)):
        raise ValueError("expected a permutation of the option positions")
    return {"current_option_order": order}


def _parse_visible_options(line: str) -> dict[str, Any]:
    visible = _parse_int_list(line)
    if not visible or any(not 0 <= index < OPTION_COUNT for index in visible):
        raise ValueError("expected option positions")
    return {"current_visible_options": sorted(set(visible))}


_OPTIONAL_FIELDS: tuple[_OptionalField, ...] = (
    _OptionalField(
        "remaining seconds",
        _parse_remaining,
        lambda: {"remaining_seconds_for_current": DEFAULT_TIME_LIMIT_SECONDS},
    ),
    _OptionalField("session descriptor", _parse_session_descriptor, lambda: {}),
    _OptionalField("question order", _parse_question_order, lambda: {}),
    _OptionalField("lifeline flags", _parse_lifeline_flags, lambda: {}),
    _OptionalField("option layout", _parse_option_order, lambda: {}),
    _OptionalField("visible options", _parse_visible_options, lambda: {}),
)


def parse_progress_text(text: str) -> SessionProgress:
    """Parse save-file contents, raising :class:`CorruptSaveError` on bad required fields."""
    lines = text.splitlines()
    if len(lines) < 4:
        raise CorruptSaveError(f"Save file has {len(lines)} lines, expected at least 4.")

    try:
        score, correct, wrong, timestamp = (int(token) for token in lines[1].split()[:4])
    except ValueError as exc:
        raise CorruptSaveError("Save file tally line is unreadable.") from exc
    try:
        answers = _parse_int_list(lines[2])
        positions = _parse_int_list(lines[3])
    except ValueError as exc:
        raise CorruptSaveError("Save file answer lines are unreadable.") from exc

    values: dict[str, Any] = {
        "player_name": lines[0],
        "score": score,
        "correct_count": correct,
        "wrong_count": wrong,
        "timestamp": timestamp,
        # zip() drops the surplus of the longer sequence.
        "attempts": [
            {"position": position, "answer": answer}
            for position, answer in zip(positions, answers)
        ],
    }

    for offset, field in enumerate(_OPTIONAL_FIELDS, start=4):
        raw = lines[offset] if offset < len(lines) else ""
        if not raw.strip():
            values.update(field.default())
            continue
        try:
            values.update(field.parse(raw))
        except ValueError:
            logger.warning("Ignoring unreadable %s in save file: %r", field.name, raw)
            values.update(field.default())

    try:
        return SessionProgress.model_validate(values)
    except ValidationError as exc:
        raise CorruptSaveError(f"Save file holds invalid values: {exc.error_count()} error(s).") from exc


def format_progress_text(progress: SessionProgress) -> str:
    descriptor = " ".join(
        (
            progress.category or _NO_CATEGORY,
            str(int(progress.difficulty or 0)),
            str(progress.streak),
        )
    )
    lines = [
        progress.player_name,
        f"{progress.score} {progress.correct_count} {progress.wrong_count} {progress.timestamp}",
        " ".join(str(answer) for answer in progress.answers),
        " ".join(str(position) for position in progress.question_indices),
        str(progress.remaining_seconds_for_current),
        descriptor,
        " ".join(str(index) for index in progress.question_order),
        " ".join("1" if flag else "0" for flag in progress.lifelines_available),
        " ".join(str(index) for index in progress.current_option_order),
        " ".join(str(index) for index in progress.current_visible_options),
    ]
    return "\n".join(lines) + "\n"


class ProgressStore:
    """Reads and overwrites the single save file."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def exists(self) -> bool:
        return self._file_path.exists()

    def save(self, progress: SessionProgress) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete snapshot.
        temp_path = self._file_path.with_name(f"{self._file_path.name}.tmp")
        temp_path.write_text(format_progress_text(progress), encoding="utf-8")
        os.replace(temp_path, self._file_path)

    def load(self) -> SessionProgress | None:
        """Return the saved snapshot, or ``None`` when nothing has been saved."""
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CorruptSaveError(f"Save file could not be read: {exc}") from exc
        return parse_progress_text(text)

    def delete(self) -> None:
        self._file_path.unlink(missing_ok=True)
