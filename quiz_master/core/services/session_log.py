"""Append-only audit trail of completed sessions."""

from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path

from quiz_master.core.progress_store import SessionProgress
from quiz_master.core.services.scoreboard import format_timestamp

logger = logging.getLogger(__name__)

_RECORD_SEPARATOR = "-------------------------------"


def format_session_record(progress: SessionProgress, moment: datetime | None = None) -> str:
    header = (
        f"Player: {progress.player_name} | Score: {progress.score} | "
        f"Correct: {progress.correct_count} | Wrong: {progress.wrong_count} | "
        f"Time: {format_timestamp(moment)}"
    )
    indices = " ,".join(str(index) for index in progress.question_indices)
    answers = " ,".join(str(answer) for answer in progress.answers)
    return f"{header}\nQuestions indices: {indices}\nAnswers: {answers}\n{_RECORD_SEPARATOR}\n"


class SessionLog:
    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def append(self, progress: SessionProgress, moment: datetime | None = None) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_path.open("a", encoding="utf-8") as handle:
                handle.write(format_session_record(progress, moment))
        except OSError:
            logger.warning("Could not append session record to %s", self._file_path, exc_info=True)
