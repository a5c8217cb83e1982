"""Service for the append-only high-score ledger."""

from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path

from quiz_master.constants.quiz_constants import HIGH_SCORE_DISPLAY_LIMIT
from quiz_master.core.models import ScoreEntry

logger = logging.getLogger(__name__)

_FIELD_SEPARATOR = "|"


def format_timestamp(moment: datetime | None = None) -> str:
    """Format like C ``ctime``, e.g. ``Sun Oct 18 13:05:09 2026``."""
    return (moment or datetime.now()).strftime("%a %b %d %H:%M:%S %Y")


class Scoreboard:
    """Appends finished-session scores and reads them back best first.

    Names are written verbatim. Lines are split from the right, so a name
    containing ``|`` still reads back with its own score and date.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def record_score(self, display_name: str, score: int, moment: datetime | None = None) -> ScoreEntry:
        entry = ScoreEntry(name=display_name, score=score, datetime=format_timestamp(moment))
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_path.open("a", encoding="utf-8") as handle:
                handle.write(f"{entry.name}|{entry.score}|{entry.datetime}\n")
        except OSError:
            logger.warning("Could not write high score to %s", self._file_path, exc_info=True)
        return entry

    def get_entries(self) -> list[ScoreEntry]:
        try:
            lines = self._file_path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        except OSError:
            logger.warning("Could not read high scores from %s", self._file_path, exc_info=True)
            return []

        entries: list[ScoreEntry] = []
        for line in lines:
            fields = line.rsplit(_FIELD_SEPARATOR, 2)
            if len(fields) < 3:
                continue
            name, raw_score, stamp = fields
            try:
                score = int(raw_score)
            except ValueError:
                score = 0
            entries.append(ScoreEntry(name=name, score=score, datetime=stamp))
        return entries

    def get_top_scorers(self, limit: int = HIGH_SCORE_DISPLAY_LIMIT) -> list[ScoreEntry]:
        """Return the top N entries, highest score first; ties keep file order."""
        return sorted(self.get_entries(), key=lambda e: -e.score)[:limit]
