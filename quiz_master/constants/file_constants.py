"""File locations and category definitions for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

DATA_DIR_ENV_VAR: str = "QUIZ_MASTER_DATA_DIR"
STATE_DIR_ENV_VAR: str = "QUIZ_MASTER_STATE_DIR"

BUNDLED_DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"

HIGH_SCORE_FILE_NAME: str = "high_scores.txt"
SESSION_LOG_FILE_NAME: str = "quiz_logs.txt"
SAVE_FILE_NAME: str = "save_progress.txt"
APP_LOG_FILE_NAME: str = "quiz_master.log"


@dataclass(frozen=True, slots=True)
class Category:
    """A selectable question category backed by one question file."""

    key: str
    title: str
    file_name: str


CATEGORIES: tuple[Category, ...] = (
    Category("science", "Science", "science.txt"),
    Category("sports", "Sports", "sports.txt"),
    Category("history", "History", "history.txt"),
    Category("computer", "Computer", "computer.txt"),
    Category("iq", "IQ/Logic", "iq.txt"),
)


def find_category(key: str) -> Category | None:
    return next((category for category in CATEGORIES if category.key == key), None)


@dataclass(frozen=True, slots=True)
class AppPaths:
    """Resolved locations of question data and persisted player state."""

    data_dir: Path
    state_dir: Path

    @classmethod
    def resolve(cls, data_dir: Path | None = None, state_dir: Path | None = None) -> "AppPaths":
        """Explicit arguments win over environment variables, which win over defaults."""
        if data_dir is None:
            env_data = os.environ.get(DATA_DIR_ENV_VAR)
            data_dir = Path(env_data) if env_data else BUNDLED_DATA_DIR
        if state_dir is None:
            env_state = os.environ.get(STATE_DIR_ENV_VAR)
            state_dir = Path(env_state) if env_state else Path.cwd()
        return cls(data_dir=data_dir, state_dir=state_dir)

    def category_file(self, category: Category) -> Path:
        return self.data_dir / category.file_name

    @property
    def high_score_file(self) -> Path:
        return self.state_dir / HIGH_SCORE_FILE_NAME

    @property
    def session_log_file(self) -> Path:
        return self.state_dir / SESSION_LOG_FILE_NAME

    @property
    def save_file(self) -> Path:
        return self.state_dir / SAVE_FILE_NAME

    @property
    def app_log_file(self) -> Path:
        return self.state_dir / APP_LOG_FILE_NAME
