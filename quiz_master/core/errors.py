"""Exception types raised by the quiz core."""

from __future__ import annotations


class QuizMasterError(Exception):
    """Base class for recoverable quiz errors shown to the player."""


class QuestionImportError(QuizMasterError):
    """Raised when a category file is missing or holds an incomplete block."""


class EmptyRepositoryError(QuizMasterError):
    """Raised when a session cannot be built because there are no questions."""


class CorruptSaveError(QuizMasterError):
    """Raised when the save file exists but a required field cannot be parsed."""
