"""Utilities for importing questions from a category text file.

File format (repeat blocks, optionally separated by blank lines):

    Question text
    First option
    Second option
    Third option
    Fourth option
    2          <- correct option, 1-4
    1          <- difficulty: 1=Easy, 2=Medium, 3=Hard

Example:

    Which planet is known as the Red Planet?
    Venus
    Mars
    Jupiter
    Mercury
    2
    1

Loading fails closed: a block missing any of its seven lines, or holding a
value out of range, rejects the whole file instead of keeping the blocks
parsed so far.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from quiz_master.constants.quiz_constants import OPTION_COUNT
from quiz_master.core.errors import QuestionImportError
from quiz_master.core.models import Difficulty, Question

logger = logging.getLogger(__name__)

_BLOCK_LENGTH = 1 + OPTION_COUNT + 2


@dataclass(slots=True)
class ImportedQuestions:
    """Container for a parsed category file."""

    source_path: Path
    questions: list[Question]


def load_questions_from_file(file_path: Path) -> ImportedQuestions:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuestionImportError(f"Could not read questions from {file_path.name}.") from exc
    questions = parse_question_text(text)
    logger.info("Loaded %d questions from %s", len(questions), file_path)
    return ImportedQuestions(source_path=file_path, questions=questions)


def parse_question_text(text: str) -> list[Question]:
    lines = [line.rstrip("\r\n") for line in text.splitlines()]
    questions: list[Question] = []
    position = 0
    while position < len(lines):
        if not lines[position].strip():
            position += 1
            continue
        block = lines[position:position + _BLOCK_LENGTH]
        block_number = len(questions) + 1
        if len(block) < _BLOCK_LENGTH:
            raise QuestionImportError(
                f"Question {block_number} is incomplete: expected {_BLOCK_LENGTH} lines, found {len(block)}."
            )
        questions.append(_parse_block(block, block_number, source_index=len(questions)))
        position += _BLOCK_LENGTH
    return questions


def _parse_block(block: list[str], block_number: int, source_index: int) -> Question:
    question_text = block[0].strip()
    options = tuple(_sanitize_option(line) for line in block[1:1 + OPTION_COUNT])
    if any(not option for option in options):
        raise QuestionImportError(f"Question {block_number} has an empty option line.")

    correct_number = _parse_int(block[1 + OPTION_COUNT], "correct option", block_number)
    if not 1 <= correct_number <= OPTION_COUNT:
        raise QuestionImportError(
            f"Question {block_number}: correct option must be between 1 and {OPTION_COUNT}."
        )

    difficulty_value = _parse_int(block[2 + OPTION_COUNT], "difficulty", block_number)
    try:
        difficulty = Difficulty(difficulty_value)
    except ValueError as exc:
        raise QuestionImportError(f"Question {block_number}: difficulty must be 1, 2 or 3.") from exc

    return Question(
        text=question_text,
        options=options,  # type: ignore[arg-type]
        original_correct_index=correct_number - 1,
        correct_index=correct_number - 1,
        difficulty=difficulty,
        source_index=source_index,
    )


def _parse_int(raw_value: str, field_name: str, block_number: int) -> int:
    try:
        return int(raw_value.strip())
    except ValueError as exc:
        raise QuestionImportError(
            f"Question {block_number}: {field_name} must be an integer, got '{raw_value.strip()}'."
        ) from exc


def _sanitize_option(option_text: str) -> str:
    return option_text.strip()
