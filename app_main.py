"""Application entry point for the QuizMaster terminal game."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from quiz_master.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION, HELP_TEXT
from quiz_master.constants.file_constants import AppPaths
from quiz_master.core.quiz_manager import QuizManager
from quiz_master.ui import ConsoleView, MainMenu, TerminalKeyboard
from quiz_master.utils.logging_config import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quiz-master",
        description=APP_ABOUT_TEXT,
        epilog=HELP_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", type=Path, help="Directory holding the category question files.")
    parser.add_argument(
        "--state-dir",
        type=Path,
        help="Directory for the save file, high scores, session log and application log.",
    )
    parser.add_argument("--log-level", default="INFO", help="Application log level (default: INFO).")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, then run the main menu until the player exits."""
    args = _parse_args(argv)
    paths = AppPaths.resolve(data_dir=args.data_dir, state_dir=args.state_dir)
    logger = configure_logging(paths.app_log_file, args.log_level.upper())
    logger.info("Starting %s %s (data: %s, state: %s)", APP_NAME, APP_VERSION, paths.data_dir, paths.state_dir)

    quiz_manager = QuizManager(paths)
    keyboard = TerminalKeyboard()
    view = ConsoleView(release_keys=keyboard.released)
    try:
        MainMenu(quiz_manager, view, keyboard).run()
    except (EOFError, KeyboardInterrupt):
        # The last snapshot on disk stays as the resume point.
        logger.info("Input closed; leaving without finishing the current session.")
        view.write("\nGoodbye!")
    sys.exit(0)


if __name__ == "__main__":
    main()
