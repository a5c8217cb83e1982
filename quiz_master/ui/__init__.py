"""Terminal UI components for the quiz game."""

from .console import ConsoleView
from .keyboard import TerminalKeyboard
from .main_menu import MainMenu

__all__ = [
    "ConsoleView",
    "MainMenu",
    "TerminalKeyboard",
]
