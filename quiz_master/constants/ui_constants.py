"""Terminal UI constants used across prompts and menus."""

BANNER_RULE: str = "================================"
WELCOME_TITLE: str = "      Welcome to QuizMaster!"
HIGH_SCORES_TITLE: str = "        High Scores"

MAIN_MENU_OPTIONS: tuple[str, ...] = (
    "Start Quiz",
    "View High Scores",
    "Resume Saved Quiz",
    "Exit Game",
)
MENU_START_QUIZ: int = 1
MENU_HIGH_SCORES: int = 2
MENU_RESUME_QUIZ: int = 3
MENU_EXIT: int = 4

QUESTION_HINT: str = "Press 1-4 to answer immediately, L for lifelines or S to skip."
HIDDEN_OPTION_TEXT: str = "----"
LIFELINE_MENU_TITLE: str = "--- Lifelines menu (timer paused) ---"
LIFELINE_DESCRIPTIONS: dict[int, str] = {
    1: "50/50   (remove two wrong options)",
    2: "Skip    (skip question, no penalty, moves on)",
    3: "Replace (replace with another question; remaining time preserved)",
    4: "ExtraTime (+10s to remaining time)",
}
LIFELINE_CANCELLED_MESSAGE: str = "Lifeline cancelled. Resuming timer."

NO_HIGH_SCORES_MESSAGE: str = "No high scores yet."
NO_SAVED_PROGRESS_MESSAGE: str = "No saved progress found."
CORRUPT_SAVE_MESSAGE: str = "Saved progress is unreadable and cannot be resumed."
RETURN_TO_MENU_PROMPT: str = "Press Enter to return to main menu..."
START_QUIZ_PROMPT: str = "Quiz starting! Press Enter to start..."
