"""Static metadata describing QuizMaster."""

APP_NAME = "QuizMaster"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "QuizMaster is a terminal trivia game: ten timed questions per round, "
    "four single-use lifelines, a local high-score table and resumable progress."
)

HELP_TEXT = (
    "Question files hold one block per question:\n\n"
    "What is the chemical symbol for gold?\n"
    "Ag\nAu\nGd\nGo\n"
    "2\n"
    "1\n\n"
    "The four option lines are followed by the correct option (1-4) and the "
    "difficulty (1=Easy, 2=Medium, 3=Hard). Blocks may be separated by a blank line."
)
