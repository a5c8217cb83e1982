"""Quiz-related constants shared across UI and core layers."""

DEFAULT_TIME_LIMIT_SECONDS: int = 10
EXTRA_TIME_SECONDS: int = 10
SESSION_QUESTION_COUNT: int = 10
MIN_DIFFICULTY_POOL_SIZE: int = 10
OPTION_COUNT: int = 4
POLL_INTERVAL_SECONDS: float = 0.1
HIGH_SCORE_DISPLAY_LIMIT: int = 5
DEFAULT_PLAYER_NAME: str = "Player"

# Keyed by Difficulty value (1=Easy, 2=Medium, 3=Hard).
CORRECT_POINTS: dict[int, int] = {1: 10, 2: 15, 3: 20}
WRONG_PENALTY: dict[int, int] = {1: 2, 2: 3, 3: 5}

# Streak length -> bonus awarded on the answer that reaches it.
STREAK_BONUSES: dict[int, int] = {3: 5, 5: 15}
