from pathlib import Path

# Grid dimension per difficulty (tiles per side).
EASY_DIMENSION = 3
MEDIUM_DIMENSION = 5
HARD_DIMENSION = 7

# Countdown (seconds) for each stage of a run, in play order.
STAGE_TIMEOUTS = (15, 10, 5)

# How long a mismatched pair stays face up before the selection clears.
MISMATCH_DELAY = 0.5

# Mismatch policy for new runs. False keeps playing until the stage timer runs out.
END_ON_MISMATCH = False

# Host loops tick at 60Hz unless they pass an explicit dt.
DEFAULT_TICK_DT = 1 / 60

DEFAULT_PLAYER_NAME = "Player"

# Keys inside the persisted score document.
SCORES_KEY_PREFIX = "scores_"
HIGH_SCORE_KEY_PREFIX = "highScore_"

DEFAULT_SAVE_PATH = Path(__file__).resolve().parents[2] / "data" / "scores.json"

# Named palette used before falling back to generated colors (RGBA).
PALETTE = {
    "red": (255, 59, 48, 255),
    "blue": (0, 122, 255, 255),
    "green": (52, 199, 89, 255),
    "yellow": (255, 204, 0, 255),
    "orange": (255, 149, 0, 255),
    "purple": (175, 82, 222, 255),
    "brown": (162, 132, 94, 255),
    "gray": (142, 142, 147, 255),
}
