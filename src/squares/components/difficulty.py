from __future__ import annotations

from enum import Enum

from squares.constants import EASY_DIMENSION, HARD_DIMENSION, MEDIUM_DIMENSION, SCORES_KEY_PREFIX, HIGH_SCORE_KEY_PREFIX


class Difficulty(Enum):
    """Selectable difficulty; the value doubles as the persistence namespace."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def dimension(self) -> int:
        return _DIMENSIONS[self]

    @property
    def scores_key(self) -> str:
        return f"{SCORES_KEY_PREFIX}{self.value}"

    @property
    def high_score_key(self) -> str:
        return f"{HIGH_SCORE_KEY_PREFIX}{self.value}"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        """Accept an enum member or a case-insensitive name such as ``"Hard"``."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown difficulty: {value!r}")


_DIMENSIONS = {
    Difficulty.EASY: EASY_DIMENSION,
    Difficulty.MEDIUM: MEDIUM_DIMENSION,
    Difficulty.HARD: HARD_DIMENSION,
}
