"""Game state resource describing the current run."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from squares.components.difficulty import Difficulty


class RunState(Enum):
    """Lifecycle of a run as seen by the presentation layer."""
    IDLE = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.WON, RunState.LOST)


@dataclass(frozen=True, slots=True)
class RunComplete:
    won: bool
    final_score: int


@dataclass
class GameState:
    """Singleton component storing the state of the current run."""
    run_state: RunState = RunState.IDLE
    difficulty: Optional[Difficulty] = None
    score: int = 0
    stage_index: int = 0
    # Incremented on every new run so delayed callbacks can detect staleness.
    generation: int = 0
    end_on_mismatch: bool = False
    result: Optional[RunComplete] = None

    @property
    def is_active(self) -> bool:
        return self.run_state is RunState.ACTIVE
