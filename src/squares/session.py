"""Presentation-facing facade over the game core.

Wires the world, event bus and systems together the way a host window would
and exposes the handful of queries and commands a UI needs.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from squares.components.difficulty import Difficulty
from squares.components.game_state import GameState, RunState
from squares.components.score_entry import ScoreEntry
from squares.components.stage import Stage
from squares.components.tile import NamedColor, Tile
from squares.constants import DEFAULT_TICK_DT, END_ON_MISMATCH, MISMATCH_DELAY, STAGE_TIMEOUTS
from squares.events.bus import EVENT_TICK, EventBus
from squares.systems.score_store import ScoreStore
from squares.systems.score_system import ScoreSystem
from squares.systems.selection_system import SelectionSystem, SelectOutcome
from squares.systems.stage_system import StageSystem
from squares.systems.timer_system import TimerSystem
from squares.utils.board_ops import get_board, get_timer, ordered_tiles
from squares.utils.game_state import get_game_state
from squares.world import create_world


@dataclass(frozen=True, slots=True)
class TileView:
    index: int
    color_name: str
    color_value: Tuple[int, int, int, int]
    is_matched: bool
    is_selected: bool


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the current run for rendering."""
    run_state: RunState
    difficulty: Optional[Difficulty]
    stage_index: int
    stage_count: int
    dimension: int
    tiles: Tuple[TileView, ...]
    remaining_pairs: int
    score: int
    high_score: int
    time_remaining: int
    awaiting_name: bool


class GameSession:
    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        save_path: Path | None = None,
        store: ScoreStore | None = None,
        stage_timeouts: Sequence[int] = STAGE_TIMEOUTS,
        mismatch_delay: float = MISMATCH_DELAY,
        end_on_mismatch: bool = END_ON_MISMATCH,
        color_pool: Sequence[NamedColor] | None = None,
    ) -> None:
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, rng=rng)
        self.store = store or ScoreStore(save_path)
        self.stage_system = StageSystem(
            self.world,
            self.event_bus,
            stage_timeouts=stage_timeouts,
            color_pool=color_pool,
            end_on_mismatch=end_on_mismatch,
        )
        self.selection_system = SelectionSystem(self.world, self.event_bus, mismatch_delay=mismatch_delay)
        self.timer_system = TimerSystem(self.world, self.event_bus)
        self.score_system = ScoreSystem(self.event_bus, self.store)

    # -- commands -------------------------------------------------------------

    def start_run(self, difficulty: Difficulty | str, *, end_on_mismatch: bool | None = None) -> GameState:
        return self.stage_system.start_run(difficulty, end_on_mismatch=end_on_mismatch)

    def select(self, tile_index: int) -> SelectOutcome:
        return self.selection_system.select(tile_index)

    def submit_player_name(self, name: str) -> ScoreEntry | None:
        return self.score_system.submit_player_name(name)

    def tick(self, dt: float = DEFAULT_TICK_DT) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def pause(self) -> None:
        self.timer_system.pause()

    def resume(self) -> None:
        self.timer_system.resume()

    def subscribe(self, name: str, fn: Callable) -> None:
        self.event_bus.subscribe(name, fn)

    # -- queries --------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def run_state(self) -> RunState:
        return self.state.run_state

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def stage_index(self) -> int:
        return self.state.stage_index

    @property
    def current_stage(self) -> Stage | None:
        return self.stage_system.current_stage

    @property
    def board(self) -> list[Tile]:
        return ordered_tiles(self.world)

    @property
    def remaining_pairs(self) -> int:
        board = get_board(self.world)
        return board.remaining_pairs if board is not None else 0

    @property
    def time_remaining(self) -> int:
        timer = get_timer(self.world)
        return timer.remaining if timer is not None else 0

    @property
    def high_score(self) -> int:
        """Stored best for the current difficulty, including a result still waiting for a name."""
        difficulty = self.state.difficulty
        if difficulty is None:
            return 0
        best = self.store.high_score(difficulty)
        pending = self.score_system.pending
        if pending is not None and pending.difficulty is difficulty:
            best = max(best, pending.score)
        return best

    def snapshot(self) -> Snapshot:
        state = self.state
        board = get_board(self.world)
        return Snapshot(
            run_state=state.run_state,
            difficulty=state.difficulty,
            stage_index=state.stage_index,
            stage_count=len(self.stage_system.stages),
            dimension=board.dimension if board is not None else 0,
            tiles=tuple(
                TileView(
                    index=tile.index,
                    color_name=tile.color.name,
                    color_value=tile.color.value,
                    is_matched=tile.is_matched,
                    is_selected=tile.is_selected,
                )
                for tile in self.board
            ),
            remaining_pairs=self.remaining_pairs,
            score=state.score,
            high_score=self.high_score,
            time_remaining=self.time_remaining,
            awaiting_name=self.score_system.awaiting_name,
        )
