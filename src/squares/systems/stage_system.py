"""Run and stage sequencing: dealing boards, advancing stages, ending runs."""
from __future__ import annotations

import logging
import random
from typing import List, Sequence

from esper import World

from squares.components.difficulty import Difficulty
from squares.components.game_state import GameState, RunComplete, RunState
from squares.components.stage import Stage
from squares.components.stage_timer import StageTimer
from squares.components.tile import NamedColor
from squares.constants import END_ON_MISMATCH, STAGE_TIMEOUTS
from squares.events.bus import (
    EventBus,
    EVENT_BOARD_READY,
    EVENT_RUN_COMPLETE,
    EVENT_RUN_STARTED,
    EVENT_STAGE_CLEARED,
    EVENT_STAGE_STARTED,
    EVENT_STAGE_TIMEOUT,
    EVENT_TILES_MISMATCHED,
)
from squares.factories.board import generate_board, spawn_board
from squares.utils.board_ops import get_board, get_selection, get_timer
from squares.utils.game_state import get_game_state, set_run_state

logger = logging.getLogger(__name__)


def build_stages(dimension: int, timeouts: Sequence[int] = STAGE_TIMEOUTS) -> List[Stage]:
    return [
        Stage(index=i, timeout_seconds=int(timeout), grid_dimension=dimension)
        for i, timeout in enumerate(timeouts)
    ]


class StageSystem:
    """Owns the current board and stage index of a run.

    A run is an ordered list of stages sharing the difficulty's grid size
    with decreasing timeouts. Score carries over between stages. The run ends
    as won after the last stage is cleared, and as lost on a stage timeout or,
    when ``end_on_mismatch`` is set, on the first mismatch.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        stage_timeouts: Sequence[int] = STAGE_TIMEOUTS,
        color_pool: Sequence[NamedColor] | None = None,
        end_on_mismatch: bool = END_ON_MISMATCH,
    ) -> None:
        if not stage_timeouts:
            raise ValueError("At least one stage timeout is required")
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self._stage_timeouts = tuple(stage_timeouts)
        self._color_pool = list(color_pool) if color_pool is not None else None
        self._end_on_mismatch = end_on_mismatch
        self.stages: List[Stage] = []

        self.event_bus.subscribe(EVENT_STAGE_CLEARED, self._on_stage_cleared)
        self.event_bus.subscribe(EVENT_STAGE_TIMEOUT, self._on_stage_timeout)
        self.event_bus.subscribe(EVENT_TILES_MISMATCHED, self._on_tiles_mismatched)

    @property
    def current_stage(self) -> Stage | None:
        state = get_game_state(self.world)
        if not self.stages or state.run_state is RunState.IDLE:
            return None
        return self.stages[state.stage_index]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_run(self, difficulty: Difficulty | str, *, end_on_mismatch: bool | None = None) -> GameState:
        difficulty = Difficulty.parse(difficulty)
        state = get_game_state(self.world)
        state.generation += 1
        state.difficulty = difficulty
        state.score = 0
        state.stage_index = 0
        state.result = None
        state.end_on_mismatch = self._end_on_mismatch if end_on_mismatch is None else end_on_mismatch
        self.stages = build_stages(difficulty.dimension, self._stage_timeouts)
        logger.debug("Starting %s run (generation %d)", difficulty.value, state.generation)
        set_run_state(self.world, self.event_bus, RunState.ACTIVE)
        self.event_bus.emit(
            EVENT_RUN_STARTED,
            difficulty=difficulty,
            generation=state.generation,
            end_on_mismatch=state.end_on_mismatch,
        )
        self._enter_stage(self.stages[0])
        return state

    def advance_stage(self) -> Stage | RunComplete | None:
        state = get_game_state(self.world)
        if state.run_state.is_terminal and state.result is not None:
            return state.result
        if not state.is_active:
            return None
        if state.stage_index < len(self.stages) - 1:
            stage = self.stages[state.stage_index + 1]
            self._enter_stage(stage)
            return stage
        return self._finish(won=True, reason="cleared")

    def on_timeout(self) -> RunComplete | None:
        state = get_game_state(self.world)
        board = get_board(self.world)
        if not state.is_active or board is None or board.is_cleared:
            return None
        return self._finish(won=False, reason="timeout")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_stage_cleared(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if payload.get("generation", state.generation) != state.generation:
            return
        if not state.is_active:
            return
        self.advance_stage()

    def _on_stage_timeout(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if payload.get("generation", state.generation) != state.generation:
            return
        self.on_timeout()

    def _on_tiles_mismatched(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state.is_active and state.end_on_mismatch:
            self._finish(won=False, reason="mismatch")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter_stage(self, stage: Stage) -> None:
        state = get_game_state(self.world)
        state.stage_index = stage.index
        tiles = generate_board(stage.grid_dimension, self._color_pool, self._rng)
        spawn_board(self.world, stage.grid_dimension, tiles, generation=state.generation)
        # A clear still pending from an earlier run is left for SelectionSystem to drop.
        selection = get_selection(self.world)
        if selection.clear_generation in (None, state.generation):
            selection.clear()
        timer = get_timer(self.world)
        if timer is None:
            self.world.create_entity(StageTimer(remaining=stage.timeout_seconds))
        else:
            timer.reset(stage.timeout_seconds)
        board = get_board(self.world)
        self.event_bus.emit(
            EVENT_BOARD_READY,
            dimension=stage.grid_dimension,
            tile_count=len(tiles),
            pairs=board.remaining_pairs,
            generation=state.generation,
        )
        self.event_bus.emit(
            EVENT_STAGE_STARTED,
            stage_index=stage.index,
            timeout_seconds=stage.timeout_seconds,
            grid_dimension=stage.grid_dimension,
        )

    def _finish(self, *, won: bool, reason: str) -> RunComplete:
        state = get_game_state(self.world)
        if state.result is not None:
            return state.result
        result = RunComplete(won=won, final_score=state.score)
        state.result = result
        timer = get_timer(self.world)
        if timer is not None:
            timer.stop()
        set_run_state(self.world, self.event_bus, RunState.WON if won else RunState.LOST)
        logger.debug("Run ended (%s): won=%s score=%d", reason, won, state.score)
        self.event_bus.emit(
            EVENT_RUN_COMPLETE,
            won=won,
            final_score=state.score,
            difficulty=state.difficulty,
            reason=reason,
        )
        return result
