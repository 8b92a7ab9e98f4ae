from __future__ import annotations

import logging
from enum import Enum, auto

from esper import World

from squares.constants import MISMATCH_DELAY
from squares.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_SELECTED,
    EVENT_TILE_DESELECTED,
    EVENT_TILES_MATCHED,
    EVENT_TILES_MISMATCHED,
    EVENT_SCORE_CHANGED,
    EVENT_STAGE_CLEARED,
)
from squares.utils.board_ops import get_board, get_selection, get_timer, index_from_position, tile_at
from squares.utils.game_state import get_game_state

logger = logging.getLogger(__name__)


class SelectOutcome(Enum):
    IGNORED = auto()
    SELECTED = auto()
    MATCH = auto()
    MISMATCH = auto()


class SelectionSystem:
    """Resolves tile taps into matches and mismatches for the active stage.

    Flow:
      - First tap marks the tile selected.
      - Second tap compares color names. A match marks both tiles matched,
        scores a point and clears the selection at once. A mismatch keeps both
        tiles face up for ``mismatch_delay`` seconds of ticks, then clears.
      - Taps on matched or selected tiles, out-of-range indices, taps while a
        mismatch is displayed or the timer is paused, and taps outside an
        active run are ignored. The mismatch delay is frozen while paused.
      - A pending clear left over from an earlier run is dropped without
        touching tiles, on the next tick or the next tap.
    When the last pair of the board is matched EVENT_STAGE_CLEARED is emitted.
    """
    def __init__(self, world: World, event_bus: EventBus, *, mismatch_delay: float = MISMATCH_DELAY):
        self.world = world
        self.event_bus = event_bus
        self.mismatch_delay = mismatch_delay
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tile_click(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None:
            row = kwargs.get('row')
            col = kwargs.get('col')
            board = get_board(self.world)
            if row is None or col is None or board is None:
                return
            index = index_from_position(board.dimension, row, col)
            if index is None:
                return
        self.select(index)

    def select(self, tile_index: int) -> SelectOutcome:
        state = get_game_state(self.world)
        board = get_board(self.world)
        if not state.is_active or board is None:
            return SelectOutcome.IGNORED
        timer = get_timer(self.world)
        if timer is not None and timer.paused:
            return SelectOutcome.IGNORED
        selection = get_selection(self.world)
        if selection.pending_clear:
            if selection.clear_generation == state.generation:
                return SelectOutcome.IGNORED
            selection.clear()
        tile = tile_at(self.world, tile_index)
        if tile is None or tile.is_matched or tile.is_selected:
            return SelectOutcome.IGNORED

        tile.is_selected = True
        selection.indices.append(tile_index)
        self.event_bus.emit(EVENT_TILE_SELECTED, index=tile_index)
        if len(selection.indices) < 2:
            return SelectOutcome.SELECTED

        first_index, second_index = selection.indices
        first = tile_at(self.world, first_index)
        if first is not None and first.color == tile.color:
            self._resolve_match(first_index, second_index)
            return SelectOutcome.MATCH
        self._resolve_mismatch(first_index, second_index)
        return SelectOutcome.MISMATCH

    def _resolve_match(self, first_index: int, second_index: int) -> None:
        state = get_game_state(self.world)
        board = get_board(self.world)
        selection = get_selection(self.world)
        color_name = ''
        for index in (first_index, second_index):
            tile = tile_at(self.world, index)
            if tile is None:
                continue
            tile.is_matched = True
            tile.is_selected = False
            color_name = tile.color.name
        selection.clear()
        state.score += 1
        board.remaining_pairs -= 1
        logger.debug("Matched %s at %d/%d, %d pairs left", color_name, first_index, second_index, board.remaining_pairs)
        self.event_bus.emit(
            EVENT_TILES_MATCHED,
            indices=(first_index, second_index),
            color_name=color_name,
            remaining_pairs=board.remaining_pairs,
        )
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=1)
        if board.remaining_pairs <= 0:
            self.event_bus.emit(
                EVENT_STAGE_CLEARED,
                stage_index=state.stage_index,
                score=state.score,
                generation=state.generation,
            )

    def _resolve_mismatch(self, first_index: int, second_index: int) -> None:
        state = get_game_state(self.world)
        selection = get_selection(self.world)
        selection.pending_clear = True
        selection.clear_remaining = self.mismatch_delay
        selection.clear_generation = state.generation
        names = tuple(
            tile.color.name if tile is not None else ''
            for tile in (tile_at(self.world, first_index), tile_at(self.world, second_index))
        )
        self.event_bus.emit(
            EVENT_TILES_MISMATCHED,
            indices=(first_index, second_index),
            color_names=names,
        )

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 0.0)
        selection = get_selection(self.world)
        if not selection.pending_clear:
            return
        timer = get_timer(self.world)
        if timer is not None and timer.paused:
            return
        selection.clear_remaining -= dt
        if selection.clear_remaining > 0:
            return
        state = get_game_state(self.world)
        if selection.clear_generation != state.generation:
            # Scheduled by a previous run; that run's tiles are already gone.
            selection.clear()
            return
        self.clear_selection(reason='mismatch')

    def clear_selection(self, reason: str = 'reset') -> None:
        selection = get_selection(self.world)
        indices = list(selection.indices)
        for index in indices:
            tile = tile_at(self.world, index)
            if tile is not None:
                tile.is_selected = False
        selection.clear()
        if indices:
            self.event_bus.emit(EVENT_TILE_DESELECTED, indices=indices, reason=reason)
