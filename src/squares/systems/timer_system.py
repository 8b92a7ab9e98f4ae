from __future__ import annotations

from esper import World

from squares.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_TIMER_TICK,
    EVENT_STAGE_TIMEOUT,
    EVENT_TIMER_PAUSED,
    EVENT_TIMER_RESUMED,
)
from squares.utils.board_ops import get_board, get_timer
from squares.utils.game_state import get_game_state


class TimerSystem:
    """Counts the stage timer down once per elapsed second of EVENT_TICK time.

    Ticks are ignored while paused, after the timer was stopped and once the
    run is over, so a late tick can never time out a finished run.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 0.0)
        if not dt or dt <= 0:
            return
        timer = get_timer(self.world)
        state = get_game_state(self.world)
        if timer is None or not timer.running or timer.paused or not state.is_active:
            return
        timer.elapsed += dt
        generation = state.generation
        while timer.elapsed >= 1.0 and timer.remaining > 0:
            timer.elapsed -= 1.0
            timer.remaining -= 1
            self.event_bus.emit(EVENT_TIMER_TICK, remaining=timer.remaining, stage_index=state.stage_index)
        if timer.remaining > 0:
            return
        timer.stop()
        board = get_board(self.world)
        if board is not None and not board.is_cleared:
            self.event_bus.emit(EVENT_STAGE_TIMEOUT, stage_index=state.stage_index, generation=generation)

    def pause(self) -> None:
        timer = get_timer(self.world)
        if timer is None or timer.paused or not timer.running:
            return
        timer.paused = True
        self.event_bus.emit(EVENT_TIMER_PAUSED, remaining=timer.remaining)

    def resume(self) -> None:
        timer = get_timer(self.world)
        if timer is None or not timer.paused:
            return
        timer.paused = False
        self.event_bus.emit(EVENT_TIMER_RESUMED, remaining=timer.remaining)
