from __future__ import annotations

from esper import World

from squares.components.game_state import GameState, RunState
from squares.events.bus import EVENT_RUN_STATE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    """Return the singleton GameState, creating it on first use."""
    for _, state in world.get_component(GameState):
        return state
    state = GameState()
    world.create_entity(state)
    return state


def set_run_state(world: World, event_bus: EventBus, run_state: RunState) -> None:
    """Update the run state and emit a change event when it differs."""

    state = get_game_state(world)
    previous_state = state.run_state
    if previous_state is run_state:
        return
    state.run_state = run_state
    event_bus.emit(
        EVENT_RUN_STATE_CHANGED,
        previous_state=previous_state,
        new_state=run_state,
    )
