import random

from squares.components.difficulty import Difficulty
from squares.components.game_state import RunComplete, RunState
from squares.components.stage import Stage
from squares.components.tile import Tile
from squares.events.bus import (
    EventBus,
    EVENT_RUN_COMPLETE,
    EVENT_RUN_STARTED,
    EVENT_RUN_STATE_CHANGED,
    EVENT_STAGE_STARTED,
)
from squares.systems.selection_system import SelectionSystem, SelectOutcome
from squares.systems.stage_system import StageSystem, build_stages
from squares.systems.timer_system import TimerSystem
from squares.utils.board_ops import get_board, get_timer
from squares.utils.game_state import get_game_state
from squares.world import create_world

from tests.helpers import drive_seconds, find_pair


def _setup(seed=0, **kwargs):
    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed))
    stages = StageSystem(world, bus, **kwargs)
    selection = SelectionSystem(world, bus)
    TimerSystem(world, bus)
    return bus, world, stages, selection


def _clear_board(world, selection):
    for _ in range(get_board(world).remaining_pairs):
        a, b = find_pair(world)
        selection.select(a)
        assert selection.select(b) is SelectOutcome.MATCH


def test_build_stages_uses_decreasing_timeouts():
    assert build_stages(5) == [
        Stage(index=0, timeout_seconds=15, grid_dimension=5),
        Stage(index=1, timeout_seconds=10, grid_dimension=5),
        Stage(index=2, timeout_seconds=5, grid_dimension=5),
    ]


def test_start_run_deals_first_stage():
    bus, world, stages, _ = _setup()
    started = {}
    bus.subscribe(EVENT_RUN_STARTED, lambda sender, **payload: started.update(payload))

    state = stages.start_run("Easy")

    assert state.run_state is RunState.ACTIVE
    assert state.stage_index == 0
    assert state.score == 0
    assert state.difficulty is Difficulty.EASY
    assert get_timer(world).remaining == 15
    assert len(list(world.get_component(Tile))) == 9
    assert get_board(world).remaining_pairs == 4
    assert started["generation"] == state.generation
    assert stages.current_stage == Stage(index=0, timeout_seconds=15, grid_dimension=3)


def test_easy_scenario_clears_stage_and_advances_with_score_carried():
    bus, world, stages, selection = _setup()
    stage_events = []
    bus.subscribe(EVENT_STAGE_STARTED, lambda sender, **payload: stage_events.append(payload))
    stages.start_run(Difficulty.EASY)

    drive_seconds(bus, 3)
    _clear_board(world, selection)

    state = get_game_state(world)
    assert state.score == 4
    assert state.stage_index == 1
    assert state.run_state is RunState.ACTIVE
    assert get_timer(world).remaining == 10
    assert get_board(world).remaining_pairs == 4
    assert all(not tile.is_matched for _, tile in world.get_component(Tile))
    assert [e["timeout_seconds"] for e in stage_events] == [15, 10]


def test_clearing_final_stage_wins_exactly_once():
    bus, world, stages, selection = _setup()
    completions = []
    bus.subscribe(EVENT_RUN_COMPLETE, lambda sender, **payload: completions.append(payload))
    stages.start_run(Difficulty.EASY)

    for _ in range(3):
        _clear_board(world, selection)

    state = get_game_state(world)
    assert state.run_state is RunState.WON
    assert state.result == RunComplete(won=True, final_score=12)
    assert len(completions) == 1
    assert completions[0]["won"] is True
    assert completions[0]["final_score"] == 12
    assert completions[0]["difficulty"] is Difficulty.EASY

    # Repeated calls report the same result without emitting again.
    assert stages.advance_stage() == RunComplete(won=True, final_score=12)
    assert len(completions) == 1


def test_advance_stage_returns_next_stage():
    bus, world, stages, _ = _setup()
    stages.start_run(Difficulty.MEDIUM)

    stage = stages.advance_stage()

    assert stage == Stage(index=1, timeout_seconds=10, grid_dimension=5)
    assert get_timer(world).remaining == 10
    assert len(list(world.get_component(Tile))) == 25


def test_advance_stage_without_run_is_noop():
    bus, world, stages, _ = _setup()
    assert stages.advance_stage() is None


def test_timeout_loses_and_blocks_input():
    bus, world, stages, selection = _setup()
    completions = []
    bus.subscribe(EVENT_RUN_COMPLETE, lambda sender, **payload: completions.append(payload))
    stages.start_run(Difficulty.MEDIUM)
    a, b = find_pair(world)
    selection.select(a)
    selection.select(b)

    drive_seconds(bus, 15)

    state = get_game_state(world)
    assert state.run_state is RunState.LOST
    assert state.result == RunComplete(won=False, final_score=1)
    assert len(completions) == 1
    assert completions[0]["reason"] == "timeout"

    c, d = find_pair(world)
    assert selection.select(c) is SelectOutcome.IGNORED
    assert state.score == 1
    assert all(not tile.is_selected for _, tile in world.get_component(Tile))


def test_timeout_after_earlier_stages_still_loses():
    bus, world, stages, selection = _setup()
    stages.start_run(Difficulty.EASY)
    _clear_board(world, selection)
    _clear_board(world, selection)

    drive_seconds(bus, 5)

    state = get_game_state(world)
    assert state.stage_index == 2
    assert state.run_state is RunState.LOST
    assert state.result.final_score == 8


def test_on_timeout_ignored_when_not_active():
    bus, world, stages, _ = _setup()
    assert stages.on_timeout() is None
    stages.start_run(Difficulty.EASY)
    result = stages.on_timeout()
    assert result == RunComplete(won=False, final_score=0)
    assert stages.on_timeout() is None


def test_restart_resets_state_and_emits_state_change():
    bus, world, stages, selection = _setup()
    transitions = []
    bus.subscribe(EVENT_RUN_STATE_CHANGED, lambda sender, **payload: transitions.append(payload["new_state"]))
    stages.start_run(Difficulty.EASY)
    first_generation = get_game_state(world).generation
    stages.on_timeout()

    state = stages.start_run(Difficulty.HARD)

    assert state.generation == first_generation + 1
    assert state.result is None
    assert state.run_state is RunState.ACTIVE
    assert len(list(world.get_component(Tile))) == 49
    assert get_board(world).remaining_pairs == 24
    assert transitions == [RunState.ACTIVE, RunState.LOST, RunState.ACTIVE]


def test_custom_stage_timeouts():
    bus, world, stages, selection = _setup(stage_timeouts=(3,))
    stages.start_run(Difficulty.EASY)
    _clear_board(world, selection)
    assert get_game_state(world).run_state is RunState.WON
