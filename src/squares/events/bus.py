from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced systems alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                            # payload: dt=float (seconds)
EVENT_TIMER_TICK = "timer_tick"                # payload: remaining=int, stage_index=int
EVENT_STAGE_TIMEOUT = "stage_timeout"          # payload: stage_index=int, generation=int
EVENT_TIMER_PAUSED = "timer_paused"            # payload: remaining=int
EVENT_TIMER_RESUMED = "timer_resumed"          # payload: remaining=int


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                # payload: index=int | row=int, col=int
EVENT_TILE_SELECTED = "tile_selected"          # payload: index=int
EVENT_TILE_DESELECTED = "tile_deselected"      # payload: indices=list[int], reason=str


# ============================================================================
# BOARD & MATCHING
# ============================================================================
EVENT_BOARD_READY = "board_ready"              # payload: dimension=int, tile_count=int, pairs=int, generation=int
EVENT_TILES_MATCHED = "tiles_matched"          # payload: indices=(int, int), color_name=str, remaining_pairs=int
EVENT_TILES_MISMATCHED = "tiles_mismatched"    # payload: indices=(int, int), color_names=(str, str)
EVENT_SCORE_CHANGED = "score_changed"          # payload: score=int, delta=int


# ============================================================================
# STAGES & RUNS
# ============================================================================
EVENT_RUN_STARTED = "run_started"              # payload: difficulty=Difficulty, generation=int, end_on_mismatch=bool
EVENT_STAGE_STARTED = "stage_started"          # payload: stage_index=int, timeout_seconds=int, grid_dimension=int
EVENT_STAGE_CLEARED = "stage_cleared"          # payload: stage_index=int, score=int, generation=int
EVENT_RUN_COMPLETE = "run_complete"            # payload: won=bool, final_score=int, difficulty=Difficulty, reason=str
EVENT_RUN_STATE_CHANGED = "run_state_changed"  # payload: previous_state=RunState|None, new_state=RunState


# ============================================================================
# SCORES
# ============================================================================
EVENT_NEW_HIGH_SCORE = "new_high_score"        # payload: difficulty=Difficulty, score=int, previous_high=int
EVENT_SCORE_RECORDED = "score_recorded"        # payload: difficulty=Difficulty, entry=ScoreEntry, high_score=int
