from __future__ import annotations

import logging
from dataclasses import dataclass

from squares.components.difficulty import Difficulty
from squares.components.score_entry import ScoreEntry
from squares.constants import DEFAULT_PLAYER_NAME
from squares.events.bus import (
    EventBus,
    EVENT_NEW_HIGH_SCORE,
    EVENT_RUN_COMPLETE,
    EVENT_RUN_STARTED,
    EVENT_SCORE_RECORDED,
)
from squares.systems.score_store import ScoreStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PendingResult:
    difficulty: Difficulty
    score: int
    previous_high: int


class ScoreSystem:
    """Turns finished runs into stored score entries.

    A result that beats the stored high score waits for the player's name
    (``submit_player_name``); any other result is stored straight away under
    the default name. An unnamed high score is stored under the default name
    as soon as the next run starts.
    """

    def __init__(
        self,
        event_bus: EventBus,
        store: ScoreStore,
        *,
        default_player_name: str = DEFAULT_PLAYER_NAME,
    ) -> None:
        self.event_bus = event_bus
        self.store = store
        self.default_player_name = default_player_name
        self.pending: PendingResult | None = None
        self.event_bus.subscribe(EVENT_RUN_COMPLETE, self._on_run_complete)
        self.event_bus.subscribe(EVENT_RUN_STARTED, self._on_run_started)

    @property
    def awaiting_name(self) -> bool:
        return self.pending is not None

    def _on_run_complete(self, sender, **payload) -> None:
        difficulty = payload.get("difficulty")
        score = payload.get("final_score")
        if difficulty is None or score is None:
            return
        self._flush_pending()
        previous_high = self.store.high_score(difficulty)
        if score > previous_high:
            self.pending = PendingResult(difficulty=difficulty, score=score, previous_high=previous_high)
            self.event_bus.emit(
                EVENT_NEW_HIGH_SCORE,
                difficulty=difficulty,
                score=score,
                previous_high=previous_high,
            )
            return
        self._record(difficulty, self.default_player_name, score)

    def _on_run_started(self, sender, **payload) -> None:
        self._flush_pending()

    def submit_player_name(self, name: str) -> ScoreEntry | None:
        """Store the pending high score under ``name``; no-op when nothing is pending."""
        pending = self.pending
        if pending is None:
            return None
        self.pending = None
        player_name = (name or "").strip() or self.default_player_name
        return self._record(pending.difficulty, player_name, pending.score)

    def _flush_pending(self) -> None:
        if self.pending is not None:
            logger.debug("No name submitted for %s high score; using default", self.pending.difficulty.value)
            self.submit_player_name(self.default_player_name)

    def _record(self, difficulty: Difficulty, player_name: str, score: int) -> ScoreEntry:
        entry = ScoreEntry(player_name=player_name, score=score)
        self.store.record_score(difficulty, entry)
        self.event_bus.emit(
            EVENT_SCORE_RECORDED,
            difficulty=difficulty,
            entry=entry,
            high_score=self.store.high_score(difficulty),
        )
        return entry
