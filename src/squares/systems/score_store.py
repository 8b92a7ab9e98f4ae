"""Persistent per-difficulty score lists."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from squares.components.difficulty import Difficulty
from squares.components.score_entry import ScoreEntry
from squares.constants import DEFAULT_SAVE_PATH

logger = logging.getLogger(__name__)


class ScoreStore:
    """Loads, appends and queries score entries kept in one JSON document.

    Each difficulty owns a ``scores_<difficulty>`` list in insertion order.
    A ``highScore_<difficulty>`` value is written next to it for readers of
    the file, but the high score is always recomputed from the list.

    Failures never reach the caller: unreadable data loads as an empty list
    and a failed write is logged and dropped.
    """

    def __init__(self, save_path: Path | None = None, *, load_existing: bool = True) -> None:
        self._save_path = Path(save_path) if save_path is not None else DEFAULT_SAVE_PATH
        self._scores: Dict[Difficulty, List[ScoreEntry]] = {difficulty: [] for difficulty in Difficulty}
        if load_existing:
            self.reload()

    @property
    def save_path(self) -> Path:
        return self._save_path

    # -- persistence ----------------------------------------------------------

    def reload(self) -> None:
        payload = self._read_document()
        for difficulty in Difficulty:
            self._scores[difficulty] = self._parse_entries(payload.get(difficulty.scores_key), difficulty)

    def _read_document(self) -> Dict[str, Any]:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError, RecursionError) as exc:
            # ValueError covers bad JSON, bad UTF-8 and oversized integers.
            logger.warning("Ignoring unreadable score file %s: %s", self._save_path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring score file %s: expected an object", self._save_path)
            return {}
        return payload

    @staticmethod
    def _parse_entries(raw: Any, difficulty: Difficulty) -> List[ScoreEntry]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Discarding %s scores: expected a list", difficulty.value)
            return []
        entries: List[ScoreEntry] = []
        for position, item in enumerate(raw):
            try:
                entries.append(ScoreEntry.from_dict(item))
            except (KeyError, ValueError, TypeError, AttributeError) as exc:
                logger.warning("Skipping corrupt %s score #%d: %s", difficulty.value, position, exc)
        return entries

    def save(self) -> bool:
        """Write every list to disk; returns False when the write failed."""
        data: Dict[str, Any] = {}
        for difficulty, entries in self._scores.items():
            data[difficulty.scores_key] = [entry.to_dict() for entry in entries]
            data[difficulty.high_score_key] = self.high_score(difficulty)
        try:
            self._save_path.parent.mkdir(parents=True, exist_ok=True)
            with self._save_path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not save scores to %s: %s", self._save_path, exc)
            return False
        return True

    # -- queries --------------------------------------------------------------

    def record_score(self, difficulty: Difficulty | str, entry: ScoreEntry) -> None:
        difficulty = Difficulty.parse(difficulty)
        self._scores[difficulty].append(entry)
        self.save()

    def load_scores(self, difficulty: Difficulty | str) -> List[ScoreEntry]:
        return list(self._scores[Difficulty.parse(difficulty)])

    def high_score(self, difficulty: Difficulty | str) -> int:
        entries = self._scores[Difficulty.parse(difficulty)]
        return max((entry.score for entry in entries), default=0)

    def ranked_scores(self, difficulty: Difficulty | str, limit: int | None = None) -> List[ScoreEntry]:
        """Best first; equal scores keep insertion order."""
        entries = sorted(self._scores[Difficulty.parse(difficulty)], key=lambda e: -e.score)
        return entries[:limit] if limit is not None else entries

    def reset(self, difficulty: Difficulty | str | None = None) -> None:
        if difficulty is None:
            for key in self._scores:
                self._scores[key] = []
        else:
            self._scores[Difficulty.parse(difficulty)] = []
        self.save()
