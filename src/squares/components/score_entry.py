from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class ScoreEntry:
    """A finished run as stored in the score list of one difficulty."""
    player_name: str
    score: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.player_name,
            "score": self.score,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ScoreEntry":
        """Build an entry from its persisted form.

        Raises ``KeyError``/``ValueError``/``TypeError`` on malformed data; the
        store treats any of these as a corrupt list.
        """
        score = payload["score"]
        if isinstance(score, bool) or not isinstance(score, int):
            raise TypeError(f"score must be an int, got {score!r}")
        timestamp = datetime.fromisoformat(payload["timestamp"])
        entry_id = payload.get("id") or uuid.uuid4().hex
        return cls(
            player_name=str(payload["name"]),
            score=score,
            timestamp=timestamp,
            id=str(entry_id),
        )
