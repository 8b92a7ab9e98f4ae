from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Tuple

RGBA = Tuple[int, int, int, int]


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class NamedColor:
    """Tile color. Equality and hashing use ``name`` only.

    Two independently created colors with the same name therefore match,
    which is what lets a board hold pairs built from separate instances.
    """
    name: str
    value: RGBA = field(default=(0, 0, 0, 255), compare=False)
    id: str = field(default_factory=_new_id, compare=False)


@dataclass(slots=True)
class Tile:
    """One face of the memory grid; ``index`` is its slot in the shuffled board."""
    color: NamedColor
    index: int = -1
    is_matched: bool = False
    is_selected: bool = False
    id: str = field(default_factory=_new_id)
