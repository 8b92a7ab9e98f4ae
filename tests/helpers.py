from __future__ import annotations

from collections import defaultdict
from typing import Tuple

from esper import World

from squares.components.tile import Tile
from squares.events.bus import EVENT_TICK, EventBus


def drive_seconds(bus: EventBus, seconds: float, dt: float = 0.25) -> None:
    """Emit ticks covering ``seconds``; dt is a power of two so sums stay exact."""
    steps = int(round(seconds / dt))
    for _ in range(steps):
        bus.emit(EVENT_TICK, dt=dt)


def find_pair(world: World) -> Tuple[int, int]:
    """Return board indices of two unmatched tiles sharing a color."""
    by_name: dict[str, list[int]] = defaultdict(list)
    for _, tile in world.get_component(Tile):
        if not tile.is_matched:
            by_name[tile.color.name].append(tile.index)
    for indices in by_name.values():
        if len(indices) >= 2:
            indices.sort()
            return indices[0], indices[1]
    raise AssertionError("board has no unmatched pair left")


def find_mismatch(world: World) -> Tuple[int, int]:
    """Return board indices of two unmatched tiles with different colors."""
    first: Tile | None = None
    for _, tile in sorted(world.get_component(Tile), key=lambda item: item[1].index):
        if tile.is_matched:
            continue
        if first is None:
            first = tile
        elif tile.color != first.color:
            return first.index, tile.index
    raise AssertionError("board has no two differently colored tiles left")
