"""Board dealing: pure tile generation plus spawning tiles into the world."""
from __future__ import annotations

import logging
import random
from itertools import islice
from typing import List, Sequence

from esper import World

from squares.components.board import Board
from squares.components.tile import NamedColor, Tile
from squares.factories.colors import default_palette, random_colors

logger = logging.getLogger(__name__)


def _distinct(colors: Sequence[NamedColor]) -> List[NamedColor]:
    # NamedColor hashes by name, so this keeps the first color per name.
    seen: set[NamedColor] = set()
    unique: List[NamedColor] = []
    for color in colors:
        if color not in seen:
            seen.add(color)
            unique.append(color)
    return unique


def generate_board(
    dimension: int,
    color_pool: Sequence[NamedColor] | None = None,
    rng: random.Random | None = None,
) -> List[Tile]:
    """Return ``dimension**2`` shuffled tiles grouped into same-name pairs.

    Pair colors are distinct. When the pool runs short it is topped up with
    generated colors. An odd tile count gets one extra tile that cannot be
    paired: its color is one no pair uses.
    Nothing outside the returned list is touched.
    """
    if dimension < 1:
        raise ValueError(f"Board dimension must be >= 1, got {dimension}")
    rng = rng or random.Random()
    tile_count = dimension * dimension
    pair_count = tile_count // 2

    pool = _distinct(default_palette() if color_pool is None else color_pool)
    rng.shuffle(pool)
    if len(pool) < pair_count + tile_count % 2:
        missing = pair_count + tile_count % 2 - len(pool)
        pool.extend(islice(random_colors(rng, exclude={c.name for c in pool}), missing))

    pair_colors = pool[:pair_count]
    tiles: List[Tile] = []
    for color in pair_colors:
        tiles.append(Tile(color=color))
        tiles.append(Tile(color=color))

    if tile_count % 2:
        tiles.append(Tile(color=rng.choice(pool[pair_count:])))

    rng.shuffle(tiles)
    for index, tile in enumerate(tiles):
        tile.index = index
    return tiles


def clear_board(world: World) -> None:
    for ent, _ in list(world.get_component(Tile)):
        world.delete_entity(ent, immediate=True)
    for ent, _ in list(world.get_component(Board)):
        world.delete_entity(ent, immediate=True)


def spawn_board(world: World, dimension: int, tiles: Sequence[Tile], *, generation: int = 0) -> int:
    """Replace the current board with ``tiles`` and return the board entity."""
    clear_board(world)
    for tile in tiles:
        world.create_entity(tile)
    board_entity = world.create_entity(
        Board(dimension=dimension, remaining_pairs=len(tiles) // 2, generation=generation)
    )
    logger.debug(
        "Spawned %dx%d board (%d tiles, generation %d)",
        dimension, dimension, len(tiles), generation,
    )
    return board_entity
