"""Lookups over the board's tile entities."""
from __future__ import annotations

from typing import List, Optional

from esper import World

from squares.components.board import Board
from squares.components.stage_timer import StageTimer
from squares.components.selection import SelectionSet
from squares.components.tile import Tile


def get_board(world: World) -> Optional[Board]:
    for _, board in world.get_component(Board):
        return board
    return None


def get_selection(world: World) -> SelectionSet:
    for _, selection in world.get_component(SelectionSet):
        return selection
    selection = SelectionSet()
    world.create_entity(selection)
    return selection


def get_timer(world: World) -> Optional[StageTimer]:
    for _, timer in world.get_component(StageTimer):
        return timer
    return None


def tile_at(world: World, index: int) -> Optional[Tile]:
    for _, tile in world.get_component(Tile):
        if tile.index == index:
            return tile
    return None


def ordered_tiles(world: World) -> List[Tile]:
    return sorted((tile for _, tile in world.get_component(Tile)), key=lambda t: t.index)


def index_from_position(dimension: int, row: int, col: int) -> Optional[int]:
    if not (0 <= row < dimension and 0 <= col < dimension):
        return None
    return row * dimension + col
