import random
from collections import Counter

import pytest
from esper import World

from squares.components.board import Board
from squares.components.tile import NamedColor, Tile
from squares.factories.board import generate_board, spawn_board
from squares.factories.colors import default_palette, random_colors


def _counts(tiles):
    return Counter(tile.color.name for tile in tiles)


@pytest.mark.parametrize("dimension", [2, 4, 6, 8])
def test_even_boards_hold_distinct_pairs(dimension):
    tiles = generate_board(dimension, rng=random.Random(dimension))
    counts = _counts(tiles)
    assert len(tiles) == dimension * dimension
    assert len(counts) == dimension * dimension // 2
    assert set(counts.values()) == {2}


@pytest.mark.parametrize("dimension", [1, 3, 5, 7])
def test_odd_boards_have_exactly_one_unpaired_tile(dimension):
    tiles = generate_board(dimension, rng=random.Random(dimension))
    counts = _counts(tiles)
    odd = [name for name, count in counts.items() if count % 2]
    assert len(tiles) == dimension * dimension
    assert len(odd) == 1
    assert counts[odd[0]] == 1


def test_indices_follow_shuffled_order():
    tiles = generate_board(4, rng=random.Random(3))
    assert [tile.index for tile in tiles] == list(range(16))


def test_shuffle_preserves_color_multiset():
    pool = default_palette()
    rng_a = random.Random(11)
    rng_b = random.Random(12)
    first = generate_board(4, pool, rng_a)
    second = generate_board(4, pool, rng_b)
    assert sorted(_counts(first).values()) == sorted(_counts(second).values())
    assert all(not t.is_matched and not t.is_selected for t in first)


def test_same_seed_gives_same_board():
    first = generate_board(4, rng=random.Random(5))
    second = generate_board(4, rng=random.Random(5))
    assert [t.color.name for t in first] == [t.color.name for t in second]


def test_small_pool_is_topped_up_with_generated_colors():
    pool = [NamedColor(name="red"), NamedColor(name="blue")]
    tiles = generate_board(4, pool, random.Random(1))
    counts = _counts(tiles)
    assert len(counts) == 8
    assert {"red", "blue"} <= set(counts)
    assert set(counts.values()) == {2}


def test_duplicate_pool_names_are_collapsed():
    pool = [NamedColor(name="red"), NamedColor(name="red"), NamedColor(name="blue")]
    tiles = generate_board(2, pool, random.Random(2))
    assert _counts(tiles) == Counter({"red": 2, "blue": 2})


def test_invalid_dimension_rejected():
    with pytest.raises(ValueError):
        generate_board(0)


def test_random_colors_are_unique_and_skip_excluded():
    stream = random_colors(random.Random(0), exclude={"#000000"})
    names = [next(stream).name for _ in range(200)]
    assert len(set(names)) == 200
    assert "#000000" not in names


def test_spawn_board_replaces_previous_tiles():
    world = World()
    spawn_board(world, 2, generate_board(2, rng=random.Random(0)), generation=1)
    spawn_board(world, 3, generate_board(3, rng=random.Random(1)), generation=2)

    tiles = [tile for _, tile in world.get_component(Tile)]
    boards = [board for _, board in world.get_component(Board)]
    assert len(tiles) == 9
    assert len(boards) == 1
    assert boards[0].dimension == 3
    assert boards[0].remaining_pairs == 4
    assert boards[0].generation == 2
