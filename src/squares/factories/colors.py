"""Color pools for board generation."""
from __future__ import annotations

import random
from typing import Iterator, List, Set

from squares.components.tile import NamedColor
from squares.constants import PALETTE


def default_palette() -> List[NamedColor]:
    return [NamedColor(name=name, value=value) for name, value in PALETTE.items()]


def random_colors(rng: random.Random, exclude: Set[str] | None = None) -> Iterator[NamedColor]:
    """Yield an endless stream of opaque colors with unique hex names.

    Names already in ``exclude`` are skipped so generated colors never pair
    with palette colors by accident.
    """
    seen = set(exclude or ())
    while True:
        r, g, b = rng.randrange(256), rng.randrange(256), rng.randrange(256)
        name = f"#{r:02x}{g:02x}{b:02x}"
        if name in seen:
            continue
        seen.add(name)
        yield NamedColor(name=name, value=(r, g, b, 255))
