import random

from esper import World
from .events.bus import EventBus
from squares.components.game_state import GameState
from squares.components.selection import SelectionSet


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "event_bus", event_bus)

    # Singleton resources shared by every system.
    world.create_entity(GameState())
    world.create_entity(SelectionSet())
    return world
