from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    dimension: int
    remaining_pairs: int
    # Run generation the board was dealt for; stale callbacks compare against it.
    generation: int = 0

    @property
    def tile_count(self) -> int:
        return self.dimension * self.dimension

    @property
    def is_cleared(self) -> bool:
        return self.remaining_pairs <= 0
