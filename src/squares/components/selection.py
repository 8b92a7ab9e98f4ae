from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class SelectionSet:
    """Tile indices chosen this turn (at most two).

    A mismatched pair stays selected until ``clear_remaining`` runs out; the
    pending clear is tagged with the run generation it belongs to.
    """
    indices: List[int] = field(default_factory=list)
    pending_clear: bool = False
    clear_remaining: float = 0.0
    clear_generation: Optional[int] = None

    def clear(self) -> None:
        self.indices.clear()
        self.pending_clear = False
        self.clear_remaining = 0.0
        self.clear_generation = None
