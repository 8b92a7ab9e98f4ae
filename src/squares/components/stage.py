from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Stage:
    """One timed round of a run."""
    index: int
    timeout_seconds: int
    grid_dimension: int
