from dataclasses import dataclass


@dataclass(slots=True)
class StageTimer:
    """Whole-second countdown for the active stage.

    ``elapsed`` buffers sub-second tick time until a full second has passed.
    """
    remaining: int
    running: bool = True
    paused: bool = False
    elapsed: float = 0.0

    def reset(self, seconds: int) -> None:
        self.remaining = seconds
        self.elapsed = 0.0
        self.running = True
        self.paused = False

    def stop(self) -> None:
        self.running = False
