import random
import time
from typing import Callable, Optional


class BasicHost:
    """Host services reachable from scripts: a wall clock and a random source."""
    def __init__(self, clock: Optional[Callable[[], float]] = None,
                 rng: Optional[random.Random] = None):
        self.clock = clock or time.time
        self.rng = rng or random.Random()

    def now(self) -> float:
        return float(self.clock())

    def random(self) -> float:
        # random.Random.random is already in [0.0, 1.0)
        return self.rng.random()
