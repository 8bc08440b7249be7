"""Randomized human-like delays, expressed in milliseconds."""

import random
import time
from typing import Callable, Optional


class HumanTiming:
    """Produces randomized pauses to avoid uniform, robotic timing."""

    def __init__(self, sleep: Callable[[float], None] = None,
                 clock: Callable[[], float] = None,
                 rng: Optional[random.Random] = None):
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic
        self._rng = rng or random.Random()

    def delay(self, min_ms: int, max_ms: int) -> int:
        """Suspend the caller for a random whole number of ms in [min_ms, max_ms]."""
        if min_ms > max_ms:
            min_ms, max_ms = max_ms, min_ms
        chosen = self._rng.randint(int(min_ms), int(max_ms))
        self._sleep(chosen / 1000.0)
        return chosen

    def now_ms(self) -> float:
        return self._clock() * 1000.0

    def elapsed_since(self, start_ms: float) -> float:
        return self.now_ms() - start_ms


default_timing = HumanTiming()


def random_delay(min_ms: int, max_ms: int) -> int:
    """Pause using the shared default timing instance."""
    return default_timing.delay(min_ms, max_ms)
