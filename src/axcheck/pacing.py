from __future__ import annotations

import time
from typing import Callable, Optional


class Pacer:
    """
    Fixed-rate wake-ups, like a ticker.

    Notes:
    - interval 0 is a tight loop: `wait()` never sleeps and never reads the clock.
    - deadlines advance on a fixed grid; deadlines already missed are dropped,
      not replayed in a burst.
    - clock and sleep are injectable so the schedule can be tested without waiting.
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._deadline: Optional[float] = None

    @property
    def untethered(self) -> bool:
        return self.interval == 0

    def wait(self) -> None:
        if self.untethered:
            return

        now = self._clock()
        if self._deadline is None:
            self._deadline = now + self.interval

        delay = self._deadline - now
        if delay > 0:
            self._sleep(delay)
            now = self._clock()

        self._deadline += self.interval
        while self._deadline <= now:
            self._deadline += self.interval
