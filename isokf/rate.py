"""Fixed-rate loop timing."""

from __future__ import annotations

import time


class Rate:
    """Sleeps so that successive calls to :meth:`sleep` occur at a given rate."""

    def __init__(self, hz: float) -> None:
        self._sleep_ms = 0
        self._process_ms = 0
        self.set_rate(hz)
        self._start = time.monotonic()

    def set_rate(self, hz: float) -> None:
        """Set the target rate in Hz; 0 disables sleeping."""
        if hz < 0:
            raise ValueError("rate must not be negative")
        self._sleep_ms = 0 if hz == 0 else int(1000 / hz)

    def sleep(self) -> None:
        """Sleep for what is left of the current period, then start the next one."""
        stop = time.monotonic()
        self._process_ms = int((stop - self._start) * 1000)
        remaining_ms = self._sleep_ms - self._process_ms
        if remaining_ms > 0:
            time.sleep(remaining_ms / 1000)
        self._start = time.monotonic()

    def process_time_ms(self) -> int:
        """Milliseconds spent between the previous period start and the last sleep call."""
        return self._process_ms