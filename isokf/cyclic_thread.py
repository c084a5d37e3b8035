"""A background thread that runs a step function at a fixed rate."""

from __future__ import annotations

import logging
import threading
from types import TracebackType

from isokf.rate import Rate

_log = logging.getLogger(__name__)


class CyclicThread:
    """Runs :meth:`run_step` periodically on a background thread.

    The thread starts paused; call :meth:`resume` to begin stepping and
    :meth:`terminate` followed by :meth:`join` to end it.
    """

    def __init__(self, rate_hz: float) -> None:
        self._rate = Rate(rate_hz)
        self._running = threading.Event()
        self._shutdown = threading.Event()
        self._avg_ms = 0.0
        self._thread = threading.Thread(target=self._loop, name=type(self).__name__, daemon=True)
        self._thread.start()
        _log.debug("%s started paused; resume it to run", type(self).__name__)

    def resume(self) -> None:
        self._running.set()

    def stop(self) -> None:
        self._running.clear()

    def terminate(self) -> None:
        """Pause the thread, ask its loop to end and run the shutdown hook."""
        self.stop()
        self._shutdown.set()
        self.on_shutdown()

    def join(self) -> None:
        self._thread.join()
        _log.debug("%s finished", type(self).__name__)

    def set_rate_hz(self, hz: float) -> None:
        self._rate.set_rate(hz)

    def process_time_ms(self) -> float:
        """Running average of the time one cycle took, in milliseconds."""
        return self._avg_ms

    def process_time_s(self) -> float:
        return self._avg_ms * 0.001

    def run_step(self) -> None:
        """Work done once per cycle; subclasses override it."""

    def on_shutdown(self) -> None:
        """Hook called by :meth:`terminate`; subclasses may override it."""

    def __enter__(self) -> CyclicThread:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.terminate()
        self.join()

    def _loop(self) -> None:
        while not self._shutdown.is_set():
            if self._running.is_set():
                self.run_step()
                self._update_average()
            self._rate.sleep()
        _log.debug("%s loop ended", type(self).__name__)

    def _update_average(self) -> None:
        duration_ms = self._rate.process_time_ms()
        if self._avg_ms != 0.0:
            self._avg_ms = (self._avg_ms + duration_ms) / 2
        else:
            self._avg_ms = float(duration_ms)