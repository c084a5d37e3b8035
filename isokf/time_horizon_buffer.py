"""History buffers that forget entries older than a time horizon."""

from __future__ import annotations

from typing import Any, TypeVar

from isokf.history_buffer import HistoryBuffer
from isokf.multi_history_buffer import MultiHistoryBuffer
from isokf.timestamp import Timestamp, as_timestamp

T = TypeVar("T")


def _span(buffer: Any) -> float:
    if len(buffer) > 1:
        return buffer.get_latest_t().to_sec() - buffer.get_oldest_t().to_sec()
    return 0.0


def _trim_from(buffer: Any, t: Timestamp, max_horizon: float) -> None:
    buffer.remove_before_t(Timestamp.from_sec(t.to_sec() - max_horizon))


class TimeHorizonBuffer(HistoryBuffer[T]):
    """A :class:`HistoryBuffer` with a maximal time span in seconds."""

    def __init__(self, horizon: float) -> None:
        super().__init__()
        self._max_horizon = abs(float(horizon))

    def clone(self) -> TimeHorizonBuffer[T]:
        """Independent copy with the same horizon and entries."""
        copy: TimeHorizonBuffer[T] = type(self)(self._max_horizon)
        for item in self:
            copy.insert(item)
        return copy

    def set_horizon(self, horizon: float) -> None:
        """Set the maximal span in seconds; the sign is ignored."""
        self._max_horizon = abs(float(horizon))

    def horizon(self) -> float:
        """Seconds between the oldest and the latest entry; 0 with fewer than two."""
        return _span(self)

    def max_horizon(self) -> float:
        return self._max_horizon

    def check_horizon(self) -> None:
        """Drop entries older than the horizon measured back from the latest one."""
        if len(self) > 0 and self.horizon() > self._max_horizon:
            _trim_from(self, self.get_latest_t(), self._max_horizon)

    def check_horizon_from_t(self, t: Any) -> None:
        """Drop entries older than the horizon measured back from ``t``."""
        if len(self) > 0:
            _trim_from(self, as_timestamp(t), self._max_horizon)

    def check_horizon_restricted(self, n: int = 2) -> None:
        """Like :meth:`check_horizon`, but only when more than ``n`` entries are held."""
        if len(self) > n and self.horizon() > self._max_horizon:
            _trim_from(self, self.get_latest_t(), self._max_horizon)


class TimeHorizonMultiBuffer(MultiHistoryBuffer[T]):
    """A :class:`MultiHistoryBuffer` with a maximal time span in seconds."""

    def __init__(self, horizon: float) -> None:
        super().__init__()
        self._max_horizon = abs(float(horizon))

    def clone(self) -> TimeHorizonMultiBuffer[T]:
        """Independent copy with the same horizon and entries."""
        copy: TimeHorizonMultiBuffer[T] = type(self)(self._max_horizon)
        for item in self:
            copy.insert(item)
        return copy

    def set_horizon(self, horizon: float) -> None:
        """Set the maximal span in seconds; the sign is ignored."""
        self._max_horizon = abs(float(horizon))

    def horizon(self) -> float:
        """Seconds between the oldest and the latest entry; 0 with fewer than two."""
        return _span(self)

    def max_horizon(self) -> float:
        return self._max_horizon

    def check_horizon(self) -> None:
        """Drop entries older than the horizon measured back from the latest one."""
        if len(self) > 0 and self.horizon() > self._max_horizon:
            _trim_from(self, self.get_latest_t(), self._max_horizon)

    def check_horizon_from_t(self, t: Any) -> None:
        """Drop entries older than the horizon measured back from ``t``."""
        if len(self) > 0:
            _trim_from(self, as_timestamp(t), self._max_horizon)

    def check_horizon_restricted(self, n: int = 2) -> None:
        """Like :meth:`check_horizon`, but only when more than ``n`` entries are held."""
        if len(self) > n and self.horizon() > self._max_horizon:
            _trim_from(self, self.get_latest_t(), self._max_horizon)