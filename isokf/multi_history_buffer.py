"""A time-ordered buffer that may hold several values per timestamp."""

from __future__ import annotations

import bisect
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from isokf.timestamp import StampedData, Timestamp, as_timestamp

T = TypeVar("T")
A = TypeVar("A")


class MultiHistoryBuffer(Generic[T]):
    """Values keyed by nanosecond timestamps, kept in time order.

    Several values may share a timestamp; they keep the order in which they
    were inserted. Timestamps may be given as :class:`Timestamp`, as float
    seconds or as integer nanoseconds.
    """

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self._keys: list[int] = []
        self._values: list[T] = []
        for item in items or ():
            if isinstance(item, StampedData):
                self.insert(item)
            else:
                t, data = item
                self.insert(data, t)

    # -- insertion and basic access -------------------------------------

    def insert(self, data: Any, t: Any = None) -> None:
        """Add ``data`` at ``t``; a :class:`StampedData` may be passed alone."""
        if t is None:
            if not isinstance(data, StampedData):
                raise TypeError("a timestamp is required unless StampedData is given")
            t, data = data.stamp, data.data
        ns = as_timestamp(t).stamp_ns()
        idx = bisect.bisect_right(self._keys, ns)
        self._keys.insert(idx, ns)
        self._values.insert(idx, data)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[StampedData[T]]:
        for ns, value in list(zip(self._keys, self._values)):
            yield StampedData(value, Timestamp.from_ns(ns))

    def __reversed__(self) -> Iterator[StampedData[T]]:
        for ns, value in reversed(list(zip(self._keys, self._values))):
            yield StampedData(value, Timestamp.from_ns(ns))

    def __str__(self) -> str:
        return f"{type(self).__name__}: len={len(self)}\n" + self.format()

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()

    def at(self, idx: int) -> StampedData[T]:
        """Entry at position ``idx`` in time order; raises IndexError if out of range."""
        if not 0 <= idx < len(self._keys):
            raise IndexError(f"index {idx} out of range for buffer of length {len(self)}")
        return self._item(idx)

    def timestamps(self) -> list[Timestamp]:
        """Timestamp of every entry in order, repeated for shared stamps."""
        return [Timestamp.from_ns(ns) for ns in self._keys]

    # -- queries --------------------------------------------------------

    def index_at_t(self, t: Any) -> int | None:
        """Position of the first entry stored exactly at ``t``, or None."""
        ns = as_timestamp(t).stamp_ns()
        idx = bisect.bisect_left(self._keys, ns)
        if idx < len(self._keys) and self._keys[idx] == ns:
            return idx
        return None

    def exist_at_t(self, t: Any) -> bool:
        return self.index_at_t(t) is not None

    def exist_after_t(self, t: Any) -> bool:
        return self._upper(t) < len(self._keys)

    def exist_before_t(self, t: Any) -> bool:
        return self._lower(t) > 0

    def get_oldest_t(self) -> Timestamp | None:
        return Timestamp.from_ns(self._keys[0]) if self._keys else None

    def get_latest_t(self) -> Timestamp | None:
        return Timestamp.from_ns(self._keys[-1]) if self._keys else None

    def get_oldest(self) -> T:
        """Oldest value; raises LookupError if the buffer is empty."""
        if not self._keys:
            raise LookupError("buffer is empty")
        return self._values[0]

    def get_latest(self) -> T:
        """Latest value; raises LookupError if the buffer is empty."""
        if not self._keys:
            raise LookupError("buffer is empty")
        return self._values[-1]

    def get_timestamps_between_t1_t2(self, t1: Any, t2: Any) -> list[Timestamp]:
        """Distinct timestamps in ``[t1, t2]`` in ascending order."""
        if as_timestamp(t1) > as_timestamp(t2):
            return []
        keys = self._keys[self._lower(t1):self._upper(t2)]
        return [Timestamp.from_ns(ns) for ns in sorted(set(keys))]

    def get_between_t1_t2(self, t1: Any, t2: Any) -> MultiHistoryBuffer[T]:
        """New buffer with the entries in ``[t1, t2]``; empty if ``t1 > t2``."""
        result: MultiHistoryBuffer[T] = MultiHistoryBuffer()
        for item in self.items_between_t1_t2(t1, t2):
            result.insert(item)
        return result

    def items_between_t1_t2(self, t1: Any, t2: Any) -> Iterator[StampedData[T]]:
        """Entries in ``[t1, t2]`` in time order; nothing if ``t1 > t2``."""
        if as_timestamp(t1) <= as_timestamp(t2):
            for idx in range(self._lower(t1), self._upper(t2)):
                yield self._item(idx)

    def accumulate_between_t1_t2(self, t1: Any, t2: Any, init: A, op: Callable[[A, T], A]) -> A:
        """Fold ``op`` over the values in ``[t1, t2]`` starting from ``init``."""
        for item in self.items_between_t1_t2(t1, t2):
            init = op(init, item.data)
        return init

    def accumulate(self, init: A, op: Callable[[A, T], A]) -> A:
        """Fold ``op`` over all values in time order starting from ``init``."""
        for value in list(self._values):
            init = op(init, value)
        return init

    def get_at_t(self, t: Any) -> StampedData[T] | None:
        """First entry stored exactly at ``t``, or None."""
        idx = self.index_at_t(t)
        return self._item(idx) if idx is not None else None

    def get_all_at_t(self, t: Any) -> list[T]:
        """All values stored exactly at ``t`` in insertion order."""
        return [self._values[idx] for idx in range(self._lower(t), self._upper(t))]

    def get_before_t(self, t: Any) -> StampedData[T] | None:
        """Latest entry strictly before ``t``, or None."""
        idx = self._lower(t)
        return self._item(idx - 1) if idx > 0 else None

    def get_after_t(self, t: Any) -> StampedData[T] | None:
        """Earliest entry strictly after ``t``, or None."""
        idx = self._upper(t)
        return self._item(idx) if idx < len(self._keys) else None

    # -- removal --------------------------------------------------------

    def remove_at_t(self, t: Any) -> None:
        """Drop every entry stored exactly at ``t``."""
        self._drop(self._lower(t), self._upper(t))

    def remove_before_t(self, t: Any) -> None:
        """Drop entries before ``t``; nothing is dropped if every entry is before ``t``."""
        idx = self._lower(t)
        if idx < len(self._keys):
            self._drop(0, idx)

    def remove_after_t(self, t: Any) -> None:
        """Drop entries strictly after ``t``."""
        idx = self._upper(t)
        if idx < len(self._keys):
            self._drop(idx, len(self._keys))

    def remove_every_n(self, subsample: int) -> None:
        """Drop every ``subsample``-th entry, starting with the first."""
        self._filter_positions(subsample, keep_multiples=False)

    def subsample_by_n(self, subsample: int) -> None:
        """Keep only every ``subsample``-th entry, starting with the first."""
        self._filter_positions(subsample, keep_multiples=True)

    # -- output ---------------------------------------------------------

    def format(self, n: int = 0) -> str:
        """One line per entry, at most ``n`` of them (all when ``n`` is 0)."""
        pairs = list(zip(self._keys, self._values))
        if n:
            pairs = pairs[:n]
        return "".join(f"* t={ns}, data={value}\n" for ns, value in pairs)

    # -- helpers --------------------------------------------------------

    def _item(self, idx: int) -> StampedData[T]:
        return StampedData(self._values[idx], Timestamp.from_ns(self._keys[idx]))

    def _lower(self, t: Any) -> int:
        return bisect.bisect_left(self._keys, as_timestamp(t).stamp_ns())

    def _upper(self, t: Any) -> int:
        return bisect.bisect_right(self._keys, as_timestamp(t).stamp_ns())

    def _drop(self, start: int, stop: int) -> None:
        self._keys = self._keys[:start] + self._keys[stop:]
        self._values = self._values[:start] + self._values[stop:]

    def _filter_positions(self, subsample: int, keep_multiples: bool) -> None:
        if subsample <= 0:
            raise ValueError("subsample must be positive")
        kept = [
            pair
            for pos, pair in enumerate(zip(self._keys, self._values))
            if (pos % subsample == 0) == keep_multiples
        ]
        self._keys = [ns for ns, _ in kept]
        self._values = [value for _, value in kept]