"""A time-ordered buffer holding at most one value per timestamp."""

from __future__ import annotations

import bisect
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from isokf.timestamp import StampedData, Timestamp, as_timestamp

T = TypeVar("T")
A = TypeVar("A")


class HistoryBuffer(Generic[T]):
    """Values keyed by nanosecond timestamps, kept in time order.

    Timestamps may be given as :class:`Timestamp`, as float seconds or as
    integer nanoseconds. Inserting at an existing timestamp replaces the value.
    """

    def __init__(self, items: Iterable[Any] | None = None) -> None:
        self._keys: list[int] = []
        self._data: dict[int, T] = {}
        for item in items or ():
            if isinstance(item, StampedData):
                self.insert(item)
            else:
                t, data = item
                self.insert(data, t)

    # -- insertion and basic access -------------------------------------

    def insert(self, data: Any, t: Any = None) -> None:
        """Store ``data`` at ``t``; a :class:`StampedData` may be passed alone."""
        if t is None:
            if not isinstance(data, StampedData):
                raise TypeError("a timestamp is required unless StampedData is given")
            t, data = data.stamp, data.data
        ns = as_timestamp(t).stamp_ns()
        if ns not in self._data:
            bisect.insort(self._keys, ns)
        self._data[ns] = data

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[StampedData[T]]:
        for ns in list(self._keys):
            yield self._item(ns)

    def __reversed__(self) -> Iterator[StampedData[T]]:
        for ns in reversed(list(self._keys)):
            yield self._item(ns)

    def __str__(self) -> str:
        return f"{type(self).__name__}: len={len(self)}\n" + self.format()

    def clear(self) -> None:
        self._keys.clear()
        self._data.clear()

    def at(self, idx: int) -> StampedData[T]:
        """Entry at position ``idx`` in time order; raises IndexError if out of range."""
        if not 0 <= idx < len(self._keys):
            raise IndexError(f"index {idx} out of range for buffer of length {len(self)}")
        return self._item(self._keys[idx])

    def timestamps(self) -> list[Timestamp]:
        return [Timestamp.from_ns(ns) for ns in self._keys]

    # -- queries --------------------------------------------------------

    def index_at_t(self, t: Any) -> int | None:
        """Position of the entry stored exactly at ``t``, or None."""
        ns = as_timestamp(t).stamp_ns()
        if ns not in self._data:
            return None
        return bisect.bisect_left(self._keys, ns)

    def exist_at_t(self, t: Any) -> bool:
        return as_timestamp(t).stamp_ns() in self._data

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
        return self._data[self._keys[0]]

    def get_latest(self) -> T:
        """Latest value; raises LookupError if the buffer is empty."""
        if not self._keys:
            raise LookupError("buffer is empty")
        return self._data[self._keys[-1]]

    def get_between_t1_t2(self, t1: Any, t2: Any) -> HistoryBuffer[T]:
        """New buffer with the entries in ``[t1, t2]``; empty unless ``t1 < t2``."""
        result: HistoryBuffer[T] = HistoryBuffer()
        if as_timestamp(t1) < as_timestamp(t2) and self._keys:
            for ns in self._keys[self._lower(t1):self._upper(t2)]:
                result._keys.append(ns)
                result._data[ns] = self._data[ns]
        return result

    def items_between_t1_t2(self, t1: Any, t2: Any) -> Iterator[StampedData[T]]:
        """Entries in ``[t1, t2]`` in time order; nothing if ``t1 > t2``."""
        if as_timestamp(t1) <= as_timestamp(t2):
            for ns in self._keys[self._lower(t1):self._upper(t2)]:
                yield self._item(ns)

    def accumulate_between_t1_t2(self, t1: Any, t2: Any, init: A, op: Callable[[A, T], A]) -> A:
        """Fold ``op`` over the values in ``[t1, t2]`` starting from ``init``."""
        for item in self.items_between_t1_t2(t1, t2):
            init = op(init, item.data)
        return init

    def accumulate(self, init: A, op: Callable[[A, T], A]) -> A:
        """Fold ``op`` over all values in time order starting from ``init``."""
        for ns in self._keys:
            init = op(init, self._data[ns])
        return init

    def get_at_t(self, t: Any) -> StampedData[T] | None:
        ns = as_timestamp(t).stamp_ns()
        return self._item(ns) if ns in self._data else None

    def get_before_t(self, t: Any) -> StampedData[T] | None:
        """Latest entry strictly before ``t``, or None."""
        idx = self._lower(t)
        return self._item(self._keys[idx - 1]) if idx > 0 else None

    def get_after_t(self, t: Any) -> StampedData[T] | None:
        """Earliest entry strictly after ``t``, or None."""
        idx = self._upper(t)
        return self._item(self._keys[idx]) if idx < len(self._keys) else None

    def get_closest_t(self, t: Any) -> StampedData[T] | None:
        """Entry nearest to ``t``; on a tie the later one wins."""
        stamp = as_timestamp(t)
        exact = self.get_at_t(stamp)
        if exact is not None:
            return exact
        before = self.get_before_t(stamp)
        after = self.get_after_t(stamp)
        if before is not None and after is not None:
            if (stamp - before.stamp) < (after.stamp - stamp):
                return before
            return after
        return after if after is not None else before

    # -- removal --------------------------------------------------------

    def remove_at_t(self, t: Any) -> None:
        ns = as_timestamp(t).stamp_ns()
        if ns in self._data:
            del self._data[ns]
            self._keys.pop(bisect.bisect_left(self._keys, ns))

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

    def format(self, n: int = 0, reverse: bool = False) -> str:
        """One line per entry, at most ``n`` of them (all when ``n`` is 0)."""
        keys = list(reversed(self._keys)) if reverse else self._keys
        if n:
            keys = keys[:n]
        return "".join(f"* t={ns}, data={self._data[ns]}\n" for ns in keys)

    # -- helpers --------------------------------------------------------

    def _item(self, ns: int) -> StampedData[T]:
        return StampedData(self._data[ns], Timestamp.from_ns(ns))

    def _lower(self, t: Any) -> int:
        return bisect.bisect_left(self._keys, as_timestamp(t).stamp_ns())

    def _upper(self, t: Any) -> int:
        return bisect.bisect_right(self._keys, as_timestamp(t).stamp_ns())

    def _drop(self, start: int, stop: int) -> None:
        for ns in self._keys[start:stop]:
            del self._data[ns]
        del self._keys[start:stop]

    def _filter_positions(self, subsample: int, keep_multiples: bool) -> None:
        if subsample <= 0:
            raise ValueError("subsample must be positive")
        kept = [ns for pos, ns in enumerate(self._keys) if (pos % subsample == 0) == keep_multiples]
        self._data = {ns: self._data[ns] for ns in kept}
        self._keys = kept