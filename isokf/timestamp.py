"""Nanosecond-resolution timestamps and data tagged with a timestamp."""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

NS_PER_SEC = 1_000_000_000

T = TypeVar("T")


class Timestamp:
    """An immutable point in time, kept as whole seconds plus nanoseconds.

    Integer arithmetic on nanoseconds avoids the rounding problems that a
    floating point representation brings to comparisons.
    """

    __slots__ = ("_ns",)

    def __init__(self, sec: int = 0, nsec: int = 0) -> None:
        self._ns = int(sec) * NS_PER_SEC + int(nsec)

    @classmethod
    def from_sec(cls, t: float) -> Timestamp:
        """Build a timestamp from seconds given as a float."""
        sec = math.floor(t)
        nsec = round((t - sec) * NS_PER_SEC)
        return cls(sec, nsec)

    @classmethod
    def from_ns(cls, stamp_ns: int) -> Timestamp:
        return cls(0, stamp_ns)

    @classmethod
    def from_ms(cls, stamp_ms: int) -> Timestamp:
        return cls(0, int(stamp_ms) * 1_000_000)

    @classmethod
    def from_us(cls, stamp_us: int) -> Timestamp:
        return cls(0, int(stamp_us) * 1_000)

    @property
    def sec(self) -> int:
        return self._ns // NS_PER_SEC

    @property
    def nsec(self) -> int:
        return self._ns % NS_PER_SEC

    def to_sec(self) -> float:
        return self.sec + self.nsec * 1e-9

    def is_zero(self) -> bool:
        return self._ns == 0

    def stamp_ms(self) -> int:
        return self._ns // 1_000_000

    def stamp_us(self) -> int:
        return self._ns // 1_000

    def stamp_ns(self) -> int:
        return self._ns

    def __str__(self) -> str:
        return f"{self.sec}.{self.nsec:09d}"

    def __repr__(self) -> str:
        return f"Timestamp(sec={self.sec}, nsec={self.nsec})"

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._ns < other._ns

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._ns <= other._ns

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._ns > other._ns

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._ns >= other._ns

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._ns == other._ns

    def __hash__(self) -> int:
        return hash(self._ns)

    def __add__(self, other: Any) -> Timestamp:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return Timestamp(0, self._ns + other._ns)

    def __sub__(self, other: Any) -> Timestamp:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return Timestamp(0, self._ns - other._ns)


def as_timestamp(value: Any) -> Timestamp:
    """Coerce a value to a Timestamp: ints are nanoseconds, floats are seconds."""
    if isinstance(value, Timestamp):
        return value
    if isinstance(value, bool):
        raise TypeError("a bool is not a timestamp")
    if isinstance(value, int):
        return Timestamp.from_ns(value)
    if isinstance(value, float):
        return Timestamp.from_sec(value)
    raise TypeError(f"cannot interpret {type(value).__name__} as a timestamp")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class StampedData(Generic[T]):
    """A value paired with a timestamp; ordering and equality use the stamp only.

    Plain numbers on the other side of a comparison are taken as seconds.
    """

    __slots__ = ("data", "stamp")

    def __init__(self, data: T | None = None, stamp: Any = None) -> None:
        self.data = data
        self.stamp = Timestamp() if stamp is None else as_timestamp(stamp)

    def __repr__(self) -> str:
        return f"StampedData(data={self.data!r}, stamp={self.stamp!r})"

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, StampedData):
            return self.stamp < other.stamp
        if isinstance(other, Timestamp):
            return self.stamp < other
        if _is_number(other):
            return self.stamp.to_sec() < other
        return NotImplemented

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, StampedData):
            return self.stamp == other.stamp
        if isinstance(other, Timestamp):
            return self.stamp == other
        if _is_number(other):
            return self.stamp.to_sec() == other
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return NotImplemented
        return not equal and not self.__lt__(other)

    def __hash__(self) -> int:
        return hash(self.stamp)