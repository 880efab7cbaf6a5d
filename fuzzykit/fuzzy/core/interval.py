from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .types import Float, XValuesOutOfOrderError


def _fmt(v: Float) -> str:
    return f"{v:g}"


@dataclass(frozen=True)
class Interval:
    """Numeric range; an open edge excludes its endpoint."""
    low: Float
    high: Float
    low_open: bool = False
    high_open: bool = False

    def __post_init__(self):
        if self.low > self.high:
            raise XValuesOutOfOrderError(self.low, self.high, f"interval low {self.low} > high {self.high}")

    def contains(self, x: Float) -> bool:
        if x < self.low or x > self.high: return False
        if x == self.low and self.low_open: return False
        if x == self.high and self.high_open: return False
        return True

    def overlaps(self, other: "Interval") -> bool:
        if self.high < other.low or other.high < self.low:
            return False
        if self.high == other.low:
            return not (self.high_open or other.low_open)
        if other.high == self.low:
            return not (other.high_open or self.low_open)
        return True

    @property
    def width(self) -> Float:
        return self.high - self.low

    def __str__(self) -> str:
        lb = "(" if self.low_open else "["
        rb = ")" if self.high_open else "]"
        return f"{lb}{_fmt(self.low)}, {_fmt(self.high)}{rb}"


class IntervalVector:
    """Ordered collection of non-overlapping intervals (alpha-cuts, supports)."""

    def __init__(self, intervals: Optional[Iterable[Interval]] = None):
        self._items: List[Interval] = []
        for iv in intervals or ():
            self.add(iv)

    def add(self, interval: Interval) -> None:
        # sklejanie stykających się domkniętych przedziałów
        if self._items:
            last = self._items[-1]
            if last.high == interval.low and not last.high_open and not interval.low_open:
                self._items[-1] = Interval(last.low, interval.high, last.low_open, interval.high_open)
                return
        self._items.append(interval)

    def insert(self, index: int, interval: Interval) -> None:
        self._items.insert(index, interval)

    def remove(self, index: int) -> Interval:
        return self._items.pop(index)

    def concat(self, other: "IntervalVector") -> "IntervalVector":
        return IntervalVector(list(self._items) + list(other))

    def contains(self, x: Float) -> bool:
        return any(iv.contains(x) for iv in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __getitem__(self, index: int) -> Interval:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._items)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntervalVector):
            return NotImplemented
        return self._items == other._items

    def __str__(self) -> str:
        return " ".join(str(iv) for iv in self._items)

    def __repr__(self) -> str:
        return f"IntervalVector({self._items!r})"
