"""
Fuzzy set as an ordered list of (x, y) breakpoints of a piecewise-linear
membership function.

Conventions:
  - x is non-decreasing; equal x values describe a vertical segment,
  - outside its first/last point the membership is held flat at the first/last y,
  - at an x carrying several points the membership is the largest y there,
  - every operation returns a new, simplified set (instances never change).

Points are collected with FuzzySetBuilder and frozen with build().
"""
from __future__ import annotations
import math
from bisect import bisect_left
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from . import defuzz
from .interval import Interval, IntervalVector
from .types import (
    FUZZY_TOLERANCE, STRONG, WEAK, Float, FuzzyConstructionError, NoXValueForMembershipError,
    Point, XValuesOutOfOrderError, YValueOutOfRangeError,
)

_TOL = FUZZY_TOLERANCE


def _clamp01(y: Float) -> Float:
    if y <= 0.0:
        return 0.0
    elif y >= 1.0:
        return 1.0
    else:
        return y


def _validate(points: Iterable[Tuple[Float, Float]]) -> List[Point]:
    out: List[Point] = []
    for x, y in points:
        x = float(x); y = float(y)
        if math.isnan(x) or math.isnan(y):
            raise FuzzyConstructionError("NaN in fuzzy set point")
        if y < -_TOL or y > 1.0 + _TOL:
            raise YValueOutOfRangeError(y)
        if out and x < out[-1][0]:
            raise XValuesOutOfOrderError(out[-1][0], x)
        out.append((x, _clamp01(y)))
    return out


def _same(a: Point, b: Point) -> bool:
    return abs(a[0] - b[0]) <= _TOL and abs(a[1] - b[1]) <= _TOL


def _redundant(a: Point, b: Point, c: Point) -> bool:
    """Is the middle point b unnecessary between a and c."""
    if abs(a[0] - b[0]) <= _TOL and abs(b[0] - c[0]) <= _TOL:
        # pionowo, w jednym kierunku
        return (a[1] <= b[1] <= c[1]) or (a[1] >= b[1] >= c[1])
    if a[0] < b[0] < c[0]:
        expected = a[1] + (c[1] - a[1]) * (b[0] - a[0]) / (c[0] - a[0])
        return abs(b[1] - expected) <= _TOL
    return False


def _simplify(pts: List[Point]) -> List[Point]:
    if len(pts) < 2:
        return pts
    out: List[Point] = []
    for p in pts:
        if out and _same(p, out[-1]):
            continue
        out.append(p)
        while len(out) >= 3 and _redundant(out[-3], out[-2], out[-1]):
            del out[-2]
    # wartości poza zakresem i tak są stałe
    while len(out) > 1 and abs(out[0][1] - out[1][1]) <= _TOL:
        del out[0]
    while len(out) > 1 and abs(out[-2][1] - out[-1][1]) <= _TOL:
        out.pop()
    return out


def _cross_x(x1: Float, y1: Float, x2: Float, y2: Float, level: Float) -> Float:
    return x1 + (level - y1) * (x2 - x1) / (y2 - y1)


class FuzzySet:
    __slots__ = ("_pts", "_xs")

    def __init__(self, points: Iterable[Tuple[Float, Float]] = ()):
        pts = _simplify(_validate(points))
        self._pts: Tuple[Point, ...] = tuple(pts)
        self._xs: Tuple[Float, ...] = tuple(p[0] for p in pts)

    @classmethod
    def from_arrays(cls, xs: Sequence[Float], ys: Sequence[Float]) -> "FuzzySet":
        if len(xs) != len(ys):
            raise FuzzyConstructionError(f"x and y arrays differ in length ({len(xs)} != {len(ys)})")
        return cls(zip(xs, ys))

    @classmethod
    def constant(cls, y: Float, x: Float = 0.0) -> "FuzzySet":
        return cls([(x, y)])

    # ---------- accessors ----------

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._pts

    @property
    def xs(self) -> Tuple[Float, ...]:
        return self._xs

    @property
    def ys(self) -> Tuple[Float, ...]:
        return tuple(p[1] for p in self._pts)

    @property
    def max_y(self) -> Float:
        return max((p[1] for p in self._pts), default=0.0)

    @property
    def min_y(self) -> Float:
        return min((p[1] for p in self._pts), default=0.0)

    def __len__(self) -> int:
        return len(self._pts)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._pts)

    def __getitem__(self, i: int) -> Point:
        return self._pts[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, FuzzySet):
            return NotImplemented
        return len(self) == len(other) and all(_same(a, b) for a, b in zip(self._pts, other._pts))

    __hash__ = None

    def __str__(self) -> str:
        return "{ " + " ".join(f"{y:.2f}/{x:.2f}" for x, y in self._pts) + " }"

    def __repr__(self) -> str:
        return f"FuzzySet({list(self._pts)!r})"

    # ---------- membership ----------

    def _at(self, x: Float) -> List[Float]:
        """All y values the curve takes at x, left to right (vertical segments give more than one)."""
        pts = self._pts
        if x < pts[0][0]:
            return [pts[0][1]]
        if x > pts[-1][0]:
            return [pts[-1][1]]
        i = bisect_left(self._xs, x)
        if self._xs[i] == x:
            j = i
            while j + 1 < len(pts) and pts[j + 1][0] == x:
                j += 1
            return [p[1] for p in pts[i:j + 1]]
        (x1, y1), (x2, y2) = pts[i - 1], pts[i]
        return [y1 + (y2 - y1) * (x - x1) / (x2 - x1)]

    def membership(self, x: Float) -> Float:
        if not self._pts:
            return 0.0
        return max(self._at(x))

    def x_for_membership(self, m: Float) -> Float:
        """First x (left to right) where the membership equals m."""
        pts = self._pts
        if not pts:
            raise NoXValueForMembershipError(m)
        if len(pts) == 1:
            if abs(pts[0][1] - m) <= _TOL:
                return pts[0][0]
            raise NoXValueForMembershipError(m)
        for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
            if abs(y1 - m) <= _TOL: return x1
            if abs(y2 - m) <= _TOL: return x2
            if y1 < m < y2 or y1 > m > y2:
                return _cross_x(x1, y1, x2, y2, m)
        raise NoXValueForMembershipError(m)

    def span(self, lo: Float, hi: Float) -> List[Point]:
        """Points covering exactly [lo, hi], flat beyond the set's own range."""
        if not self._pts:
            return [(lo, 0.0), (hi, 0.0)]
        out = [p for p in self._pts if lo <= p[0] <= hi]
        if not out or out[0][0] > lo:
            out.insert(0, (lo, self.membership(lo)))
        if out[-1][0] < hi:
            out.append((hi, self.membership(hi)))
        return out

    # ---------- predicates ----------

    def is_empty(self) -> bool:
        return all(p[1] == 0.0 for p in self._pts)

    def is_normal(self) -> bool:
        return any(p[1] == 1.0 for p in self._pts)

    def is_convex(self) -> bool:
        seen_fall = False
        for (_, y1), (_, y2) in zip(self._pts, self._pts[1:]):
            if y2 < y1 - _TOL:
                seen_fall = True
            elif y2 > y1 + _TOL and seen_fall:
                return False
        return True

    def is_monotonic(self) -> bool:
        ys = self.ys
        rising = all(b >= a - _TOL for a, b in zip(ys, ys[1:]))
        falling = all(b <= a + _TOL for a, b in zip(ys, ys[1:]))
        return rising or falling

    # ---------- pointwise algebra ----------

    @staticmethod
    def _pointwise(a: "FuzzySet", b: "FuzzySet", op: Callable[[Float, Float], Float],
                   crossings: bool) -> "FuzzySet":
        out: List[Point] = []
        prev: Optional[Tuple[Float, Float, Float]] = None
        for x in sorted(set(a._xs) | set(b._xs)):
            pa = a._at(x); pb = b._at(x)
            if crossings and prev is not None:
                px, ra, rb = prev
                d0 = ra - rb
                d1 = pa[0] - pb[0]
                if (d0 > 0.0 and d1 < 0.0) or (d0 < 0.0 and d1 > 0.0):
                    t = d0 / (d0 - d1)
                    out.append((px + t * (x - px), ra + t * (pa[0] - ra)))
            # lewa granica, wartość w x, prawa granica
            out.append((x, op(pa[0], pb[0])))
            out.append((x, op(max(pa), max(pb))))
            out.append((x, op(pa[-1], pb[-1])))
            prev = (x, pa[-1], pb[-1])
        return FuzzySet(out)

    def union(self, other: "FuzzySet") -> "FuzzySet":
        if not self._pts: return other
        if not other._pts: return self
        return self._pointwise(self, other, max, True)

    def intersection(self, other: "FuzzySet") -> "FuzzySet":
        if not self._pts or not other._pts:
            return FuzzySet()
        return self._pointwise(self, other, min, True)

    def fuzzy_sum(self, other: "FuzzySet") -> "FuzzySet":
        if not self._pts: return other
        if not other._pts: return self
        return self._pointwise(self, other, lambda u, v: u + v - u * v, False)

    def complement(self) -> "FuzzySet":
        return FuzzySet((x, 1.0 - _clamp01(y)) for x, y in self._pts)

    def horizontal_intersection(self, y: Float) -> "FuzzySet":
        if not self._pts:
            return FuzzySet()
        return self.intersection(FuzzySet.constant(_clamp01(y), self._xs[0]))

    def horizontal_union(self, y: Float) -> "FuzzySet":
        y = _clamp01(y)
        if y <= 0.0:
            return self
        if not self._pts:
            return FuzzySet.constant(y)
        return self.union(FuzzySet.constant(y, self._xs[0]))

    def multiply(self, k: Float) -> "FuzzySet":
        k = _clamp01(k)
        return FuzzySet((x, y * k) for x, y in self._pts)

    def scale(self, y: Float) -> "FuzzySet":
        """Rescale so that the peak membership becomes y."""
        if not self._pts:
            return self
        y = _clamp01(y)
        if y <= 0.0:
            return FuzzySet.constant(0.0, self._xs[0])
        top = self.max_y
        if top <= y:
            return self
        return self.multiply(y / top)

    def normalize(self) -> "FuzzySet":
        top = self.max_y
        if top <= 0.0 or top == 1.0:
            return self
        return FuzzySet((x, y / top) for x, y in self._pts)

    def maximum_of_intersection(self, other: "FuzzySet") -> Float:
        return self.intersection(other).max_y

    def confine_to_bounds(self, lo: Float, hi: Float) -> "FuzzySet":
        """Clip to [lo, hi]; the result drops vertically to 0 at a cut bound."""
        if lo > hi:
            raise XValuesOutOfOrderError(lo, hi)
        pts = self._pts
        if not pts or (pts[0][0] >= lo and pts[-1][0] <= hi):
            return self
        if pts[-1][0] < lo or pts[0][0] > hi:
            y = pts[0][1] if pts[0][0] > hi else pts[-1][1]
            if y > 0.0:
                return FuzzySet([(lo, 0.0), (lo, y), (hi, y), (hi, 0.0)])
            return FuzzySet.constant(0.0, lo)
        inner = self.span(lo, hi)
        if inner[0][1] != 0.0:
            inner.insert(0, (lo, 0.0))
        if inner[-1][1] != 0.0:
            inner.append((hi, 0.0))
        return FuzzySet(inner)

    # ---------- alpha-cuts / intersection tests ----------

    def alpha_cut(self, strength: bool, level: Float, min_uod: Float = -math.inf,
                  max_uod: Float = math.inf) -> IntervalVector:
        """x ranges with y >= level (WEAK, closed) or y > level (STRONG, open)."""
        result = IntervalVector()
        if not self._pts:
            return result
        if strength == WEAK and level <= 0.0:
            result.add(Interval(min_uod, max_uod))
            return result
        if strength == WEAK:
            passes = lambda y: y >= level
        else:
            passes = lambda y: y > level
        open_edge = strength == STRONG
        pts = self.span(min_uod, max_uod)
        start: Optional[Tuple[Float, bool]] = (pts[0][0], False) if passes(pts[0][1]) else None
        for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
            if start is None:
                if not passes(y2):
                    continue
                if x1 == x2 or y2 == level:
                    start = (x2, False)
                else:
                    start = (min(x2, _cross_x(x1, y1, x2, y2, level)), open_edge)
            elif not passes(y2):
                if x1 == x2 or y1 == level:
                    result.add(Interval(start[0], max(start[0], x1), start[1], False))
                else:
                    end = max(x1, _cross_x(x1, y1, x2, y2, level))
                    result.add(Interval(start[0], max(start[0], end), start[1], open_edge))
                start = None
        if start is not None:
            result.add(Interval(start[0], pts[-1][0], start[1], False))
        return result

    def support(self, min_uod: Float = -math.inf, max_uod: Float = math.inf) -> IntervalVector:
        return self.alpha_cut(STRONG, 0.0, min_uod, max_uod)

    def non_intersection_test(self, other: "FuzzySet") -> bool:
        """True when the supports of both sets are disjoint."""
        mine = self.support()
        theirs = other.support()
        return not any(a.overlaps(b) for a in mine for b in theirs)

    def no_intersection_test(self, other: "FuzzySet") -> bool:
        """Quick structural check that the max of the pointwise min is zero.

        True when one set ends at 0 strictly before the other starts at 0,
        or when either set has no positive membership. A False answer does
        not prove an overlap.
        """
        if len(self) > 1 and len(other) > 1:
            for a, b in ((self, other), (other, self)):
                last, first = a._pts[-1], b._pts[0]
                if last[0] < first[0] and last[1] == 0.0 and first[1] == 0.0:
                    return True
        return self.is_empty() or other.is_empty()

    # ---------- area / defuzzification ----------

    def area(self, lo: Float, hi: Float) -> Float:
        return defuzz.area(self.span(lo, hi))

    def moment_defuzzify(self, lo: Float, hi: Float) -> Float:
        return defuzz.moment(self.span(lo, hi))

    def center_of_area_defuzzify(self, lo: Float, hi: Float) -> Float:
        return defuzz.center_of_area(self.span(lo, hi))

    def maximum_defuzzify(self, lo: Float, hi: Float) -> Float:
        return defuzz.maximum(self.span(lo, hi))[1]

    def weighted_average_defuzzify(self, lo: Float, hi: Float) -> Float:
        return defuzz.weighted_average(self.span(lo, hi))


class FuzzySetBuilder:
    """Mutable point collection; build() freezes it into a FuzzySet."""

    def __init__(self, points: Iterable[Tuple[Float, Float]] = ()):
        self._pts: List[Point] = []
        self.extend(points)

    def append_point(self, x: Float, y: Float) -> "FuzzySetBuilder":
        if self._pts and x < self._pts[-1][0]:
            raise XValuesOutOfOrderError(self._pts[-1][0], x)
        self._pts.append((float(x), float(y)))
        return self

    def insert_point(self, x: Float, y: Float) -> "FuzzySetBuilder":
        # po istniejących punktach o tym samym x
        i = len(self._pts)
        while i > 0 and self._pts[i - 1][0] > x:
            i -= 1
        self._pts.insert(i, (float(x), float(y)))
        return self

    def extend(self, points: Iterable[Tuple[Float, Float]]) -> "FuzzySetBuilder":
        for x, y in points:
            self.append_point(x, y)
        return self

    def __len__(self) -> int:
        return len(self._pts)

    def build(self) -> FuzzySet:
        return FuzzySet(self._pts)
