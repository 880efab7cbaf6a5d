"""
Defuzyfikacja na łamanych (lista punktów pokrywająca dokładnie [lo, hi]).

Wszystkie funkcje przyjmują punkty już rozpięte na przedziale
(patrz FuzzySet.span) i liczą dokładnie, trapez po trapezie:
  moment          - środek ciężkości (moment / pole)
  center_of_area  - x dzielący pole na dwie równe połowy
  maximum         - środek pierwszego plateau o maksymalnej przynależności
  weighted_average- średnia x lokalnych szczytów ważona ich wysokością
"""
from __future__ import annotations
import math
from typing import List, Sequence, Tuple

from .types import FUZZY_TOLERANCE, Float, InvalidDefuzzifyError, Point


def _segments(pts: Sequence[Point]):
    return zip(pts, pts[1:])


def moment_and_area(pts: Sequence[Point]) -> Tuple[Float, Float]:
    """Sum of first moments and total area of the trapezoids under the polyline."""
    moment = 0.0
    area = 0.0
    for (x1, y1), (x2, y2) in _segments(pts):
        w = x2 - x1
        if w <= 0.0 or (y1 + y2) <= 0.0:
            continue
        a = w * (y1 + y2) / 2.0
        cx = x1 + w * (y1 + 2.0 * y2) / (3.0 * (y1 + y2))
        moment += a * cx
        area += a
    return moment, area


def area(pts: Sequence[Point]) -> Float:
    return moment_and_area(pts)[1]


def moment(pts: Sequence[Point]) -> Float:
    m, a = moment_and_area(pts)
    if a <= 0.0:
        raise InvalidDefuzzifyError("moment defuzzification of a set with zero area")
    return m / a


def center_of_area(pts: Sequence[Point]) -> Float:
    segs = list(_segments(pts))
    total = sum((x2 - x1) * (y1 + y2) / 2.0 for (x1, y1), (x2, y2) in segs if x2 > x1)
    if total <= 0.0:
        raise InvalidDefuzzifyError("center of area defuzzification of a set with zero area")
    half = total / 2.0
    tol = total * 1e-12
    acc = 0.0
    for i, ((x1, y1), (x2, y2)) in enumerate(segs):
        w = x2 - x1
        if w <= 0.0:
            continue
        a = w * (y1 + y2) / 2.0
        if acc + a < half - tol:
            acc += a
            continue
        if abs(acc + a - half) <= tol:
            # połowa pola kończy się w x2; jeśli dalej jest przerwa o zerowym polu, bierzemy jej środek
            end = x2
            for (u1, v1), (u2, v2) in segs[i + 1:]:
                if (u2 - u1) * (v1 + v2) > 0.0:
                    break
                end = u2
            return (x2 + end) / 2.0
        need = half - acc
        slope = (y2 - y1) / w
        if abs(slope) < 1e-15:
            return x1 + need / y1
        disc = max(0.0, y1 * y1 + 2.0 * slope * need)
        return x1 + (-y1 + math.sqrt(disc)) / slope
    return pts[-1][0]


def maximum(pts: Sequence[Point]) -> Tuple[Float, Float]:
    """(max membership, midpoint of the first plateau reaching it)."""
    if not pts:
        raise InvalidDefuzzifyError("maximum defuzzification of an empty set")
    maxy = max(y for _, y in pts)
    if maxy <= 0.0:
        raise InvalidDefuzzifyError("maximum defuzzification of a set with no membership")
    i = next(k for k, (_, y) in enumerate(pts) if y >= maxy - FUZZY_TOLERANCE)
    j = i
    while j + 1 < len(pts) and pts[j + 1][1] >= maxy - FUZZY_TOLERANCE:
        j += 1
    return maxy, (pts[i][0] + pts[j][0]) / 2.0


def peaks(pts: Sequence[Point]) -> List[Point]:
    """Local peaks as (x, height); plateaus report their midpoint."""
    out: List[Point] = []
    n = len(pts)
    i = 0
    while i < n:
        y = pts[i][1]
        j = i
        while j + 1 < n and abs(pts[j + 1][1] - y) <= FUZZY_TOLERANCE:
            j += 1
        if y > 0.0:
            left_lower = i == 0 or pts[i - 1][1] < y
            right_lower = j == n - 1 or pts[j + 1][1] < y
            if left_lower and right_lower:
                out.append(((pts[i][0] + pts[j][0]) / 2.0, y))
        i = j + 1
    return out


def weighted_average(pts: Sequence[Point]) -> Float:
    return weighted_average_of_peaks(peaks(pts))


def weighted_average_of_peaks(tops: Sequence[Point]) -> Float:
    den = sum(y for _, y in tops)
    if den <= 0.0:
        raise InvalidDefuzzifyError("weighted average defuzzification without any peak")
    return sum(x * y for x, y in tops) / den
