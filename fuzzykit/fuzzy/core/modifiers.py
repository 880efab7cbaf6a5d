from __future__ import annotations
import logging
import math
from typing import Callable, Dict, List

from .fuzzyset import FuzzySet
from .types import Float, FuzzyConstructionError, Point

logger = logging.getLogger(__name__)

ModifierFn = Callable[[FuzzySet], FuzzySet]

# maksymalny skok y między punktami przed potęgowaniem
DELTA_Y: Float = 0.1


def expand_set(fs: FuzzySet, delta_y: Float = DELTA_Y) -> List[Point]:
    """Points of fs resampled so that no sloped segment changes y by more than delta_y (not simplified)."""
    pts = list(fs)
    if len(pts) < 2:
        return pts
    out: List[Point] = [pts[0]]
    for (x1, y1), (x2, y2) in zip(pts, pts[1:]):
        if x2 > x1:
            steps = int(math.ceil(abs(y2 - y1) / delta_y - 1e-9))
            for k in range(1, steps):
                t = k / steps
                out.append((x1 + t * (x2 - x1), y1 + t * (y2 - y1)))
        out.append((x2, y2))
    return out


def _power(p: Float) -> ModifierFn:
    def apply(fs: FuzzySet) -> FuzzySet:
        return FuzzySet((x, y ** p) for x, y in expand_set(fs))
    return apply


def not_(fs: FuzzySet) -> FuzzySet:
    return fs.complement()


very = _power(2.0)
extremely = _power(3.0)
somewhat = _power(0.5)
more_or_less = _power(1.0 / 3.0)
plus = _power(1.25)


def norm(fs: FuzzySet) -> FuzzySet:
    return fs.normalize()


def intensify(fs: FuzzySet) -> FuzzySet:
    def f(y: Float) -> Float:
        if y <= 0.5: return 2.0 * y * y
        return 1.0 - 2.0 * (1.0 - y) ** 2
    return FuzzySet((x, f(y)) for x, y in expand_set(fs))


def slightly(fs: FuzzySet) -> FuzzySet:
    return intensify(norm(plus(fs).intersection(not_(very(fs)))))


def above(fs: FuzzySet) -> FuzzySet:
    """0 up to the (first) peak, complement of the set after it."""
    pts = list(fs)
    if not pts:
        return fs
    top = max(range(len(pts)), key=lambda i: (pts[i][1], -i))
    return FuzzySet((x, 1.0 - y if i > top else 0.0) for i, (x, y) in enumerate(pts))


def below(fs: FuzzySet) -> FuzzySet:
    """Complement of the set before the (last) peak, 0 from it on."""
    pts = list(fs)
    if not pts:
        return fs
    top = max(range(len(pts)), key=lambda i: (pts[i][1], i))
    return FuzzySet((x, 1.0 - y if i < top else 0.0) for i, (x, y) in enumerate(pts))


MODIFIERS: Dict[str, ModifierFn] = {
    "not": not_,
    "very": very,
    "extremely": extremely,
    "somewhat": somewhat,
    "more_or_less": more_or_less,
    "plus": plus,
    "norm": norm,
    "intensify": intensify,
    "slightly": slightly,
    "above": above,
    "below": below,
}


def register_modifier(name: str, fn: ModifierFn) -> None:
    key = name.strip().lower()
    if not key or key in ("and", "or") or any(c in key for c in " ()"):
        raise FuzzyConstructionError(f"invalid modifier name: {name!r}")
    if key in MODIFIERS:
        logger.info("replacing modifier %s", key)
    MODIFIERS[key] = fn


def unregister_modifier(name: str) -> None:
    MODIFIERS.pop(name.lower(), None)


def is_modifier(name: str) -> bool:
    return name.lower() in MODIFIERS


def modifier_names() -> List[str]:
    return sorted(MODIFIERS)


def apply_modifier(name: str, fs: FuzzySet) -> FuzzySet:
    try:
        fn = MODIFIERS[name.lower()]
    except KeyError:
        raise FuzzyConstructionError(f"unknown modifier: {name}") from None
    return fn(fs)
