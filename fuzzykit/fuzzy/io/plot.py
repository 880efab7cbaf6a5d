"""ASCII plots of fuzzy sets (debugging aid)."""
from __future__ import annotations
from typing import List, Optional, Sequence

from ..core.fuzzyset import FuzzySet
from ..core.types import Float

ROWS = 20
COLS = 50
_MARKS = "*+o#x@"


def _column_range(fs: FuzzySet, x0: Float, x1: Float) -> List[Float]:
    """Memberships met between x0 and x1 (breakpoints included)."""
    ys = [fs.membership(x0), fs.membership(x1)]
    ys.extend(y for x, y in fs if x0 <= x <= x1)
    return ys


def plot_fuzzy_sets(sets: Sequence[FuzzySet], lo: Float, hi: Float,
                    heading: Optional[str] = None) -> str:
    grid = [[" "] * (COLS + 1) for _ in range(ROWS + 1)]
    step = (hi - lo) / COLS if hi > lo else 1.0
    for k, fs in enumerate(sets):
        mark = _MARKS[k % len(_MARKS)]
        if not len(fs):
            continue
        for c in range(COLS + 1):
            x0 = lo + (c - 0.5) * step
            x1 = lo + (c + 0.5) * step
            ys = _column_range(fs, max(lo, x0), min(hi, x1))
            r_lo = int(round(min(ys) * ROWS))
            r_hi = int(round(max(ys) * ROWS))
            for r in range(r_lo, r_hi + 1):
                grid[r][c] = mark
    lines: List[str] = []
    if heading:
        lines.append(heading)
        lines.append("")
    for r in range(ROWS, -1, -1):
        label = f"{r / ROWS:4.2f}" if r % 5 == 0 else "    "
        lines.append(f"{label} |" + "".join(grid[r]).rstrip())
    lines.append("     +" + "-" * (COLS + 1))
    lines.append(f"      {lo:<{COLS // 2}g}{hi:>{COLS // 2 + 1}g}")
    return "\n".join(lines)


def plot_fuzzy_set(fs: FuzzySet, lo: Float, hi: Float, heading: Optional[str] = None) -> str:
    return plot_fuzzy_sets([fs], lo, hi, heading)


def plot_fuzzy_value(fv, heading: Optional[str] = None) -> str:
    if heading is None:
        heading = f"Fuzzy Value: {fv.variable.name}\nLinguistic Value: {fv.linguistic_expression}"
    return plot_fuzzy_set(fv.fuzzy_set, fv.min_uod, fv.max_uod, heading)


def plot_fuzzy_values(values, heading: Optional[str] = None) -> str:
    values = list(values)
    if not values:
        return heading or ""
    first = values[0]
    if heading is None:
        legend = ", ".join(f"{_MARKS[i % len(_MARKS)]} {fv.linguistic_expression}" for i, fv in enumerate(values))
        heading = f"Fuzzy Values: {first.variable.name} ({legend})"
    return plot_fuzzy_sets([fv.fuzzy_set for fv in values], first.min_uod, first.max_uod, heading)
