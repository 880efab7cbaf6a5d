from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Union

from ...config import InferenceConfig, resolve_config
from ..core import defuzz, mfs, modifiers
from ..core.fuzzyset import FuzzySet
from ..core.interval import IntervalVector
from ..core.similarity import resolve_similarity
from ..core.types import (
    WEAK, Float, FuzzyConstructionError, FuzzyUsageError, IncompatibleFuzzyValuesError,
    InvalidDefuzzifyError, XValueOutsideUODError,
)
from ..io.plot import plot_fuzzy_value

if TYPE_CHECKING:
    from .variable import FuzzyVariable

UNKNOWN_EXPRESSION = "???"


class FuzzyValue:
    """A fuzzy set attached to the universe of discourse of a FuzzyVariable."""

    __slots__ = ("variable", "fuzzy_set", "linguistic_expression")

    def __init__(self, variable: "FuzzyVariable", value: Union[FuzzySet, str], *,
                 linguistic: Optional[str] = None, config: Optional[InferenceConfig] = None):
        cfg = resolve_config(config)
        if isinstance(value, str):
            fs = variable.parse_expression(value)
            linguistic = linguistic or " ".join(value.lower().split())
        elif isinstance(value, FuzzySet):
            fs = value
        else:
            raise FuzzyConstructionError(f"cannot build a fuzzy value from {type(value).__name__}")
        lo, hi = variable.min_uod, variable.max_uod
        if cfg.confine_to_uod:
            fs = fs.confine_to_bounds(lo, hi)
        else:
            for x in fs.xs:
                if x < lo or x > hi:
                    raise XValueOutsideUODError(x, lo, hi)
        self.variable = variable
        self.fuzzy_set = fs
        self.linguistic_expression = linguistic or UNKNOWN_EXPRESSION

    # ---------- constructors ----------

    @classmethod
    def from_points(cls, variable: "FuzzyVariable", xs: Sequence[Float], ys: Sequence[Float],
                    config: Optional[InferenceConfig] = None) -> "FuzzyValue":
        return cls(variable, FuzzySet.from_arrays(xs, ys), config=config)

    @classmethod
    def from_expression(cls, variable: "FuzzyVariable", text: str,
                        config: Optional[InferenceConfig] = None) -> "FuzzyValue":
        return cls(variable, text, config=config)

    @classmethod
    def singleton(cls, variable: "FuzzyVariable", x: Float,
                  config: Optional[InferenceConfig] = None) -> "FuzzyValue":
        return cls(variable, mfs.singleton(x), config=config)

    @classmethod
    def from_crisp(cls, variable: "FuzzyVariable", x: Float, width: Float,
                   config: Optional[InferenceConfig] = None) -> "FuzzyValue":
        """Narrow triangle around a crisp reading, clipped to the variable's range."""
        if width <= 0:
            return cls.singleton(variable, x, config=config)
        if not variable.contains(x):
            raise XValueOutsideUODError(x, variable.min_uod, variable.max_uod)
        fs = mfs.triangle(x - width, x, x + width).confine_to_bounds(variable.min_uod, variable.max_uod)
        return cls(variable, fs, config=config)

    def derive(self, fs: FuzzySet, expression: Optional[str] = None) -> "FuzzyValue":
        fv = object.__new__(FuzzyValue)
        fv.variable = self.variable
        fv.fuzzy_set = fs
        fv.linguistic_expression = expression or self.linguistic_expression
        return fv

    # ---------- basic ----------

    @property
    def min_uod(self) -> Float:
        return self.variable.min_uod

    @property
    def max_uod(self) -> Float:
        return self.variable.max_uod

    def _check(self, other: "FuzzyValue") -> None:
        if not self.variable.is_compatible(other.variable):
            raise IncompatibleFuzzyValuesError(
                f"{self.variable.name} [{self.min_uod:g}, {self.max_uod:g}] vs "
                f"{other.variable.name} [{other.min_uod:g}, {other.max_uod:g}]")

    def membership(self, x: Float) -> Float:
        if not self.variable.contains(x):
            raise XValueOutsideUODError(x, self.min_uod, self.max_uod)
        return self.fuzzy_set.membership(x)

    def is_empty(self) -> bool:
        return self.fuzzy_set.is_empty()

    def is_normal(self) -> bool:
        return self.fuzzy_set.is_normal()

    def is_convex(self) -> bool:
        return self.fuzzy_set.is_convex()

    def alpha_cut(self, strength: bool, level: Float) -> IntervalVector:
        return self.fuzzy_set.alpha_cut(strength, level, self.min_uod, self.max_uod)

    def support(self) -> IntervalVector:
        return self.fuzzy_set.support(self.min_uod, self.max_uod)

    # ---------- algebra ----------

    def union(self, other: "FuzzyValue") -> "FuzzyValue":
        self._check(other)
        return self.derive(self.fuzzy_set.union(other.fuzzy_set),
                           f"({self.linguistic_expression}) or ({other.linguistic_expression})")

    def intersection(self, other: "FuzzyValue") -> "FuzzyValue":
        self._check(other)
        return self.derive(self.fuzzy_set.intersection(other.fuzzy_set),
                           f"({self.linguistic_expression}) and ({other.linguistic_expression})")

    def fuzzy_sum(self, other: "FuzzyValue") -> "FuzzyValue":
        self._check(other)
        return self.derive(self.fuzzy_set.fuzzy_sum(other.fuzzy_set),
                           f"({self.linguistic_expression}) + ({other.linguistic_expression})")

    def complement(self) -> "FuzzyValue":
        return self.derive(self.fuzzy_set.complement(), f"not ({self.linguistic_expression})")

    def modify(self, modifier: str) -> "FuzzyValue":
        return self.derive(modifiers.apply_modifier(modifier, self.fuzzy_set),
                           f"{modifier.lower()} ({self.linguistic_expression})")

    def horizontal_intersection(self, y: Float) -> "FuzzyValue":
        return self.derive(self.fuzzy_set.horizontal_intersection(y), UNKNOWN_EXPRESSION)

    def horizontal_union(self, y: Float) -> "FuzzyValue":
        return self.derive(self.fuzzy_set.horizontal_union(y), UNKNOWN_EXPRESSION)

    def scale(self, y: Float) -> "FuzzyValue":
        return self.derive(self.fuzzy_set.scale(y), UNKNOWN_EXPRESSION)

    def normalize(self) -> "FuzzyValue":
        return self.derive(self.fuzzy_set.normalize(), f"norm ({self.linguistic_expression})")

    # ---------- matching ----------

    def maximum_of_intersection(self, other: "FuzzyValue") -> Float:
        self._check(other)
        return max(y for _, y in self.fuzzy_set.intersection(other.fuzzy_set).span(self.min_uod, self.max_uod))

    def similarity(self, other: "FuzzyValue", operator=None,
                   config: Optional[InferenceConfig] = None) -> Float:
        self._check(other)
        op = resolve_similarity(operator) if operator is not None else resolve_config(config).similarity_operator
        return float(op(self.fuzzy_set, other.fuzzy_set, self.min_uod, self.max_uod))

    def fuzzy_match(self, other: "FuzzyValue", threshold: Optional[Float] = None,
                    config: Optional[InferenceConfig] = None) -> bool:
        if threshold is None:
            threshold = resolve_config(config).match_threshold
        threshold = min(1.0, max(0.0, threshold))
        if threshold == 0.0:
            self._check(other)
            if self.fuzzy_set.no_intersection_test(other.fuzzy_set):
                return False
            return self.maximum_of_intersection(other) > 0.0
        return self.maximum_of_intersection(other) >= threshold

    def equals(self, other: "FuzzyValue", strength: Optional[bool] = None,
               config: Optional[InferenceConfig] = None) -> bool:
        """WEAK compares sets within the fuzzy tolerance, STRONG point by point."""
        if not isinstance(other, FuzzyValue) or not self.variable.is_compatible(other.variable):
            return False
        if strength is None:
            strength = resolve_config(config).equals_strength
        if strength == WEAK:
            return self.fuzzy_set == other.fuzzy_set
        return self.fuzzy_set.points == other.fuzzy_set.points

    def __eq__(self, other) -> bool:
        if not isinstance(other, FuzzyValue):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.min_uod, self.max_uod))

    # ---------- defuzzification ----------

    def moment_defuzzify(self) -> Float:
        return self.fuzzy_set.moment_defuzzify(self.min_uod, self.max_uod)

    def center_of_area_defuzzify(self) -> Float:
        return self.fuzzy_set.center_of_area_defuzzify(self.min_uod, self.max_uod)

    def maximum_defuzzify(self) -> Float:
        return self.fuzzy_set.maximum_defuzzify(self.min_uod, self.max_uod)

    def weighted_average_defuzzify(self) -> Float:
        return self.fuzzy_set.weighted_average_defuzzify(self.min_uod, self.max_uod)

    # ---------- text ----------

    def plot(self, heading: Optional[str] = None) -> str:
        return plot_fuzzy_value(self, heading)

    def __str__(self) -> str:
        return f"{self.variable.name}: {self.linguistic_expression} {self.fuzzy_set}"

    def __repr__(self) -> str:
        return f"FuzzyValue({self.variable.name!r}, {self.linguistic_expression!r}, {self.fuzzy_set!r})"


class FuzzyValueVector:
    """Ordered collection of FuzzyValues (rule output, aggregates)."""

    def __init__(self, values: Optional[Iterable[FuzzyValue]] = None):
        self._items: List[FuzzyValue] = list(values or ())

    def add(self, fv: FuzzyValue) -> None:
        self._items.append(fv)

    def insert(self, index: int, fv: FuzzyValue) -> None:
        self._items.insert(index, fv)

    def remove(self, index: int) -> FuzzyValue:
        return self._items.pop(index)

    def concat(self, other: "FuzzyValueVector") -> "FuzzyValueVector":
        return FuzzyValueVector(self._items + list(other))

    def __getitem__(self, index: int) -> FuzzyValue:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[FuzzyValue]:
        return iter(self._items)

    def _fold(self, name: str) -> FuzzyValue:
        if not self._items:
            raise FuzzyUsageError(f"{name} of an empty FuzzyValueVector")
        acc = self._items[0]
        for fv in self._items[1:]:
            acc = getattr(acc, name)(fv)
        return acc

    def union(self) -> FuzzyValue:
        return self._fold("union")

    def intersection(self) -> FuzzyValue:
        return self._fold("intersection")

    def fuzzy_sum(self) -> FuzzyValue:
        return self._fold("fuzzy_sum")

    def _spans(self):
        if not self._items:
            raise InvalidDefuzzifyError("defuzzification of an empty FuzzyValueVector")
        first = self._items[0]
        for fv in self._items[1:]:
            first._check(fv)
        return [fv.fuzzy_set.span(first.min_uod, first.max_uod) for fv in self._items]

    def moment_defuzzify(self) -> Float:
        num = den = 0.0
        for pts in self._spans():
            m, a = defuzz.moment_and_area(pts)
            num += m; den += a
        if den <= 0.0:
            raise InvalidDefuzzifyError("moment defuzzification of values with zero area")
        return num / den

    def weighted_average_defuzzify(self) -> Float:
        tops = []
        for pts in self._spans():
            tops.extend(defuzz.peaks(pts))
        return defuzz.weighted_average_of_peaks(tops)

    def maximum_defuzzify(self) -> Float:
        best = None
        for pts in self._spans():
            if max(y for _, y in pts) <= 0.0:
                continue
            cand = defuzz.maximum(pts)
            if best is None or cand[0] > best[0]:
                best = cand
        if best is None:
            raise InvalidDefuzzifyError("maximum defuzzification of empty values")
        return best[1]

    def center_of_area_defuzzify(self) -> Float:
        self._spans()
        return self.fuzzy_sum().center_of_area_defuzzify()

    def __str__(self) -> str:
        return "\n".join(str(fv) for fv in self._items)
