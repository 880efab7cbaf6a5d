# FuzzyVariable: przestrzeń rozważań + nazwane termy

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Union

from ..core.fuzzyset import FuzzySet
from ..core.types import Float, InvalidTermNameError, InvalidUODRangeError, InvalidVariableNameError
from ..io import lexpr
from .value import FuzzyValue

logger = logging.getLogger(__name__)

TermDefinition = Union[FuzzySet, str, Sequence[Float], Sequence[Sequence[Float]]]


class FuzzyVariable:
    def __init__(self, name: str, min_uod: Float, max_uod: Float, units: str = ""):
        if not name or not name.strip():
            raise InvalidVariableNameError("fuzzy variable name must not be empty")
        if min_uod >= max_uod:
            raise InvalidUODRangeError(f"{name}: min_uod < max_uod required (got {min_uod} >= {max_uod})")
        self.name = name.strip()
        self.min_uod = float(min_uod)
        self.max_uod = float(max_uod)
        self.units = units
        self._terms: Dict[str, FuzzyValue] = {}

    # ---------- terms ----------

    @staticmethod
    def _term_key(name: str) -> str:
        key = (name or "").strip().lower()
        if not key or key in ("and", "or") or any(c in key for c in " ()"):
            raise InvalidTermNameError(f"invalid term name: {name!r}")
        return key

    def add_term(self, name: str, definition: TermDefinition,
                 ys: Optional[Sequence[Float]] = None, config=None) -> FuzzyValue:
        """Register a term from a set, a linguistic expression or x/y arrays."""
        key = self._term_key(name)
        if isinstance(definition, str):
            fs = self.parse_expression(definition)
        elif isinstance(definition, FuzzySet):
            fs = definition
        elif ys is not None:
            fs = FuzzySet.from_arrays(definition, ys)
        else:
            fs = FuzzySet(definition)
        if key in self._terms:
            logger.debug("variable %s: replacing term %s", self.name, key)
        fv = FuzzyValue(self, fs, linguistic=key, config=config)
        self._terms[key] = fv
        return fv

    def find_term(self, name: str) -> Optional[FuzzyValue]:
        return self._terms.get(name.strip().lower())

    def has_term(self, name: str) -> bool:
        return name.strip().lower() in self._terms

    def remove_term(self, name: str) -> Optional[FuzzyValue]:
        return self._terms.pop(name.strip().lower(), None)

    def term_names(self) -> List[str]:
        return list(self._terms)

    def terms(self) -> Dict[str, FuzzyValue]:
        return dict(self._terms)

    # ---------- expressions ----------

    def parse_expression(self, text: str) -> FuzzySet:
        node = lexpr.parse(text, self.has_term)
        return lexpr.evaluate(node, self._lookup_set)

    def _lookup_set(self, name: str) -> Optional[FuzzySet]:
        fv = self._terms.get(name)
        return fv.fuzzy_set if fv is not None else None

    # ---------- misc ----------

    def is_compatible(self, other: "FuzzyVariable") -> bool:
        return other is self or (self.min_uod == other.min_uod and self.max_uod == other.max_uod)

    def contains(self, x: Float) -> bool:
        return self.min_uod <= x <= self.max_uod

    def __str__(self) -> str:
        lines = [f"{self.name} [{self.min_uod:g}, {self.max_uod:g}] {self.units}".rstrip()]
        for key, fv in self._terms.items():
            lines.append(f"  {key}: {fv.fuzzy_set}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"FuzzyVariable({self.name!r}, {self.min_uod!r}, {self.max_uod!r}, {self.units!r})"
