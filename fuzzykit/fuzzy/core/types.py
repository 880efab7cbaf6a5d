from __future__ import annotations
from typing import Tuple

Float = float
Point = Tuple[float, float]

# tolerancja porównań punktów zbiorów
FUZZY_TOLERANCE: Float = 1e-8

# rodzaj alfa-przekroju / siły równości
WEAK = True
STRONG = False


class FuzzyError(Exception):
    """Domain error for fuzzy framework."""


# ---------- construction ----------

class FuzzyConstructionError(FuzzyError):
    """Invalid data while building a set, variable or value."""


class XValuesOutOfOrderError(FuzzyConstructionError):
    def __init__(self, x1: Float, x2: Float, msg: str = ""):
        self.x1, self.x2 = x1, x2
        super().__init__(msg or f"x values out of order: {x1} > {x2}")


class YValueOutOfRangeError(FuzzyConstructionError):
    def __init__(self, y: Float):
        self.y = y
        super().__init__(f"membership value {y} outside [0, 1]")


class XValueOutsideUODError(FuzzyConstructionError):
    def __init__(self, x: Float, lo: Float, hi: Float):
        self.x, self.lo, self.hi = x, lo, hi
        super().__init__(f"x value {x} outside universe of discourse [{lo}, {hi}]")


class InvalidUODRangeError(FuzzyConstructionError):
    pass


class InvalidVariableNameError(FuzzyConstructionError):
    pass


class InvalidTermNameError(FuzzyConstructionError):
    pass


class LinguisticExpressionError(FuzzyConstructionError):
    """Malformed linguistic expression; carries the offending token."""

    def __init__(self, msg: str, token: str = "", position: int = -1):
        self.token = token
        self.position = position
        if token:
            msg = f"{msg}: '{token}' (position {position})"
        super().__init__(msg)


class UnknownTermError(LinguisticExpressionError):
    pass


# ---------- compatibility ----------

class FuzzyCompatibilityError(FuzzyError):
    pass


class IncompatibleFuzzyValuesError(FuzzyCompatibilityError):
    pass


class IncompatibleRuleInputsError(FuzzyCompatibilityError):
    pass


# ---------- algorithmic ----------

class FuzzyAlgorithmError(FuzzyError):
    pass


class InvalidDefuzzifyError(FuzzyAlgorithmError):
    pass


class NoXValueForMembershipError(FuzzyAlgorithmError):
    def __init__(self, membership: Float):
        self.membership = membership
        super().__init__(f"no x value with membership {membership}")


class NonMonotonicConclusionError(FuzzyAlgorithmError):
    pass


# ---------- usage ----------

class FuzzyUsageError(FuzzyError):
    pass


class RuleNotReadyError(FuzzyUsageError):
    pass


class RuleArityError(FuzzyUsageError):
    pass
