from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Sequence, Type, TypeVar, Union

from .types import Float, FuzzyUsageError

E = TypeVar("E", bound=Enum)


def resolve_strategy(kind: Type[E], choice, aliases: Optional[Dict[str, E]] = None):
    """Enum member, its name/value (any case) or a plain callable."""
    if isinstance(choice, kind):
        return choice
    if isinstance(choice, str):
        key = choice.strip().lower().replace("-", "_")
        for member in kind:
            if key in (member.value, member.name.lower()):
                return member
        if aliases and key in aliases:
            return aliases[key]
        raise FuzzyUsageError(f"unknown {kind.__name__}: {choice!r}")
    if callable(choice):
        return choice
    raise FuzzyUsageError(f"cannot use {choice!r} as {kind.__name__}")


# --- combine (T-normy) ---

def t_min(vals: Iterable[Float]) -> Float:
    it = iter(vals)
    try:
        m = float(next(it))
    except StopIteration:
        return 1.0
    for v in it:
        if v < m: m = float(v)
    return m


def t_prod(vals: Iterable[Float]) -> Float:
    p = 1.0
    for v in vals:
        p *= float(v)
    return p


DEFAULT_GAMMA: Float = 0.562


@dataclass(frozen=True)
class CompensatoryAnd:
    """prod(m) ** (1 - gamma) * (1 - prod(1 - m)) ** gamma"""
    gamma: Float = DEFAULT_GAMMA

    def __post_init__(self):
        object.__setattr__(self, "gamma", min(1.0, max(0.0, float(self.gamma))))

    def __call__(self, vals: Sequence[Float]) -> Float:
        vals = [float(v) for v in vals]
        if not vals:
            return 0.0
        p = t_prod(vals)
        q = t_prod(1.0 - v for v in vals)
        return (p ** (1.0 - self.gamma)) * ((1.0 - q) ** self.gamma)


class AntecedentCombineOperator(Enum):
    MINIMUM = "minimum"
    PRODUCT = "product"
    COMPENSATORY_AND = "compensatory_and"

    def __call__(self, vals: Sequence[Float]) -> Float:
        return _COMBINE[self](vals)


_COMBINE: Dict[AntecedentCombineOperator, Callable[[Sequence[Float]], Float]] = {
    AntecedentCombineOperator.MINIMUM: t_min,
    AntecedentCombineOperator.PRODUCT: t_prod,
    AntecedentCombineOperator.COMPENSATORY_AND: CompensatoryAnd(),
}

CombineFn = Union[AntecedentCombineOperator, Callable[[Sequence[Float]], Float]]


def resolve_combine(choice) -> CombineFn:
    return resolve_strategy(AntecedentCombineOperator, choice, {
        "min": AntecedentCombineOperator.MINIMUM,
        "prod": AntecedentCombineOperator.PRODUCT,
        "compensatory": AntecedentCombineOperator.COMPENSATORY_AND,
    })


# --- global contribution (powtórne asercje tego samego faktu) ---

class GlobalContributionOperator(Enum):
    UNION = "union"
    SUM = "sum"

    def __call__(self, new_value, existing_value):
        if self is GlobalContributionOperator.SUM:
            return new_value.fuzzy_sum(existing_value)
        return new_value.union(existing_value)


def resolve_contribution(choice):
    return resolve_strategy(GlobalContributionOperator, choice, {"max": GlobalContributionOperator.UNION})
