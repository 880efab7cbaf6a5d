from __future__ import annotations
from enum import Enum

from .fuzzyset import FuzzySet
from .norms import resolve_strategy
from .types import Float


def _max_within(fs: FuzzySet, lo: Float, hi: Float) -> Float:
    return max(y for _, y in fs.span(lo, hi))


def similarity_by_area(a: FuzzySet, b: FuzzySet, lo: Float, hi: Float) -> Float:
    """Area of the intersection over area of the union."""
    if a == b:
        return 1.0
    union_area = a.union(b).area(lo, hi)
    if union_area <= 0.0:
        return 0.0
    return a.intersection(b).area(lo, hi) / union_area


def similarity_by_possibility(a: FuzzySet, b: FuzzySet, lo: Float, hi: Float) -> Float:
    """Possibility of b given a, discounted when the necessity is low."""
    if a == b:
        return 1.0
    poss = _max_within(a.intersection(b), lo, hi)
    nec = 1.0 - _max_within(a.complement().intersection(b), lo, hi)
    if nec > 0.5:
        return poss
    return (nec + 0.5) * poss


class SimilarityOperator(Enum):
    AREA = "area"
    POSSIBILITY = "possibility"

    def __call__(self, a: FuzzySet, b: FuzzySet, lo: Float, hi: Float) -> Float:
        if self is SimilarityOperator.AREA:
            return similarity_by_area(a, b, lo, hi)
        return similarity_by_possibility(a, b, lo, hi)


def resolve_similarity(choice):
    return resolve_strategy(SimilarityOperator, choice, {"necessity": SimilarityOperator.POSSIBILITY})
