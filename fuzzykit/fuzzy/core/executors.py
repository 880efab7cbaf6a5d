"""
Rule executors: modify a conclusion set with the rule's degree of fulfilment.

  mamdani   - clip the conclusion at the degree (pointwise min)
  larsen    - scale the conclusion by the degree (pointwise product)
  tsukamoto - monotonic conclusion solved for the x reaching the degree,
              result is a singleton of that height
"""
from __future__ import annotations
from enum import Enum

from .fuzzyset import FuzzySet
from .mfs import singleton
from .norms import resolve_strategy
from .types import Float, NonMonotonicConclusionError


def mamdani_min_max_min(conclusion: FuzzySet, dof: Float) -> FuzzySet:
    return conclusion.horizontal_intersection(dof)


def larsen_product_max_min(conclusion: FuzzySet, dof: Float) -> FuzzySet:
    return conclusion.multiply(dof)


def tsukamoto(conclusion: FuzzySet, dof: Float) -> FuzzySet:
    if len(conclusion) < 2 or not conclusion.is_monotonic():
        raise NonMonotonicConclusionError(f"Tsukamoto rule needs a monotonic conclusion, got {conclusion}")
    if dof <= 0.0:
        return FuzzySet.constant(0.0, conclusion.xs[0])
    return singleton(conclusion.x_for_membership(dof), dof)


class RuleExecutor(Enum):
    MAMDANI_MIN_MAX_MIN = "mamdani"
    LARSEN_PRODUCT_MAX_MIN = "larsen"
    TSUKAMOTO = "tsukamoto"

    def __call__(self, conclusion: FuzzySet, dof: Float) -> FuzzySet:
        if self is RuleExecutor.LARSEN_PRODUCT_MAX_MIN:
            return larsen_product_max_min(conclusion, dof)
        if self is RuleExecutor.TSUKAMOTO:
            return tsukamoto(conclusion, dof)
        return mamdani_min_max_min(conclusion, dof)


def resolve_executor(choice):
    return resolve_strategy(RuleExecutor, choice, {
        "min": RuleExecutor.MAMDANI_MIN_MAX_MIN,
        "product": RuleExecutor.LARSEN_PRODUCT_MAX_MIN,
    })
