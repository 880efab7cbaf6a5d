"""Tests for FuzzyRule matching and firing."""

import pytest

from fuzzykit.config import InferenceConfig
from fuzzykit.fuzzy.core import mfs
from fuzzykit.fuzzy.core.executors import RuleExecutor
from fuzzykit.fuzzy.core.types import (
    IncompatibleRuleInputsError, NonMonotonicConclusionError, RuleArityError, RuleNotReadyError,
)
from fuzzykit.fuzzy.model.rule import FuzzyRule, RuleState
from fuzzykit.fuzzy.model.value import FuzzyValue
from fuzzykit.fuzzy.model.variable import FuzzyVariable


@pytest.fixture
def height() -> FuzzyVariable:
    var = FuzzyVariable("height", 0, 3, "m")
    var.add_term("tall", mfs.left_linear(1, 2))
    var.add_term("average", mfs.triangle(0.5, 1.5, 2.5))
    return var


@pytest.fixture
def rule(temp, height) -> FuzzyRule:
    r = FuzzyRule(name="r1")
    r.add_antecedent(temp.find_term("hot"))
    r.add_conclusion(height.find_term("average"))
    return r


def _reading(temp, x):
    return FuzzyValue.singleton(temp, x)


def test_degree_of_fulfillment_single_antecedent(rule, temp) -> None:
    assert rule.degree_of_fulfillment([_reading(temp, 75)]) == pytest.approx(0.5)
    assert rule.last_degree == pytest.approx(0.5)
    assert rule.last_match_degrees[0].degree == pytest.approx(0.5)


def test_mamdani_fire(rule, temp) -> None:
    out = rule.fire([_reading(temp, 75)])

    assert len(out) == 1
    assert out[0].fuzzy_set.max_y == pytest.approx(0.5)
    assert out[0].linguistic_expression == "average"
    assert out[0].moment_defuzzify() == pytest.approx(1.5)
    assert rule.state is RuleState.FIRED


def test_zero_degree_gives_empty_conclusion(rule, temp) -> None:
    out = rule.fire([_reading(temp, 30)])

    assert out[0].is_empty()


def test_larsen_fire(temp, height) -> None:
    r = FuzzyRule(executor="larsen")
    r.add_antecedent(temp.find_term("hot"))
    r.add_conclusion(height.find_term("average"))
    out = r.fire([_reading(temp, 75)])

    assert out[0].membership(1.5) == pytest.approx(0.5)
    assert out[0].membership(1.0) == pytest.approx(0.25)


def test_tsukamoto_fire(temp, height) -> None:
    r = FuzzyRule(executor=RuleExecutor.TSUKAMOTO)
    r.add_antecedent(temp.find_term("hot"))
    r.add_conclusion(height.find_term("tall"))
    out = r.fire([_reading(temp, 75)])

    assert out[0].weighted_average_defuzzify() == pytest.approx(1.5)
    assert out[0].maximum_defuzzify() == pytest.approx(1.5)


def test_tsukamoto_rejects_non_monotonic(rule, temp) -> None:
    with pytest.raises(NonMonotonicConclusionError):
        rule.fire([_reading(temp, 75)], executor="tsukamoto")


def test_executor_from_config(rule, temp) -> None:
    out = rule.fire([_reading(temp, 75)], config=InferenceConfig(executor="larsen"))

    assert out[0].membership(1.0) == pytest.approx(0.25)


def test_combine_operators(temp, height) -> None:
    r = FuzzyRule()
    r.add_antecedent(temp.find_term("hot"))
    r.add_antecedent(temp.find_term("medium"))
    r.add_conclusion(height.find_term("tall"))
    inputs = [_reading(temp, 60), _reading(temp, 60)]

    assert r.degree_of_fulfillment(inputs) == pytest.approx(0.2)
    product = InferenceConfig(combine_operator="product")
    assert r.degree_of_fulfillment(inputs, product) == pytest.approx(0.2 * 0.6)
    r.combine_operator = max
    assert r.degree_of_fulfillment(inputs) == pytest.approx(0.6)


def test_rule_without_antecedents_always_fires(height) -> None:
    r = FuzzyRule()
    r.add_conclusion(height.find_term("tall"))

    assert r.degree_of_fulfillment() == 1.0
    assert r.fire()[0].fuzzy_set == height.find_term("tall").fuzzy_set


def test_bound_inputs_and_state(rule, temp) -> None:
    assert rule.state is RuleState.IDLE
    rule.add_input(_reading(temp, 75))

    assert rule.test_rule_matching(0.4)
    assert rule.state is RuleState.MATCHED
    assert not rule.test_rule_matching(0.6)
    rule.fire()
    assert rule.state is RuleState.FIRED
    rule.clear_inputs()
    assert rule.state is RuleState.IDLE
    assert rule.last_degree is None


def test_usage_errors(rule, temp) -> None:
    narrow = FuzzyVariable("narrow", 0, 50)

    with pytest.raises(RuleNotReadyError):
        rule.fire()
    with pytest.raises(RuleArityError):
        rule.fire([_reading(temp, 75), _reading(temp, 80)])
    with pytest.raises(IncompatibleRuleInputsError):
        rule.fire([FuzzyValue.singleton(narrow, 10)])


def test_editing_antecedents_and_conclusions(rule, temp, height) -> None:
    rule.insert_antecedent(0, temp.find_term("medium"))
    rule.insert_conclusion(0, height.find_term("tall"))

    assert [a.linguistic_expression for a in rule.antecedents] == ["medium", "hot"]
    assert rule.remove_conclusion(0).linguistic_expression == "tall"
    assert rule.remove_antecedent(0).linguistic_expression == "medium"
    rule.set_inputs([_reading(temp, 75)])
    rule.insert_input(0, _reading(temp, 10))
    assert rule.remove_input(0).membership(10) == 1.0
    assert len(rule.inputs) == 1


def test_text_form(rule) -> None:
    assert str(rule) == "r1: IF temp is hot THEN height is average"
