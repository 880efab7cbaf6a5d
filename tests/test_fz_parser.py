"""Tests for the .fz rule base reader."""

import pytest

from fuzzykit.fuzzy.core.executors import RuleExecutor
from fuzzykit.fuzzy.io.fz_parser import FZParseError, parse_fz, parse_fz_string


def test_shower_model(shower_source: str) -> None:
    kb = parse_fz_string(shower_source)

    assert list(kb.variables) == ["temp", "flow", "valve"]
    assert kb.variables["flow"].units == "l/min"
    assert kb.variables["temp"].term_names() == ["cold", "hot", "warm"]
    assert [r.name for r in kb.rules] == ["r1", "r2", "r3"]
    assert kb.input_names() == ["temp", "flow"]
    assert kb.output_names() == ["valve"]
    assert kb.executor == "mamdani"
    assert kb.defuzz == "moment"


def test_rule_options_and_quoted_expressions(shower_source: str) -> None:
    kb = parse_fz_string(shower_source)
    r3 = kb.find_rule("r3")

    assert r3.executor is RuleExecutor.LARSEN_PRODUCT_MAX_MIN
    assert r3.antecedents[0].linguistic_expression == "very hot"
    assert r3.conclusions[0].linguistic_expression == "very closed"
    assert kb.find_rule("r1").executor is None
    assert len(kb.find_rule("r2").antecedents) == 2


def test_engine_directives() -> None:
    kb = parse_fz_string(
        "var x 0 1\n"
        "combine product\nsimilarity area\ncontribution sum\n"
        "defuzz weighted\nconfine on\nthreshold 0.25\ninput_width 0.1\n"
    )
    config = kb.config()

    assert kb.combine_operator == "product"
    assert config.similarity_operator.value == "area"
    assert config.global_contribution.value == "sum"
    assert config.confine_to_uod is True
    assert config.match_threshold == 0.25
    assert kb.defuzz == "weighted"
    assert kb.input_width == 0.1


def test_points_shape() -> None:
    kb = parse_fz_string("var x 0 10\nterm x bump points 0 0 5 1 10 0\n")

    assert kb.variables["x"].find_term("bump").membership(2.5) == pytest.approx(0.5)


@pytest.mark.parametrize(
    "source, line",
    [
        ("bogus 1 2", 1),
        ("var x 0 1\nterm y a tri 0 0.5 1", 2),
        ("var x 0 1\nterm x a tri 0 1", 2),
        ("var x 0 1\nterm x a blob 0 1", 2),
        ("var x 0 1\nvar x 0 2", 2),
        ("var x 1 0", 1),
        ("var x 0 1\nthreshold 1.5", 2),
        ("var x 0 1\ndefuzz median", 2),
        ("var x 0 1\nterm x a tri 0 0.5 1\nrule r1 IF x is a", 3),
        ("var x 0 1\nterm x a tri 0 0.5 1\n\nrule r1 IF y is a THEN x is a", 4),
        ("var x 0 1\nterm x a tri 0 0.5 1\nrule r1 IF x is b THEN x is a", 3),
        ("var x 0 1\nterm x a tri 0 0.5 1\nrule r1 IF x a THEN x is a", 3),
        ("var x 0 1\nterm x a tri 0 0.5 1\nrule r1 THEN x is a\n", 3),
        ("var x 0 1\nterm x a tri 0 0.5 1\nrule r1 IF x is a THEN x is a\nrule r1 IF x is a THEN x is a", 4),
    ],
)
def test_errors_carry_line_numbers(source: str, line: int) -> None:
    with pytest.raises(FZParseError) as exc:
        parse_fz_string(source)

    assert exc.value.line == line
    assert str(exc.value).startswith(f"[.fz:{line}]")


def test_rules_may_precede_their_terms() -> None:
    kb = parse_fz_string(
        "var x 0 1\n"
        "rule r1 IF x is a THEN x is b\n"
        "term x a left 0 1\n"
        "term x b right 0 1\n"
    )

    assert kb.find_rule("r1") is not None


def test_parse_from_file(shower_file: str) -> None:
    kb = parse_fz(shower_file)

    assert len(kb.rules) == 3
