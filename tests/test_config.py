"""Tests for settings and the inference configuration context."""

from pydantic import ValidationError
import pytest

from fuzzykit.config import (
    InferenceConfig, Settings, get_default_config, get_settings, resolve_config, set_default_config,
)
from fuzzykit.fuzzy.core.executors import RuleExecutor
from fuzzykit.fuzzy.core.norms import AntecedentCombineOperator, CompensatoryAnd, GlobalContributionOperator
from fuzzykit.fuzzy.core.similarity import SimilarityOperator
from fuzzykit.fuzzy.core.types import STRONG, WEAK, FuzzyUsageError


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.executor == "mamdani"
    assert settings.combine_operator == "minimum"
    assert settings.match_threshold == 0.0
    assert settings.log_level == "WARNING"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FUZZYKIT_EXECUTOR", "larsen")
    monkeypatch.setenv("FUZZYKIT_EQUALS_STRENGTH", "weak")
    monkeypatch.setenv("FUZZYKIT_CONFINE_TO_UOD", "true")

    config = InferenceConfig.from_settings(get_settings())

    assert config.executor is RuleExecutor.LARSEN_PRODUCT_MAX_MIN
    assert config.equals_strength == WEAK
    assert config.confine_to_uod is True


def test_compensatory_gamma_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FUZZYKIT_COMBINE_OPERATOR", "compensatory_and")
    monkeypatch.setenv("FUZZYKIT_COMPENSATORY_GAMMA", "0.3")

    assert InferenceConfig.from_settings().combine_operator == CompensatoryAnd(0.3)


def test_settings_reject_out_of_range(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FUZZYKIT_MATCH_THRESHOLD", "2")

    with pytest.raises(ValidationError):
        Settings()


def test_inference_config_resolves_strategies() -> None:
    config = InferenceConfig(executor="tsukamoto", combine_operator="product",
                             similarity_operator="area", global_contribution="sum", match_threshold=1.5)

    assert config.executor is RuleExecutor.TSUKAMOTO
    assert config.combine_operator is AntecedentCombineOperator.PRODUCT
    assert config.similarity_operator is SimilarityOperator.AREA
    assert config.global_contribution is GlobalContributionOperator.SUM
    assert config.match_threshold == 1.0
    assert config.equals_strength == STRONG
    with pytest.raises(FuzzyUsageError):
        InferenceConfig(executor="bogus")


def test_replace_keeps_other_fields() -> None:
    base = InferenceConfig(executor="larsen")
    changed = base.replace(match_threshold=0.4)

    assert changed.executor is RuleExecutor.LARSEN_PRODUCT_MAX_MIN
    assert changed.match_threshold == 0.4
    assert base.match_threshold == 0.0


def test_process_default(monkeypatch: pytest.MonkeyPatch) -> None:
    custom = InferenceConfig(executor="larsen")
    set_default_config(custom)

    assert get_default_config() is custom
    assert resolve_config(None) is custom
    assert resolve_config(InferenceConfig()) is not custom

    monkeypatch.setenv("FUZZYKIT_GLOBAL_CONTRIBUTION", "sum")
    set_default_config(None)
    assert get_default_config().global_contribution is GlobalContributionOperator.SUM
