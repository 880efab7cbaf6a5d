"""Runtime configuration for fuzzy inference."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .fuzzy.core.executors import RuleExecutor, resolve_executor
from .fuzzy.core.norms import (
    AntecedentCombineOperator, CompensatoryAnd, GlobalContributionOperator,
    resolve_combine, resolve_contribution,
)
from .fuzzy.core.similarity import SimilarityOperator, resolve_similarity
from .fuzzy.core.types import STRONG, WEAK


class Settings(BaseSettings):
    """Process defaults loaded from environment variables."""

    executor: str = "mamdani"
    combine_operator: str = "minimum"
    compensatory_gamma: float = Field(default=0.562, ge=0, le=1)
    similarity_operator: str = "possibility"
    global_contribution: str = "union"
    confine_to_uod: bool = False
    equals_strength: Literal["weak", "strong"] = "strong"
    match_threshold: float = Field(default=0.0, ge=0, le=1)
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="FUZZYKIT_", extra="ignore")


def get_settings() -> Settings:
    """Return settings object."""

    return Settings()


@dataclass(frozen=True)
class InferenceConfig:
    """Strategies and policy flags read once at the start of an operation."""

    executor: Callable[..., Any] = RuleExecutor.MAMDANI_MIN_MAX_MIN
    combine_operator: Callable[..., Any] = AntecedentCombineOperator.MINIMUM
    similarity_operator: Callable[..., Any] = SimilarityOperator.POSSIBILITY
    global_contribution: Callable[..., Any] = GlobalContributionOperator.UNION
    confine_to_uod: bool = False
    equals_strength: bool = STRONG
    match_threshold: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "executor", resolve_executor(self.executor))
        object.__setattr__(self, "combine_operator", resolve_combine(self.combine_operator))
        object.__setattr__(self, "similarity_operator", resolve_similarity(self.similarity_operator))
        object.__setattr__(self, "global_contribution", resolve_contribution(self.global_contribution))
        object.__setattr__(self, "match_threshold", min(1.0, max(0.0, float(self.match_threshold))))

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InferenceConfig":
        s = settings or get_settings()
        combine = resolve_combine(s.combine_operator)
        if combine is AntecedentCombineOperator.COMPENSATORY_AND:
            combine = CompensatoryAnd(s.compensatory_gamma)
        return cls(
            executor=s.executor,
            combine_operator=combine,
            similarity_operator=s.similarity_operator,
            global_contribution=s.global_contribution,
            confine_to_uod=s.confine_to_uod,
            equals_strength=WEAK if s.equals_strength == "weak" else STRONG,
            match_threshold=s.match_threshold,
        )

    def replace(self, **changes: Any) -> "InferenceConfig":
        return dataclasses.replace(self, **changes)


_default_lock = Lock()
_default_config: Optional[InferenceConfig] = None


def get_default_config() -> InferenceConfig:
    """Process-wide default, built from Settings on first use."""

    global _default_config
    with _default_lock:
        if _default_config is None:
            _default_config = InferenceConfig.from_settings()
        return _default_config


def set_default_config(config: Optional[InferenceConfig]) -> None:
    """Replace the process-wide default; None rebuilds it from Settings."""

    global _default_config
    with _default_lock:
        _default_config = config


def resolve_config(config: Optional[InferenceConfig]) -> InferenceConfig:
    return config if config is not None else get_default_config()
