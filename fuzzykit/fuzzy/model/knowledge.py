from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ...config import InferenceConfig, get_default_config
from .rule import FuzzyRule
from .variable import FuzzyVariable

DEFUZZ_METHODS = {
    "moment": "moment_defuzzify",
    "center": "center_of_area_defuzzify",
    "maximum": "maximum_defuzzify",
    "weighted": "weighted_average_defuzzify",
}


@dataclass
class KnowledgeBase:
    # --- zmienne i reguły ---
    variables: Dict[str, FuzzyVariable] = field(default_factory=dict)
    rules: List[FuzzyRule] = field(default_factory=list)

    # --- ustawienia silnika (None -> domyślne z konfiguracji) ---
    executor: Optional[str] = None
    combine_operator: Optional[str] = None
    similarity_operator: Optional[str] = None
    global_contribution: Optional[str] = None
    confine_to_uod: Optional[bool] = None
    match_threshold: Optional[float] = None
    defuzz: str = "moment"
    input_width: float = 0.0      # 0 -> wejścia crisp jako singletony

    # ---------- metody pomocnicze (KB) ----------
    def add_variable(self, var: FuzzyVariable) -> None:
        self.variables[var.name] = var

    def add_rule(self, rule: FuzzyRule) -> None:
        self.rules.append(rule)

    def find_rule(self, name: str) -> Optional[FuzzyRule]:
        return next((r for r in self.rules if r.name == name), None)

    def input_names(self) -> List[str]:
        seen: Dict[str, None] = {}
        for r in self.rules:
            for a in r.antecedents:
                seen.setdefault(a.variable.name, None)
        return list(seen)

    def output_names(self) -> List[str]:
        seen: Dict[str, None] = {}
        for r in self.rules:
            for c in r.conclusions:
                seen.setdefault(c.variable.name, None)
        return list(seen)

    # ---------- metody pomocnicze (silnik) ----------
    def config(self, base: Optional[InferenceConfig] = None) -> InferenceConfig:
        """Base config (process default if None) with this knowledge base's overrides."""
        cfg = base if base is not None else get_default_config()
        changes = {
            "executor": self.executor,
            "combine_operator": self.combine_operator,
            "similarity_operator": self.similarity_operator,
            "global_contribution": self.global_contribution,
            "confine_to_uod": self.confine_to_uod,
            "match_threshold": self.match_threshold,
        }
        changes = {k: v for k, v in changes.items() if v is not None}
        return cfg.replace(**changes) if changes else cfg
