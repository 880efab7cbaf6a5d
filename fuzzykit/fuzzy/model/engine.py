from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from ...config import InferenceConfig
from ...observability import log_event
from ..core.types import Float, FuzzyUsageError, InvalidDefuzzifyError
from .knowledge import DEFUZZ_METHODS, KnowledgeBase
from .value import FuzzyValue

logger = logging.getLogger(__name__)

InputValue = Union[Float, str, FuzzyValue]


class InferenceEngine:
    """
    Fire every rule whose inputs are known, combine conclusions per output
    variable with the global contribution operator, then defuzzify.
    """
    def __init__(self, kb: KnowledgeBase, config: Optional[InferenceConfig] = None) -> None:
        self.kb = kb
        self.config = kb.config(config)
        if kb.defuzz not in DEFUZZ_METHODS:
            raise FuzzyUsageError(f"unknown defuzzification method: {kb.defuzz}")

    # ---------- helpers ----------

    def fuzzify(self, name: str, raw: InputValue) -> FuzzyValue:
        var = self.kb.variables.get(name)
        if var is None:
            raise FuzzyUsageError(f"unknown variable: {name}")
        if isinstance(raw, FuzzyValue):
            return raw
        if isinstance(raw, str):
            try:
                return FuzzyValue.from_crisp(var, float(raw), self.kb.input_width, config=self.config)
            except ValueError:
                return FuzzyValue.from_expression(var, raw, config=self.config)
        return FuzzyValue.from_crisp(var, float(raw), self.kb.input_width, config=self.config)

    def _fuzzify_all(self, inputs: Mapping[str, InputValue]) -> Dict[str, FuzzyValue]:
        return {name: self.fuzzify(name, raw) for name, raw in inputs.items()}

    def _ready_rules(self, facts: Mapping[str, FuzzyValue]):
        for rule in self.kb.rules:
            if all(a.variable.name in facts for a in rule.antecedents):
                yield rule, [facts[a.variable.name] for a in rule.antecedents]

    # ---------- API ----------

    def evaluate(self, inputs: Mapping[str, InputValue]) -> Dict[str, FuzzyValue]:
        """Aggregated fuzzy conclusion per output variable."""
        facts = self._fuzzify_all(inputs)
        contribute = self.config.global_contribution
        out: Dict[str, FuzzyValue] = {}
        for rule, vals in self._ready_rules(facts):
            for fv in rule.fire(vals, config=self.config):
                name = fv.variable.name
                out[name] = contribute(fv, out[name]) if name in out else fv
        return out

    def infer(self, inputs: Mapping[str, InputValue], strict: bool = True) -> Dict[str, Optional[Float]]:
        """Crisp value per output; with strict=False an undefined result maps to None."""
        method = DEFUZZ_METHODS[self.kb.defuzz]
        result: Dict[str, Optional[Float]] = {}
        for name, fv in self.evaluate(inputs).items():
            try:
                result[name] = float(getattr(fv, method)())
            except InvalidDefuzzifyError:
                if strict:
                    raise
                logger.warning("output %s cannot be defuzzified (nothing fired)", name)
                result[name] = None
        log_event(logger, "inference_done", inputs=dict(inputs), outputs=result, defuzz=self.kb.defuzz)
        return result

    def explain(self, inputs: Mapping[str, InputValue]) -> List[Dict[str, Any]]:
        facts = self._fuzzify_all(inputs)
        report: List[Dict[str, Any]] = []
        for rule, vals in self._ready_rules(facts):
            dof = rule.degree_of_fulfillment(vals, self.config)
            report.append({
                "rule": rule.name,
                "antecedents": [
                    {"var": m.antecedent.variable.name, "expr": m.antecedent.linguistic_expression,
                     "degree": m.degree}
                    for m in rule.last_match_degrees
                ],
                "conclusions": [
                    {"var": c.variable.name, "expr": c.linguistic_expression} for c in rule.conclusions
                ],
                "dof": dof,
            })
        return report
