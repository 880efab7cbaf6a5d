from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from ...config import InferenceConfig, resolve_config
from ...observability import log_event
from ..core.executors import resolve_executor
from ..core.norms import resolve_combine
from ..core.types import (
    Float, IncompatibleRuleInputsError, RuleArityError, RuleNotReadyError,
)
from .value import FuzzyValue, FuzzyValueVector

logger = logging.getLogger(__name__)


class RuleState(Enum):
    IDLE = "idle"          # brak wejść
    MATCHED = "matched"    # stopnie dopasowania policzone
    FIRED = "fired"


@dataclass(frozen=True)
class MatchDegree:
    antecedent: FuzzyValue
    input: FuzzyValue
    degree: Float


def _strategy_name(fn) -> str:
    return getattr(fn, "value", None) or getattr(fn, "__name__", None) or repr(fn)


class FuzzyRule:
    """IF antecedents THEN conclusions; inputs are matched positionally to antecedents."""

    def __init__(self, executor=None, combine_operator=None, name: str = ""):
        self.name = name
        self.antecedents: List[FuzzyValue] = []
        self.conclusions: List[FuzzyValue] = []
        self.inputs: List[FuzzyValue] = []
        self.executor = resolve_executor(executor) if executor is not None else None
        self.combine_operator = resolve_combine(combine_operator) if combine_operator is not None else None
        self.state = RuleState.IDLE
        self.last_match_degrees: List[MatchDegree] = []
        self.last_degree: Optional[Float] = None

    # ---------- building ----------

    def add_antecedent(self, fv: FuzzyValue) -> None:
        self.antecedents.append(fv)

    def insert_antecedent(self, index: int, fv: FuzzyValue) -> None:
        self.antecedents.insert(index, fv)

    def remove_antecedent(self, index: int) -> FuzzyValue:
        return self.antecedents.pop(index)

    def add_conclusion(self, fv: FuzzyValue) -> None:
        self.conclusions.append(fv)

    def insert_conclusion(self, index: int, fv: FuzzyValue) -> None:
        self.conclusions.insert(index, fv)

    def remove_conclusion(self, index: int) -> FuzzyValue:
        return self.conclusions.pop(index)

    def add_input(self, fv: FuzzyValue) -> None:
        self.inputs.append(fv)
        self.state = RuleState.IDLE

    def insert_input(self, index: int, fv: FuzzyValue) -> None:
        self.inputs.insert(index, fv)
        self.state = RuleState.IDLE

    def remove_input(self, index: int) -> FuzzyValue:
        self.state = RuleState.IDLE
        return self.inputs.pop(index)

    def set_inputs(self, inputs: Iterable[FuzzyValue]) -> None:
        self.inputs = list(inputs)
        self.state = RuleState.IDLE

    def clear_inputs(self) -> None:
        self.inputs = []
        self.last_match_degrees = []
        self.last_degree = None
        self.state = RuleState.IDLE

    # ---------- matching ----------

    def _bound_inputs(self, inputs: Optional[Iterable[FuzzyValue]]) -> List[FuzzyValue]:
        vals = list(inputs) if inputs is not None else self.inputs
        if self.antecedents and not vals:
            raise RuleNotReadyError(f"rule {self.name or '?'}: inputs are not bound")
        if len(vals) != len(self.antecedents):
            raise RuleArityError(
                f"rule {self.name or '?'}: {len(vals)} inputs for {len(self.antecedents)} antecedents")
        for ant, inp in zip(self.antecedents, vals):
            if not ant.variable.is_compatible(inp.variable):
                raise IncompatibleRuleInputsError(
                    f"input on {inp.variable.name} does not fit antecedent on {ant.variable.name}")
        return vals

    def match_degrees(self, inputs: Optional[Iterable[FuzzyValue]] = None) -> List[MatchDegree]:
        """Per antecedent/input pair: max of the pointwise intersection."""
        vals = self._bound_inputs(inputs)
        degrees = [MatchDegree(a, i, a.maximum_of_intersection(i)) for a, i in zip(self.antecedents, vals)]
        self.last_match_degrees = degrees
        self.state = RuleState.MATCHED
        return degrees

    def degree_of_fulfillment(self, inputs: Optional[Iterable[FuzzyValue]] = None,
                              config: Optional[InferenceConfig] = None) -> Float:
        degrees = [m.degree for m in self.match_degrees(inputs)]
        if not degrees:
            dof = 1.0
        elif len(degrees) == 1:
            dof = degrees[0]
        else:
            combine = self.combine_operator
            if combine is None:
                combine = resolve_config(config).combine_operator
            dof = float(combine(degrees))
        self.last_degree = dof
        return dof

    def test_rule_matching(self, threshold: Optional[Float] = None,
                           inputs: Optional[Iterable[FuzzyValue]] = None,
                           config: Optional[InferenceConfig] = None) -> bool:
        """Match inputs against antecedents without firing."""
        vals = self._bound_inputs(inputs)
        cfg = resolve_config(config)
        ok = all(a.fuzzy_match(i, threshold, config=cfg) for a, i in zip(self.antecedents, vals))
        self.state = RuleState.MATCHED
        return ok

    # ---------- firing ----------

    def fire(self, inputs: Optional[Iterable[FuzzyValue]] = None, executor=None,
             config: Optional[InferenceConfig] = None) -> FuzzyValueVector:
        cfg = resolve_config(config)
        if executor is not None:
            run = resolve_executor(executor)
        else:
            run = self.executor if self.executor is not None else cfg.executor
        dof = self.degree_of_fulfillment(inputs, cfg)
        out = FuzzyValueVector()
        for conc in self.conclusions:
            out.add(conc.derive(run(conc.fuzzy_set, dof)))
        self.state = RuleState.FIRED
        log_event(logger, "rule_fired", logging.DEBUG, rule=self.name, degree=dof,
                  executor=_strategy_name(run), conclusions=len(out))
        return out

    def __str__(self) -> str:
        ants = " AND ".join(f"{a.variable.name} is {a.linguistic_expression}" for a in self.antecedents)
        cons = " AND ".join(f"{c.variable.name} is {c.linguistic_expression}" for c in self.conclusions)
        head = f"{self.name}: " if self.name else ""
        return f"{head}IF {ants or 'TRUE'} THEN {cons}"
