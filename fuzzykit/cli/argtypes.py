import argparse
from typing import Dict, List

from ..fuzzy.core.executors import RuleExecutor
from ..fuzzy.core.norms import AntecedentCombineOperator, GlobalContributionOperator
from ..fuzzy.model.knowledge import DEFUZZ_METHODS

EXECUTOR_CHOICES = [e.value for e in RuleExecutor]
COMBINE_CHOICES = [c.value for c in AntecedentCombineOperator]
CONTRIBUTION_CHOICES = [g.value for g in GlobalContributionOperator]
DEFUZZ_CHOICES = list(DEFUZZ_METHODS)


def parse_kv(items: List[str]) -> Dict[str, str]:
    """['temp=45', 'flow="very low"'] -> {'temp': '45', 'flow': 'very low'}"""
    out: Dict[str, str] = {}
    for item in items or []:
        if "=" not in item:
            raise argparse.ArgumentTypeError(f"Invalid element: '{item}' (expected 'var=value').")
        k, v = (t.strip() for t in item.split("=", 1))
        if not k or not v:
            raise argparse.ArgumentTypeError(f"Empty key or value in: '{item}'.")
        out[k] = v.strip("'\"")
    return out
