import json

import yaml

from ...fuzzy.core.types import FuzzyUsageError
from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.model.engine import InferenceEngine


def _load_cases(path: str):
    try:
        with open(path, encoding="utf-8") as f:
            if path.lower().endswith((".yml", ".yaml")):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise FuzzyUsageError(f"{path}: cannot read cases ({e})") from e
    if isinstance(data, dict):
        data = data.get("cases", [])
    if not isinstance(data, list) or not all(isinstance(c, dict) for c in data):
        raise FuzzyUsageError(f"{path}: expected a list of cases or a mapping with 'cases'")
    return data


def cmd_run(args):
    """Batch inference: one line per case from a YAML/JSON file."""
    kb = parse_fz(args.model)
    engine = InferenceEngine(kb)
    for i, case in enumerate(_load_cases(args.cases), 1):
        inputs = {k: (v if isinstance(v, str) else float(v)) for k, v in case.items()}
        out = engine.infer(inputs, strict=False)
        vals = ", ".join(f"{k}={'n/a' if v is None else format(v, '.6g')}" for k, v in out.items())
        print(f"[{i}] {vals}")
    return 0
