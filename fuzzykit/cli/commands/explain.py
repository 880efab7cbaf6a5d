import json

from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.model.engine import InferenceEngine
from ..argtypes import parse_kv


def cmd_explain(args):
    kb = parse_fz(args.model)
    engine = InferenceEngine(kb)
    res = engine.explain(parse_kv(args.kv))
    if args.threshold > 0.0:
        res = [r for r in res if r["dof"] >= args.threshold]
    if getattr(args, "json", False):
        print(json.dumps(res, indent=2))
        return 0
    for r in res:
        ants = " AND ".join(f"{a['var']} is {a['expr']} (μ={a['degree']:.3f})" for a in r["antecedents"])
        cons = " AND ".join(f"{c['var']} is {c['expr']}" for c in r["conclusions"])
        print(f"  {r['rule']}: IF {ants or 'TRUE'} THEN {cons}  dof={r['dof']:.4f}")
    return 0
