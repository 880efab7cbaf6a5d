from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.model.engine import InferenceEngine
from ..argtypes import parse_kv


def cmd_predict(args):
    kb = parse_fz(args.model)
    if args.defuzz:
        kb.defuzz = args.defuzz
    if args.executor:
        kb.executor = args.executor
    engine = InferenceEngine(kb)
    out = engine.infer(parse_kv(args.kv), strict=False)
    for oname, val in out.items():
        print(f"{oname}: {'n/a' if val is None else format(val, '.6g')}")
    return 0
