from ...fuzzy.io.fz_parser import parse_fz


def cmd_validate(args):
    kb = parse_fz(args.model)
    cfg = kb.config()
    print(f"OK: variables={len(kb.variables)}, rules={len(kb.rules)}, "
          f"inputs={','.join(kb.input_names()) or '-'}, outputs={','.join(kb.output_names()) or '-'}")
    print(f"executor={cfg.executor.value}, combine={getattr(cfg.combine_operator, 'value', cfg.combine_operator)}, "
          f"contribution={cfg.global_contribution.value}, defuzz={kb.defuzz}")
    return 0
