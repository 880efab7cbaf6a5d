import argparse

from ..argtypes import DEFUZZ_CHOICES, EXECUTOR_CHOICES
from .explain import cmd_explain
from .plot import cmd_plot
from .predict import cmd_predict
from .run import cmd_run
from .show import cmd_show
from .validate import cmd_validate


def build_parser():
    fmt = argparse.ArgumentDefaultsHelpFormatter
    ap = argparse.ArgumentParser(
        prog="fuzzykit",
        description="Fuzzy rule toolkit: fuzzy sets, linguistic variables, Mamdani/Larsen/Tsukamoto rules",
        formatter_class=fmt,
        epilog=(
            "Examples:\n"
            "  fuzzykit validate --model shower.fz\n"
            "  fuzzykit show --model shower.fz --at temp=45\n"
            "  fuzzykit predict --model shower.fz temp=45 flow=12\n"
            "  fuzzykit explain --model shower.fz temp=45 'flow=very low' --json\n"
            "  fuzzykit plot --model shower.fz --var temp very hot\n"
            "  fuzzykit run --model shower.fz --cases cases.yaml\n"
        ),
    )
    ap.add_argument("--log-level", default=None, help="override FUZZYKIT_LOG_LEVEL")

    sub = ap.add_subparsers(dest="cmd", required=True)

    # validate
    sp_v = sub.add_parser("validate", help="Load and check a rule base", formatter_class=fmt)
    sp_v.add_argument("--model", required=True)
    sp_v.set_defaults(func=cmd_validate)

    # show
    sp_s = sub.add_parser("show", help="Show variables, terms and rules", formatter_class=fmt)
    sp_s.add_argument("--model", required=True)
    sp_s.add_argument("--at", nargs="*", help="var=value points to evaluate term memberships at")
    sp_s.add_argument("--plot", action="store_true", help="ASCII plot of each variable's terms")
    sp_s.set_defaults(func=cmd_show)

    # predict
    sp_p = sub.add_parser("predict", help="Crisp outputs for one sample", formatter_class=fmt)
    sp_p.add_argument("--model", required=True)
    sp_p.add_argument("kv", nargs="+", help="var=value pairs (number or linguistic expression)")
    sp_p.add_argument("--defuzz", choices=DEFUZZ_CHOICES, help="override the rule base's method")
    sp_p.add_argument("--executor", choices=EXECUTOR_CHOICES, help="override the rule base's executor")
    sp_p.set_defaults(func=cmd_predict)

    # explain
    sp_e = sub.add_parser("explain", help="Per-rule match degrees for one sample", formatter_class=fmt)
    sp_e.add_argument("--model", required=True)
    sp_e.add_argument("kv", nargs="+")
    sp_e.add_argument("--json", action="store_true")
    sp_e.add_argument("--threshold", type=float, default=0.0, help="hide rules with a lower degree")
    sp_e.set_defaults(func=cmd_explain)

    # plot
    sp_pl = sub.add_parser("plot", help="ASCII plot of a variable's terms or an expression", formatter_class=fmt)
    sp_pl.add_argument("--model", required=True)
    sp_pl.add_argument("--var", required=True)
    sp_pl.add_argument("expr", nargs="*", help="linguistic expression (default: all terms)")
    sp_pl.set_defaults(func=cmd_plot)

    # run
    sp_run = sub.add_parser("run", help="Batch predictions from a YAML/JSON case file", formatter_class=fmt)
    sp_run.add_argument("--model", required=True)
    sp_run.add_argument("--cases", required=True, help="list of {var: value} mappings")
    sp_run.set_defaults(func=cmd_run)

    return ap
