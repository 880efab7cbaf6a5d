from ...fuzzy.core.types import FuzzyUsageError
from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.io.plot import plot_fuzzy_value, plot_fuzzy_values
from ...fuzzy.model.value import FuzzyValue


def cmd_plot(args):
    kb = parse_fz(args.model)
    var = kb.variables.get(args.var)
    if var is None:
        raise FuzzyUsageError(f"unknown variable: {args.var}")
    if args.expr:
        print(plot_fuzzy_value(FuzzyValue.from_expression(var, " ".join(args.expr), config=kb.config())))
    else:
        print(plot_fuzzy_values(var.terms().values()))
    return 0
