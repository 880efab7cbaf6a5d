import sys
from typing import Dict, List, Sequence, Union

from ...fuzzy.core.types import FuzzyUsageError
from ...fuzzy.io.fz_parser import parse_fz
from ...fuzzy.io.plot import plot_fuzzy_values


# ========= utils: ANSI =========

_RESET = "\x1b[0m"


def _use_ansi() -> bool:
    return sys.stdout.isatty()


def _ansi_color(mu: float) -> str:
    """
    Color by membership:
      >= 0.50 -> green
      >= 0.20 -> yellow
      <  0.20 -> grey
    """
    if not _use_ansi():
        return ""
    if mu >= 0.50:
        return "\x1b[32m"
    if mu >= 0.20:
        return "\x1b[33m"
    return "\x1b[90m"


def _parse_at(at_arg: Union[str, Sequence[str], None]) -> Dict[str, float]:
    """Accepts None, "x=1,y=2" or ["x=1", "y=2"]."""
    if not at_arg:
        return {}
    if isinstance(at_arg, str):
        at_arg = [at_arg]
    out: Dict[str, float] = {}
    for elem in at_arg:
        for tok in str(elem).split(","):
            tok = tok.strip()
            if not tok:
                continue
            if "=" not in tok:
                raise FuzzyUsageError(f"--at: expected 'var=value', got '{tok}'")
            k, v = tok.split("=", 1)
            try:
                out[k.strip()] = float(v)
            except ValueError:
                raise FuzzyUsageError(f"--at: '{k.strip()}' needs a number, got '{v}'") from None
    return out


def cmd_show(args):
    kb = parse_fz(args.model)
    xdict = _parse_at(getattr(args, "at", None))

    print("Variables:")
    for name, var in kb.variables.items():
        x = xdict.get(name)
        parts: List[str] = []
        for label, fv in var.terms().items():
            if x is None:
                parts.append(label)
            else:
                mu = fv.membership(x)
                color = _ansi_color(mu)
                parts.append(f"{color}{label}({mu:.2f}){_RESET if color else ''}")
        units = f" {var.units}" if var.units else ""
        print(f"  {name} [{var.min_uod:g},{var.max_uod:g}]{units} -> {', '.join(parts) or '(no terms)'}")
        if getattr(args, "plot", False) and var.terms():
            print(plot_fuzzy_values(var.terms().values()))

    print("Rules:")
    cfg = kb.config()
    print(f"  executor={getattr(cfg.executor, 'value', cfg.executor)}, defuzz={kb.defuzz}")
    for rule in kb.rules:
        print(f"  {rule}")
    if not kb.rules:
        print("  (no rules)")
    return 0
