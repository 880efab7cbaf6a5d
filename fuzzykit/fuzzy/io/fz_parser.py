"""
Grammar (summary):
  var <name> <min> <max> [units]
  term <var> <name> <shape> <params...>
        shapes: singleton x | tri a b c | trap a b c d | rect l r | left l r | right l r
                s l r | z l r | pi center width | gauss center sd | lgauss c sd | rgauss c sd
                points x1 y1 x2 y2 ...
  term <var> <name> expr "<linguistic expression>"
  rule <name> IF <var> is <expr> (AND <var> is <expr>)* THEN <var> is <expr> (AND ...)*
        [executor <name>] [combine <name>]
  executor <mamdani|larsen|tsukamoto>
  combine <minimum|product|compensatory_and>
  similarity <possibility|area>
  contribution <union|sum>
  defuzz <moment|center|maximum|weighted>
  confine <on|off>
  threshold <0..1>
  input_width <w>            # crisp inputs become triangles of half-width w

Notes:
- Keywords are case-insensitive; term names are stored in lowercase.
- Multi-word expressions must be quoted: temp is "very hot".
- Rules are validated AFTER the whole file is read.
"""

from __future__ import annotations
import logging
import shlex
from typing import List, Tuple

from ...observability import log_event
from ..core import mfs
from ..core.executors import resolve_executor
from ..core.fuzzyset import FuzzySet
from ..core.norms import resolve_combine, resolve_contribution
from ..core.similarity import resolve_similarity
from ..model.knowledge import DEFUZZ_METHODS, KnowledgeBase
from ..model.rule import FuzzyRule
from ..model.value import FuzzyValue
from ..model.variable import FuzzyVariable

logger = logging.getLogger(__name__)


class FZParseError(Exception):
    def __init__(self, msg: str, line: int, content: str):
        self.line = line
        self.content = content
        super().__init__(f"[.fz:{line}] {msg}\n  >> {content}")


# liczba parametrów kształtów
_ARITY = {
    "singleton": 1, "tri": 3, "trap": 4, "rect": 2, "left": 2, "right": 2,
    "s": 2, "z": 2, "pi": 2, "gauss": 2, "lgauss": 2, "rgauss": 2,
}
_RULE_OPTIONS = ("executor", "combine")


def _lex_line(raw: str) -> List[str]:
    """Tokenize one line: '#' comments and quotes are supported."""
    lx = shlex.shlex(raw, posix=True)
    lx.whitespace_split = True
    lx.commenters = "#"
    return list(lx)


def _on_off(tok: str) -> bool:
    t = tok.lower()
    if t in ("on", "true", "yes", "1"):
        return True
    if t in ("off", "false", "no", "0"):
        return False
    raise ValueError(f"expected on/off, got '{tok}'")


def _shape(shape: str, args: List[str]) -> FuzzySet:
    if shape == "points":
        if len(args) < 2 or len(args) % 2:
            raise ValueError("points: expected pairs 'x y'")
        vals = [float(a) for a in args]
        return FuzzySet(zip(vals[0::2], vals[1::2]))
    if shape not in _ARITY:
        raise ValueError(f"unknown shape: {shape}")
    if len(args) != _ARITY[shape]:
        raise ValueError(f"{shape}: expected {_ARITY[shape]} parameters, got {len(args)}")
    return mfs.SHAPES[shape](*map(float, args))


def _clauses(words: List[str], part: str) -> List[Tuple[str, str]]:
    """'<var> is <expr> (AND <var> is <expr>)*' -> [(var, expr), ...]"""
    out: List[Tuple[str, str]] = []
    i = 0
    while i < len(words):
        if i + 2 >= len(words) or words[i + 1].lower() != "is":
            raise ValueError(f"{part}: expected '<var> is <expr>'")
        out.append((words[i], words[i + 2]))
        i += 3
        if i < len(words):
            if words[i].lower() != "and":
                raise ValueError(f"{part}: expected 'AND' or end of clause, got '{words[i]}'")
            i += 1
    if not out:
        raise ValueError(f"{part}: empty")
    return out


def parse_fz(path: str) -> KnowledgeBase:
    with open(path, "r", encoding="utf-8") as f:
        src = f.read()
    kb = parse_fz_string(src)
    log_event(logger, "knowledge_base_loaded", path=path, variables=len(kb.variables), rules=len(kb.rules))
    return kb


def parse_fz_string(source: str) -> KnowledgeBase:
    kb = KnowledgeBase()
    lines = source.splitlines()
    pending_rules = []

    for lineno, raw in enumerate(lines, 1):
        try:
            tokens = _lex_line(raw)
            if not tokens:
                continue
            head = tokens[0].lower()

            if head == "var":
                if len(tokens) < 4:
                    raise FZParseError("var: expected 'var <name> <min> <max> [units]'", lineno, raw)
                name = tokens[1]
                if name in kb.variables:
                    raise FZParseError(f"duplicate variable: {name}", lineno, raw)
                units = " ".join(tokens[4:])
                kb.add_variable(FuzzyVariable(name, float(tokens[2]), float(tokens[3]), units))

            elif head == "term":
                if len(tokens) < 5:
                    raise FZParseError("term: expected 'term <var> <name> <shape> <params...>'", lineno, raw)
                var = kb.variables.get(tokens[1])
                if var is None:
                    raise FZParseError(f"term for unknown variable: {tokens[1]}", lineno, raw)
                shape = tokens[3].lower()
                if shape == "expr":
                    var.add_term(tokens[2], " ".join(tokens[4:]))
                else:
                    var.add_term(tokens[2], _shape(shape, tokens[4:]))

            elif head == "rule":
                if len(tokens) < 2:
                    raise FZParseError("rule: missing name", lineno, raw)
                name, words = tokens[1], tokens[2:]
                if not words or words[0].lower() != "if":
                    raise FZParseError("rule must start with IF", lineno, raw)
                try:
                    then_idx = next(i for i, t in enumerate(words) if t.lower() == "then")
                except StopIteration:
                    raise FZParseError("rule missing THEN", lineno, raw) from None
                cons = words[then_idx + 1:]
                options = {}
                while len(cons) >= 2 and cons[-2].lower() in _RULE_OPTIONS:
                    options[cons[-2].lower()] = cons[-1]
                    cons = cons[:-2]
                ante = _clauses(words[1:then_idx], "antecedent") if then_idx > 1 else []
                pending_rules.append((lineno, raw, name, ante, _clauses(cons, "conclusion"), options))

            elif head == "executor":
                kb.executor = resolve_executor(tokens[1]).value
            elif head == "combine":
                kb.combine_operator = resolve_combine(tokens[1]).value
            elif head == "similarity":
                kb.similarity_operator = resolve_similarity(tokens[1]).value
            elif head == "contribution":
                kb.global_contribution = resolve_contribution(tokens[1]).value
            elif head == "defuzz":
                method = tokens[1].lower()
                if method not in DEFUZZ_METHODS:
                    raise FZParseError(f"supported defuzz: {' | '.join(DEFUZZ_METHODS)}", lineno, raw)
                kb.defuzz = method
            elif head == "confine":
                kb.confine_to_uod = _on_off(tokens[1])
            elif head == "threshold":
                t = float(tokens[1])
                if not 0.0 <= t <= 1.0:
                    raise FZParseError("threshold must be within [0, 1]", lineno, raw)
                kb.match_threshold = t
            elif head == "input_width":
                kb.input_width = float(tokens[1])
            else:
                raise FZParseError(f"unknown directive: {tokens[0]}", lineno, raw)

        except FZParseError:
            raise
        except Exception as e:
            # każdy błąd z kontekstem linii
            raise FZParseError(str(e), lineno, raw) from e

    cfg = kb.config()
    names = set()
    for rlineno, rraw, name, ante, cons, options in pending_rules:
        try:
            if name in names:
                raise FZParseError(f"duplicate rule name: {name}", rlineno, rraw)
            names.add(name)
            rule = FuzzyRule(executor=options.get("executor"), combine_operator=options.get("combine"), name=name)
            for part, clauses in (("antecedent", ante), ("conclusion", cons)):
                for vname, expr in clauses:
                    var = kb.variables.get(vname)
                    if var is None:
                        raise FZParseError(f"rule: unknown variable '{vname}'", rlineno, rraw)
                    fv = FuzzyValue.from_expression(var, expr, config=cfg)
                    if part == "antecedent":
                        rule.add_antecedent(fv)
                    else:
                        rule.add_conclusion(fv)
        except FZParseError:
            raise
        except Exception as e:
            raise FZParseError(str(e), rlineno, rraw) from e
        kb.add_rule(rule)

    return kb
