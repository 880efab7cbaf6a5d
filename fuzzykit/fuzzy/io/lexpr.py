"""
Linguistic expressions over the terms of one variable.

Grammar (case-insensitive):
  expr  := conj ("or" conj)*
  conj  := unary ("and" unary)*
  unary := MODIFIER unary | TERM | "(" expr ")"

"not" is an ordinary modifier. A name is looked up among the variable's
terms first, then among the registered modifiers.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from ..core import modifiers
from ..core.fuzzyset import FuzzySet
from ..core.types import LinguisticExpressionError, UnknownTermError


@dataclass(frozen=True)
class Token:
    kind: str      # "(" | ")" | "and" | "or" | "name" | "end"
    text: str
    pos: int


def tokenize(text: str) -> List[Token]:
    toks: List[Token] = []
    i, n = 0, len(text)
    while i < n:
        c = text[i]
        if c.isspace():
            i += 1
            continue
        if c in "()":
            toks.append(Token(c, c, i))
            i += 1
            continue
        j = i
        while j < n and not text[j].isspace() and text[j] not in "()":
            j += 1
        word = text[i:j].lower()
        toks.append(Token(word if word in ("and", "or") else "name", word, i))
        i = j
    toks.append(Token("end", "", n))
    return toks


# ---------- AST ----------

@dataclass(frozen=True)
class TermRef:
    name: str


@dataclass(frozen=True)
class ModifierCall:
    name: str
    operand: "Node"


@dataclass(frozen=True)
class And:
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Or:
    left: "Node"
    right: "Node"


Node = Union[TermRef, ModifierCall, And, Or]


class _Parser:
    def __init__(self, text: str, is_term: Callable[[str], bool]):
        self.toks = tokenize(text)
        self.i = 0
        self.is_term = is_term

    def peek(self) -> Token:
        return self.toks[self.i]

    def take(self) -> Token:
        tok = self.toks[self.i]
        self.i += 1
        return tok

    def parse(self) -> Node:
        if self.peek().kind == "end":
            raise LinguisticExpressionError("empty linguistic expression")
        node = self.expr()
        tok = self.peek()
        if tok.kind != "end":
            raise LinguisticExpressionError("unexpected token", tok.text, tok.pos)
        return node

    def expr(self) -> Node:
        node = self.conj()
        while self.peek().kind == "or":
            self.take()
            node = Or(node, self.conj())
        return node

    def conj(self) -> Node:
        node = self.unary()
        while self.peek().kind == "and":
            self.take()
            node = And(node, self.unary())
        return node

    def unary(self) -> Node:
        tok = self.take()
        if tok.kind == "(":
            node = self.expr()
            close = self.take()
            if close.kind != ")":
                raise LinguisticExpressionError("expected ')'", close.text or "<end>", close.pos)
            return node
        if tok.kind == "name":
            if self.is_term(tok.text):
                return TermRef(tok.text)
            if modifiers.is_modifier(tok.text):
                return ModifierCall(tok.text, self.unary())
            raise UnknownTermError("unknown term or modifier", tok.text, tok.pos)
        raise LinguisticExpressionError("unexpected token", tok.text or "<end>", tok.pos)


def parse(text: str, is_term: Callable[[str], bool]) -> Node:
    return _Parser(text, is_term).parse()


def evaluate(node: Node, lookup: Callable[[str], Optional[FuzzySet]]) -> FuzzySet:
    """Fold the tree into set algebra; lookup maps a term name to its set."""
    if isinstance(node, TermRef):
        fs = lookup(node.name)
        if fs is None:
            raise UnknownTermError("unknown term", node.name)
        return fs
    if isinstance(node, ModifierCall):
        return modifiers.apply_modifier(node.name, evaluate(node.operand, lookup))
    if isinstance(node, And):
        return evaluate(node.left, lookup).intersection(evaluate(node.right, lookup))
    return evaluate(node.left, lookup).union(evaluate(node.right, lookup))


def to_text(node: Node) -> str:
    if isinstance(node, TermRef):
        return node.name
    if isinstance(node, ModifierCall):
        return f"{node.name} {to_text(node.operand)}"
    op = "and" if isinstance(node, And) else "or"
    return f"({to_text(node.left)} {op} {to_text(node.right)})"
