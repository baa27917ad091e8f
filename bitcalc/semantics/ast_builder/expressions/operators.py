"""Operator expression lowering (unary and binary chains)."""
from __future__ import annotations
from typing import Any, List
from lark import Tree, Token
from bitcalc.semantics.ast import Expr, Neg, Bitnot, binary_node_for
from bitcalc.semantics.ast_builder.expressions.literals import LITERAL_TOKENS
from bitcalc.internals.report import Span, span_of


def is_operator(c: Any) -> bool:
    """True for operator tokens inside a chain (literal tokens are operands)."""
    return isinstance(c, Token) and c.type not in LITERAL_TOKENS


def expr_unary(t: Tree, operand: Expr) -> Expr:
    """Handle unary operators: neg and bitnot (both '!' and '~')."""
    if t.data == "neg":
        return Neg(expr=operand, loc=span_of(t))

    if t.data == "bitnot":
        return Bitnot(expr=operand, loc=span_of(t))

    raise NotImplementedError(f"unexpected unary node: {t.data}")


def bin_chain(t: Tree, operands: List[Expr]) -> Expr:
    """Lower binary operator chains left-associatively.

    `operands` are the already-built operands of `t`, in source order.
    """
    ops = [c for c in t.children if is_operator(c)]
    if not operands or len(ops) != len(operands) - 1:
        raise NotImplementedError("malformed binary chain")

    lhs = operands[0]
    for op, rhs in zip(ops, operands[1:]):
        node_cls = binary_node_for(op)
        # Span covers everything from the chain start to this operand.
        lhs = node_cls(left=lhs, right=rhs, loc=_join(lhs.loc, rhs.loc))

    return lhs


def _join(left: Span | None, right: Span | None) -> Span | None:
    if left is None or right is None:
        return left or right
    return Span(left.line, left.col, right.end_line, right.end_col)
