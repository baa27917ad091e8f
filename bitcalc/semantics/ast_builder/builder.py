"""ASTBuilder: turns the Lark parse tree of an expression into AST nodes.

The grammar inlines single-child rules (`?rule`), so the builder sees only
three shapes:

- a bare literal Token (INT, OCT_INT, HEX_INT)
- a `neg` / `bitnot` tree for prefix operators
- a precedence-level tree (`product`, `sum`, ...) holding an operand/operator
  chain that is lowered left-associatively

Trees are walked with an explicit stack, so nesting depth is bounded by
memory rather than by the interpreter's recursion limit.
"""
from __future__ import annotations
from typing import List, Tuple, Union

from lark import Tree, Token

from bitcalc.semantics.ast import Expr
from bitcalc.semantics.ast_builder.expressions import (
    parse_int_literal, expr_unary, bin_chain, is_operator,
)

_UNARY_NODES = {"neg", "bitnot"}
_CHAIN_NODES = {"bit_or", "bit_xor", "bit_and", "shift", "sum", "product"}
_PASSTHROUGH_NODES = {"start", "expr", "atom"}

ParseNode = Union[Tree, Token]


def _operands(node: Tree) -> List[ParseNode]:
    """Child parse nodes that lower to sub-expressions, left to right."""
    tag = node.data
    if tag in _UNARY_NODES:
        return [node.children[-1]]
    if tag in _CHAIN_NODES:
        return [c for c in node.children if not is_operator(c)]
    if tag in _PASSTHROUGH_NODES and len(node.children) == 1:
        return list(node.children)

    raise NotImplementedError(f"unexpected parse tree node: {tag}")


class ASTBuilder:
    """Build a typed AST from a Lark tree."""

    def build(self, tree: ParseNode) -> Expr:
        return self._expr(tree)

    def _expr(self, root: ParseNode) -> Expr:
        # Post-order walk: a tree is lowered once all of its operands are.
        built: List[Expr] = []
        work: List[Tuple[ParseNode, bool]] = [(root, False)]

        while work:
            node, expanded = work.pop()

            if isinstance(node, Token):
                built.append(parse_int_literal(node))
                continue

            operands = _operands(node)
            if not expanded:
                work.append((node, True))
                work.extend((child, False) for child in reversed(operands))
                continue

            args = built[len(built) - len(operands):]
            del built[len(built) - len(operands):]
            built.append(self._lower(node, args))

        return built.pop()

    def _lower(self, node: Tree, args: List[Expr]) -> Expr:
        tag = node.data
        if tag in _UNARY_NODES:
            return expr_unary(node, args[0])
        if tag in _CHAIN_NODES:
            return bin_chain(node, args)
        return args[0]
