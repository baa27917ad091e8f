# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Dict, Literal, Optional, Type, Union

from lark import Token

from bitcalc.internals.report import Span

# === Core node base ===

@dataclass
class Node:
    loc: Optional[Span]

# === Expressions ===

Radix = Literal[10, 8, 16]

@dataclass
class IntLit(Node):
    value: int          # Non-negative, below 2**128; wrapped at evaluation time
    radix: Radix = 10
    text: str = ""      # Literal as written, e.g. "0xff"

@dataclass
class Neg(Node):
    expr: "Expr"

@dataclass
class Bitnot(Node):
    expr: "Expr"

@dataclass
class BinaryOp(Node):
    left: "Expr"
    right: "Expr"

    symbol: ClassVar[str] = "?"

@dataclass
class Mul(BinaryOp):
    symbol: ClassVar[str] = "*"

@dataclass
class Div(BinaryOp):
    symbol: ClassVar[str] = "/"

@dataclass
class Rem(BinaryOp):
    symbol: ClassVar[str] = "%"

@dataclass
class Add(BinaryOp):
    symbol: ClassVar[str] = "+"

@dataclass
class Sub(BinaryOp):
    symbol: ClassVar[str] = "-"

@dataclass
class Shl(BinaryOp):
    symbol: ClassVar[str] = "<<"

@dataclass
class Shr(BinaryOp):
    symbol: ClassVar[str] = ">>"

@dataclass
class And(BinaryOp):
    symbol: ClassVar[str] = "&"

@dataclass
class Xor(BinaryOp):
    symbol: ClassVar[str] = "^"

@dataclass
class Or(BinaryOp):
    symbol: ClassVar[str] = "|"


Expr = Union[IntLit, Neg, Bitnot, Mul, Div, Rem, Add, Sub, Shl, Shr, And, Xor, Or]

BINARY_NODES: Dict[str, Type[BinaryOp]] = {
    cls.symbol: cls for cls in (Mul, Div, Rem, Add, Sub, Shl, Shr, And, Xor, Or)
}


def binary_node_for(op_tok_or_str: Token | str) -> Type[BinaryOp]:
    """
    Accepts either a Token (from the parser) or a str (already a lexeme).
    Returns the BinaryOp subclass for that operator.
    Raises if unknown (fail-fast so we don't build an invalid AST).
    """
    # Token types as named in grammar.lark
    type_map = {
        "STAR": "*", "SLASH": "/", "MOD": "%",
        "PLUS": "+", "MINUS": "-",
        "LSHIFT": "<<", "RSHIFT": ">>",
        "BIT_AND": "&", "BIT_XOR": "^", "BIT_OR": "|",
    }

    key = getattr(op_tok_or_str, "type", None)
    symbol = type_map.get(key) if key is not None else None
    if symbol is None:
        symbol = getattr(op_tok_or_str, "value", op_tok_or_str)

    try:
        return BINARY_NODES[symbol]
    except KeyError:
        raise NotImplementedError(f"unknown binary operator: {op_tok_or_str!r}") from None


__all__ = [
    "Node", "Expr", "IntLit", "Radix", "Neg", "Bitnot", "BinaryOp",
    "Mul", "Div", "Rem", "Add", "Sub", "Shl", "Shr", "And", "Xor", "Or",
    "BINARY_NODES", "binary_node_for",
]
