"""
AST Builder module for bitcalc.

Exports:
    ASTBuilder: Main class for building the expression AST from Lark parse trees
    Exceptions: Error types raised while parsing and evaluating
"""
# Main ASTBuilder class
from bitcalc.semantics.ast_builder.builder import ASTBuilder

# Exception classes
from bitcalc.semantics.ast_builder.exceptions import (
    CalcError,
    ExprSyntaxError,
    LiteralOverflowError,
    DivideByZeroError,
    ExpressionTooDeepError,
)

__all__ = [
    'ASTBuilder',
    'CalcError',
    'ExprSyntaxError',
    'LiteralOverflowError',
    'DivideByZeroError',
    'ExpressionTooDeepError',
]
