"""Exceptions raised while parsing or evaluating an expression.

Every failure a user can trigger is a CalcError; the pipeline turns them
into coded diagnostics (see internals/parse_errors.py).
"""
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from bitcalc.internals.report import Span


class CalcError(Exception):
    """Base class for errors in a single parse/evaluate cycle."""
    def __init__(self, message: str, span: Optional['Span'] = None):
        super().__init__(message)
        self.span = span


class ExprSyntaxError(CalcError):
    """Exception raised when the input does not match the expression grammar."""
    END_OF_INPUT = "<end of input>"

    def __init__(self, message: str, token: str, span: Optional['Span'] = None,
                 kind: str = "token"):
        super().__init__(message, span)
        self.token = token
        self.kind = kind    # "token", "character" or "end"

    @property
    def at_end(self) -> bool:
        return self.kind == "end"


class LiteralOverflowError(CalcError):
    """Exception raised when a literal does not fit the 128-bit intermediate."""
    def __init__(self, literal: str, span: Optional['Span'] = None):
        message = f"Integer literal '{literal}' is too large."
        super().__init__(message, span)
        self.literal = literal


class DivideByZeroError(CalcError):
    """Exception raised when '/' or '%' has a zero divisor."""
    def __init__(self, operator: str, span: Optional['Span'] = None):
        what = "remainder" if operator == "%" else "division"
        super().__init__(f"{what.capitalize()} by zero.", span)
        self.operator = operator


class ExpressionTooDeepError(CalcError):
    """Exception raised when an expression is nested deeper than can be rendered."""
    def __init__(self, span: Optional['Span'] = None):
        super().__init__("Expression is nested too deeply.", span)
