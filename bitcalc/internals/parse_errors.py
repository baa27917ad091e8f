"""Shared exception handling for the one-shot CLI and the REPL."""
from __future__ import annotations

from bitcalc.internals import errors as er
from bitcalc.internals.report import Reporter
from bitcalc.semantics.ast_builder import (
    ExprSyntaxError,
    LiteralOverflowError,
    DivideByZeroError,
    ExpressionTooDeepError,
)
from bitcalc.semantics.ast_builder.expressions import WIDE_BITS


def handle_calc_exception(exc: Exception, reporter: Reporter) -> bool:
    """Handle a parse or evaluation exception by emitting a diagnostic.

    Args:
        exc: The exception to handle.
        reporter: Reporter collecting the diagnostic.

    Returns:
        True if the exception was handled, False otherwise.
    """
    if isinstance(exc, ExprSyntaxError):
        if exc.at_end:
            er.emit(reporter, er.ERR.CE2002, exc.span)
        elif exc.kind == "character":
            er.emit(reporter, er.ERR.CE2003, exc.span, token=exc.token)
        else:
            er.emit(reporter, er.ERR.CE2001, exc.span, token=exc.token)
        return True

    if isinstance(exc, LiteralOverflowError):
        er.emit(reporter, er.ERR.CE2004, exc.span, literal=exc.literal, bits=WIDE_BITS)
        return True

    if isinstance(exc, DivideByZeroError):
        code = er.ERR.CE3002 if exc.operator == "%" else er.ERR.CE3001
        er.emit(reporter, code, exc.span)
        return True

    if isinstance(exc, ExpressionTooDeepError):
        er.emit(reporter, er.ERR.CE2005, exc.span)
        return True

    return False
