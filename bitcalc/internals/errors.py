# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from bitcalc.internals.report import Span, Reporter


class Category(str, Enum):
    SYNTAX    = "syntax"
    LITERAL   = "literal"
    RUNTIME   = "runtime"
    CONFIG    = "config"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    text: str
    category: Category
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    r.error(em.code, _fmt(em.code, **kwargs), span)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal calculator errors.

    Internal errors (CE0xxx codes) indicate bugs in bitcalc itself, not
    problems with the user's expression.

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors (calculator bugs) - CE0xxx range
_add(ErrorMessage("CE0001",
    "unknown expression node '{node}'",
    Category.INTERNAL, "The evaluator met an AST node it has no rule for."))

# Syntax errors - CE2xxx range
_add(ErrorMessage("CE2001",
    "unexpected token '{token}'",
    Category.SYNTAX, "The parser found a token that cannot continue the expression."))

_add(ErrorMessage("CE2002",
    "unexpected end of input",
    Category.SYNTAX, "The expression stopped before it was complete (empty input, dangling operator or unclosed parenthesis)."))

_add(ErrorMessage("CE2003",
    "unexpected character '{token}'",
    Category.SYNTAX, "The character does not start any literal, operator or parenthesis."))

_add(ErrorMessage("CE2004",
    "integer literal '{literal}' is too large (limit is {bits} bits)",
    Category.LITERAL, "Literals are parsed into a 128-bit intermediate before being wrapped to the selected type."))

_add(ErrorMessage("CE2005",
    "expression is nested too deeply",
    Category.SYNTAX, "The parse tree is too deep to be rendered by --dump-parse."))

# Evaluation errors - CE3xxx range
_add(ErrorMessage("CE3001",
    "division by zero",
    Category.RUNTIME, "The right operand of '/' evaluated to zero."))

_add(ErrorMessage("CE3002",
    "remainder by zero",
    Category.RUNTIME, "The right operand of '%' evaluated to zero."))

# Configuration errors - CE4xxx range
_add(ErrorMessage("CE4001",
    "unknown numeric type '{name}' (expected one of: {choices})",
    Category.CONFIG, "Select one of u8, u16, u32, u64, i8, i16, i32, i64."))
