"""Integer literal parsing (decimal, octal, hex)."""
from __future__ import annotations
from lark import Token
from bitcalc.semantics.ast import IntLit
from bitcalc.semantics.ast_builder.exceptions import LiteralOverflowError
from bitcalc.internals.report import span_of

# Literals are parsed into an unsigned intermediate of this many bits before
# the evaluator wraps them to the selected type.
WIDE_BITS = 128
WIDE_LIMIT = 1 << WIDE_BITS

_PREFIXES = {
    "HEX_INT": ("0x", 16),
    "OCT_INT": ("0o", 8),
    "INT": ("", 10),
}

LITERAL_TOKENS = tuple(_PREFIXES)


def parse_int_literal(tok: Token) -> IntLit:
    """Map an INT, OCT_INT or HEX_INT token to an IntLit.

    Raises LiteralOverflowError if the value needs more than WIDE_BITS bits.
    """
    try:
        prefix, radix = _PREFIXES[tok.type]
    except KeyError:
        raise NotImplementedError(f"unexpected token in atom: {tok.type}") from None

    text = str(tok.value)
    digits = text[len(prefix):]
    # Any radix is at least 2, so more than WIDE_BITS significant digits
    # cannot fit; this also keeps int() away from huge digit strings.
    if len(digits.lstrip("0")) > WIDE_BITS:
        raise LiteralOverflowError(text, span=span_of(tok))

    value = int(digits, radix)
    if value >= WIDE_LIMIT:
        raise LiteralOverflowError(text, span=span_of(tok))

    return IntLit(value=value, radix=radix, text=text, loc=span_of(tok))
