"""Rendering of evaluation results in decimal, hex, octal and binary."""
from __future__ import annotations

from enum import Enum
from typing import List

from bitcalc.semantics.typesys import TypedValue


class OutputBase(Enum):
    DEC = "dec"
    HEX = "hex"
    OCT = "oct"
    BIN = "bin"
    ALL = "all"

    def __str__(self) -> str:
        return self.value


def format_dec(value: TypedValue) -> str:
    return str(value.signed_value)


def format_hex(value: TypedValue) -> str:
    digits = value.type.width // 4
    return f"0x{value.raw:0{digits}x}"


def format_oct(value: TypedValue) -> str:
    return f"0o{value.raw:o}"


def format_bin(value: TypedValue) -> str:
    width = value.type.width
    bits = f"{value.raw:0{width}b}"
    return "0b" + "_".join(bits[i:i + 4] for i in range(0, width, 4))


_FORMATTERS = {
    OutputBase.DEC: format_dec,
    OutputBase.HEX: format_hex,
    OutputBase.OCT: format_oct,
    OutputBase.BIN: format_bin,
}


def format_value(value: TypedValue, base: OutputBase = OutputBase.ALL) -> str:
    """Render `value` in one base, or as an aligned table of all four.

    Hex, octal and binary always show the raw bit pattern; decimal honors the
    signedness of the value's type.
    """
    if base is not OutputBase.ALL:
        return _FORMATTERS[base](value)

    rows: List[tuple[str, str]] = [(str(b), fmt(value)) for b, fmt in _FORMATTERS.items()]
    label_w = max(len(label) for label, _ in rows)
    value_w = max(len(text) for _, text in rows)
    return "\n".join(f"{label:<{label_w}}  {text:>{value_w}}" for label, text in rows)
