from __future__ import annotations
from enum import Enum
from dataclasses import dataclass


class NumericType(Enum):
    """Fixed-width integer type an expression is evaluated in."""
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> "NumericType":
        """Map a type name such as 'u8' or 'I64' to its member."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"unknown numeric type: {name!r}") from None

    @property
    def signed(self) -> bool:
        return self.value[0] == "i"

    @property
    def width(self) -> int:
        return int(self.value[1:])

    @property
    def modulus(self) -> int:
        return 1 << self.width

    @property
    def mask(self) -> int:
        return self.modulus - 1

    @property
    def shift_mask(self) -> int:
        # All widths are powers of two, so masking by width-1 is mod width.
        return self.width - 1

    @property
    def sign_bit(self) -> int:
        return 1 << (self.width - 1)

    @property
    def min(self) -> int:
        return -self.sign_bit if self.signed else 0

    @property
    def max(self) -> int:
        return self.sign_bit - 1 if self.signed else self.mask


@dataclass(frozen=True)
class TypedValue:
    """Result of one evaluation: a canonical bit pattern and its type.

    `raw` is always the unsigned pattern reduced modulo 2**width; signedness
    only matters when the value is viewed as a number.
    """
    raw: int
    type: NumericType

    def __post_init__(self) -> None:
        if not 0 <= self.raw <= self.type.mask:
            raise ValueError(f"raw pattern {self.raw:#x} does not fit in {self.type}")

    @property
    def signed_value(self) -> int:
        return to_signed_display(self)


def wrap(raw: int, ty: NumericType) -> TypedValue:
    """Reduce any integer to the canonical pattern of `ty` (mod 2**width)."""
    return TypedValue(raw & ty.mask, ty)


def to_signed_display(value: TypedValue) -> int:
    """Two's-complement view of a signed value; identity for unsigned types."""
    ty = value.type
    if ty.signed and value.raw & ty.sign_bit:
        return value.raw - ty.modulus
    return value.raw


__all__ = ["NumericType", "TypedValue", "wrap", "to_signed_display"]
