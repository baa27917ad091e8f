# semantics/passes/evaluate.py
"""Fixed-width expression evaluator.

Reduces an expression AST to a single TypedValue under the semantics of one
NumericType, emulating machine integers rather than Python's unbounded ints.

Design:
- Stateless evaluation apart from the selected type
- Every literal and every operator result passes through `wrap`
- Operands never widen beyond the selected width

Semantics:
- Literals: reduced modulo 2**width
- Arithmetic: +, -, *, unary - (two's-complement wraparound)
- Bitwise: &, |, ^, ~ / ! (all `width` bits)
- Shifts: <<, >> with the amount masked to width-1; >> is logical for
  unsigned types and arithmetic for signed types
- Division: /, % truncate toward zero for signed types, the remainder takes
  the sign of the dividend; MIN / -1 wraps to MIN

Failures:
- DivideByZeroError for '/' or '%' with a zero divisor
"""
from __future__ import annotations

from typing import List, Tuple

from bitcalc.internals import errors as er
from bitcalc.semantics.ast import (
    Expr, IntLit, Neg, Bitnot, BinaryOp,
    Mul, Div, Rem, Add, Sub, Shl, Shr, And, Xor, Or,
)
from bitcalc.semantics.ast_builder.exceptions import DivideByZeroError
from bitcalc.semantics.typesys import NumericType, TypedValue, wrap, to_signed_display


class ExpressionEvaluator:
    """Evaluates expressions in a single fixed-width integer type."""

    def __init__(self, numeric_type: NumericType):
        self.numeric_type = numeric_type

    def evaluate(self, expr: Expr) -> TypedValue:
        """Evaluate an expression to a value of the selected type.

        The tree is walked with an explicit stack, so arbitrarily long chains
        and deep unary runs do not hit the recursion limit.

        Raises:
            DivideByZeroError: division or remainder by zero
        """
        ty = self.numeric_type
        values: List[TypedValue] = []
        work: List[Tuple[Expr, bool]] = [(expr, False)]

        while work:
            node, ready = work.pop()

            if isinstance(node, IntLit):
                values.append(wrap(node.value, ty))

            elif isinstance(node, (Neg, Bitnot)):
                if ready:
                    values.append(self._evaluate_unary_op(node, values.pop()))
                else:
                    work.append((node, True))
                    work.append((node.expr, False))

            elif isinstance(node, BinaryOp):
                if ready:
                    right = values.pop()
                    left = values.pop()
                    values.append(self._evaluate_binary_op(node, left, right))
                else:
                    # Left operand is evaluated first, so it is pushed last.
                    work.append((node, True))
                    work.append((node.right, False))
                    work.append((node.left, False))

            else:
                er.raise_internal_error("CE0001", node=type(node).__name__)

        return values.pop()

    def _evaluate_unary_op(self, expr: Expr, operand: TypedValue) -> TypedValue:
        ty = self.numeric_type
        if isinstance(expr, Neg):
            return wrap(ty.modulus - operand.raw, ty)
        return wrap(operand.raw ^ ty.mask, ty)

    def _evaluate_binary_op(self, expr: BinaryOp, left: TypedValue, right: TypedValue) -> TypedValue:
        ty = self.numeric_type
        a, b = left.raw, right.raw

        # Modular arithmetic
        if isinstance(expr, Add):
            return wrap(a + b, ty)
        elif isinstance(expr, Sub):
            return wrap(a - b, ty)
        elif isinstance(expr, Mul):
            return wrap(a * b, ty)

        # Division and remainder
        elif isinstance(expr, (Div, Rem)):
            if b == 0:
                raise DivideByZeroError(expr.symbol, span=expr.loc)
            return self._eval_division(expr, left, right)

        # Shifts
        elif isinstance(expr, Shl):
            return wrap(a << (b & ty.shift_mask), ty)
        elif isinstance(expr, Shr):
            return self._eval_shift_right(left, b & ty.shift_mask)

        # Bitwise operations
        elif isinstance(expr, And):
            return wrap(a & b, ty)
        elif isinstance(expr, Xor):
            return wrap(a ^ b, ty)
        elif isinstance(expr, Or):
            return wrap(a | b, ty)

        er.raise_internal_error("CE0001", node=type(expr).__name__)

    def _eval_division(self, expr: BinaryOp, left: TypedValue, right: TypedValue) -> TypedValue:
        """Unsigned or truncating signed division/remainder (divisor is non-zero)."""
        ty = self.numeric_type
        if not ty.signed:
            result = left.raw // right.raw if isinstance(expr, Div) else left.raw % right.raw
            return wrap(result, ty)

        a = to_signed_display(left)
        b = to_signed_display(right)
        # Round toward zero, unlike Python's floor division.
        quotient = abs(a) // abs(b)
        if (a < 0) != (b < 0):
            quotient = -quotient

        if isinstance(expr, Div):
            # MIN / -1 yields 2**(width-1) here, which wraps back to MIN.
            return wrap(quotient, ty)
        return wrap(a - quotient * b, ty)

    def _eval_shift_right(self, value: TypedValue, amount: int) -> TypedValue:
        """Logical shift for unsigned types, sign-extending for signed types."""
        if self.numeric_type.signed:
            return wrap(to_signed_display(value) >> amount, self.numeric_type)
        return wrap(value.raw >> amount, self.numeric_type)


def evaluate(expr: Expr, numeric_type: NumericType) -> TypedValue:
    """Evaluate `expr` under `numeric_type`."""
    return ExpressionEvaluator(numeric_type).evaluate(expr)
