"""Tests for fixed-width evaluation semantics."""
import pytest

from bitcalc.internals.parser import parse_to_ast
from bitcalc.semantics.ast import IntLit, Neg, Add, Div, Rem
from bitcalc.semantics.ast_builder import DivideByZeroError
from bitcalc.semantics.passes.evaluate import ExpressionEvaluator, evaluate
from bitcalc.semantics.typesys import NumericType

ALL_TYPES = list(NumericType)
SIGNED_TYPES = [t for t in NumericType if t.signed]
UNSIGNED_TYPES = [t for t in NumericType if not t.signed]


def ev(src, ty):
    """Evaluate `src` and return the value as the type displays it."""
    return evaluate(parse_to_ast(src), ty).signed_value


def raw(src, ty):
    return evaluate(parse_to_ast(src), ty).raw


class TestSimple:

    @pytest.mark.parametrize("ty", ALL_TYPES)
    @pytest.mark.parametrize("src, expected", [
        ("1", 1),
        ("(1)", 1),
        ("(1 + 1)", 2),
        ("(1) + 1", 2),
        ("1 + (1)", 2),
        ("10 + 2 * 5", 20),
        ("(10 + 2) * 5", 60),
        ("10/3", 3),
        ("10 % 3", 1),
        ("2 & 1", 0),
        ("2 | 1", 3),
        ("3 ^ 1", 2),
        ("1 | 6 ^ 7 & 12", 3),
        ("(1 | 6) ^ 7 & 12", 3),
        ("1 | (6 ^ 7) & 12", 1),
        ("3 << 2", 12),
        ("12 >> 2", 3),
        ("1 + 2 * 3", 7),
        ("8 / 4 / 2", 1),
        ("(1 + 2) * 3", 9),
        ("~~5", 5),
        ("!!5", 5),
        ("--5", 5),
    ])
    def test_expression(self, ty, src, expected):
        assert ev(src, ty) == expected

    @pytest.mark.parametrize("ty", ALL_TYPES)
    def test_wraparound(self, ty):
        assert raw("0 - 1", ty) == ty.mask
        assert raw("-64 + 3", ty) == -61 & ty.mask
        assert raw(f"{ty.max} + 1", ty) == (ty.max + 1) & ty.mask

    @pytest.mark.parametrize("ty", ALL_TYPES)
    def test_unary_round_trip_any_pattern(self, ty):
        assert raw(f"~~{ty.mask}", ty) == ty.mask
        assert raw(f"--{ty.mask}", ty) == ty.mask
        assert raw("--0", ty) == 0


class TestLiterals:

    def test_radix_literals(self):
        assert ev("0xf", NumericType.U32) == 15
        assert ev("0o20", NumericType.U32) == 16
        assert ev("0xf ^ 0o20", NumericType.U32) == 31

    def test_spellings_agree(self):
        values = {raw(src, NumericType.U8) for src in ("255", "0xff", "0xFF", "0o377")}
        assert values == {255}

    def test_wide_literal_is_wrapped(self):
        assert raw("1000000000000", NumericType.U32) == 10 ** 12 % 2 ** 32
        assert raw("0x1000000000000", NumericType.U32) == 0
        assert raw(str(2 ** 128 - 1), NumericType.U64) == 2 ** 64 - 1

    def test_literal_at_own_width(self):
        assert ev("255", NumericType.I8) == -1
        assert ev("128", NumericType.I8) == -128
        assert ev("0xffff", NumericType.U16) == 0xFFFF


class TestArithmetic:

    def test_u8_multiplication_wraps(self):
        assert ev("255 * 2", NumericType.U8) == 254

    def test_signed_basics(self):
        for ty in SIGNED_TYPES:
            assert ev("-1", ty) == -1
            assert ev("8 - 15", ty) == -7
            assert ev("-3 * - 15", ty) == 45
            assert ev("-3 * 15", ty) == -45

    @pytest.mark.parametrize("ty", SIGNED_TYPES)
    def test_signed_overflow(self, ty):
        lo, hi = ty.min, ty.max
        assert ev(f"{lo} - 1", ty) == hi
        assert ev(f"{hi} + 1", ty) == lo
        assert ev(f"-1 * {lo}", ty) == lo

    def test_unsigned_negation(self):
        assert raw("-1", NumericType.U32) == 0xFFFF_FFFF
        assert raw("-5 + 6", NumericType.U32) == 1
        assert raw("-5 - 6", NumericType.U32) == -11 & 0xFFFF_FFFF
        assert raw("-5 + -6", NumericType.U32) == -11 & 0xFFFF_FFFF

    def test_negation_wraparound(self):
        assert ev("-0", NumericType.U8) == 0
        assert ev("-(-128)", NumericType.I8) == -128
        assert ev("--128", NumericType.I8) == -128
        assert ev("-128", NumericType.I8) == -128

    def test_bitnot(self):
        assert raw("!0", NumericType.U32) == 0xFFFF_FFFF
        assert raw("!1", NumericType.U32) == 0xFFFF_FFFE
        assert raw("~32", NumericType.U32) == 0xFFFF_FFDF
        assert raw("!(-32)", NumericType.U32) == 31
        assert ev("~0", NumericType.I16) == -1


class TestShifts:

    def test_shift_amount_is_masked(self):
        assert ev("2 << 3", NumericType.U8) == 16
        assert ev("2 << 11", NumericType.U8) == 16
        assert ev("1 << 8", NumericType.U8) == 1
        assert ev("1 << 64", NumericType.U64) == 1
        assert ev("256 >> 33", NumericType.U32) == 128

    def test_shift_out_of_width(self):
        assert ev("1 << 7", NumericType.U8) == 128
        assert ev("1 << 7", NumericType.I8) == -128
        assert ev("3 << 7", NumericType.U8) == 128

    def test_negative_shift_amount_is_masked(self):
        # -1 is all ones, masked to width-1
        assert ev("1 << -1", NumericType.I32) == -2 ** 31

    def test_logical_right_shift_unsigned(self):
        assert ev("-1 >> 1", NumericType.U32) == 0x7FFF_FFFF
        assert ev("0x80 >> 7", NumericType.U8) == 1

    @pytest.mark.parametrize("ty", SIGNED_TYPES)
    def test_arithmetic_right_shift_signed(self, ty):
        assert ev("23 >> 3", ty) == 2
        assert ev(f"{ty.min} >> 1", ty) == ty.min // 2
        assert ev("-1 >> 1", ty) == -1
        assert ev("-16 >> 2", ty) == -4


class TestDivision:

    def test_truncating_signed_division(self):
        ty = NumericType.I32
        assert ev("-7 / 2", ty) == -3
        assert ev("-7 % 2", ty) == -1
        assert ev("7 / -2", ty) == -3
        assert ev("7 % -2", ty) == 1
        assert ev("-7 / -2", ty) == 3
        assert ev("-7 % -2", ty) == -1

    def test_unsigned_division_uses_raw_pattern(self):
        assert ev("-7 / 2", NumericType.U32) == (2 ** 32 - 7) // 2
        assert ev("-7 % 2", NumericType.U32) == 1
        assert ev("255 / 2", NumericType.U8) == 127

    @pytest.mark.parametrize("ty", SIGNED_TYPES)
    def test_min_divided_by_minus_one_wraps(self, ty):
        assert ev(f"{ty.min} / -1", ty) == ty.min
        assert ev(f"{ty.min} % -1", ty) == 0

    def test_i8_min_by_minus_one(self):
        assert ev("-128 / -1", NumericType.I8) == -128

    @pytest.mark.parametrize("ty", ALL_TYPES)
    @pytest.mark.parametrize("src, op", [
        ("5 / 0", "/"),
        ("5 % 0", "%"),
        ("1 / (2 - 2)", "/"),
        ("7 % (256 * 0)", "%"),
    ])
    def test_divide_by_zero(self, ty, src, op):
        with pytest.raises(DivideByZeroError) as info:
            evaluate(parse_to_ast(src), ty)
        assert info.value.operator == op

    def test_divisor_zero_only_after_wrapping(self):
        # 256 wraps to 0 at u8 but not at u16
        with pytest.raises(DivideByZeroError):
            evaluate(parse_to_ast("5 / 256"), NumericType.U8)
        assert ev("512 / 256", NumericType.U16) == 2

    def test_error_span_points_at_division(self):
        with pytest.raises(DivideByZeroError) as info:
            evaluate(parse_to_ast("1 + 4 / 0"), NumericType.I32)
        assert (info.value.span.col, info.value.span.end_col) == (5, 10)

    def test_error_aborts_whole_expression(self):
        evaluator = ExpressionEvaluator(NumericType.U8)
        with pytest.raises(DivideByZeroError):
            evaluator.evaluate(parse_to_ast("(1 % 0) + 2"))


class TestEvaluatorApi:

    def test_result_carries_type(self):
        value = evaluate(parse_to_ast("1"), NumericType.I16)
        assert value.type is NumericType.I16

    def test_hand_built_tree(self):
        tree = Rem(
            left=Div(left=IntLit(value=100, loc=None), right=IntLit(value=7, loc=None), loc=None),
            right=IntLit(value=5, loc=None),
            loc=None,
        )
        assert evaluate(tree, NumericType.U8).raw == 4

    def test_unknown_node_is_internal_error(self):
        with pytest.raises(RuntimeError, match="CE0001"):
            ExpressionEvaluator(NumericType.I8).evaluate(object())


class TestDeepExpressions:

    def test_long_chain(self):
        assert ev(" + ".join(["1"] * 3000), NumericType.U32) == 3000

    def test_long_mixed_chain(self):
        src = " - ".join(["1"] * 2001)
        assert ev(src, NumericType.I16) == -1999

    def test_deep_unary_run(self):
        assert ev("-" * 1200 + "1", NumericType.I32) == 1
        assert ev("~" * 1201 + "0", NumericType.I32) == -1

    def test_deep_parentheses(self):
        src = "(1 + " * 1500 + "1" + ")" * 1500
        assert ev(src, NumericType.U16) == 1501

    def test_error_deep_in_chain(self):
        src = " + ".join(["1"] * 2000) + " + 1 / 0"
        with pytest.raises(DivideByZeroError):
            ev(src, NumericType.U32)

    def test_hand_built_deep_negation(self):
        tree = IntLit(value=5, loc=None)
        for _ in range(10001):
            tree = Neg(expr=tree, loc=None)
        assert evaluate(tree, NumericType.I8).signed_value == -5

    def test_hand_built_left_deep_sum(self):
        tree = IntLit(value=0, loc=None)
        for _ in range(10000):
            tree = Add(left=tree, right=IntLit(value=3, loc=None), loc=None)
        assert evaluate(tree, NumericType.U64).raw == 30000
