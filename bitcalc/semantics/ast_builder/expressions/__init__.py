from bitcalc.semantics.ast_builder.expressions.literals import parse_int_literal, WIDE_BITS, LITERAL_TOKENS
from bitcalc.semantics.ast_builder.expressions.operators import expr_unary, bin_chain, is_operator

__all__ = ["parse_int_literal", "WIDE_BITS", "LITERAL_TOKENS", "expr_unary", "bin_chain", "is_operator"]
