"""Lark parser setup and AST construction."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from bitcalc.internals.report import Span
from bitcalc.semantics.ast import Expr
from bitcalc.semantics.ast_builder import ASTBuilder, ExprSyntaxError, ExpressionTooDeepError

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Build the expression parser once per process."""
    kwargs = dict(
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
        lexer="basic",
    )
    return Lark.open(str(GRAMMAR_PATH), **kwargs)


def _end_span(src: str) -> Span:
    """Span just past the last character of the input."""
    lines = src.splitlines() or [""]
    col = len(lines[-1]) + 1
    return Span(len(lines), col, len(lines), col)


def to_syntax_error(e: UnexpectedInput, src: str) -> ExprSyntaxError:
    """Convert a Lark parse failure into an ExprSyntaxError with position."""
    end = ExprSyntaxError.END_OF_INPUT

    if isinstance(e, UnexpectedCharacters):
        span = Span(e.line, e.column, e.line, e.column + 1)
        return ExprSyntaxError(f"Unexpected character '{e.char}'.", e.char, span, kind="character")

    if isinstance(e, UnexpectedToken) and e.token.type != "$END":
        tok = e.token
        span = Span(tok.line, tok.column, tok.end_line or tok.line, tok.end_column or tok.column + 1)
        return ExprSyntaxError(f"Unexpected token '{tok.value}'.", str(tok.value), span)

    if isinstance(e, (UnexpectedToken, UnexpectedEOF)):
        return ExprSyntaxError("Unexpected end of input.", end, _end_span(src), kind="end")

    return ExprSyntaxError(str(e), end, None, kind="end")


def dump_parse_tree(tree) -> str:
    """Render the raw Lark tree for --dump-parse.

    Lark renders trees recursively; a tree too deep for that is reported as
    ExpressionTooDeepError rather than crashing the caller.
    """
    try:
        return tree.pretty() if hasattr(tree, "pretty") else repr(tree)
    except RecursionError:
        raise ExpressionTooDeepError(span=None) from None


def parse_to_ast(src: str, dump_parse: bool = False) -> Expr:
    """Parse one expression into an AST.

    The whole input must match the grammar; anything else raises
    ExprSyntaxError. Literal overflow raises LiteralOverflowError.
    """
    try:
        tree = get_parser().parse(src)
    except UnexpectedInput as e:
        raise to_syntax_error(e, src) from e

    if dump_parse:
        print(dump_parse_tree(tree))

    ast_builder = ASTBuilder()
    return ast_builder.build(tree)
