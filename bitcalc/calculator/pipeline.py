"""One parse + evaluate cycle, shared by the CLI and the REPL."""
from __future__ import annotations

from typing import Optional

from bitcalc.frontend.ast_printer import dump_ast as format_ast
from bitcalc.internals.parse_errors import handle_calc_exception
from bitcalc.internals.parser import parse_to_ast
from bitcalc.internals.report import Reporter
from bitcalc.semantics.ast_builder import CalcError
from bitcalc.semantics.passes.evaluate import evaluate
from bitcalc.semantics.typesys import NumericType, TypedValue


def evaluate_source(
    src: str,
    numeric_type: NumericType,
    reporter: Reporter,
    dump_parse: bool = False,
    dump_ast: bool = False,
) -> Optional[TypedValue]:
    """Parse and evaluate one expression.

    Returns the value, or None after emitting diagnostics on `reporter`.
    Parse errors stop the cycle before evaluation; evaluation errors discard
    the whole expression.
    """
    try:
        ast = parse_to_ast(src, dump_parse=dump_parse)

        if dump_ast:
            print(format_ast(ast))
            print()

        return evaluate(ast, numeric_type)

    except CalcError as exc:
        if handle_calc_exception(exc, reporter):
            return None
        raise
