"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys

from bitcalc.calculator.formatting import OutputBase, format_value
from bitcalc.internals.version import print_banner
from bitcalc.semantics.typesys import NumericType


def _numeric_type(name: str) -> NumericType:
    """argparse `type=` hook for --type."""
    try:
        return NumericType.parse(name)
    except ValueError:
        from bitcalc.internals.errors import ERR
        msg = ERR["CE4001"]
        choices = ", ".join(t.value for t in NumericType)
        raise argparse.ArgumentTypeError(f"{msg.code}: {msg.text.format(name=name, choices=choices)}")


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bitcalc", description="Programmer's calculator with fixed-width integer semantics")

    ap.add_argument("expr", nargs="*", help="Expression to evaluate (starts the REPL when omitted)")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument(
        "-t", "--type",
        type=_numeric_type,
        default=NumericType.I64,
        metavar="TYPE",
        help="Integer type to evaluate in: u8, u16, u32, u64, i8, i16, i32, i64 (default: i64)",
    )
    ap.add_argument(
        "-b", "--base",
        type=OutputBase,
        choices=list(OutputBase),
        default=OutputBase.ALL,
        help="Output base (default: all)",
    )
    ap.add_argument("--dump-parse", action="store_true", help="Print raw Lark tree")
    ap.add_argument("--dump-ast", action="store_true", help="Print AST")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Calculator entry point.

    Returns:
        0 on success, 2 when the expression could not be evaluated.
    """
    args = build_arg_parser().parse_args(argv)

    if args.version:
        print_banner(args.type)
        return 0

    if not args.expr:
        from bitcalc.calculator.repl import run_repl
        print_banner(args.type)
        return run_repl(args.type, args.base, dump_parse=args.dump_parse, dump_ast=args.dump_ast)

    from bitcalc.calculator.pipeline import evaluate_source
    from bitcalc.internals.report import Reporter

    src = " ".join(args.expr)
    reporter = Reporter(source=src)

    value = evaluate_source(src, args.type, reporter,
                            dump_parse=args.dump_parse, dump_ast=args.dump_ast)
    if value is None:
        reporter.print()
        return 2

    print(format_value(value, args.base))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
