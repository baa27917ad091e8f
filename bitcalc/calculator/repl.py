"""Interactive read-evaluate-print loop."""
from __future__ import annotations

from typing import Callable, Optional

from bitcalc.calculator.formatting import OutputBase, format_value
from bitcalc.calculator.pipeline import evaluate_source
from bitcalc.internals.report import Reporter
from bitcalc.semantics.typesys import NumericType

PROMPT = "> "


def _enable_history() -> None:
    # Line editing and history where the platform ships readline.
    try:
        import readline  # noqa: F401
    except ImportError:
        pass


def run_repl(
    numeric_type: NumericType,
    base: OutputBase,
    read_line: Optional[Callable[[str], str]] = None,
    dump_parse: bool = False,
    dump_ast: bool = False,
) -> int:
    """Evaluate lines until EOF or Ctrl-C.

    Each line is an independent cycle: errors are reported and the loop
    continues. Returns the process exit code (always 0).
    """
    if read_line is None:
        _enable_history()
        read_line = input

    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line.strip():
            continue

        reporter = Reporter(source=line)
        value = evaluate_source(line, numeric_type, reporter,
                                dump_parse=dump_parse, dump_ast=dump_ast)
        if value is None:
            reporter.print()
            continue

        print(format_value(value, base))
