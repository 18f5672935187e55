"""Command line interface: single-shot evaluation, JSON output and a REPL."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional

from .api import evaluate, process_input, solve_equation, solve_system
from .config import SOLVER_METHOD, VERSION
from .formatting import FormatOptions
from .logging_config import get_logger, setup_logging

logger = get_logger("cli")

EXIT_COMMANDS = ("quit", "exit")


def structured_result(
    expr: str, method: Optional[str], options: FormatOptions
) -> dict[str, Any]:
    """Machine-readable result for ``--format json``."""
    text = expr.strip()
    if text.startswith("equation2"):
        data = solve_system(text, options).to_dict()
    elif text.startswith("equation"):
        data = solve_equation(text, method, options).to_dict()
    else:
        data = evaluate(text, options).to_dict()
    data["input"] = expr
    return data


def run_once(
    expr: str,
    output_format: str = "human",
    method: Optional[str] = None,
    options: Optional[FormatOptions] = None,
) -> int:
    """Process one input and print it.

    Returns:
        Exit code: 1 when the result is an error, 0 otherwise
    """
    options = options or FormatOptions()
    if output_format == "json":
        data = structured_result(expr, method, options)
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0 if data.get("ok") else 1
    line = process_input(expr, method, options)
    print(line)
    return 1 if line.startswith("Error:") else 0


def repl_loop(
    output_format: str = "human",
    method: Optional[str] = None,
    options: Optional[FormatOptions] = None,
) -> None:
    """Interactive loop reading one expression or equation per line."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows
        pass

    print("Polysolver - type an expression, equation(...) or equation2(...); 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        if raw.lower() in EXIT_COMMANDS:
            print("Goodbye.")
            break
        run_once(raw, output_format, method, options)


def _health_check() -> int:
    """Verify dependencies and a few known answers.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_failed = 0
    print("Running Polysolver health check...")
    print("-" * 50)

    try:
        import numpy as np
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__}, NumPy {np.__version__} imported successfully")
    except ImportError as e:
        print(f"[FAIL] Dependency import failed: {e}")
        return 1

    known_answers = [
        ("3 + 5 * (2 - 8)^2", "183"),
        ("equation(2x-3=7)", "x = 5"),
        ("equation2(x+y=5,x-y=1)", "x = 3, y = 2"),
    ]
    for expr, expected in known_answers:
        got = process_input(expr)
        if got == expected:
            print(f"[OK] {expr} -> {got}")
        else:
            print(f"[FAIL] {expr}: expected {expected!r}, got {got!r}")
            checks_failed += 1

    print("-" * 50)
    print("Health check passed" if not checks_failed else f"Health check: {checks_failed} failure(s)")
    return 0 if not checks_failed else 1


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Polysolver CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="polysolver")
    parser.add_argument(
        "expression",
        nargs="*",
        help="Expression, equation(...) or equation2(...) to process",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one input and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (one line)",
    )
    parser.add_argument(
        "--method",
        type=str,
        choices=["auto", "symbolic", "numeric"],
        default=SOLVER_METHOD,
        help="Solver method (default: auto)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Decimal places for non-integer results"
    )
    parser.add_argument(
        "--fractions",
        action="store_true",
        help="Print simple rational results as a/b instead of decimals",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    options = FormatOptions(
        precision=args.precision if args.precision and args.precision > 0 else None,
        fraction_style="ratio" if args.fractions else "decimal",
    )
    expr = args.eval_expr or " ".join(args.expression)
    if expr.strip():
        logger.debug("Single-shot input: %r", expr)
        return run_once(expr, args.format, args.method, options)

    repl_loop(args.format, args.method, options)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
