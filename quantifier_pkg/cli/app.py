from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from .. import config
from ..api import evaluate
from ..config import VERSION
from ..dimensional_analysis import get_registry
from ..logging_config import setup_logging
from ..utils.formatting import print_result_pretty

_logger = logging.getLogger(__name__)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running quantifier health check...")
    print("-" * 50)

    try:
        import numpy as np

        print(f"[OK] NumPy {np.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        registry = get_registry()
        print(f"[OK] Unit registry loaded: {registry!r}")
        checks_passed += 1
    except Exception as e:
        print(f"[FAIL] Unit registry failed to load: {e}")
        checks_failed += 1

    samples = [
        ("[2 m/s] * [4 s]", "8 m"),
        ("60 cel to fah", "140 fah"),
        ("4 m^3 to cm^3", "4000000 cm^3"),
    ]
    for expr, expected in samples:
        result = evaluate(expr)
        if result.get("ok") and result.get("result") == expected:
            print(f"[OK] {expr} = {expected}")
            checks_passed += 1
        else:
            print(f"[FAIL] {expr}: expected {expected}, got {result.get('result') or result.get('error')}")
            checks_failed += 1

    print("-" * 50)
    print(f"Health check complete: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def list_units() -> list[dict[str, Any]]:
    """Rows describing every registered unit, base units first."""
    registry = get_registry()
    aliases: dict[str, list[str]] = {}
    for alias, symbol in registry.aliases().items():
        aliases.setdefault(symbol, []).append(alias)

    rows = []
    for unit in registry:
        base = getattr(unit, "base", unit)
        rows.append(
            {
                "symbol": unit.symbol,
                "name": unit.name,
                "quality": unit.quality,
                "base": base.symbol,
                "aliases": aliases.get(unit.symbol, []),
            }
        )
    return rows


def _print_units(output_format: str) -> None:
    rows = list_units()
    if output_format == "json":
        print(json.dumps(rows, ensure_ascii=False))
        return
    for row in rows:
        alias_text = f" (also {', '.join(row['aliases'])})" if row["aliases"] else ""
        kind = "base unit" if row["symbol"] == row["base"] else f"-> {row['base']}"
        print(f"  {row['symbol']:<5} {row['name']:<20} {row['quality']:<22} {kind}{alias_text}")


def repl_loop(
    output_format: str = "human", style: str | None = None, precision: int | None = None
) -> None:
    """Entry point delegating to the REPL class."""
    from .context import ReplContext
    from .repl_core import REPL

    repl = REPL(ReplContext(output_format=output_format, style=style, precision=precision))
    repl.start()


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the quantifier CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="quantifier",
        description="Evaluate and convert physical quantities, e.g. '60 cel' --to K",
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="Quantity or expression: '2 m/s', '[2 m/s] * [4 s]', '60 cel to K'",
    )
    parser.add_argument("--to", type=str, dest="units", help="Convert the result to these units")
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    style = parser.add_mutually_exclusive_group()
    style.add_argument("--html", action="store_true", help="Render exponents as <sup> markup")
    style.add_argument("--unicode", action="store_true", help="Render exponents as superscripts")
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument("--list-units", action="store_true", help="List registered units")
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL.upper(),
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
        print(f"quantifier {VERSION}")
        return 0
    if args.health_check:
        return _health_check()
    if args.list_units:
        _print_units(args.format)
        return 0

    precision = args.precision if args.precision and args.precision > 0 else None
    render_style = "html" if args.html else "unicode" if args.unicode else None

    if args.expression is None:
        repl_loop(output_format=args.format, style=render_style, precision=precision)
        return 0

    result = evaluate(args.expression, units=args.units, precision=precision)
    if result.get("ok") and render_style:
        result["result"] = result[render_style]
    print_result_pretty(result, output_format=args.format)
    if not result.get("ok"):
        _logger.debug("Evaluation failed: %s", result.get("error"))
        return 1
    return 0
