"""Text-level API used by the CLI and REPL.

Every function returns a result dict instead of raising:

    {"ok": True, "result": "8 m", "html": ..., "unicode": ..., "normalized": ..., "dimension": "L"}
    {"ok": False, "error": "...", "error_type": "IncompatibleUnitsError"}
"""

from __future__ import annotations

import operator
from typing import Any

from . import config
from .dimensional_analysis import PhysicalQuantity, UnitRegistry
from .logging_config import get_logger
from .types import ParseError, QuantifierError

logger = get_logger("api")

OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


def parse_expression(text: str, registry: UnitRegistry | None = None) -> PhysicalQuantity:
    """Evaluate "<q>", "[<q>]" or "[<q1>] op [<q2>]" with an optional "to <units>" suffix."""
    text = text.strip()
    if not text:
        raise ParseError("Empty expression")

    target = None
    match = config.CONVERSION_SUFFIX_RE.match(text)
    if match:
        text, target = match.group("expr").strip(), match.group("units").strip()

    match = config.BINARY_EXPR_RE.match(text)
    if match:
        left = PhysicalQuantity.parse(match.group("left"), registry=registry)
        right = PhysicalQuantity.parse(match.group("right"), registry=registry)
        result = OPERATORS[match.group("op")](left, right)
    else:
        if text.startswith("[") and text.endswith("]"):
            text = text[1:-1]
        if "[" in text or "]" in text:
            raise ParseError(f"Cannot read expression '{text}'; use [q1] op [q2]")
        result = PhysicalQuantity.parse(text, registry=registry)

    if target:
        result.convert_to(target)
    return result


def describe(quantity: PhysicalQuantity, precision: int | None = None) -> dict[str, Any]:
    return {
        "ok": True,
        "result": quantity.to_string(precision=precision),
        "html": quantity.to_string("html", precision=precision),
        "unicode": quantity.to_string("unicode", precision=precision),
        "normalized": quantity.to_base_units().to_string(precision=precision),
        "dimension": str(quantity.dimension),
    }


def evaluate(
    text: str,
    units: str | None = None,
    precision: int | None = None,
    registry: UnitRegistry | None = None,
) -> dict[str, Any]:
    """Evaluate a quantity expression, optionally converting the result to `units`."""
    try:
        quantity = parse_expression(text, registry=registry)
        if units:
            quantity.convert_to(units)
        return describe(quantity, precision=precision)
    except (QuantifierError, ValueError, ZeroDivisionError) as e:
        logger.warning("Could not evaluate %r: %s", text, e)
        return {"ok": False, "error": str(e), "error_type": type(e).__name__}


def convert(text: str, units: str, precision: int | None = None) -> dict[str, Any]:
    """Shorthand for evaluate(text, units=units)."""
    return evaluate(text, units=units, precision=precision)
