import json
import logging
from typing import Any

from .. import config

logger = logging.getLogger(__name__)

_SUPERSCRIPT_DIGITS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def format_number_no_trailing_zeros(num_str: str) -> str:
    """Format a number string by removing trailing zeros and decimal point if not needed."""
    try:
        num = float(num_str)
    except (ValueError, TypeError):
        return num_str
    # Integer text for whole numbers unless the float is too large to print exactly
    if num.is_integer() and abs(num) < 1e16:
        return str(int(num))
    if "." in num_str and "e" not in num_str.lower():
        return num_str.rstrip("0").rstrip(".")
    return num_str


def format_magnitude(value: float, precision: int | None = None) -> str:
    """Render a magnitude at `precision` significant digits, collapsing whole numbers."""
    if precision is None:
        precision = config.OUTPUT_PRECISION
    # + 0.0 turns -0.0 into 0.0
    return format_number_no_trailing_zeros(f"{float(value) + 0.0:.{precision}g}")


def format_for_equality(value: float) -> str:
    """Text form of a magnitude used by equality checks."""
    return f"{float(value) + 0.0:.{config.EQUALITY_PRECISION}g}"


def format_superscript(text: str) -> str:
    """Replace ^n exponents with unicode superscript digits (m^2 -> m²)."""
    return config.SUPERSCRIPT_RE.sub(
        lambda m: m.group(1).translate(_SUPERSCRIPT_DIGITS), text
    )


def format_html_superscript(text: str) -> str:
    """Replace ^n exponents with HTML superscript markup (m^2 -> m<sup>2</sup>)."""
    return config.SUPERSCRIPT_RE.sub(
        lambda m: config.HTML_SUPERSCRIPT.format(m.group(1)), text
    )


def print_result_pretty(result: dict[str, Any], output_format: str = "human") -> None:
    """Print an evaluation result dict for the CLI."""
    if output_format == "json":
        print(json.dumps(result, ensure_ascii=False))
        return

    if not result.get("ok"):
        print(f"Error: {result.get('error')}")
        return

    print(result.get("result"))
    base = result.get("normalized")
    if base and base != result.get("result"):
        print(f"  = {base}")
