"""Centralized configuration for the quantifier.

This module defines:
- Output precision for rendered quantities
- Precision used when comparing magnitudes for equality
- The probe set used to compare transformations
- Regex patterns for parsing unit strings and CLI expressions

Every value can be overridden via environment variables prefixed with
QUANTIFIER_. CLI flags (see cli/app.py) override the module values at run time.
"""

import os
import re

VERSION = "1.0.0"

# Rendering
OUTPUT_PRECISION = int(
    os.getenv("QUANTIFIER_OUTPUT_PRECISION", "12")
)  # significant digits
HTML_SUPERSCRIPT = os.getenv("QUANTIFIER_HTML_SUPERSCRIPT", "<sup>{}</sup>")

# Equality of magnitudes is decided on their text form at this many
# significant digits, which absorbs last-digit float noise from conversions.
EQUALITY_PRECISION = int(os.getenv("QUANTIFIER_EQUALITY_PRECISION", "12"))

# Two transformations are equal when they map every probe to the same value.
TRANSFORMATION_PROBES = tuple(
    float(p)
    for p in os.getenv("QUANTIFIER_TRANSFORMATION_PROBES", "-1,0,1,2,3.5").split(",")
)

# Probe outputs closer than this fraction of the largest output compare equal.
TRANSFORMATION_ZERO_TOLERANCE = float(
    os.getenv("QUANTIFIER_TRANSFORMATION_ZERO_TOLERANCE", "1e-9")
)

LOG_LEVEL = os.getenv("QUANTIFIER_LOG_LEVEL", "WARNING")

# Unit strings: "m kg/s^2", "m^1kg^1/s^2", "°C/s"
UNIT_TOKEN_RE = re.compile(r"([\w°]+)(\^-?\d+)?")
SUPERSCRIPT_RE = re.compile(r"\^(-?\d+)")

# CLI expressions: "[2 m/s] * [4 s] to km/hr"
CONVERSION_SUFFIX_RE = re.compile(r"^(?P<expr>.+?)\s+to\s+(?P<units>[^\[\]]+)$")
BINARY_EXPR_RE = re.compile(
    r"^\[(?P<left>[^\[\]]+)\]\s*(?P<op>[-+*/])\s*\[(?P<right>[^\[\]]+)\]$"
)
