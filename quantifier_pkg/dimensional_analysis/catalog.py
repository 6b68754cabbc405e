"""Built-in unit catalog and the process-wide default registry.

The seven SI base units and a fixed set of derived units are registered once,
the first time the default registry is requested. A malformed catalog raises
at that point and is not recoverable.
"""

from __future__ import annotations

import threading

from ..logging_config import get_logger
from .registry import Conversion, UnitRegistry

logger = get_logger("dimensional_analysis.catalog")

# (symbol, name, quality)
SI_BASE_UNITS = [
    ("m", "meter", "length"),
    ("kg", "kilogram", "mass"),
    ("s", "second", "time"),
    ("A", "ampere", "electric_current"),
    ("K", "kelvin", "temperature"),
    ("mol", "mole", "amount_of_substance"),
    ("cd", "candela", "luminous_intensity"),
]

# (symbol, name, base symbol, value_in_unit * factor = value_in_base)
SCALED_UNITS = [
    # Length
    ("km", "kilometer", "m", 1000),
    ("dm", "decimeter", "m", 0.1),
    ("cm", "centimeter", "m", 0.01),
    ("mm", "millimeter", "m", 1e-3),
    ("um", "micrometer", "m", 1e-6),
    ("nm", "nanometer", "m", 1e-9),
    ("pm", "picometer", "m", 1e-12),
    ("in", "inch", "m", 0.0254),
    ("ft", "foot", "m", 0.3048),
    ("yd", "yard", "m", 0.9144),
    ("mi", "mile", "m", 1609.344),
    # Mass
    ("g", "gram", "kg", 1e-3),
    ("dg", "decigram", "kg", 1e-4),
    ("cg", "centigram", "kg", 1e-5),
    ("mg", "milligram", "kg", 1e-6),
    ("lb", "pound", "kg", 0.45359237),
    ("oz", "ounce", "kg", 0.02835),
    # Time
    ("hr", "hour", "s", 60 * 60),
]

TEMPERATURE_UNITS = [
    (
        "fah",
        "degree fahrenheit",
        "K",
        Conversion(
            to_base=lambda x: (x + 459.67) * 5.0 / 9,
            from_base=lambda x: (x * 9.0 / 5) - 459.67,
        ),
    ),
    (
        "cel",
        "degree celsius",
        "K",
        Conversion(
            to_base=lambda x: x + 273.15,
            from_base=lambda x: x - 273.15,
        ),
    ),
]

# (alias, symbol)
ALIASES = [
    ("µm", "um"),
    ("ou", "oz"),
    ("°F", "fah"),
    ("°C", "cel"),
]


def populate(registry: UnitRegistry) -> UnitRegistry:
    """Register the built-in catalog into `registry`."""
    for symbol, name, quality in SI_BASE_UNITS:
        registry.register_base_unit(symbol, name, quality)
    for symbol, name, base, factor in SCALED_UNITS:
        registry.register_unit(symbol, name, base, factor)
    for symbol, name, base, conversion in TEMPERATURE_UNITS:
        registry.register_unit(symbol, name, base, conversion)
    for alias, symbol in ALIASES:
        registry.register_alias(alias, symbol)
    return registry


def build_default_registry() -> UnitRegistry:
    registry = populate(UnitRegistry())
    logger.info("Unit registry initialized: %r", registry)
    return registry


_default_registry: UnitRegistry | None = None
_default_lock = threading.Lock()


def get_registry() -> UnitRegistry:
    """Return the process-wide registry, building it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = build_default_registry()
    return _default_registry


def set_registry(registry: UnitRegistry | None) -> None:
    """Replace the process-wide registry (None rebuilds it on next use)."""
    global _default_registry
    with _default_lock:
        _default_registry = registry


def register_unit(symbol, name, base_symbol, conversion):
    """Register a custom unit in the process-wide registry."""
    return get_registry().register_unit(symbol, name, base_symbol, conversion)
