"""Quantifier package: physical quantities with unit algebra, conversions and a CLI."""

__version__ = "1.0.0"

from . import api, config, dimensional_analysis, logging_config, types
from .api import convert, evaluate
from .dimensional_analysis import (
    BaseUnit,
    PhysicalQuantity,
    Transformation,
    Unit,
    UnitRegistry,
    get_registry,
    parse_units,
    register_unit,
)

__all__ = [
    "api",
    "config",
    "dimensional_analysis",
    "logging_config",
    "types",
    "evaluate",
    "convert",
    "BaseUnit",
    "Unit",
    "UnitRegistry",
    "Transformation",
    "PhysicalQuantity",
    "get_registry",
    "parse_units",
    "register_unit",
]
