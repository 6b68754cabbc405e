"""Dimensional Analysis Module.

Provides unit-aware physical quantities.

Components:
    - registry: base units, derived units and the UnitRegistry
    - transformation: composable unit-to-unit conversions
    - parsing: unit strings ("m kg/s^2") and unit specs
    - catalog: built-in SI catalog and the process-wide registry
    - units: Dimension signatures and common dimensions
    - quantity: PhysicalQuantity
"""

from .catalog import get_registry
from .catalog import register_unit
from .catalog import set_registry
from .parsing import parse_units
from .parsing import to_powers
from .quantity import PhysicalQuantity
from .registry import BaseUnit
from .registry import Conversion
from .registry import Unit
from .registry import UnitRegistry
from .transformation import Transformation
from .units import ACCELERATION
from .units import AMOUNT
from .units import AREA
from .units import CHARGE
from .units import CURRENT
from .units import DENSITY
from .units import DIMENSIONLESS
from .units import ENERGY
from .units import FORCE
from .units import FREQUENCY
from .units import LENGTH
from .units import LUMINOSITY
from .units import MASS
from .units import POWER
from .units import PRESSURE
from .units import TEMPERATURE
from .units import TIME
from .units import VELOCITY
from .units import VOLTAGE
from .units import VOLUME
from .units import Dimension

__all__ = [
    # Classes
    "BaseUnit",
    "Unit",
    "Conversion",
    "UnitRegistry",
    "Transformation",
    "PhysicalQuantity",
    "Dimension",
    # Registry access
    "get_registry",
    "set_registry",
    "register_unit",
    # Base dimensions
    "DIMENSIONLESS",
    "MASS",
    "LENGTH",
    "TIME",
    "CURRENT",
    "TEMPERATURE",
    "AMOUNT",
    "LUMINOSITY",
    # Derived dimensions
    "AREA",
    "VOLUME",
    "VELOCITY",
    "ACCELERATION",
    "FORCE",
    "ENERGY",
    "POWER",
    "FREQUENCY",
    "PRESSURE",
    "DENSITY",
    "CHARGE",
    "VOLTAGE",
    # Functions
    "parse_units",
    "to_powers",
]
