"""Unit strings and unit specs.

A unit spec is any of:
- a unit symbol ("mm", "°C") or a Unit/BaseUnit object, with power 1
- a powers map ({"m": 1, "s": -2})
- a unit expression ("m/s^2", "m kg / s^2")

`to_powers` turns every form into a canonical {unit: power} map.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

from .. import config
from ..types import ParseError
from .registry import AnyUnit, BaseUnit, Unit, UnitRegistry

UnitSpec = Union[str, AnyUnit, Mapping]


def parse_units(string: str) -> dict[str, int]:
    """Build a powers map from a unit expression.

    An optional numerator and denominator are separated by '/'. Each part is
    a list of symbol[^power] tokens; a missing power is 1 and denominator
    powers are negated. Symbols are not validated here. A second '/' raises
    ParseError (write "m/s^2", not "m/s/s").

    Examples:
        >>> parse_units("m kg / s^2")
        {'m': 1, 'kg': 1, 's': -2}
        >>> parse_units("1/s")
        {'s': -1}
    """
    numerator, _, denominator = string.partition("/")
    if "/" in denominator:
        raise ParseError(f"Unit string '{string}' has more than one '/'")
    powers: dict[str, int] = {}
    _parse_unit_part(numerator, 1, powers)
    _parse_unit_part(denominator, -1, powers)
    return {symbol: power for symbol, power in powers.items() if power != 0}


def _parse_unit_part(part: str, sign: int, powers: dict[str, int]) -> None:
    for match in config.UNIT_TOKEN_RE.finditer(part):
        symbol, exponent = match.groups()
        if symbol == "1":  # "1/s"
            continue
        power = int(exponent[1:]) if exponent else 1
        powers[symbol] = powers.get(symbol, 0) + sign * power


def to_powers(spec: UnitSpec, registry: UnitRegistry) -> dict[AnyUnit, int]:
    """Resolve any unit spec to a {unit: power} map with zero powers dropped."""
    if isinstance(spec, (Unit, BaseUnit)):
        return {spec: 1}

    if isinstance(spec, str):
        symbol = spec.strip()
        if symbol in registry:
            return {registry.resolve(symbol): 1}
        items = parse_units(symbol).items()
    elif isinstance(spec, Mapping):
        items = spec.items()
    else:
        raise TypeError(
            f"Unit spec must be a symbol, a unit, a mapping or a unit string, "
            f"got {type(spec).__name__}"
        )

    powers: dict[AnyUnit, int] = {}
    for symbol, power in items:
        if int(power) != power:
            raise ValueError(f"Unit powers must be integers, got {symbol}^{power}")
        unit = registry.resolve(symbol)
        powers[unit] = powers.get(unit, 0) + int(power)
    return {unit: power for unit, power in powers.items() if power != 0}
