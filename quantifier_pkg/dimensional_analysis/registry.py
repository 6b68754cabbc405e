"""Base units, derived units and the registry that owns them.

Provides:
- BaseUnit: the single fundamental unit of a physical quality
- Unit: a unit with a fixed conversion rule to exactly one BaseUnit
- Conversion: the (to_base, from_base) function pair of a Unit
- UnitRegistry: symbol lookup with the uniqueness rules enforced

Reads never take a lock. Writers copy the affected tables under a single
writer lock and swap them in, so readers always see a complete table.
"""

from __future__ import annotations

import math
import numbers
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, NamedTuple, Union

from ..logging_config import get_logger
from ..types import (
    DuplicateQualityError,
    DuplicateSymbolError,
    IncompatibleUnitsError,
    TransformationSumError,
    UnitNotFoundError,
    UnknownBaseUnitError,
)
from .transformation import Operation, Transformation

logger = get_logger("dimensional_analysis.registry")


class Conversion(NamedTuple):
    """Functions relating a unit to its base unit.

    to_base maps a magnitude in the unit to the base unit; from_base is its
    inverse. Use this for affine or nonlinear rules such as temperature
    offsets; plain scale factors can be given as a number instead.
    """

    to_base: Operation
    from_base: Operation


@dataclass(frozen=True)
class BaseUnit:
    """The canonical unit of one physical quality (length, mass, ...)."""

    symbol: str
    name: str
    quality: str

    def normalize(self) -> Transformation:
        """A base unit is already normalized."""
        return Transformation.identity(self)

    def denormalize(self, target: AnyUnit | None = None) -> Transformation:
        """Transformation from this base unit to `target` (itself if omitted)."""
        if target is None or target == self:
            return Transformation.identity(self)
        if target.quality != self.quality:
            raise IncompatibleUnitsError(
                f"Cannot express {self.quality} ({self.symbol}) in "
                f"{target.quality} ({target.symbol})"
            )
        return target.denormalize()

    def convert_to(self, other: AnyUnit) -> Transformation:
        return _convert(self, other)

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, eq=False)
class Unit:
    """A named unit with a fixed relationship to one BaseUnit."""

    symbol: str
    name: str
    base: BaseUnit
    to_base: Operation = field(repr=False)
    from_base: Operation = field(repr=False)

    @property
    def quality(self) -> str:
        return self.base.quality

    def normalize(self) -> Transformation:
        """Transformation from this unit to its base unit."""
        return Transformation(self, self.base, (self.to_base,))

    def denormalize(self, target: AnyUnit | None = None) -> Transformation:
        """Transformation from the base unit back to this unit.

        `target` is accepted for symmetry with BaseUnit.denormalize; when given
        it must be this unit.
        """
        if target is not None and target is not self:
            raise IncompatibleUnitsError(
                f"{self.symbol} cannot denormalize to {target.symbol}"
            )
        return Transformation(self.base, self, (self.from_base,))

    def convert_to(self, other: AnyUnit) -> Transformation:
        """Transformation from this unit to any unit of the same quality."""
        return _convert(self, other)

    def __str__(self) -> str:
        return self.symbol


AnyUnit = Union[BaseUnit, Unit]


def _convert(source: AnyUnit, target: AnyUnit) -> Transformation:
    # Every conversion goes through the shared base unit.
    to_base = source.normalize()
    from_base = target.denormalize() if isinstance(target, Unit) else target.normalize()
    try:
        return to_base + from_base
    except TransformationSumError as e:
        raise IncompatibleUnitsError(
            f"Cannot convert {source.symbol} ({source.quality}) to "
            f"{target.symbol} ({target.quality})"
        ) from e


def _scale_to_base(factor: float) -> Operation:
    def op(x: float) -> float:
        return x * factor

    return op


def _scale_from_base(factor: float) -> Operation:
    def op(x: float) -> float:
        return x / factor

    return op


def build_conversion(conversion: Any) -> Conversion:
    """Accept a scale factor or a (to_base, from_base) pair."""
    if isinstance(conversion, numbers.Real) and not isinstance(conversion, bool):
        factor = float(conversion)
        if factor == 0 or not math.isfinite(factor):
            raise ValueError(f"Scale factor must be finite and non-zero, got {conversion!r}")
        return Conversion(_scale_to_base(factor), _scale_from_base(factor))
    if isinstance(conversion, (tuple, list)) and len(conversion) == 2:
        to_base, from_base = conversion
        if callable(to_base) and callable(from_base):
            return Conversion(to_base, from_base)
    raise TypeError(
        "A unit conversion must be a number or a (to_base, from_base) pair of "
        f"callables, got {type(conversion).__name__}"
    )


class UnitRegistry:
    """All registered base units, units and aliases.

    Symbols are unique across base units, units and aliases. Each quality has
    at most one base unit. Lookups resolve derived units first and fall back
    to base units, so a base unit is usable anywhere a unit is.
    """

    def __init__(self) -> None:
        self._write_lock = threading.RLock()
        self._base_units: dict[str, BaseUnit] = {}
        self._qualities: dict[str, BaseUnit] = {}
        self._units: dict[str, Unit] = {}
        self._aliases: dict[str, str] = {}

    # -- registration -----------------------------------------------------

    def register_base_unit(self, symbol: str, name: str, quality: str) -> BaseUnit:
        with self._write_lock:
            if quality in self._qualities:
                raise DuplicateQualityError(
                    f"Base unit already defined for quality '{quality}' "
                    f"({self._qualities[quality].symbol})"
                )
            if self._symbol_taken(symbol):
                raise DuplicateSymbolError(f"Unit already defined for symbol '{symbol}'")

            base = BaseUnit(symbol, name, quality)
            self._base_units = {**self._base_units, symbol: base}
            self._qualities = {**self._qualities, quality: base}

        logger.debug("Registered base unit %s (%s) for %s", symbol, name, quality)
        return base

    def register_unit(
        self,
        symbol: str,
        name: str,
        base_symbol: str | BaseUnit,
        conversion: float | Conversion | tuple[Callable, Callable],
    ) -> Unit:
        """Register a unit defined relative to an existing base unit.

        Args:
            symbol: Unique unit symbol
            name: Display name
            base_symbol: Symbol of the base unit (or the BaseUnit itself)
            conversion: Factor such that value_in_unit * factor = value_in_base,
                or a (to_base, from_base) pair of callables
        """
        if isinstance(base_symbol, BaseUnit):
            base_symbol = base_symbol.symbol
        rule = build_conversion(conversion)

        with self._write_lock:
            base = self._base_units.get(base_symbol)
            if base is None:
                raise UnknownBaseUnitError(f"BaseUnit '{base_symbol}' not defined")
            if self._symbol_taken(symbol):
                raise DuplicateSymbolError(f"Unit already defined for symbol '{symbol}'")

            unit = Unit(symbol, name, base, rule.to_base, rule.from_base)
            self._units = {**self._units, symbol: unit}

        logger.debug("Registered unit %s (%s) on base %s", symbol, name, base_symbol)
        return unit

    def register_alias(self, alias: str, symbol: str) -> AnyUnit:
        """Make `alias` resolve to the unit registered under `symbol`."""
        with self._write_lock:
            unit = self.resolve(symbol)
            if self._symbol_taken(alias):
                raise DuplicateSymbolError(f"Unit already defined for symbol '{alias}'")
            self._aliases = {**self._aliases, alias: unit.symbol}
        logger.debug("Registered alias %s -> %s", alias, unit.symbol)
        return unit

    def _symbol_taken(self, symbol: str) -> bool:
        return symbol in self._units or symbol in self._base_units or symbol in self._aliases

    # -- lookup ------------------------------------------------------------

    def resolve(self, symbol: str | AnyUnit) -> AnyUnit:
        """Return the Unit or BaseUnit registered under `symbol`."""
        if isinstance(symbol, (Unit, BaseUnit)):
            return symbol
        symbol = self._aliases.get(symbol, symbol)
        unit = self._units.get(symbol)
        if unit is not None:
            return unit
        base = self._base_units.get(symbol)
        if base is not None:
            return base
        raise UnitNotFoundError(f"Unit '{symbol}' not defined")

    def get_base_unit(self, symbol: str) -> BaseUnit:
        try:
            return self._base_units[symbol]
        except KeyError:
            raise UnknownBaseUnitError(f"BaseUnit '{symbol}' not defined") from None

    def base_unit_for(self, quality: str) -> BaseUnit:
        try:
            return self._qualities[quality]
        except KeyError:
            raise UnknownBaseUnitError(f"No base unit for quality '{quality}'") from None

    def base_unit_exists(self, symbol: str) -> bool:
        return symbol in self._base_units

    def unit_or_base_exists(self, symbol: str) -> bool:
        return self._symbol_taken(symbol)

    def convert(self, source: str | AnyUnit, target: str | AnyUnit) -> Transformation:
        """Transformation between two units given by symbol or object."""
        return _convert(self.resolve(source), self.resolve(target))

    # -- introspection -----------------------------------------------------

    def base_units(self) -> list[BaseUnit]:
        return list(self._base_units.values())

    def units(self) -> list[Unit]:
        return list(self._units.values())

    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def symbols(self) -> list[str]:
        return [*self._base_units, *self._units, *self._aliases]

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self._symbol_taken(symbol)

    def __iter__(self) -> Iterator[AnyUnit]:
        yield from self._base_units.values()
        yield from self._units.values()

    def __len__(self) -> int:
        return len(self._base_units) + len(self._units)

    def __repr__(self) -> str:
        return (
            f"UnitRegistry({len(self._base_units)} base units, "
            f"{len(self._units)} units, {len(self._aliases)} aliases)"
        )
