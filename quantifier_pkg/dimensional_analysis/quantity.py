"""Physical quantities: a magnitude with a composite unit attached.

A PhysicalQuantity always stores its magnitude in base units (normalized
form). The units it was built with are remembered per quality as preferred
units, and rendering converts back to them on a snapshot, leaving the
quantity untouched.

    >>> a = PhysicalQuantity(2, "mm/s")
    >>> b = PhysicalQuantity(48, {"mm": 1, "s": -1})
    >>> str(a + b)
    '50 mm/s'
    >>> PhysicalQuantity(60, "cel") == PhysicalQuantity(333.15, "K")
    True
"""

from __future__ import annotations

import numbers
from typing import Any, Mapping

from ..logging_config import get_logger
from ..types import IncomparableUnitsError, IncompatibleUnitsError, ParseError
from ..utils.formatting import (
    format_for_equality,
    format_html_superscript,
    format_magnitude,
    format_superscript,
)
from ..utils.parsing import eval_to_float
from .catalog import get_registry
from .parsing import UnitSpec, to_powers
from .registry import AnyUnit, UnitRegistry
from .transformation import Transformation
from .units import Dimension

logger = get_logger("dimensional_analysis.quantity")

UNIT_SEPARATOR = ""
RENDER_STYLES = (None, "", "plain", "html", "unicode")


def _transform_power(
    quantity: float, forward: Transformation, backward: Transformation, power: int
) -> float:
    """Apply `forward` once per power (or `backward` once per negative power).

    A unit squared scales the magnitude twice; a unit in the denominator
    scales it the other way.
    """
    if forward.is_identity:
        return quantity
    step = forward if power > 0 else backward
    for _ in range(abs(power)):
        quantity = step.apply_to_quantity(quantity)
    return quantity


def _merge_powers(*maps: Mapping[AnyUnit, int]) -> dict[AnyUnit, int]:
    merged: dict[AnyUnit, int] = {}
    for powers in maps:
        for unit, power in powers.items():
            merged[unit] = merged.get(unit, 0) + power
    return {unit: power for unit, power in merged.items() if power != 0}


def _preferred_from(powers: Mapping[AnyUnit, int]) -> dict[str, AnyUnit]:
    """quality -> unit map from a powers map."""
    return {unit.quality: unit for unit in powers}


def _unit_token(unit: AnyUnit, power: int) -> str:
    return unit.symbol + (f"^{power}" if power != 1 else "")


class PhysicalQuantity:
    """A number with a composite unit.

    Args:
        magnitude: The numeric value, expressed in `units`
        units: A unit spec: a symbol ("mm"), a powers map ({"m": 1, "s": -1})
            or a unit string ("m/s^2"). Use {} for a dimensionless number.
        preferred_units: Optional unit spec the quantity should be displayed
            in; defaults to the units it was built with
        registry: Registry used to resolve symbols (process default if omitted)

    Attributes:
        quantity: Magnitude in base units
        powers: {base unit: power}, zero powers omitted
        preferred_units: {quality: unit} used when rendering
    """

    __slots__ = ("_quantity", "_powers", "_preferred_units", "_registry")

    def __init__(
        self,
        magnitude: float,
        units: UnitSpec,
        preferred_units: UnitSpec | None = None,
        registry: UnitRegistry | None = None,
    ):
        self._registry = registry if registry is not None else get_registry()
        powers = to_powers(units, self._registry)

        if preferred_units is None:
            self._preferred_units = _preferred_from(powers)
        else:
            self._preferred_units = _preferred_from(to_powers(preferred_units, self._registry))

        self._quantity = float(magnitude)
        self._powers: dict[AnyUnit, int] = {}
        self._normalize(powers)

    @classmethod
    def _build(
        cls,
        quantity: float,
        powers: Mapping[AnyUnit, int],
        preferred_units: Mapping[str, AnyUnit],
        registry: UnitRegistry,
    ) -> PhysicalQuantity:
        """Construct from an already-normalized state."""
        obj = cls.__new__(cls)
        obj._registry = registry
        obj._quantity = float(quantity)
        obj._powers = {unit: power for unit, power in powers.items() if power != 0}
        obj._preferred_units = dict(preferred_units)
        return obj

    @classmethod
    def parse(cls, text: str, registry: UnitRegistry | None = None) -> PhysicalQuantity:
        """Read "<magnitude> <units>" text, e.g. "2 m/s" or "1/3 km".

        The magnitude may be any real number expression (pi, 1/3, 2e-3).
        """
        magnitude_text, _, unit_text = text.strip().partition(" ")
        if not magnitude_text:
            raise ParseError("Empty quantity")
        magnitude = eval_to_float(magnitude_text)
        return cls(magnitude, unit_text.strip() or {}, registry=registry)

    # -- normalization --------------------------------------------------------

    def _normalize(self, powers: Mapping[AnyUnit, int]) -> None:
        normalized: dict[AnyUnit, int] = {}
        quantity = self._quantity
        for unit, power in powers.items():
            forward = unit.normalize()
            normalized[forward.to_unit] = normalized.get(forward.to_unit, 0) + power
            quantity = _transform_power(quantity, forward, unit.denormalize(), power)
        self._quantity = quantity
        self._powers = {unit: power for unit, power in normalized.items() if power != 0}

    def _denormalized(
        self, preferred: Mapping[str, AnyUnit] | None = None
    ) -> tuple[float, dict[AnyUnit, int]]:
        """Magnitude and powers expressed in preferred units.

        Returns a snapshot; the quantity itself stays normalized.
        """
        if preferred is None:
            preferred = self._preferred_units
        quantity = self._quantity
        display: dict[AnyUnit, int] = {}
        for base, power in self._powers.items():
            target = preferred.get(base.quality, base)
            forward = base.denormalize(target)
            display[forward.to_unit] = display.get(forward.to_unit, 0) + power
            quantity = _transform_power(quantity, forward, target.normalize(), power)
        return quantity, {unit: power for unit, power in display.items() if power != 0}

    # -- accessors -------------------------------------------------------------

    @property
    def quantity(self) -> float:
        return self._quantity

    @property
    def powers(self) -> dict[AnyUnit, int]:
        return dict(self._powers)

    @property
    def preferred_units(self) -> dict[str, AnyUnit]:
        return dict(self._preferred_units)

    @property
    def registry(self) -> UnitRegistry:
        return self._registry

    @property
    def magnitude(self) -> float:
        """Magnitude expressed in the preferred units."""
        return self._denormalized()[0]

    @property
    def display_powers(self) -> dict[AnyUnit, int]:
        return self._denormalized()[1]

    @property
    def dimension(self) -> Dimension:
        exponents: dict[str, int] = {}
        for unit, power in self._powers.items():
            exponents[unit.quality] = exponents.get(unit.quality, 0) + power
        return Dimension.from_mapping(exponents)

    def is_dimensionless(self) -> bool:
        return not self._powers

    def is_compatible(self, other: PhysicalQuantity | UnitSpec) -> bool:
        """True when `other` (a quantity or unit spec) has the same dimension."""
        if not isinstance(other, PhysicalQuantity):
            other = PhysicalQuantity(1, other, registry=self._registry)
        return self.dimension == other.dimension

    # -- conversion -----------------------------------------------------------

    def convert_to(self, units: UnitSpec) -> PhysicalQuantity:
        """Display this quantity in `units` from now on. Returns self.

        Only the preferred units change; the stored magnitude stays in base
        units.
        """
        targets = to_powers(units, self._registry)
        qualities = {unit.quality for unit in self._powers}
        for unit in targets:
            if unit.quality not in qualities:
                raise IncompatibleUnitsError(
                    f"Cannot convert {self.dimension} quantity to {unit.symbol} "
                    f"({unit.quality})"
                )
        self._preferred_units = _preferred_from(targets)
        logger.debug("Converted %r to %s", self, [u.symbol for u in targets])
        return self

    def to(self, units: UnitSpec) -> PhysicalQuantity:
        """A copy of this quantity displayed in `units`."""
        return self._copy().convert_to(units)

    def to_base_units(self) -> PhysicalQuantity:
        """A copy displayed in base units."""
        return PhysicalQuantity._build(self._quantity, self._powers, {}, self._registry)

    def transform(self, transformation: Transformation) -> PhysicalQuantity:
        """Apply a transformation to the unit it starts from.

        The magnitude is transformed once and the unit entry replaced by the
        transformation's target. The result is normalized again and keeps the
        target as its preferred unit for that quality.
        """
        source = transformation.from_unit
        if source not in self._powers:
            raise IncompatibleUnitsError(
                f"{transformation!r} does not apply to a quantity in {self.dimension}"
            )
        powers = dict(self._powers)
        power = powers.pop(source)
        target = transformation.to_unit
        powers[target] = powers.get(target, 0) + power

        result = PhysicalQuantity(
            transformation.apply_to_quantity(self._quantity), powers, registry=self._registry
        )
        result._preferred_units = {**self._preferred_units, target.quality: target}
        return result

    def _copy(self) -> PhysicalQuantity:
        return PhysicalQuantity._build(
            self._quantity, self._powers, self._preferred_units, self._registry
        )

    # -- arithmetic --------------------------------------------------------------

    def _coerce(self, other: Any) -> PhysicalQuantity | None:
        if isinstance(other, PhysicalQuantity):
            return other
        if isinstance(other, numbers.Real):
            return PhysicalQuantity._build(float(other), {}, {}, self._registry)
        return None

    def _like(self, other: PhysicalQuantity, verb: str) -> None:
        if self._powers != other._powers:
            raise IncompatibleUnitsError(
                f"Can only {verb} PhysicalQuantities with like units "
                f"({self.dimension} vs {other.dimension})"
            )

    def __add__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        self._like(other, "add")
        return PhysicalQuantity._build(
            self._quantity + other._quantity, self._powers, self._preferred_units, self._registry
        )

    def __radd__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + self

    def __sub__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        self._like(other, "subtract")
        return PhysicalQuantity._build(
            self._quantity - other._quantity, self._powers, self._preferred_units, self._registry
        )

    def __rsub__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        # On a quality collision the left operand's preference wins.
        preferred = {**other._preferred_units, **self._preferred_units}
        return PhysicalQuantity._build(
            self._quantity * other._quantity,
            _merge_powers(self._powers, other._powers),
            preferred,
            self._registry,
        )

    def __rmul__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other * self

    def __truediv__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self * other.inverse()

    def __rtruediv__(self, other: Any) -> PhysicalQuantity:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other / self

    def __pow__(self, exponent: int) -> PhysicalQuantity:
        if not isinstance(exponent, numbers.Integral):
            return NotImplemented
        if exponent < 0:
            return (self**-exponent).inverse()
        return PhysicalQuantity._build(
            self._quantity**exponent,
            {unit: power * exponent for unit, power in self._powers.items()},
            self._preferred_units if exponent else {},
            self._registry,
        )

    def __neg__(self) -> PhysicalQuantity:
        return PhysicalQuantity._build(
            -self._quantity, self._powers, self._preferred_units, self._registry
        )

    def __pos__(self) -> PhysicalQuantity:
        return self._copy()

    def __abs__(self) -> PhysicalQuantity:
        return PhysicalQuantity._build(
            abs(self._quantity), self._powers, self._preferred_units, self._registry
        )

    def inverse(self) -> PhysicalQuantity:
        """1 / self, displayed in base units."""
        powers = {unit: -power for unit, power in self._powers.items()}
        return PhysicalQuantity._build(
            1.0 / self._quantity, powers, _preferred_from(powers), self._registry
        )

    # -- comparison --------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return (
            format_for_equality(self._quantity) == format_for_equality(other._quantity)
            and self._powers == other._powers
        )

    def __hash__(self) -> int:
        # Dimensionless quantities compare equal to plain numbers.
        magnitude = float(format_for_equality(self._quantity))
        if not self._powers:
            return hash(magnitude)
        return hash((magnitude, frozenset(self._powers.items())))

    def _compare(self, other: Any) -> int | None:
        other = self._coerce(other)
        if other is None:
            return None
        if self._powers != other._powers:
            raise IncomparableUnitsError(
                "Only physical quantities of like units can be compared "
                f"({self.dimension} vs {other.dimension})"
            )
        return (self._quantity > other._quantity) - (self._quantity < other._quantity)

    def __lt__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    # -- rendering ---------------------------------------------------------------

    def _unit_text(self, display: Mapping[AnyUnit, int]) -> str:
        numerator = [_unit_token(u, p) for u, p in display.items() if p > 0]
        denominator = [_unit_token(u, -p) for u, p in display.items() if p < 0]
        text = UNIT_SEPARATOR.join(numerator) or "1"
        if denominator:
            text += "/" + UNIT_SEPARATOR.join(denominator)
        return text

    def to_string(self, fmt: str | None = None, precision: int | None = None) -> str:
        """Render as "<magnitude> <numerator>/<denominator>" in preferred units.

        Args:
            fmt: None for plain text ("4.8 m^2/s"), "html" for
                "4.8 m<sup>2</sup>/s" or "unicode" for "4.8 m²/s"
            precision: Significant digits (config.OUTPUT_PRECISION by default)
        """
        quantity, display = self._denormalized()
        return self._styled(f"{format_magnitude(quantity, precision)} {self._unit_text(display)}", fmt)

    @staticmethod
    def _styled(text: str, fmt: str | None) -> str:
        if fmt not in RENDER_STYLES:
            raise ValueError(f"Unknown render style {fmt!r}; use one of 'html', 'unicode'")
        if fmt == "html":
            return format_html_superscript(text)
        if fmt == "unicode":
            return format_superscript(text)
        return text

    def __format__(self, spec: str) -> str:
        # f"{q:html}", f"{q:unicode}" or a float spec for the magnitude: f"{q:.2f}"
        if spec in RENDER_STYLES:
            return self.to_string(spec or None)
        quantity, display = self._denormalized()
        return f"{format(quantity, spec)} {self._unit_text(display)}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PhysicalQuantity({self.to_string()!r})"
