"""Composable unit transformations.

A Transformation converts a single magnitude from one unit to another. It
is an ordered chain of unary numeric functions plus its two endpoints.
Transformations are added to chain them:

    mm -> m  +  m -> ft  ==  mm -> ft

Only the to-base and from-base rules of each unit are registered; any
unit-to-unit conversion is synthesized by adding the two through the shared
base unit.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Sequence

from .. import config
from ..types import TransformationSumError

Operation = Callable[[float], float]


def _identity(x: float) -> float:
    return x


class Transformation:
    """An ordered list of unary operations between two units.

    Attributes:
        from_unit: Unit the input magnitude is expressed in
        to_unit: Unit the output magnitude is expressed in
        ops: Operations applied left to right
    """

    __slots__ = ("from_unit", "to_unit", "ops")

    def __init__(self, from_unit: Any, to_unit: Any, ops: Operation | Iterable[Operation]):
        self.from_unit = from_unit
        self.to_unit = to_unit
        if callable(ops):
            ops = (ops,)
        self.ops: tuple[Operation, ...] = tuple(ops)

    @classmethod
    def identity(cls, unit: Any) -> Transformation:
        """The no-op transformation from a unit to itself."""
        return cls(unit, unit, (_identity,))

    @classmethod
    def null(cls) -> Transformation:
        """Identity transformation with no endpoints."""
        return cls(None, None, (_identity,))

    @property
    def is_identity(self) -> bool:
        return self.from_unit == self.to_unit

    def apply_to_quantity(self, quantity: float) -> float:
        """Fold the operations over a plain number."""
        for op in self.ops:
            quantity = op(quantity)
        return quantity

    __call__ = apply_to_quantity

    def probe(self, probes: Sequence[float] | None = None) -> list[float]:
        """Outputs at the probe inputs."""
        if probes is None:
            probes = config.TRANSFORMATION_PROBES
        return [float(self.apply_to_quantity(p)) for p in probes]

    def agrees_with(self, other: Transformation) -> bool:
        """True when both transformations give the same output at every probe.

        Outputs match when they agree to EQUALITY_PRECISION digits, or when
        they differ by less than TRANSFORMATION_ZERO_TOLERANCE times the
        largest output of either side.
        """
        ours, theirs = self.probe(), other.probe()
        scale = max((abs(v) for v in ours + theirs if math.isfinite(v)), default=0.0)
        abs_tol = scale * config.TRANSFORMATION_ZERO_TOLERANCE
        rel_tol = 10.0 ** (1 - config.EQUALITY_PRECISION)
        return all(
            a == b or math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
            for a, b in zip(ours, theirs)
        )

    def __add__(self, other: Any) -> Transformation:
        if not isinstance(other, Transformation):
            raise TransformationSumError(
                "Incompatible summand types (each must be a Transformation)"
            )
        if self.to_unit != other.from_unit:
            raise TransformationSumError(
                f"Incompatible summand types (units don't match: "
                f"{_symbol(self.to_unit)} -> {_symbol(other.from_unit)})"
            )
        return Transformation(self.from_unit, other.to_unit, self.ops + other.ops)

    def __eq__(self, other: object) -> bool:
        # Functions cannot be compared structurally. Two transformations are
        # equal when their endpoints match and they agree on every probe.
        if not isinstance(other, Transformation):
            return NotImplemented
        return (
            self.from_unit == other.from_unit
            and self.to_unit == other.to_unit
            and self.agrees_with(other)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Transformation({_symbol(self.from_unit)} -> {_symbol(self.to_unit)}, "
            f"{len(self.ops)} op{'s' if len(self.ops) != 1 else ''})"
        )


def _symbol(unit: Any) -> str:
    return getattr(unit, "symbol", repr(unit))
