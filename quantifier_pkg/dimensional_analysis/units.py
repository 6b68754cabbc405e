"""Physical dimensions.

Provides:
- Dimension class: the quality-exponent signature of a composite unit
- Common base and derived dimensions (LENGTH, VELOCITY, FORCE, ...)

Two quantities can be added or compared only when their units match; two
units can be converted into one another only when their dimensions match.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Sequence

import numpy as np

# SI qualities in the conventional [M, L, T, I, Θ, N, J] order
SI_QUALITIES = (
    "mass",
    "length",
    "time",
    "electric_current",
    "temperature",
    "amount_of_substance",
    "luminous_intensity",
)

_QUALITY_SYMBOLS = {
    "mass": "M",
    "length": "L",
    "time": "T",
    "electric_current": "I",
    "temperature": "Θ",
    "amount_of_substance": "N",
    "luminous_intensity": "J",
}


@dataclass(frozen=True)
class Dimension:
    """Integer exponents of physical qualities.

    Qualities are open-ended, so custom base units (say, "currency") get a
    dimension too. Zero exponents are never stored.

    Examples:
        - Force: Dimension.of(mass=1, length=1, time=-2)  # kg·m/s²
        - Velocity: Dimension.of(length=1, time=-1)  # m/s

    Attributes:
        exponents: Sorted (quality, exponent) pairs
    """

    exponents: tuple[tuple[str, int], ...] = ()

    @classmethod
    def of(cls, **exponents: int) -> Dimension:
        return cls.from_mapping(exponents)

    @classmethod
    def from_mapping(cls, exponents: Mapping[str, int]) -> Dimension:
        return cls(tuple(sorted((q, int(e)) for q, e in exponents.items() if e != 0)))

    def as_dict(self) -> dict[str, int]:
        return dict(self.exponents)

    def __getitem__(self, quality: str) -> int:
        return self.as_dict().get(quality, 0)

    def _combine(self, other: Dimension, sign: int) -> Dimension:
        merged = self.as_dict()
        for quality, exp in other.exponents:
            merged[quality] = merged.get(quality, 0) + sign * exp
        return Dimension.from_mapping(merged)

    def __mul__(self, other: Dimension) -> Dimension:
        """Multiply dimensions (add exponents)."""
        return self._combine(other, 1)

    def __truediv__(self, other: Dimension) -> Dimension:
        """Divide dimensions (subtract exponents)."""
        return self._combine(other, -1)

    def __pow__(self, n: int) -> Dimension:
        """Raise dimension to a power (multiply exponents)."""
        return Dimension.from_mapping({q: e * n for q, e in self.exponents})

    def is_dimensionless(self) -> bool:
        return not self.exponents

    def to_vector(self, qualities: Sequence[str] = SI_QUALITIES) -> np.ndarray:
        """Exponents as a numpy array in the given quality order."""
        exps = self.as_dict()
        unknown = set(exps) - set(qualities)
        if unknown:
            raise ValueError(f"Qualities {sorted(unknown)} are not in the vector basis")
        return np.array([exps.get(q, 0) for q in qualities], dtype=int)

    @staticmethod
    def from_vector(v: np.ndarray, qualities: Sequence[str] = SI_QUALITIES) -> Dimension:
        """Create Dimension from an exponent vector."""
        v = np.asarray(v).astype(int)
        return Dimension.from_mapping({q: int(e) for q, e in zip(qualities, v)})

    def __str__(self) -> str:
        parts = []
        for quality, exp in self.exponents:
            name = _QUALITY_SYMBOLS.get(quality, quality)
            parts.append(name if exp == 1 else f"{name}^{exp}")
        return " ".join(parts) if parts else "1 (dimensionless)"


# Common dimensions
DIMENSIONLESS = Dimension()
MASS = Dimension.of(mass=1)
LENGTH = Dimension.of(length=1)
TIME = Dimension.of(time=1)
CURRENT = Dimension.of(electric_current=1)
TEMPERATURE = Dimension.of(temperature=1)
AMOUNT = Dimension.of(amount_of_substance=1)
LUMINOSITY = Dimension.of(luminous_intensity=1)

# Derived dimensions
AREA = LENGTH**2
VOLUME = LENGTH**3
VELOCITY = LENGTH / TIME
ACCELERATION = LENGTH / TIME**2
FORCE = MASS * ACCELERATION
ENERGY = FORCE * LENGTH
POWER = ENERGY / TIME
FREQUENCY = DIMENSIONLESS / TIME
PRESSURE = FORCE / LENGTH**2
DENSITY = MASS / LENGTH**3
CHARGE = CURRENT * TIME
VOLTAGE = ENERGY / CHARGE
