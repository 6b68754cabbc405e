"""Exception types raised by the quantifier package."""


class QuantifierError(Exception):
    """Base class for all quantifier errors."""


class RegistryError(QuantifierError):
    """Raised when the unit registry rejects a registration or lookup."""


class DuplicateQualityError(RegistryError):
    """A base unit is already registered for this quality."""


class DuplicateSymbolError(RegistryError):
    """The symbol is already taken by a base unit, unit or alias."""


class UnknownBaseUnitError(RegistryError):
    """A unit referenced a base unit that is not registered."""


class UnitNotFoundError(RegistryError, KeyError):
    """No unit or base unit is registered under the symbol."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return Exception.__str__(self)


class IncompatibleUnitsError(QuantifierError):
    """Arithmetic or conversion requested between mismatched units."""


class IncomparableUnitsError(QuantifierError, TypeError):
    """Ordering requested between quantities of different unit powers."""


class TransformationError(QuantifierError):
    """Base class for transformation errors."""


class TransformationSumError(TransformationError):
    """Two transformations whose endpoints do not chain were added."""


class ParseError(QuantifierError, ValueError):
    """Text could not be read as a magnitude or quantity expression."""
