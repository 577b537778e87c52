"""Dimensional algebra for calculator quantities.

A :class:`Quantity` pairs a float with a :class:`DimensionVector`, the sparse
list of ``(BaseUnit, exponent)`` pairs describing its physical dimension.
Vectors are kept in canonical form at all times: one entry per base unit,
sorted by base unit, zero exponents dropped. Values are expressed relative to
the unprefixed base units (meter, gram, second, ...), so ``5 km`` is stored as
``Quantity(5000.0, m¹)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, NamedTuple, Optional, Tuple

from ..errors import DimensionMismatch, EvaluationError, InvalidExponent
from .formatting import SUPERSCRIPT_MINUS, superscript

INTEGER_TOLERANCE = 1e-10


class BaseUnit(IntEnum):
    """Physical base dimensions, in canonical order."""

    LENGTH = 0
    MASS = 1
    TIME = 2
    CURRENT = 3
    TEMPERATURE = 4
    AMOUNT = 5
    LUMINOUS_INTENSITY = 6
    BYTE = 7

    @property
    def symbol(self) -> str:
        return _BASE_SYMBOLS[self]


_BASE_SYMBOLS: Dict[BaseUnit, str] = {
    BaseUnit.LENGTH: "m",
    BaseUnit.MASS: "g",
    BaseUnit.TIME: "s",
    BaseUnit.CURRENT: "A",
    BaseUnit.TEMPERATURE: "K",
    BaseUnit.AMOUNT: "mol",
    BaseUnit.LUMINOUS_INTENSITY: "cd",
    BaseUnit.BYTE: "B",
}


class DimensionExponent(NamedTuple):
    base: BaseUnit
    exponent: int


@dataclass(frozen=True)
class DimensionVector:
    """Canonical mapping from base unit to a non-zero integer exponent."""

    terms: Tuple[DimensionExponent, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", _canonicalize(self.terms))

    @classmethod
    def of(cls, **exponents: int) -> "DimensionVector":
        """Build a vector from keyword exponents, e.g. ``of(length=1, time=-1)``."""

        return cls(tuple(DimensionExponent(BaseUnit[name.upper()], exp) for name, exp in exponents.items()))

    # -- Core algebra -----------------------------------------------------
    def __mul__(self, other: "DimensionVector") -> "DimensionVector":
        return DimensionVector(self.terms + other.terms)

    def __truediv__(self, other: "DimensionVector") -> "DimensionVector":
        return self * other.scaled(-1)

    def scaled(self, factor: int) -> "DimensionVector":
        return DimensionVector(tuple(DimensionExponent(t.base, t.exponent * factor) for t in self.terms))

    def is_empty(self) -> bool:
        return not self.terms

    def log_of(self, candidate: "DimensionVector") -> Optional[int]:
        """Return ``n`` such that ``self == candidate ** n``, or ``None``.

        Both vectors must list the same base units in the same order and every
        exponent must match for the same integer ``n``.
        """

        if len(self.terms) != len(candidate.terms) or not self.terms:
            return None
        log, remainder = divmod(self.terms[0].exponent, candidate.terms[0].exponent)
        if remainder != 0:
            return None
        for mine, theirs in zip(self.terms, candidate.terms):
            if mine.base != theirs.base or theirs.exponent * log != mine.exponent:
                return None
        return log

    def render(self) -> str:
        """Human readable form such as ``m² g/s²`` or ``s⁻¹``."""

        positive = [t for t in self.terms if t.exponent > 0]
        negative = [t for t in self.terms if t.exponent < 0]
        if not positive:
            return " ".join(
                f"{t.base.symbol}{SUPERSCRIPT_MINUS}{superscript(-t.exponent)}" for t in negative
            )
        text = " ".join(_render_term(t.base, t.exponent) for t in positive)
        for term in negative:
            text += "/" + _render_term(term.base, -term.exponent)
        return text

    def __str__(self) -> str:
        return self.render() or "dimensionless"


def _render_term(base: BaseUnit, exponent: int) -> str:
    if exponent == 1:
        return base.symbol
    return f"{base.symbol}{superscript(exponent)}"


def _canonicalize(terms: Iterable[DimensionExponent]) -> Tuple[DimensionExponent, ...]:
    merged: Dict[BaseUnit, int] = {}
    for base, exponent in terms:
        merged[BaseUnit(base)] = merged.get(BaseUnit(base), 0) + int(exponent)
    return tuple(
        DimensionExponent(base, exponent) for base, exponent in sorted(merged.items()) if exponent != 0
    )


DIMENSIONLESS = DimensionVector()


@dataclass(frozen=True)
class Quantity:
    """A float value with its dimension vector, relative to the base units."""

    value: float
    dims: DimensionVector = DIMENSIONLESS

    def __post_init__(self) -> None:
        value = float(self.value)
        if not math.isfinite(value):
            raise EvaluationError("result out of range")
        object.__setattr__(self, "value", value)

    def __add__(self, other: "Quantity") -> "Quantity":
        if self.dims != other.dims:
            raise DimensionMismatch(f"cannot add {self.dims} and {other.dims}")
        return Quantity(self.value + other.value, self.dims)

    def __sub__(self, other: "Quantity") -> "Quantity":
        if self.dims != other.dims:
            raise DimensionMismatch(f"cannot subtract {other.dims} from {self.dims}")
        return Quantity(self.value - other.value, self.dims)

    def __neg__(self) -> "Quantity":
        return Quantity(-self.value, self.dims)

    def __mul__(self, other: "Quantity") -> "Quantity":
        return Quantity(self.value * other.value, self.dims * other.dims)

    def __truediv__(self, other: "Quantity") -> "Quantity":
        if other.value == 0:
            raise EvaluationError("division by zero")
        return self * other.pow_int(-1)

    def pow_int(self, exponent: int) -> "Quantity":
        try:
            value = self.value ** exponent
        except ZeroDivisionError:
            raise EvaluationError("division by zero") from None
        except OverflowError:
            raise EvaluationError("result out of range") from None
        return Quantity(value, self.dims.scaled(exponent))

    def to_int(self) -> int:
        """Return the value as an exponent; it must be dimensionless and integral."""

        if not self.dims.is_empty():
            raise InvalidExponent("only integer exponents without units are allowed")
        rounded = round(self.value)
        if abs(rounded - self.value) >= INTEGER_TOLERANCE:
            raise InvalidExponent("only integer exponents without units are allowed")
        return int(rounded)


__all__ = [
    "BaseUnit",
    "DimensionExponent",
    "DimensionVector",
    "DIMENSIONLESS",
    "Quantity",
    "INTEGER_TOLERANCE",
]
