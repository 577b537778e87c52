"""Exception hierarchy shared by the calculator pipeline."""

from __future__ import annotations


class UnitCalcError(ValueError):
    """Base class for every failure of a single calculator evaluation."""

    kind = "error"


class LexError(UnitCalcError):
    """Raised when no token matches at some position of the input."""

    kind = "lex"

    def __init__(self, message: str, text: str, position: int | None = None) -> None:
        pointer = ""
        if position is not None and 0 <= position <= len(text):
            pointer = f"\n{text}\n{' ' * position}^"
        super().__init__(f"{message}{pointer}")
        self.text = text
        self.position = position


class ParseError(UnitCalcError):
    """Raised when a token sequence does not fit the expression grammar."""

    kind = "parse"


class EvaluationError(UnitCalcError):
    """Raised when evaluating a well-formed tree fails numerically."""

    kind = "evaluation"


class DimensionMismatch(EvaluationError):
    """Raised when adding or subtracting quantities of different dimensions."""

    kind = "dimension_mismatch"


class InvalidExponent(EvaluationError):
    """Raised when an exponent is dimensioned or not an integer."""

    kind = "invalid_exponent"


class IncompatibleUnit(UnitCalcError):
    """Raised when a conversion target leaves a residual dimension."""

    kind = "incompatible_unit"


__all__ = [
    "UnitCalcError",
    "LexError",
    "ParseError",
    "EvaluationError",
    "DimensionMismatch",
    "InvalidExponent",
    "IncompatibleUnit",
]
