"""Text helpers for rendering numbers and exponents."""

from __future__ import annotations

from typing import Dict

SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
SUPERSCRIPT_MINUS = "⁻"

_TO_SUPERSCRIPT = str.maketrans({**{str(d): s for d, s in enumerate(SUPERSCRIPT_DIGITS)}, "-": SUPERSCRIPT_MINUS})
_FROM_SUPERSCRIPT: Dict[int, str] = {ord(s): str(d) for d, s in enumerate(SUPERSCRIPT_DIGITS)}


def superscript(exponent: int) -> str:
    """Render ``exponent`` with Unicode superscript glyphs (``-2`` -> ``⁻²``)."""

    return str(exponent).translate(_TO_SUPERSCRIPT)


def from_superscript(text: str) -> str:
    """Translate superscript digits in ``text`` back to ASCII digits."""

    return text.translate(_FROM_SUPERSCRIPT)


def is_superscript_digits(text: str) -> bool:
    return bool(text) and all(ch in SUPERSCRIPT_DIGITS for ch in text)


def format_number(value: float, decimals: int = 5) -> str:
    """Format ``value`` with ``decimals`` places, trimming trailing zeros and point.

    ``format_number(2.5)`` gives ``"2.5"``, ``format_number(500.0)`` gives
    ``"500"``. Values that round to zero always render as ``"0"``.
    """

    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


__all__ = [
    "SUPERSCRIPT_DIGITS",
    "SUPERSCRIPT_MINUS",
    "superscript",
    "from_superscript",
    "is_superscript_digits",
    "format_number",
]
