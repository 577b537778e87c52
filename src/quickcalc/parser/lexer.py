"""Greedy longest-match tokenizer for calculator input."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..errors import LexError
from ..units.dimensions import Quantity
from ..units.formatting import SUPERSCRIPT_DIGITS, SUPERSCRIPT_MINUS, from_superscript, is_superscript_digits
from ..units.registry import UnitDef, UnitRegistry

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NUMBER = "number"
    STRING = "string"
    PLUS = "+"
    MINUS = "-"
    MULT = "*"
    DIV = "/"
    POWER = "^"
    LOWER = "<"
    LOWER_EQ = "<="
    HIGHER = ">"
    HIGHER_EQ = ">="
    EQ = "=="
    NEQ = "!="
    CONVERT = "as"
    DOT = "."
    OPEN = "("
    CLOSE = ")"
    UNIT = "unit"


OPERATOR_KINDS = frozenset(
    {
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.MULT,
        TokenKind.DIV,
        TokenKind.POWER,
        TokenKind.LOWER,
        TokenKind.LOWER_EQ,
        TokenKind.HIGHER,
        TokenKind.HIGHER_EQ,
        TokenKind.EQ,
        TokenKind.NEQ,
        TokenKind.CONVERT,
    }
)

ATOMIC: Dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "×": TokenKind.MULT,
    "·": TokenKind.MULT,
    "/": TokenKind.DIV,
    "÷": TokenKind.DIV,
    "^": TokenKind.POWER,
    "**": TokenKind.POWER,
    "<=": TokenKind.LOWER_EQ,
    "<": TokenKind.LOWER,
    ">=": TokenKind.HIGHER_EQ,
    ">": TokenKind.HIGHER,
    "==": TokenKind.EQ,
    "!=": TokenKind.NEQ,
    "(": TokenKind.OPEN,
    ")": TokenKind.CLOSE,
    ".": TokenKind.DOT,
    "as": TokenKind.CONVERT,
    "to": TokenKind.CONVERT,
    "->": TokenKind.CONVERT,
    "=>": TokenKind.CONVERT,
}

_DIGITS_RE = re.compile(r"[0-9]+")
_RUN_RE = re.compile(rf'[0-9]+|\s+|"[^"]*"|{SUPERSCRIPT_MINUS}?[{SUPERSCRIPT_DIGITS}]+')
_ATOMIC_WIDTH = max(len(text) for text in ATOMIC)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int = 0
    quantity: Optional[Quantity] = None
    unit: Optional[UnitDef] = None

    def __str__(self) -> str:
        if self.kind is TokenKind.STRING:
            return f'"{self.text}"'
        return self.text


def match_segment(segment: str, position: int, registry: UnitRegistry) -> Optional[List[Token]]:
    """Tokens for ``segment`` if it matches as a whole, otherwise ``None``.

    An empty list means the segment matched but produces no token (whitespace).
    """

    kind = ATOMIC.get(segment)
    if kind is not None:
        return [Token(kind, segment, position)]
    if _DIGITS_RE.fullmatch(segment):
        return [Token(TokenKind.NUMBER, segment, position)]
    if segment.isspace():
        return []
    if len(segment) >= 2 and segment[0] == '"' and segment[-1] == '"' and '"' not in segment[1:-1]:
        return [Token(TokenKind.STRING, segment[1:-1], position)]
    if is_superscript_digits(segment):
        return [
            Token(TokenKind.POWER, "^", position),
            Token(TokenKind.NUMBER, from_superscript(segment), position),
        ]
    if segment[0] == SUPERSCRIPT_MINUS and is_superscript_digits(segment[1:]):
        return [
            Token(TokenKind.POWER, "^", position),
            Token(TokenKind.MINUS, "-", position),
            Token(TokenKind.NUMBER, from_superscript(segment[1:]), position + 1),
        ]
    units = registry.lookup(segment)
    if units:
        unit = units[0]
        return [Token(TokenKind.UNIT, segment, position, unit.si, unit)]
    return None


def lex(text: str, registry: UnitRegistry, *, max_length: int | None = None) -> List[Token]:
    """Split ``text`` into tokens, always taking the longest match first.

    Raises :class:`LexError` when some position admits no match at any length.
    """

    if max_length is not None and len(text) > max_length:
        raise LexError(f"input longer than {max_length} characters", text[:max_length], None)

    window = max(registry.max_alias_length, _ATOMIC_WIDTH)
    tokens: List[Token] = []
    start = 0
    while start < len(text):
        run = _RUN_RE.match(text, start)
        longest = max(window, run.end() - start if run else 0)
        end = min(len(text), start + longest)
        while end > start:
            matched = match_segment(text[start:end], start, registry)
            if matched is not None:
                tokens.extend(matched)
                break
            end -= 1
        else:
            raise LexError(f"unrecognized token '{text[start]}'", text, start)
        start = end

    logger.debug("lexed %r into %d tokens", text, len(tokens))
    return tokens


__all__ = ["Token", "TokenKind", "OPERATOR_KINDS", "ATOMIC", "lex", "match_segment"]
