"""Recursive-descent grammar for calculator expressions.

Precedence, lowest first: conversion (``as``), addition/subtraction,
multiplication/division with implicit multiplication between numbers and
brackets, implicit multiplication involving units, powers, brackets, atoms.
Each level splits the token slice at its rightmost operator outside of
brackets, so chains of the same level group to the left: ``10-2-5`` is
``(10-2)-5``.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import ParseError
from ..units.dimensions import Quantity
from .lexer import OPERATOR_KINDS, Token, TokenKind
from .nodes import (
    BinaryOp,
    BinaryOperator,
    Bracket,
    Calculation,
    ComplexConversion,
    Conversion,
    Negate,
    Node,
    NumberLiteral,
    PrimitiveConversion,
)

logger = logging.getLogger(__name__)

Tokens = Sequence[Token]

MAX_NESTING = 64

_UNARY_CONTEXT = OPERATOR_KINDS | {TokenKind.OPEN}
_SIGNS = (TokenKind.PLUS, TokenKind.MINUS)
_BINARY_OPS = {
    TokenKind.PLUS: BinaryOperator.PLUS,
    TokenKind.MINUS: BinaryOperator.MINUS,
    TokenKind.MULT: BinaryOperator.MULT,
    TokenKind.DIV: BinaryOperator.DIV,
    TokenKind.POWER: BinaryOperator.POW,
}


def _context(tokens: Tokens) -> str:
    return " ".join(str(token) for token in tokens) or "<empty>"


def _depths(tokens: Tokens) -> List[int]:
    """Bracket depth in front of each token."""

    depths: List[int] = []
    depth = 0
    for token in tokens:
        depths.append(depth)
        if token.kind is TokenKind.OPEN:
            depth += 1
        elif token.kind is TokenKind.CLOSE:
            depth -= 1
    return depths


def _check_brackets(tokens: Tokens) -> None:
    depth = 0
    for token in tokens:
        if token.kind is TokenKind.OPEN:
            depth += 1
            if depth > MAX_NESTING:
                raise ParseError(f"brackets nested deeper than {MAX_NESTING} at position {token.position}")
        elif token.kind is TokenKind.CLOSE:
            depth -= 1
            if depth < 0:
                raise ParseError(f"unmatched ')' at position {token.position}")
    if depth:
        raise ParseError("unmatched '('")


def _is_unary(tokens: Tokens, index: int) -> bool:
    return index == 0 or tokens[index - 1].kind in _UNARY_CONTEXT


def _split_rightmost(
    tokens: Tokens,
    kinds: Tuple[TokenKind, ...],
    *,
    skip_unary: bool = False,
) -> Optional[Tuple[Tokens, Token, Tokens]]:
    depths = _depths(tokens)
    for index in range(len(tokens) - 1, -1, -1):
        token = tokens[index]
        if depths[index] != 0 or token.kind not in kinds:
            continue
        if skip_unary and _is_unary(tokens, index):
            continue
        return tokens[:index], token, tokens[index + 1 :]
    return None


def _split_adjacent(
    tokens: Tokens,
    rules: Sequence[Tuple[Tuple[TokenKind, ...], Tuple[TokenKind, ...]]],
    explicit: Tuple[TokenKind, ...] = (),
) -> Optional[Tuple[int, Optional[Token]]]:
    """Find the rightmost top-level split for one multiplication level.

    Returns ``(index, operator)``; ``operator`` is ``None`` for implicit
    multiplication, where ``index`` is the first token of the right operand.
    """

    depths = _depths(tokens)
    for index in range(len(tokens) - 1, -1, -1):
        if depths[index] != 0:
            continue
        token = tokens[index]
        if token.kind in explicit:
            return index, token
        if index == 0:
            continue
        previous = tokens[index - 1]
        for current_kinds, previous_kinds in rules:
            if token.kind in current_kinds and previous.kind in previous_kinds:
                return index, None
    return None


# -- Grammar levels -------------------------------------------------------
def parse_conversion(tokens: Tokens) -> Conversion:
    """Parse a full token list into a conversion tree."""

    _check_brackets(tokens)
    split = _split_rightmost(tokens, (TokenKind.CONVERT,))
    if split is None:
        return Calculation(parse_add_sub(tokens))

    left, _, right = split
    if len(right) == 1 and right[0].kind is TokenKind.UNIT and right[0].unit is not None:
        return PrimitiveConversion(parse_add_sub(left), right[0].unit)
    return ComplexConversion(parse_add_sub(left), parse_add_sub(right))


def parse_add_sub(tokens: Tokens) -> Node:
    split = _split_rightmost(tokens, _SIGNS, skip_unary=True)
    if split is None:
        return parse_mult_div(tokens)
    left, operator, right = split
    return BinaryOp(_BINARY_OPS[operator.kind], parse_add_sub(left), parse_add_sub(right))


_NUMERIC_RULES = (
    ((TokenKind.NUMBER, TokenKind.OPEN), (TokenKind.NUMBER, TokenKind.CLOSE)),
)

_UNIT_RULES = (
    ((TokenKind.UNIT,), (TokenKind.UNIT, TokenKind.NUMBER, TokenKind.CLOSE)),
    ((TokenKind.NUMBER, TokenKind.OPEN), (TokenKind.UNIT,)),
)


def _binary_split(
    tokens: Tokens,
    found: Tuple[int, Optional[Token]],
    recurse: Callable[[Tokens], Node],
) -> Node:
    index, operator = found
    if operator is None:
        return BinaryOp(BinaryOperator.IMPLICIT_MULT, recurse(tokens[:index]), recurse(tokens[index:]))
    return BinaryOp(_BINARY_OPS[operator.kind], recurse(tokens[:index]), recurse(tokens[index + 1 :]))


def parse_mult_div(tokens: Tokens) -> Node:
    """Explicit ``*``/``/`` and implicit products such as ``2(3+4)`` or ``3 4``."""

    found = _split_adjacent(tokens, _NUMERIC_RULES, explicit=(TokenKind.MULT, TokenKind.DIV))
    if found is None:
        return parse_unit_product(tokens)
    return _binary_split(tokens, found, parse_mult_div)


def parse_unit_product(tokens: Tokens) -> Node:
    """Implicit products involving units such as ``5kg``, ``kg m`` or ``(1+2)m``."""

    found = _split_adjacent(tokens, _UNIT_RULES)
    if found is not None:
        return _binary_split(tokens, found, parse_unit_product)
    if tokens and tokens[0].kind in _SIGNS:
        return _signed(tokens[0], parse_unit_product(tokens[1:]))
    return parse_power(tokens)


def parse_power(tokens: Tokens) -> Node:
    split = _split_rightmost(tokens, (TokenKind.POWER,))
    if split is None:
        return parse_bracket(tokens)
    left, _, right = split
    return BinaryOp(BinaryOperator.POW, parse_power(left), _parse_exponent(right))


def _parse_exponent(tokens: Tokens) -> Node:
    if tokens and tokens[0].kind in _SIGNS:
        return _signed(tokens[0], _parse_exponent(tokens[1:]))
    return parse_power(tokens)


def _signed(sign: Token, operand: Node) -> Node:
    return Negate(operand) if sign.kind is TokenKind.MINUS else operand


def parse_bracket(tokens: Tokens) -> Node:
    if (
        len(tokens) >= 2
        and tokens[0].kind is TokenKind.OPEN
        and tokens[-1].kind is TokenKind.CLOSE
        and all(depth > 0 for depth in _depths(tokens)[1:])
    ):
        return Bracket(parse_add_sub(tokens[1:-1]))
    return parse_atom(tokens)


def parse_atom(tokens: Tokens) -> Node:
    kinds = tuple(token.kind for token in tokens)
    if kinds == (TokenKind.NUMBER,):
        return _number(tokens[0].text, tokens[0].text)
    if kinds == (TokenKind.UNIT,):
        token = tokens[0]
        assert token.quantity is not None
        return NumberLiteral(token.quantity, token.text)
    if kinds == (TokenKind.DOT, TokenKind.NUMBER):
        text = f"0.{tokens[1].text}"
        return _number(text, f".{tokens[1].text}")
    if kinds == (TokenKind.NUMBER, TokenKind.DOT, TokenKind.NUMBER):
        text = f"{tokens[0].text}.{tokens[2].text}"
        return _number(text, text)
    if not tokens:
        raise ParseError("missing operand")
    if len(tokens) == 1:
        raise ParseError(f"unexpected token: {_context(tokens)}")
    raise ParseError(f"cannot parse '{_context(tokens)}' as a number")


def _number(text: str, label: str) -> NumberLiteral:
    return NumberLiteral(Quantity(float(text)), label)


def parse(tokens: List[Token]) -> Conversion:
    try:
        tree = parse_conversion(tokens)
    except RecursionError:
        raise ParseError("expression is nested too deeply") from None
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("parsed %s", tree.render())
    return tree


__all__ = [
    "parse",
    "parse_conversion",
    "parse_add_sub",
    "parse_mult_div",
    "parse_unit_product",
    "parse_power",
    "parse_bracket",
    "parse_atom",
]
