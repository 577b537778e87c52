"""Evaluate expression trees over the quantity algebra."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import EvaluationError
from ..parser.nodes import (
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
from ..units.dimensions import Quantity
from ..units.registry import UnitDef


def evaluate(node: Node) -> Quantity:
    """Evaluate ``node`` bottom-up and return the resulting quantity."""

    if isinstance(node, NumberLiteral):
        return Quantity(node.quantity.value, node.quantity.dims)
    if isinstance(node, Bracket):
        return evaluate(node.inner)
    if isinstance(node, Negate):
        return -evaluate(node.operand)
    if isinstance(node, BinaryOp):
        return _binary(node)
    raise EvaluationError(f"unsupported node {type(node).__name__}")


def _binary(node: BinaryOp) -> Quantity:
    left = evaluate(node.left)
    right = evaluate(node.right)
    op = node.op
    if op is BinaryOperator.PLUS:
        return left + right
    if op is BinaryOperator.MINUS:
        return left - right
    if op in (BinaryOperator.MULT, BinaryOperator.IMPLICIT_MULT):
        return left * right
    if op is BinaryOperator.DIV:
        return left / right
    if op is BinaryOperator.POW:
        return left.pow_int(right.to_int())
    raise EvaluationError(f"unsupported operator {op.name}")


@dataclass(frozen=True)
class Evaluation:
    """Result of evaluating a conversion tree.

    ``target`` is set for explicit conversions; ``target_unit`` only for
    conversions to a single catalog unit, ``target_label`` for display.
    """

    quantity: Quantity
    target: Optional[Quantity] = None
    target_unit: Optional[UnitDef] = None
    target_label: Optional[str] = None


def evaluate_conversion(tree: Conversion) -> Evaluation:
    try:
        return _evaluate_conversion(tree)
    except RecursionError:
        raise EvaluationError("expression is nested too deeply") from None


def _evaluate_conversion(tree: Conversion) -> Evaluation:
    quantity = evaluate(tree.expression)
    if isinstance(tree, PrimitiveConversion):
        return Evaluation(quantity, tree.unit.si, tree.unit, tree.unit.abbreviation)
    if isinstance(tree, ComplexConversion):
        return Evaluation(quantity, evaluate(tree.target), None, tree.target.render())
    if isinstance(tree, Calculation):
        return Evaluation(quantity)
    raise EvaluationError(f"unsupported conversion {type(tree).__name__}")


__all__ = ["evaluate", "evaluate_conversion", "Evaluation"]
