"""Choose a display unit for a quantity and render the final result.

When the expression names no target, every catalog unit whose dimension
vector is an integer power of the result's is tried; the candidate whose
number prints shortest (fewest characters, fewest decimals) wins, with the
unit priority breaking ties and a small penalty for powered units.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import EvaluationError, IncompatibleUnit
from ..units.dimensions import Quantity
from ..units.formatting import format_number, superscript
from ..units.registry import UnitDef, UnitRegistry
from .evaluator import Evaluation

POWER_PENALTY = 0.1


@dataclass(frozen=True)
class UnitChoice:
    unit: UnitDef
    exponent: int
    value_text: str
    score: float


@dataclass(frozen=True)
class CalcResult:
    """Structured outcome of one evaluation."""

    expression: str
    display: str
    value: str
    unit: Optional[str]
    exponent: int
    si_value: float
    dimensions: str


def score_value_text(value_text: str, priority: float, exponent: int = 1) -> float:
    """Legibility score: shorter numbers with fewer decimals score higher."""

    length = len(value_text)
    point = value_text.find(".")
    decimals = length - (point if point >= 0 else length)
    score = -length - decimals + priority
    if exponent != 1:
        score -= POWER_PENALTY
    return score


def select_unit(quantity: Quantity, registry: UnitRegistry, decimals: int = 5) -> Optional[UnitChoice]:
    """Best catalog unit for ``quantity`` or ``None`` when nothing fits."""

    best: Optional[UnitChoice] = None
    for unit in registry:
        exponent = quantity.dims.log_of(unit.si.dims)
        if exponent is None:
            continue
        try:
            scaled = quantity / unit.si.pow_int(exponent)
        except EvaluationError:
            continue
        value_text = format_number(scaled.value, decimals)
        if value_text == "0":
            continue
        score = score_value_text(value_text, unit.priority, exponent)
        if best is None or score > best.score:
            best = UnitChoice(unit, exponent, value_text, score)
    return best


def convert(quantity: Quantity, target: Quantity, label: str) -> float:
    """Express ``quantity`` as a multiple of ``target``."""

    ratio = quantity / target
    if not ratio.dims.is_empty():
        raise IncompatibleUnit(f"cannot convert {quantity.dims} to {label}")
    return ratio.value


def format_evaluation(
    expression: str,
    evaluation: Evaluation,
    registry: UnitRegistry,
    *,
    decimals: int = 5,
    long_names: bool = False,
) -> CalcResult:
    quantity = evaluation.quantity
    dims_text = quantity.dims.render()

    def result(value_text: str, unit: Optional[str], exponent: int = 1) -> CalcResult:
        display = f"{value_text} {unit}" if unit else value_text
        return CalcResult(expression, display, value_text, unit, exponent, quantity.value, dims_text)

    if evaluation.target is not None:
        label = evaluation.target_label or ""
        value_text = format_number(convert(quantity, evaluation.target, label), decimals)
        if evaluation.target_unit is not None:
            label = evaluation.target_unit.label(value_text, long_names=long_names)
        return result(value_text, label)

    choice = select_unit(quantity, registry, decimals)
    if choice is None:
        return result(format_number(quantity.value, decimals), dims_text or None)

    label = choice.unit.label(choice.value_text, long_names=long_names)
    if choice.exponent != 1:
        label += superscript(choice.exponent)
    return result(choice.value_text, label, choice.exponent)


__all__ = [
    "CalcResult",
    "UnitChoice",
    "POWER_PENALTY",
    "score_value_text",
    "select_unit",
    "convert",
    "format_evaluation",
]
