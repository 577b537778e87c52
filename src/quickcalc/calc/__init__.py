"""Evaluation, unit selection and the calculator entry points."""

from .engine import calculate, evaluate_unit_expression
from .selector import CalcResult

__all__ = ["calculate", "evaluate_unit_expression", "CalcResult"]
