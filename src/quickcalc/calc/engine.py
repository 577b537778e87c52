"""Entry points wiring lexer, grammar, evaluator and formatter together."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import Settings, get_settings
from ..errors import UnitCalcError
from ..observability import log_event
from ..parser.grammar import parse
from ..parser.lexer import lex
from ..units.registry import UnitRegistry, default_registry
from .evaluator import evaluate_conversion
from .selector import CalcResult, format_evaluation

logger = logging.getLogger(__name__)


def calculate(
    text: str,
    *,
    registry: Optional[UnitRegistry] = None,
    settings: Optional[Settings] = None,
    long_names: Optional[bool] = None,
) -> CalcResult:
    """Evaluate ``text`` and return the structured result.

    Raises a :class:`~quickcalc.errors.UnitCalcError` subclass when the text
    cannot be tokenized, parsed, evaluated or converted.
    """

    registry = registry if registry is not None else default_registry()
    settings = settings or get_settings()
    if long_names is None:
        long_names = settings.long_names

    try:
        tokens = lex(text, registry, max_length=settings.max_input)
        tree = parse(tokens)
        evaluation = evaluate_conversion(tree)
        result = format_evaluation(
            text, evaluation, registry, decimals=settings.decimals, long_names=long_names
        )
    except UnitCalcError as exc:
        log_event("calc.error", expression=text, kind=exc.kind, error=str(exc))
        raise

    log_event("calc.evaluate", expression=text, display=result.display)
    return result


def evaluate_unit_expression(
    text: str,
    *,
    registry: Optional[UnitRegistry] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Return the formatted result of ``text`` such as ``"500 cm"``."""

    return calculate(text, registry=registry, settings=settings).display


__all__ = ["calculate", "evaluate_unit_expression"]
