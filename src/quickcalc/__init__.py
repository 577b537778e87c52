"""quickcalc - dimensional unit calculator for a quick-launcher."""

from .calc.engine import calculate, evaluate_unit_expression
from .errors import UnitCalcError

__version__ = "0.3.0"

__all__ = ["calculate", "evaluate_unit_expression", "UnitCalcError", "__version__"]
