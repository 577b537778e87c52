"""Quantity algebra and the unit catalog."""

from .dimensions import DIMENSIONLESS, BaseUnit, DimensionExponent, DimensionVector, Quantity
from .registry import UnitDef, UnitRegistry, default_registry

__all__ = [
    "BaseUnit",
    "DimensionExponent",
    "DimensionVector",
    "DIMENSIONLESS",
    "Quantity",
    "UnitDef",
    "UnitRegistry",
    "default_registry",
]
