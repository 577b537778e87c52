"""Query interpreters producing launcher entries."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Protocol

from ..calc.engine import calculate
from ..config import Settings, get_settings
from ..errors import UnitCalcError
from ..units.formatting import format_number
from ..units.registry import UnitDef, UnitRegistry, default_registry
from .entries import LOWEST_PRIORITY, ResultEntry

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 26


class QueryInterpreter(Protocol):
    name: str

    def interpret(self, query: str) -> List[ResultEntry]:
        ...


def rank_match(query: str, candidate: str, catalog_size: int) -> Optional[float]:
    """Rank ``candidate`` for ``query``, or ``None`` if it does not match.

    Each typed character is worth one point and a catalog of ``n`` entries
    costs ``log26(n)``. Substring matches additionally lose ``1 +
    log26(unmatched + 1)`` so every prefix match outranks every substring
    match of the same query.
    """

    needle = query.strip().lower()
    haystack = candidate.lower()
    if not needle or needle not in haystack:
        return None
    rank = len(needle) - math.log(max(catalog_size, 1), ALPHABET_SIZE)
    if haystack.startswith(needle):
        return rank
    unmatched = len(haystack) - len(needle)
    return rank - 1.0 - math.log(unmatched + 1, ALPHABET_SIZE)


class UnitCalcInterpreter:
    """Evaluate the query as a unit expression."""

    name = "unit-calc"

    def __init__(self, registry: Optional[UnitRegistry] = None, settings: Optional[Settings] = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.settings = settings or get_settings()

    def interpret(self, query: str) -> List[ResultEntry]:
        if not query.strip():
            return []
        try:
            result = calculate(query, registry=self.registry, settings=self.settings)
        except UnitCalcError as exc:
            return [ResultEntry(f"error: {exc}", LOWEST_PRIORITY, self.name)]
        return [ResultEntry(result.display, float(len(query)), self.name, result.display)]


class UnitLookupInterpreter:
    """List catalog units whose name or abbreviation matches the query."""

    name = "unit-lookup"

    def __init__(self, registry: Optional[UnitRegistry] = None, settings: Optional[Settings] = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.settings = settings or get_settings()

    def interpret(self, query: str) -> List[ResultEntry]:
        size = len(self.registry)
        entries: List[ResultEntry] = []
        for unit in self.registry.search(query):
            labels = (unit.name, unit.plural, unit.abbreviation)
            ranks = [r for r in (rank_match(query, label, size) for label in labels) if r is not None]
            if not ranks:
                continue
            text = describe_unit(unit, self.settings.decimals)
            entries.append(ResultEntry(text, max(ranks), self.name, unit.abbreviation))
        entries.sort(key=lambda entry: entry.priority, reverse=True)
        return entries[: self.settings.lookup_limit]


def describe_unit(unit: UnitDef, decimals: int = 5) -> str:
    si = unit.si
    dims = si.dims.render()
    value = format_number(si.value, decimals) if 1e-3 <= abs(si.value) < 1e9 else f"{si.value:g}"
    return f"{unit.name} ({unit.abbreviation}) = {value} {dims}".rstrip()


__all__ = [
    "QueryInterpreter",
    "UnitCalcInterpreter",
    "UnitLookupInterpreter",
    "rank_match",
    "describe_unit",
]
