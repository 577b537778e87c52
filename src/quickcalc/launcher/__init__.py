"""Launcher-facing interpreters and the query dispatcher."""

from .dispatcher import QueryDispatcher, build_dispatcher
from .entries import LOWEST_PRIORITY, ResultEntry
from .interpreters import UnitCalcInterpreter, UnitLookupInterpreter, rank_match

__all__ = [
    "QueryDispatcher",
    "build_dispatcher",
    "ResultEntry",
    "LOWEST_PRIORITY",
    "UnitCalcInterpreter",
    "UnitLookupInterpreter",
    "rank_match",
]
