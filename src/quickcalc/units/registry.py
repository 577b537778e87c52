"""Catalog of units recognised by the calculator.

The catalog is generated from a short table of base definitions. Most base
units are expanded into SI-prefixed siblings by :func:`apply_prefix`, which
derives names, abbreviations and aliases mechanically instead of listing each
``kilometer``/``km`` pair by hand.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

from .dimensions import DIMENSIONLESS, DimensionVector, Quantity

logger = logging.getLogger(__name__)

SHORT_ALIAS_MAX = 3


@dataclass(frozen=True)
class UnitDef:
    """A displayable unit and the quantity one of it equals."""

    name: str
    plural: str
    abbreviation: str
    aliases: Tuple[str, ...]
    si: Quantity
    priority: float = 1.0

    def label(self, value_text: str | None = None, *, long_names: bool = False) -> str:
        """Name to print after ``value_text``."""

        if not long_names:
            return self.abbreviation
        return self.name if value_text == "1" else self.plural


class Prefix(NamedTuple):
    multiplier: float
    symbol: str
    word: str
    alternates: Tuple[str, ...] = ()


SI_PREFIXES: Tuple[Prefix, ...] = (
    Prefix(1e-24, "y", "yocto"),
    Prefix(1e-21, "z", "zepto"),
    Prefix(1e-18, "a", "atto"),
    Prefix(1e-15, "f", "femto"),
    Prefix(1e-12, "p", "pico"),
    Prefix(1e-9, "n", "nano"),
    Prefix(1e-6, "µ", "micro", ("μ", "u", "mu")),
    Prefix(1e-3, "m", "milli"),
    Prefix(1e3, "k", "kilo"),
    Prefix(1e6, "M", "mega"),
    Prefix(1e9, "G", "giga"),
    Prefix(1e12, "T", "tera"),
    Prefix(1e15, "P", "peta"),
    Prefix(1e18, "E", "exa"),
    Prefix(1e21, "Z", "zetta"),
    Prefix(1e24, "Y", "yotta"),
)

SUBUNIT_PREFIXES: Tuple[Prefix, ...] = (
    Prefix(1e-2, "c", "centi"),
    Prefix(1e-1, "d", "deci"),
)

BINARY_PREFIXES: Tuple[Prefix, ...] = (
    Prefix(2.0**10, "Ki", "kibi"),
    Prefix(2.0**20, "Mi", "mebi"),
    Prefix(2.0**30, "Gi", "gibi"),
    Prefix(2.0**40, "Ti", "tebi"),
    Prefix(2.0**50, "Pi", "pebi"),
    Prefix(2.0**60, "Ei", "exbi"),
)


def make_unit(
    name: str,
    plural: str,
    abbreviation: str,
    factor: float,
    dims: DimensionVector,
    *,
    aliases: Sequence[str] = (),
    priority: float = 1.0,
) -> UnitDef:
    """Create a unit whose aliases include its abbreviation, name and plural."""

    names = _unique((abbreviation, name, plural, *aliases))
    return UnitDef(name, plural, abbreviation, names, Quantity(factor, dims), priority)


def apply_prefix(unit: UnitDef, prefix: Prefix, short_max: int = SHORT_ALIAS_MAX) -> UnitDef:
    """Derive the ``prefix`` sibling of ``unit``.

    Aliases of at most ``short_max`` characters take the symbol prefix
    (``m`` -> ``km``), longer ones the word prefix (``meter`` -> ``kilometer``).
    """

    symbols = (prefix.symbol, *prefix.alternates)
    aliases: List[str] = []
    for alias in unit.aliases:
        if len(alias) <= short_max:
            aliases.extend(symbol + alias for symbol in symbols)
        else:
            aliases.append(prefix.word + alias)
    return UnitDef(
        name=prefix.word + unit.name,
        plural=prefix.word + unit.plural,
        abbreviation=prefix.symbol + unit.abbreviation,
        aliases=_unique(aliases),
        si=Quantity(unit.si.value * prefix.multiplier, unit.si.dims),
        priority=unit.priority,
    )


def expand(unit: UnitDef, *prefix_sets: Sequence[Prefix]) -> List[UnitDef]:
    """Return ``unit`` followed by its siblings for every prefix in ``prefix_sets``."""

    expanded = [unit]
    for prefixes in prefix_sets:
        expanded.extend(apply_prefix(unit, prefix) for prefix in prefixes)
    return expanded


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))


class UnitRegistry:
    """Immutable list of units with an alias index."""

    def __init__(self, units: Iterable[UnitDef]) -> None:
        self._units: Tuple[UnitDef, ...] = tuple(units)
        index: Dict[str, List[UnitDef]] = {}
        for unit in self._units:
            for alias in unit.aliases:
                index.setdefault(alias, []).append(unit)
        self._index: Dict[str, Tuple[UnitDef, ...]] = {k: tuple(v) for k, v in index.items()}
        self._max_alias = max((len(alias) for alias in self._index), default=0)

        shared = sorted(alias for alias, defs in self._index.items() if len(defs) > 1)
        if shared:
            logger.debug("ambiguous unit aliases: %s", ", ".join(shared))

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self):
        return iter(self._units)

    @property
    def units(self) -> Tuple[UnitDef, ...]:
        return self._units

    @property
    def max_alias_length(self) -> int:
        return self._max_alias

    def lookup(self, alias: str) -> Tuple[UnitDef, ...]:
        """Return every unit listing ``alias``; empty when nothing matches."""

        return self._index.get(alias, ())

    def search(self, text: str) -> List[UnitDef]:
        """Units whose name, plural or abbreviation contains ``text`` (case-insensitive)."""

        needle = text.strip().lower()
        if not needle:
            return []
        return [
            unit
            for unit in self._units
            if any(needle in label.lower() for label in (unit.name, unit.plural, unit.abbreviation))
        ]


# -- Default catalog ------------------------------------------------------
_L = DimensionVector.of(length=1)
_M = DimensionVector.of(mass=1)
_T = DimensionVector.of(time=1)

METRIC = 0.9
TIME = 0.95
IMPERIAL = 0.5
CONSTANT = 0.2
PERCENT = 0.1


def _default_units() -> List[UnitDef]:
    units: List[UnitDef] = []

    prefixed = [
        (make_unit("meter", "meters", "m", 1.0, _L, aliases=("metre", "metres")), SUBUNIT_PREFIXES),
        (make_unit("gram", "grams", "g", 1.0, _M), ()),
        (make_unit("second", "seconds", "s", 1.0, _T, aliases=("sec", "secs")), ()),
        (make_unit("ampere", "amperes", "A", 1.0, DimensionVector.of(current=1), aliases=("amp", "amps")), ()),
        (make_unit("kelvin", "kelvins", "K", 1.0, DimensionVector.of(temperature=1)), ()),
        (make_unit("mole", "moles", "mol", 1.0, DimensionVector.of(amount=1)), ()),
        (make_unit("candela", "candelas", "cd", 1.0, DimensionVector.of(luminous_intensity=1)), ()),
        (
            make_unit(
                "liter", "liters", "L", 1e-3, DimensionVector.of(length=3),
                aliases=("l", "litre", "litres"), priority=METRIC,
            ),
            SUBUNIT_PREFIXES,
        ),
        (make_unit("hertz", "hertz", "Hz", 1.0, DimensionVector.of(time=-1)), ()),
        (make_unit("newton", "newtons", "N", 1e3, DimensionVector.of(mass=1, length=1, time=-2)), ()),
        (make_unit("pascal", "pascals", "Pa", 1e3, DimensionVector.of(mass=1, length=-1, time=-2)), ()),
        (make_unit("joule", "joules", "J", 1e3, DimensionVector.of(mass=1, length=2, time=-2)), ()),
        (make_unit("watt", "watts", "W", 1e3, DimensionVector.of(mass=1, length=2, time=-3)), ()),
        (make_unit("coulomb", "coulombs", "C", 1.0, DimensionVector.of(current=1, time=1)), ()),
        (
            make_unit("volt", "volts", "V", 1e3, DimensionVector.of(mass=1, length=2, time=-3, current=-1)),
            (),
        ),
        (
            make_unit(
                "ohm", "ohms", "Ω", 1e3, DimensionVector.of(mass=1, length=2, time=-3, current=-2),
            ),
            (),
        ),
    ]
    for unit, extra in prefixed:
        units.extend(expand(unit, SI_PREFIXES, extra))

    byte = make_unit("byte", "bytes", "B", 1.0, DimensionVector.of(byte=1))
    bit = make_unit("bit", "bits", "b", 0.125, DimensionVector.of(byte=1), priority=METRIC)
    units.extend(expand(byte, SI_PREFIXES, BINARY_PREFIXES))
    units.extend(expand(bit, SI_PREFIXES, BINARY_PREFIXES))

    units.extend(
        [
            make_unit("minute", "minutes", "min", 60.0, _T, aliases=("mins",), priority=TIME),
            make_unit("hour", "hours", "h", 3600.0, _T, aliases=("hr", "hrs"), priority=TIME),
            make_unit("day", "days", "d", 86400.0, _T, priority=TIME),
            make_unit("week", "weeks", "wk", 604800.0, _T, priority=TIME),
            make_unit("year", "years", "yr", 31557600.0, _T, aliases=("yrs",), priority=TIME),
            make_unit("inch", "inches", "in", 0.0254, _L, priority=IMPERIAL),
            make_unit("foot", "feet", "ft", 0.3048, _L, priority=IMPERIAL),
            make_unit("yard", "yards", "yd", 0.9144, _L, priority=IMPERIAL),
            make_unit("mile", "miles", "mi", 1609.344, _L, priority=IMPERIAL),
            make_unit("ounce", "ounces", "oz", 28.349523125, _M, priority=IMPERIAL),
            make_unit("pound", "pounds", "lb", 453.59237, _M, aliases=("lbs",), priority=IMPERIAL),
            make_unit(
                "gallon", "gallons", "gal", 0.003785411784, DimensionVector.of(length=3), priority=IMPERIAL,
            ),
            make_unit("pi", "pi", "π", math.pi, DIMENSIONLESS, priority=CONSTANT),
            make_unit("percent", "percent", "%", 0.01, DIMENSIONLESS, priority=PERCENT),
        ]
    )
    return units


@lru_cache(maxsize=1)
def default_registry() -> UnitRegistry:
    """Build the default catalog once per process."""

    registry = UnitRegistry(_default_units())
    logger.debug("unit registry built with %d units", len(registry))
    return registry


__all__ = [
    "UnitDef",
    "Prefix",
    "SI_PREFIXES",
    "SUBUNIT_PREFIXES",
    "BINARY_PREFIXES",
    "SHORT_ALIAS_MAX",
    "UnitRegistry",
    "apply_prefix",
    "expand",
    "make_unit",
    "default_registry",
]
