import pytest

from quickcalc.units.dimensions import DimensionVector
from quickcalc.units.registry import (
    BINARY_PREFIXES,
    SI_PREFIXES,
    UnitRegistry,
    apply_prefix,
    default_registry,
    expand,
    make_unit,
)

LENGTH = DimensionVector.of(length=1)


def _prefix(word):
    return next(p for p in SI_PREFIXES + BINARY_PREFIXES if p.word == word)


def test_make_unit_lists_abbreviation_name_and_plural_first():
    widget = make_unit("widget", "widgets", "wd", 2.0, LENGTH, aliases=("wdg", "wd"))
    assert widget.aliases == ("wd", "widget", "widgets", "wdg")
    assert widget.si.value == 2.0


def test_apply_prefix_uses_symbol_for_short_aliases_and_word_for_long():
    widget = make_unit("widget", "widgets", "wd", 2.0, LENGTH)
    kilo = apply_prefix(widget, _prefix("kilo"))
    assert kilo.name == "kilowidget"
    assert kilo.plural == "kilowidgets"
    assert kilo.abbreviation == "kwd"
    assert kilo.aliases == ("kwd", "kilowidget", "kilowidgets")
    assert kilo.si.value == pytest.approx(2000.0)
    assert kilo.si.dims == LENGTH


def test_micro_prefix_accepts_alternate_symbols():
    widget = make_unit("widget", "widgets", "wd", 1.0, LENGTH)
    micro = apply_prefix(widget, _prefix("micro"))
    assert micro.abbreviation == "µwd"
    for alias in ("µwd", "μwd", "uwd", "muwd", "microwidget"):
        assert alias in micro.aliases


def test_expand_keeps_base_unit_first():
    widget = make_unit("widget", "widgets", "wd", 1.0, LENGTH)
    units = expand(widget, SI_PREFIXES)
    assert units[0] is widget
    assert len(units) == len(SI_PREFIXES) + 1


def test_default_registry_resolves_prefixed_units():
    registry = default_registry()
    assert registry.lookup("km")[0].si.value == pytest.approx(1000.0)
    assert registry.lookup("kilometre")[0].abbreviation == "km"
    assert registry.lookup("cm")[0].si.value == pytest.approx(0.01)
    assert registry.lookup("kg")[0].si.value == pytest.approx(1000.0)
    assert registry.lookup("KiB")[0].si.value == 1024.0
    assert registry.lookup("kb")[0].si.value == pytest.approx(125.0)
    for alias in ("µm", "μm", "um", "micrometer"):
        assert registry.lookup(alias)[0].si.value == pytest.approx(1e-6)


def test_subunit_prefixes_only_apply_to_meter_and_liter():
    registry = default_registry()
    assert registry.lookup("dm")
    assert registry.lookup("mL")
    assert registry.lookup("cL")
    assert not registry.lookup("cs")
    assert not registry.lookup("cg")


def test_lookup_unknown_alias_is_empty():
    assert default_registry().lookup("furlong") == ()


def test_duplicate_aliases_are_kept_for_every_unit():
    first = make_unit("widget", "widgets", "w", 1.0, LENGTH)
    second = make_unit("whatsit", "whatsits", "w", 3.0, LENGTH)
    registry = UnitRegistry([first, second])
    assert registry.lookup("w") == (first, second)
    assert len(registry) == 2


def test_search_matches_names_case_insensitively():
    registry = default_registry()
    names = {unit.name for unit in registry.search("KILOMETER")}
    assert "kilometer" in names
    assert registry.search("   ") == []


def test_max_alias_length_covers_longest_alias():
    registry = default_registry()
    longest = max(len(alias) for unit in registry for alias in unit.aliases)
    assert registry.max_alias_length == longest


def test_label_switches_between_abbreviation_and_names():
    hour = default_registry().lookup("h")[0]
    assert hour.label("2") == "h"
    assert hour.label("2", long_names=True) == "hours"
    assert hour.label("1", long_names=True) == "hour"
