import pytest

from quickcalc.errors import LexError
from quickcalc.parser import lexer
from quickcalc.parser.lexer import TokenKind, lex
from quickcalc.units.registry import default_registry


def _kinds(text):
    return [token.kind for token in lex(text, default_registry())]


def test_numbers_and_units_lex_greedily():
    tokens = lex("5km", default_registry())
    assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.UNIT]
    assert tokens[1].text == "km"
    assert tokens[1].unit.name == "kilometer"


def test_longest_alias_wins_over_shorter_ones():
    tokens = lex("5min", default_registry())
    assert [t.text for t in tokens] == ["5", "min"]
    assert lex("mm", default_registry())[0].unit.name == "millimeter"


def test_whitespace_is_dropped():
    assert _kinds("  12   m ") == [TokenKind.NUMBER, TokenKind.UNIT]


def test_conversion_keywords():
    for text in ("5 m as cm", "5 m to cm", "5 m -> cm", "5 m => cm"):
        assert _kinds(text) == [TokenKind.NUMBER, TokenKind.UNIT, TokenKind.CONVERT, TokenKind.UNIT]


def test_operator_spellings():
    assert _kinds("2×3") == [TokenKind.NUMBER, TokenKind.MULT, TokenKind.NUMBER]
    assert _kinds("2·3") == [TokenKind.NUMBER, TokenKind.MULT, TokenKind.NUMBER]
    assert _kinds("6÷3") == [TokenKind.NUMBER, TokenKind.DIV, TokenKind.NUMBER]
    assert _kinds("2**3") == [TokenKind.NUMBER, TokenKind.POWER, TokenKind.NUMBER]
    assert _kinds("1 <= 2") == [TokenKind.NUMBER, TokenKind.LOWER_EQ, TokenKind.NUMBER]


def test_superscript_digits_become_power():
    tokens = lex("m²", default_registry())
    assert [t.kind for t in tokens] == [TokenKind.UNIT, TokenKind.POWER, TokenKind.NUMBER]
    assert tokens[2].text == "2"
    assert [t.text for t in lex("s¹⁰", default_registry())] == ["s", "^", "10"]


def test_negative_superscript_becomes_signed_power():
    tokens = lex("s⁻¹", default_registry())
    assert [t.kind for t in tokens] == [TokenKind.UNIT, TokenKind.POWER, TokenKind.MINUS, TokenKind.NUMBER]
    assert tokens[-1].text == "1"


def test_decimal_point_is_its_own_token():
    assert _kinds("1.5") == [TokenKind.NUMBER, TokenKind.DOT, TokenKind.NUMBER]


def test_quoted_string():
    tokens = lex('"hello world"', default_registry())
    assert tokens[0].kind is TokenKind.STRING
    assert tokens[0].text == "hello world"


def test_unknown_character_raises_with_position():
    with pytest.raises(LexError) as excinfo:
        lex("5 $", default_registry())
    assert excinfo.value.position == 2
    assert "^" in str(excinfo.value)


def test_overlong_input_is_rejected():
    with pytest.raises(LexError):
        lex("1" * 20, default_registry(), max_length=10)


def test_long_input_only_tries_segments_up_to_the_longest_alias(monkeypatch):
    registry = default_registry()
    calls = []
    real_match = lexer.match_segment

    def counting(segment, position, reg):
        calls.append(segment)
        return real_match(segment, position, reg)

    monkeypatch.setattr(lexer, "match_segment", counting)
    text = "12 km + " * 60
    tokens = lex(text, registry)

    assert len(tokens) == 180
    window = max(registry.max_alias_length, 2)
    assert max(len(segment) for segment in calls) <= window
    assert len(calls) <= len(text) * window


def test_runs_longer_than_any_alias_still_lex_whole():
    registry = default_registry()
    digits = "7" * 60
    assert [t.text for t in lex(digits, registry)] == [digits]
    assert lex(f'"{"x" * 50}"', registry)[0].text == "x" * 50
    spaced = lex("1" + " " * 40 + "2", registry)
    assert [t.text for t in spaced] == ["1", "2"]
