import json

from click.testing import CliRunner

from quickcalc.cli.main import cli


def test_eval_prints_display():
    result = CliRunner().invoke(cli, ["eval", "5m", "as", "cm"])
    assert result.exit_code == 0
    assert result.output.strip() == "500 cm"


def test_eval_long_names():
    result = CliRunner().invoke(cli, ["eval", "--long-names", "1 h as min"])
    assert result.exit_code == 0
    assert result.output.strip() == "60 minutes"


def test_eval_json_output():
    result = CliRunner().invoke(cli, ["eval", "--json", "5m as cm"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["ok"] is True
    assert payload["display"] == "500 cm"
    assert payload["unit"] == "cm"


def test_eval_error_exits_nonzero():
    result = CliRunner().invoke(cli, ["eval", "5 m + 3 s"])
    assert result.exit_code == 1
    assert "error:" in result.output


def test_eval_error_json():
    result = CliRunner().invoke(cli, ["eval", "--json", "5 m as s"])
    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload == {"ok": False, "kind": "incompatible_unit", "message": "cannot convert m to s"}


def test_units_lists_matches():
    result = CliRunner().invoke(cli, ["units", "kilometer"])
    assert result.exit_code == 0
    assert result.output.strip() == "kilometer (km) = 1000 m"


def test_query_prints_ranked_entries():
    result = CliRunner().invoke(cli, ["query", "5m as cm"])
    assert result.exit_code == 0
    first = result.output.splitlines()[0]
    assert first.endswith("[unit-calc] 500 cm")


def test_repl_evaluates_until_blank_line():
    result = CliRunner().invoke(cli, ["repl"], input="2+2\n5 m + 3 s\n\n")
    assert result.exit_code == 0
    assert "4" in result.output
    assert "error: cannot add m and s" in result.output


def test_query_renders_lowest_priority_as_negative_infinity():
    result = CliRunner().invoke(cli, ["query", "5 m + 3 s"])
    assert result.exit_code == 0
    line = result.output.splitlines()[0]
    assert line == "    -inf  [unit-calc] error: cannot add m and s"
