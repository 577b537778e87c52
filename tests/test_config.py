from quickcalc import calculate
from quickcalc.config import Settings, get_settings, reset_settings


def test_defaults():
    settings = get_settings()
    assert settings == Settings()
    assert settings.decimals == 5
    assert settings.long_names is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("QUICKCALC_DECIMALS", "2")
    monkeypatch.setenv("QUICKCALC_LONG_NAMES", "yes")
    monkeypatch.setenv("QUICKCALC_LOG_LEVEL", "debug")
    monkeypatch.setenv("QUICKCALC_WORKERS", "0")
    reset_settings()
    settings = get_settings()
    assert settings.decimals == 2
    assert settings.long_names is True
    assert settings.log_level == "DEBUG"
    assert settings.workers == 1


def test_invalid_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("QUICKCALC_MAX_INPUT", "lots")
    monkeypatch.setenv("QUICKCALC_LOOKUP_LIMIT", "")
    reset_settings()
    settings = get_settings()
    assert settings.max_input == 512
    assert settings.lookup_limit == 8


def test_settings_are_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("QUICKCALC_DECIMALS", "1")
    assert get_settings() is first
    reset_settings()
    assert get_settings().decimals == 1


def test_calculate_reads_environment(monkeypatch):
    monkeypatch.setenv("QUICKCALC_LONG_NAMES", "1")
    monkeypatch.setenv("QUICKCALC_DECIMALS", "1")
    reset_settings()
    assert calculate("1 h as min").display == "60 minutes"
    assert calculate("10/3").display == "3.3"
