import pytest

from quickcalc.config import reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "QUICKCALC_DECIMALS",
        "QUICKCALC_LONG_NAMES",
        "QUICKCALC_LOG_LEVEL",
        "QUICKCALC_MAX_INPUT",
        "QUICKCALC_WORKERS",
        "QUICKCALC_LOOKUP_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
