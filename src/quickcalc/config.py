"""Environment-driven settings.

All options are read from ``QUICKCALC_*`` environment variables:

``QUICKCALC_DECIMALS``
    Decimal places kept before trailing zeros are trimmed (default 5).
``QUICKCALC_LONG_NAMES``
    Render unit names (``hours``) instead of abbreviations (``h``).
``QUICKCALC_LOG_LEVEL``
    Level used by the CLI when configuring logging (default ``WARNING``).
``QUICKCALC_MAX_INPUT``
    Longest expression accepted, in characters (default 512).
``QUICKCALC_WORKERS``
    Thread pool size of the query dispatcher (default 4).
``QUICKCALC_LOOKUP_LIMIT``
    Maximum entries produced by the unit lookup interpreter (default 8).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(minimum, int(raw))
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    decimals: int = 5
    long_names: bool = False
    log_level: str = "WARNING"
    max_input: int = 512
    workers: int = 4
    lookup_limit: int = 8

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            decimals=_env_int("QUICKCALC_DECIMALS", 5),
            long_names=_env_bool("QUICKCALC_LONG_NAMES"),
            log_level=os.getenv("QUICKCALC_LOG_LEVEL", "WARNING").upper(),
            max_input=_env_int("QUICKCALC_MAX_INPUT", 512, minimum=1),
            workers=_env_int("QUICKCALC_WORKERS", 4, minimum=1),
            lookup_limit=_env_int("QUICKCALC_LOOKUP_LIMIT", 8, minimum=1),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings"]
