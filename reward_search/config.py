"""Environment driven settings for the reward search service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///reward_flights.db"
DEFAULT_CARRIER_CODE = "VS"
RANGE_SEARCH_PAGE_SIZE = 10
CHEAPEST_SEARCH_PAGE_SIZE = 50

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    carrier_code: str = DEFAULT_CARRIER_CODE
    use_fixtures: bool = False
    log_level: str = "INFO"
    echo_sql: bool = False


def load_settings() -> Settings:
    """Read settings from the environment, after loading a local ``.env`` file."""

    load_dotenv()
    database_url = os.environ.get(
        "REWARD_SEARCH_DATABASE_URL",
        os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
    )
    return Settings(
        database_url=database_url,
        carrier_code=os.environ.get("REWARD_SEARCH_CARRIER_CODE", DEFAULT_CARRIER_CODE).upper(),
        use_fixtures=_env_flag("REWARD_SEARCH_USE_FIXTURES"),
        log_level=os.environ.get("REWARD_SEARCH_LOG_LEVEL", "INFO").upper(),
        echo_sql=_env_flag("REWARD_SEARCH_ECHO_SQL"),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
