"""Reward flight search package: paginated queries over cached award availability."""
from typing import Any

from .cabins import CabinClass, parse_cheapest_cabin
from .database import create_session_factory, init_db
from .dataset import generate_sample_data
from .entities import AwardOffer, Page, RewardFlight
from .errors import DataAccessError, InvalidPageRequestError, MappingError, RewardSearchError
from .fixtures import FixtureRewardFlightRepository
from .repository import RewardFlightRepository, SqlRewardFlightRepository, build_repository
from .cli import main as cli_main


def create_app(*args: Any, **kwargs: Any):  # pragma: no cover - thin wrapper
    from .web import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "AwardOffer",
    "CabinClass",
    "DataAccessError",
    "FixtureRewardFlightRepository",
    "InvalidPageRequestError",
    "MappingError",
    "Page",
    "RewardFlight",
    "RewardFlightRepository",
    "RewardSearchError",
    "SqlRewardFlightRepository",
    "build_repository",
    "cli_main",
    "create_app",
    "create_session_factory",
    "generate_sample_data",
    "init_db",
    "parse_cheapest_cabin",
]
