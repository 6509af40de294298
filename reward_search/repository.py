"""Repository contract for reward flight searches and its database implementation."""
from __future__ import annotations

import logging
from datetime import date
from typing import Protocol

from sqlalchemy.orm import Session, sessionmaker

from .cabins import CabinClass
from .config import Settings
from .database import create_session_factory, read_scope
from .entities import Page, RewardFlight
from .fixtures import FixtureRewardFlightRepository
from .mapper import map_rows
from .pagination import paginate, validate_page_request
from .queries import CheapestSearchQuery, RangeSearchQuery, SearchQuery, execute_search

logger = logging.getLogger(__name__)


class RewardFlightRepository(Protocol):
    """What the HTTP layer and CLI depend on.

    Implementations raise :class:`~reward_search.errors.RewardSearchError`
    subclasses when a search fails and
    :class:`~reward_search.errors.InvalidPageRequestError` for a page size
    below one or a negative page number. An empty page always means the search
    succeeded with nothing to show.
    """

    def range_search(
        self,
        origin: str,
        destination: str,
        carrier_code: str,
        from_date: date,
        to_date: date,
        page_number: int,
        page_size: int,
    ) -> Page[RewardFlight]:
        ...

    def cheapest_search(
        self,
        origin: str,
        destination: str,
        cabin: CabinClass,
        page_number: int,
        page_size: int,
    ) -> Page[RewardFlight]:
        ...


class SqlRewardFlightRepository:
    """Answer searches from the reward flight tables.

    Each search opens its own session and issues the count and the page query
    in one transaction; the repository itself keeps no per-request state.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def _search(self, query: SearchQuery, page_number: int, page_size: int) -> Page[RewardFlight]:
        validate_page_request(page_number, page_size)
        with read_scope(self.session_factory) as session:
            total, rows = execute_search(session, query, page_number, page_size)
        flights = map_rows(rows)
        logger.info(
            "%s returned %s of %s flights (page %s)",
            query.describe(),
            len(flights),
            total,
            page_number,
        )
        return paginate(flights, total, page_number, page_size)

    def range_search(
        self,
        origin: str,
        destination: str,
        carrier_code: str,
        from_date: date,
        to_date: date,
        page_number: int,
        page_size: int,
    ) -> Page[RewardFlight]:
        query = RangeSearchQuery(
            origin=origin,
            destination=destination,
            carrier_code=carrier_code,
            from_date=from_date,
            to_date=to_date,
        )
        return self._search(query, page_number, page_size)

    def cheapest_search(
        self,
        origin: str,
        destination: str,
        cabin: CabinClass,
        page_number: int,
        page_size: int,
    ) -> Page[RewardFlight]:
        query = CheapestSearchQuery(origin=origin, destination=destination, cabin=cabin)
        return self._search(query, page_number, page_size)


def build_repository(settings: Settings) -> RewardFlightRepository:
    """Return the repository the configured service should answer from."""

    if settings.use_fixtures:
        logger.info("Serving reward flights from the fixture repository")
        return FixtureRewardFlightRepository(carrier_code=settings.carrier_code)
    _, session_factory = create_session_factory(settings.database_url, echo=settings.echo_sql)
    return SqlRewardFlightRepository(session_factory)
