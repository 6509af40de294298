"""Count and page queries for the two reward flight search shapes.

Both shapes select the base flight columns plus every cabin's award columns
from a four-way left join, so a flight without an award in some cabin still
comes back with nulls for that cabin. Counts are issued separately with the
same predicates and must never be reported as zero when they fail.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session, aliased

from .cabins import AWARD_COLUMNS, CABIN_TABLES, CHEAPEST_SEARCH_CABINS, CabinClass
from .errors import DataAccessError
from .models import RewardFlightLatest
from .pagination import page_offset

logger = logging.getLogger(__name__)

_FLIGHT = aliased(RewardFlightLatest, name="rfl")
_AWARDS = {table.cabin: aliased(table.model, name=table.prefix) for table in CABIN_TABLES}

# cabin -> (joined award table, ordering column) for cheapest-first searches.
_CHEAPEST_DISPATCH: Dict[CabinClass, Tuple[Any, InstrumentedAttribute]] = {
    cabin: (_AWARDS[cabin], _AWARDS[cabin].cabin_points_value) for cabin in CHEAPEST_SEARCH_CABINS
}

_FLIGHT_COLUMNS = ("id", "origin", "destination", "departure", "carrier_code", "scraped_at")


def _joined_columns() -> List[ColumnElement]:
    columns: List[ColumnElement] = [getattr(_FLIGHT, name).label(name) for name in _FLIGHT_COLUMNS]
    for table in CABIN_TABLES:
        award = _AWARDS[table.cabin]
        columns.extend(getattr(award, name).label(table.label(name)) for name in AWARD_COLUMNS)
    return columns


def _joined_select() -> Select:
    stmt = select(*_joined_columns()).select_from(_FLIGHT)
    for table in CABIN_TABLES:
        award = _AWARDS[table.cabin]
        stmt = stmt.outerjoin(award, award.flight_id == _FLIGHT.id)
    return stmt


@dataclass(frozen=True)
class RangeSearchQuery:
    """Flights for one route and carrier departing within ``[from_date, to_date]``."""

    origin: str
    destination: str
    carrier_code: str
    from_date: date
    to_date: date

    def _filters(self) -> List[ColumnElement[bool]]:
        return [
            _FLIGHT.origin == self.origin,
            _FLIGHT.destination == self.destination,
            _FLIGHT.carrier_code == self.carrier_code,
            _FLIGHT.departure.between(self.from_date, self.to_date),
        ]

    def count_statement(self) -> Select:
        # Filters only touch the base table, so no join is needed to count.
        return select(func.count()).select_from(_FLIGHT).where(*self._filters())

    def page_statement(self, page_number: int, page_size: int) -> Select:
        return (
            _joined_select()
            .where(*self._filters())
            .order_by(_FLIGHT.departure.asc(), _FLIGHT.id.asc())
            .limit(page_size)
            .offset(page_offset(page_number, page_size))
        )

    def describe(self) -> str:
        return (
            f"range search origin={self.origin} destination={self.destination} "
            f"carrier_code={self.carrier_code} from={self.from_date} to={self.to_date}"
        )


@dataclass(frozen=True)
class CheapestSearchQuery:
    """Bookable flights for one route ordered by a cabin's points value."""

    origin: str
    destination: str
    cabin: CabinClass

    def __post_init__(self) -> None:
        if self.cabin not in _CHEAPEST_DISPATCH:
            raise ValueError(f"cheapest search is not available for cabin {self.cabin}")

    def _filters(self) -> List[ColumnElement[bool]]:
        award, points = _CHEAPEST_DISPATCH[self.cabin]
        return [
            _FLIGHT.origin == self.origin,
            _FLIGHT.destination == self.destination,
            points.is_not(None),
            award.cabin_class_seat_count > 0,
        ]

    def count_statement(self) -> Select:
        award, _ = _CHEAPEST_DISPATCH[self.cabin]
        return (
            select(func.count())
            .select_from(_FLIGHT)
            .join(award, award.flight_id == _FLIGHT.id)
            .where(*self._filters())
        )

    def page_statement(self, page_number: int, page_size: int) -> Select:
        _, points = _CHEAPEST_DISPATCH[self.cabin]
        return (
            _joined_select()
            .where(*self._filters())
            .order_by(points.asc(), _FLIGHT.departure.asc(), _FLIGHT.id.asc())
            .limit(page_size)
            .offset(page_offset(page_number, page_size))
        )

    def describe(self) -> str:
        return (
            f"cheapest search origin={self.origin} destination={self.destination} "
            f"cabin={self.cabin.value}"
        )


SearchQuery = Union[RangeSearchQuery, CheapestSearchQuery]


def fetch_total(session: Session, query: SearchQuery) -> int:
    logger.info("Executing count query for %s", query.describe())
    try:
        total = session.execute(query.count_statement()).scalar_one()
    except SQLAlchemyError as exc:
        logger.error("Count query failed for %s: %s", query.describe(), exc)
        raise DataAccessError(f"count query failed for {query.describe()}") from exc
    logger.debug("Count query returned %s", total)
    return int(total)


def fetch_page_rows(
    session: Session, query: SearchQuery, page_number: int, page_size: int
) -> Sequence[Mapping[str, Any]]:
    logger.info(
        "Executing page query for %s limit=%s offset=%s",
        query.describe(),
        page_size,
        page_offset(page_number, page_size),
    )
    try:
        rows = session.execute(query.page_statement(page_number, page_size)).mappings().all()
    except SQLAlchemyError as exc:
        logger.error("Page query failed for %s: %s", query.describe(), exc)
        raise DataAccessError(f"page query failed for {query.describe()}") from exc
    logger.debug("Page query returned %s rows", len(rows))
    return rows


def execute_search(
    session: Session, query: SearchQuery, page_number: int, page_size: int
) -> Tuple[int, Sequence[Mapping[str, Any]]]:
    """Run the count query, then the page query, on the same session."""

    total = fetch_total(session, query)
    rows = fetch_page_rows(session, query, page_number, page_size)
    return total, rows
