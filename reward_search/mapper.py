"""Turn flattened, left-joined result rows back into nested reward flights."""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from .cabins import CABIN_TABLES, CabinTable
from .entities import AwardOffer, RewardFlight
from .errors import MappingError

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _optional(row: Mapping[str, Any], column: str, expected: Type[V]) -> Optional[V]:
    """Read ``column`` as ``expected``; a null, missing or mistyped value is ``None``."""

    value = row.get(column)
    if value is None:
        return None
    # bool is an int subclass and must not pass as a count or points value.
    if expected is int and isinstance(value, bool):
        return None
    if not isinstance(value, expected):
        return None
    return value


def _identifier(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    return str(value)


def _required_text(row: Mapping[str, Any], column: str) -> str:
    value = row.get(column)
    if not isinstance(value, str) or not value:
        raise MappingError(column, value)
    return value


def format_departure(value: Any) -> str:
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise MappingError("departure", value)
    return value.strftime("%Y-%m-%d")


def extract_offer(row: Mapping[str, Any], table: CabinTable) -> Optional[AwardOffer]:
    """Build the offer for one cabin, or ``None`` when its join did not match.

    Presence is decided by the joined identifier alone. Attribute columns are
    read independently so one unreadable value only blanks that field.
    """

    offer_id = _identifier(row.get(table.label("id")))
    if offer_id is None:
        return None
    return AwardOffer(
        id=offer_id,
        cabin_points_value=_optional(row, table.label("cabin_points_value"), int),
        is_saver_award=_optional(row, table.label("is_saver_award"), bool),
        cabin_class_seat_count=_optional(row, table.label("cabin_class_seat_count"), int),
        cabin_class_seat_count_string=_optional(
            row, table.label("cabin_class_seat_count_string"), str
        ),
    )


def map_row(row: Mapping[str, Any]) -> RewardFlight:
    flight_id = _identifier(row.get("id"))
    if flight_id is None:
        raise MappingError("id", row.get("id"))
    scraped_at = row.get("scraped_at")
    if not isinstance(scraped_at, datetime):
        raise MappingError("scraped_at", scraped_at)
    # SQLite drops the offset on read; stored capture times are UTC.
    if scraped_at.tzinfo is None:
        scraped_at = scraped_at.replace(tzinfo=timezone.utc)

    offers: Dict[str, Optional[AwardOffer]] = {
        table.slot: extract_offer(row, table) for table in CABIN_TABLES
    }
    return RewardFlight(
        id=flight_id,
        origin=_required_text(row, "origin"),
        destination=_required_text(row, "destination"),
        departure=format_departure(row.get("departure")),
        carrier_code=_required_text(row, "carrier_code"),
        scraped_at=scraped_at,
        **offers,
    )


def map_rows(rows: Iterable[Mapping[str, Any]]) -> List[RewardFlight]:
    flights: List[RewardFlight] = []
    for position, row in enumerate(rows):
        try:
            flights.append(map_row(row))
        except MappingError:
            logger.error("Could not map row %s (flight id %r)", position, row.get("id"))
            raise
    return flights
