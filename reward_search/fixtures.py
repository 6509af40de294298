"""Deterministic in-memory repository for demos and tests without a live store."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from .cabins import CABIN_TABLE_BY_CLASS, CHEAPEST_SEARCH_CABINS, CabinClass
from .config import DEFAULT_CARRIER_CODE
from .entities import AwardOffer, Page, RewardFlight
from .pagination import slice_page, validate_page_request

CHEAPEST_FIXTURE_COUNT = 10


class FixtureRewardFlightRepository:
    """Generate plausible flights on demand instead of reading a database.

    ``scraped_at`` and ``start_date`` are fixed when the repository is built, so
    repeating a search returns the same page.
    """

    def __init__(
        self,
        *,
        scraped_at: Optional[datetime] = None,
        start_date: Optional[date] = None,
        carrier_code: str = DEFAULT_CARRIER_CODE,
    ) -> None:
        self.scraped_at = scraped_at or datetime.now(timezone.utc)
        self.start_date = start_date or self.scraped_at.date()
        self.carrier_code = carrier_code

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
        validate_page_request(page_number, page_size)
        flights: List[RewardFlight] = []
        current = from_date
        while current <= to_date:
            flights.append(
                RewardFlight(
                    id=f"mock-{origin}-{destination}-{current.isoformat()}",
                    origin=origin,
                    destination=destination,
                    departure=current.isoformat(),
                    carrier_code=carrier_code,
                    scraped_at=self.scraped_at,
                    award_economy=AwardOffer("mock-economy-id", 10000, True, 5, "5"),
                    award_business=AwardOffer("mock-business-id", 30000, False, 2, "2"),
                    award_premium_economy=AwardOffer("mock-premium-economy-id", 20000, True, 3, "3"),
                    award_first=None,
                )
            )
            current += timedelta(days=1)
        return slice_page(flights, page_number, page_size)

    def cheapest_search(
        self,
        origin: str,
        destination: str,
        cabin: CabinClass,
        page_number: int,
        page_size: int,
    ) -> Page[RewardFlight]:
        validate_page_request(page_number, page_size)
        if cabin not in CHEAPEST_SEARCH_CABINS:
            raise ValueError(f"cheapest search is not available for cabin {cabin}")
        slot = CABIN_TABLE_BY_CLASS[cabin].slot
        flights: List[RewardFlight] = []
        for index in range(CHEAPEST_FIXTURE_COUNT):
            flights.append(
                RewardFlight(
                    id=f"mock-{origin}-{destination}-{index}",
                    origin=origin,
                    destination=destination,
                    departure=(self.start_date + timedelta(days=index)).isoformat(),
                    carrier_code=self.carrier_code,
                    scraped_at=self.scraped_at,
                    award_economy=AwardOffer(
                        f"mock-economy-id-{index}", 10000 + index * 1000, True, 5, "5"
                    ),
                    award_business=AwardOffer(
                        f"mock-business-id-{index}", 30000 + index * 2000, False, 2, "2"
                    ),
                    award_premium_economy=AwardOffer(
                        f"mock-premium-economy-id-{index}", 20000 + index * 1500, True, 3, "3"
                    ),
                    award_first=None,
                )
            )

        def _bookable(flight: RewardFlight) -> bool:
            offer = getattr(flight, slot)
            return (
                offer is not None
                and offer.cabin_points_value is not None
                and (offer.cabin_class_seat_count or 0) > 0
            )

        eligible = [flight for flight in flights if _bookable(flight)]
        eligible.sort(key=lambda flight: (getattr(flight, slot).cabin_points_value, flight.departure))
        return slice_page(eligible, page_number, page_size)
