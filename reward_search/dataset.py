"""Utilities to populate a local store with sample reward flights for tests and demos."""
from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Optional, Sequence, Tuple

from sqlalchemy.orm import Session, sessionmaker

from .cabins import CABIN_TABLES
from .database import session_scope
from .models import RewardFlightLatest

ROUTES: Sequence[Tuple[str, str]] = (
    ("LHR", "JFK"),
    ("LHR", "LAX"),
    ("LHR", "BOS"),
    ("MAN", "JFK"),
    ("LHR", "SFO"),
    ("LHR", "DEL"),
    ("LHR", "JNB"),
    ("LHR", "HKG"),
)
CARRIERS = ("VS", "VS", "VS", "DL")
BASE_POINTS = {
    "award_economy": 10000,
    "award_premium_economy": 20000,
    "award_business": 30000,
    "award_first": 60000,
}
# Chance that a cabin has an award row at all for a given flight.
OFFER_PROBABILITY = {
    "award_economy": 0.9,
    "award_premium_economy": 0.6,
    "award_business": 0.7,
    "award_first": 0.1,
}


def add_reward_flight(
    session: Session,
    *,
    origin: str,
    destination: str,
    departure: date,
    carrier_code: str,
    scraped_at: datetime,
) -> RewardFlightLatest:
    flight = RewardFlightLatest(
        origin=origin,
        destination=destination,
        departure=departure,
        carrier_code=carrier_code,
        scraped_at=scraped_at,
    )
    session.add(flight)
    session.flush()
    return flight


def add_award(
    session: Session,
    slot: str,
    *,
    flight_id: int,
    cabin_points_value: Optional[int],
    seat_count: Optional[int],
    is_saver_award: Optional[bool] = None,
    seat_count_string: Optional[str] = None,
):
    """Attach an award row to ``flight_id`` in the table backing ``slot``."""

    model = next(table.model for table in CABIN_TABLES if table.slot == slot)
    if seat_count_string is None and seat_count is not None:
        seat_count_string = str(seat_count)
    award = model(
        flight_id=flight_id,
        cabin_points_value=cabin_points_value,
        is_saver_award=is_saver_award,
        cabin_class_seat_count=seat_count,
        cabin_class_seat_count_string=seat_count_string,
    )
    session.add(award)
    session.flush()
    return award


def generate_sample_data(
    session_factory: sessionmaker[Session],
    *,
    routes: int = 4,
    days: int = 30,
    start: Optional[date] = None,
    seed: int = 42,
) -> Dict[str, int]:
    """Populate the store with deterministic pseudo-random flights and awards."""

    rng = random.Random(seed)
    start = start or date.today()
    scraped_at = datetime.combine(start, time(6, 0), tzinfo=timezone.utc)
    counts = {"flights": 0, "awards": 0}
    with session_scope(session_factory) as session:
        for origin, destination in ROUTES[:routes]:
            for offset in range(days):
                flight = add_reward_flight(
                    session,
                    origin=origin,
                    destination=destination,
                    departure=start + timedelta(days=offset),
                    carrier_code=rng.choice(CARRIERS),
                    scraped_at=scraped_at,
                )
                counts["flights"] += 1
                for slot, base in BASE_POINTS.items():
                    if rng.random() > OFFER_PROBABILITY[slot]:
                        continue
                    saver = rng.random() < 0.5
                    points: Optional[int] = (base // 2 if saver else base) + rng.randint(0, 20) * 500
                    if rng.random() < 0.05:
                        points = None
                    add_award(
                        session,
                        slot,
                        flight_id=flight.id,
                        cabin_points_value=points,
                        seat_count=rng.choice((0, 1, 2, 3, 5, 9)),
                        is_saver_award=saver,
                    )
                    counts["awards"] += 1
    return counts
