from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict

import pytest

from reward_search.database import create_session_factory, session_scope
from reward_search.dataset import add_award, add_reward_flight
from reward_search.models import Base

SCRAPED_AT = datetime(2024, 5, 31, 6, 0, tzinfo=timezone.utc)


@pytest.fixture
def session_factory(tmp_path):
    engine, factory = create_session_factory(f"sqlite+pysqlite:///{tmp_path / 'rewards.db'}")
    Base.metadata.create_all(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def seed_flight(session_factory):
    """Insert one flight plus the given awards and return the flight id.

    Awards are passed per slot, e.g. ``award_business={"cabin_points_value":
    25000, "seat_count": 2}``.
    """

    def _seed(
        departure: date,
        *,
        origin: str = "LHR",
        destination: str = "JFK",
        carrier_code: str = "VS",
        **awards: Dict[str, object],
    ) -> int:
        with session_scope(session_factory) as session:
            flight = add_reward_flight(
                session,
                origin=origin,
                destination=destination,
                departure=departure,
                carrier_code=carrier_code,
                scraped_at=SCRAPED_AT,
            )
            for slot, values in awards.items():
                add_award(session, slot, flight_id=flight.id, **values)
            return flight.id

    return _seed
