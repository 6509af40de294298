from datetime import date

from reward_search.cabins import CHEAPEST_SEARCH_CABINS, CABIN_TABLE_BY_CLASS
from reward_search.dataset import generate_sample_data
from reward_search.models import AwardEconomy, RewardFlightLatest
from reward_search.repository import SqlRewardFlightRepository

START = date(2024, 6, 1)


def test_dataset_generator_creates_records(session_factory):
    summary = generate_sample_data(session_factory, routes=2, days=10, start=START)

    with session_factory() as session:
        flight_count = session.query(RewardFlightLatest).count()
        economy_count = session.query(AwardEconomy).count()
    assert flight_count == 20
    assert summary["flights"] == 20
    assert 0 < economy_count <= 20
    assert summary["awards"] >= economy_count


def test_seeded_range_search_stays_within_bounds(session_factory):
    generate_sample_data(session_factory, routes=1, days=30, start=START)
    repo = SqlRewardFlightRepository(session_factory)

    departures = []
    number = 0
    while True:
        page = repo.range_search("LHR", "JFK", "VS", date(2024, 6, 5), date(2024, 6, 20), number, 4)
        if not page.content:
            break
        departures.extend(flight.departure for flight in page.content)
        assert all(flight.carrier_code == "VS" for flight in page.content)
        number += 1

    assert len(departures) == page.total_elements
    assert departures == sorted(departures)
    assert all("2024-06-05" <= departure <= "2024-06-20" for departure in departures)


def test_seeded_cheapest_search_only_returns_bookable_offers(session_factory):
    generate_sample_data(session_factory, routes=1, days=60, start=START)
    repo = SqlRewardFlightRepository(session_factory)

    for cabin in CHEAPEST_SEARCH_CABINS:
        slot = CABIN_TABLE_BY_CLASS[cabin].slot
        page = repo.cheapest_search("LHR", "JFK", cabin, 0, 100)
        keys = []
        for flight in page.content:
            offer = getattr(flight, slot)
            assert offer is not None
            assert offer.cabin_points_value is not None
            assert offer.cabin_class_seat_count > 0
            keys.append((offer.cabin_points_value, flight.departure))
        assert keys == sorted(keys)
        assert len(page.content) == page.total_elements


def test_same_seed_gives_same_results(session_factory, tmp_path):
    from reward_search.database import init_db

    other_factory = init_db(f"sqlite+pysqlite:///{tmp_path / 'other.db'}")
    generate_sample_data(session_factory, routes=1, days=15, start=START, seed=7)
    generate_sample_data(other_factory, routes=1, days=15, start=START, seed=7)

    first = SqlRewardFlightRepository(session_factory).range_search(
        "LHR", "JFK", "VS", START, date(2024, 6, 15), 0, 20
    )
    second = SqlRewardFlightRepository(other_factory).range_search(
        "LHR", "JFK", "VS", START, date(2024, 6, 15), 0, 20
    )

    assert first == second
