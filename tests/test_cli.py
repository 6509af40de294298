import pytest

from reward_search import cli
from reward_search.cabins import CabinClass


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REWARD_SEARCH_DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.delenv("REWARD_SEARCH_USE_FIXTURES", raising=False)
    monkeypatch.delenv("REWARD_SEARCH_CARRIER_CODE", raising=False)
    return tmp_path


def test_range_with_fixtures_prints_table(store, capsys):
    exit_code = cli.main(["range", "lhr", "jfk", "--from", "2024-06-01", "--to", "2024-06-02", "--fixtures"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "LHR-JFK" in output
    assert "2024-06-02" in output
    assert "(2 flights, 10 per page)" in output


def test_seed_then_cheapest_search(store, capsys):
    assert cli.main(["seed", "--routes", "1", "--days", "20", "--start", "2024-06-01"]) == 0
    assert "Seeded 20 flights" in capsys.readouterr().out

    exit_code = cli.main(["cheapest", "LHR", "JFK", "economy", "--page-size", "3"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Economy" in output
    assert "3 per page" in output


def test_invalid_cabin_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        cli.parse_args(["cheapest", "LHR", "JFK", "first"])


def test_invalid_date_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        cli.parse_args(["range", "LHR", "JFK", "--from", "June", "--to", "2024-06-02"])


def test_cabin_argument_is_parsed_to_cabin_class():
    args = cli.parse_args(["cheapest", "LHR", "JFK", "business"])

    assert args.cabin is CabinClass.BUSINESS
