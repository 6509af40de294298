from reward_search.config import DEFAULT_DATABASE_URL, load_settings
from reward_search.fixtures import FixtureRewardFlightRepository
from reward_search.repository import SqlRewardFlightRepository, build_repository

ENV_NAMES = (
    "REWARD_SEARCH_DATABASE_URL",
    "DATABASE_URL",
    "REWARD_SEARCH_CARRIER_CODE",
    "REWARD_SEARCH_USE_FIXTURES",
    "REWARD_SEARCH_LOG_LEVEL",
    "REWARD_SEARCH_ECHO_SQL",
)


def _clear_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch, tmp_path):
    _clear_env(monkeypatch, tmp_path)

    settings = load_settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.carrier_code == "VS"
    assert settings.use_fixtures is False
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch, tmp_path):
    _clear_env(monkeypatch, tmp_path)
    monkeypatch.setenv("DATABASE_URL", "postgresql://ignored/db")
    monkeypatch.setenv("REWARD_SEARCH_DATABASE_URL", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("REWARD_SEARCH_CARRIER_CODE", "ba")
    monkeypatch.setenv("REWARD_SEARCH_USE_FIXTURES", "yes")
    monkeypatch.setenv("REWARD_SEARCH_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.database_url == "sqlite+pysqlite:///:memory:"
    assert settings.carrier_code == "BA"
    assert settings.use_fixtures is True
    assert settings.log_level == "DEBUG"


def test_database_url_falls_back_to_generic_variable(monkeypatch, tmp_path):
    _clear_env(monkeypatch, tmp_path)
    monkeypatch.setenv("DATABASE_URL", "sqlite+pysqlite:///fallback.db")

    assert load_settings().database_url == "sqlite+pysqlite:///fallback.db"


def test_build_repository_picks_implementation(monkeypatch, tmp_path):
    _clear_env(monkeypatch, tmp_path)
    monkeypatch.setenv("REWARD_SEARCH_DATABASE_URL", "sqlite+pysqlite:///:memory:")

    assert isinstance(build_repository(load_settings()), SqlRewardFlightRepository)

    monkeypatch.setenv("REWARD_SEARCH_USE_FIXTURES", "true")
    assert isinstance(build_repository(load_settings()), FixtureRewardFlightRepository)
