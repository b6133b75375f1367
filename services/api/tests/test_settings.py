import pytest

from dealscan.settings import Settings


def test_junk_defaults():
    s = Settings(_env_file=None)
    assert s.junk_refresh_interval_seconds == 1800
    assert s.junk_seller_penalty_threshold == 3
    assert s.junk_seller_penalty_per_report == 0.05
    assert s.junk_seller_penalty_cap == 0.20
    assert s.junk_learned_keyword_penalty == 0.15
    assert s.junk_catalog_lookup_limit == 500


def test_junk_settings_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("JUNK_REFRESH_INTERVAL_SECONDS", "60")
    monkeypatch.setenv("JUNK_SELLER_PENALTY_THRESHOLD", "5")
    monkeypatch.setenv("JUNK_BACKGROUND_REFRESH", "false")
    s = Settings(_env_file=None)
    assert s.junk_refresh_interval_seconds == 60
    assert s.junk_seller_penalty_threshold == 5
    assert s.junk_background_refresh is False


def test_async_database_url_rewrites_driver():
    s = Settings(_env_file=None, database_url="postgresql://u:p@db.example.com:5432/dealscan")
    assert s.async_database_url == "postgresql+asyncpg://u:p@db.example.com:5432/dealscan"
    assert s.asyncpg_connect_args == {}


def test_railway_internal_host_disables_ssl():
    s = Settings(_env_file=None, database_url="postgresql://u:p@postgres.railway.internal:5432/db")
    assert s.asyncpg_connect_args == {"ssl": False, "timeout": 20}
