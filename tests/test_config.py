from pathlib import Path

from salesboard.core.config import DatabaseSettings, load_settings
from salesboard.core.database import engine_options


def test_connection_parts_build_url():
    url = DatabaseSettings(host="db", user="app", password="s3cret", database="restaurant", port=3306).sqlalchemy_url()

    assert url.drivername == "mysql+pymysql"
    assert (url.host, url.port, url.username, url.password, url.database) == ("db", 3306, "app", "s3cret", "restaurant")


def test_full_url_wins():
    url = DatabaseSettings(host="ignored", url="sqlite:///sales.db").sqlalchemy_url()
    assert url.get_backend_name() == "sqlite"
    assert url.database == "sales.db"


def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db")
    monkeypatch.setenv("DB_PORT", "3307")
    monkeypatch.setenv("DB_NAME", "restaurant")
    monkeypatch.setenv("UPLOAD_DIR", "/tmp/in-transit")
    monkeypatch.setenv("UPLOAD_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a,http://b")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)

    settings = load_settings()

    assert settings.db.host == "db"
    assert settings.db.port == 3307
    assert settings.db.database == "restaurant"
    assert settings.db.pool_timeout == 5
    assert settings.upload_dir == Path("/tmp/in-transit")
    assert settings.upload_timeout_seconds == 5
    assert settings.cors_allowed_origins == ["http://a", "http://b"]
    assert settings.redis_url is None


def test_mysql_statements_are_time_bounded():
    options = engine_options(DatabaseSettings(host="db", database="restaurant", pool_timeout=7.5))

    assert options["pool_timeout"] == 7.5
    assert options["connect_args"] == {"connect_timeout": 8, "read_timeout": 8, "write_timeout": 8}


def test_sqlite_only_relaxes_thread_check():
    options = engine_options(DatabaseSettings(url="sqlite:///sales.db"))
    assert options == {"connect_args": {"check_same_thread": False}}
