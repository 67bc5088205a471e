import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from salesboard.core.cache import SummaryCache
from salesboard.core.config import DatabaseSettings, Settings
from salesboard.core.gateway import PersistenceGateway
from salesboard.main import create_app

HEADER = "ItemName,Category,Sales,Revenue\n"


def csv_bytes(*rows):
    return (HEADER + "".join(",".join(r) + "\n" for r in rows)).encode("utf-8")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        db=DatabaseSettings(url=f"sqlite:///{tmp_path / 'sales.db'}"),
        upload_dir=tmp_path / "uploads",
        log_level="DEBUG",
    )


@pytest.fixture
def gateway(settings):
    gw = PersistenceGateway(settings.db)
    gw.create_schema()
    yield gw
    gw.close()


@pytest.fixture
def cache():
    return SummaryCache(fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True))


@pytest.fixture
def client(settings, cache):
    app = create_app(settings, cache=cache)
    with TestClient(app) as c:
        yield c


def reject_item(engine, item_name):
    """Make the database refuse any insert of `item_name`."""
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TRIGGER reject_item BEFORE INSERT ON sales "
            f"WHEN NEW.item_name = '{item_name}' "
            "BEGIN SELECT RAISE(ABORT, 'rejected'); END;"
        ))
