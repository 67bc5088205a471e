import time

import pytest

from salesboard.api.schemas.schemas import SalesRecordCreate
from salesboard.core.errors import PersistenceFailure

from conftest import reject_item


def record(name, category, units=1.0, revenue=10.0):
    return SalesRecordCreate(item_name=name, category=category, units_sold=units, revenue=revenue)


def test_persist_stores_every_record_in_order(gateway):
    batch = [record("A", "Wine"), record("B", "Beer"), record("C", "Sake")]

    assert gateway.persist(batch) == 3

    rows = gateway.fetch_all()
    assert [r.item_name for r in rows] == ["A", "B", "C"]
    assert rows[0].sales == 1.0
    assert rows[0].revenue == 10.0


def test_failed_insert_rolls_back_whole_batch(gateway):
    gateway.persist([record("Existing", "Wine")])
    reject_item(gateway.engine, "Poison")

    batch = [record("A", "Wine"), record("Poison", "Wine"), record("C", "Beer")]
    with pytest.raises(PersistenceFailure):
        gateway.persist(batch)

    assert [r.item_name for r in gateway.fetch_all()] == ["Existing"]


def test_expired_deadline_stores_nothing(gateway):
    with pytest.raises(PersistenceFailure):
        gateway.persist([record("A", "Wine")], deadline=time.monotonic() - 1)

    assert gateway.fetch_all() == []


def test_empty_batch_commits_nothing(gateway):
    assert gateway.persist([]) == 0
    assert gateway.fetch_all() == []


def test_gateway_keeps_working_after_a_failed_batch(gateway):
    reject_item(gateway.engine, "Poison")
    with pytest.raises(PersistenceFailure):
        gateway.persist([record("Poison", "Wine")])

    assert gateway.persist([record("A", "Wine")]) == 1


def test_fetch_all_by_category(gateway):
    gateway.persist([record("A", "Wine"), record("B", "Sake"), record("C", "Beer")])

    rows = gateway.fetch_all(["Wine", "Beer"])

    assert [r.item_name for r in rows] == ["A", "C"]


def test_category_totals(gateway):
    gateway.persist([
        record("A", "Wine", 2, 30),
        record("B", "Wine", 1, 15),
        record("C", "Beer", 4, 20),
        SalesRecordCreate(item_name="D", category="Beer"),
    ])

    assert gateway.category_totals() == {
        "Beer": {"units_sold": 4.0, "revenue": 20.0},
        "Wine": {"units_sold": 3.0, "revenue": 45.0},
    }
    assert gateway.category_totals(["Wine"]) == {"Wine": {"units_sold": 3.0, "revenue": 45.0}}
