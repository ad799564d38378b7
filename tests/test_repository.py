import asyncio
import logging
import sqlite3

import pytest

from fintrack import db, repository
from fintrack.config import BUDGETS_KEY, TRANSACTIONS_KEY
from conftest import make_budget, make_transaction


def test_load_missing_key_returns_empty_list(store):
    assert store.load(TRANSACTIONS_KEY) == []


@pytest.mark.parametrize("records", [
    [],
    [{"id": 1, "category": "Alimentação", "budgetAmount": 500.0}],
    [
        {"id": 1, "description": "Supermercado", "amount": 250.0, "date": "10/06/2023",
         "category": "Alimentação", "type": "expense"},
        {"id": 2, "description": "Salário", "amount": 3500.0, "date": "08/06/2023",
         "category": "Renda Fixa", "type": "income"},
    ],
])
def test_save_then_load_round_trip(store, records):
    assert store.save("records", records) is True
    assert store.load("records") == records


def test_save_overwrites_whole_list(store):
    store.save(BUDGETS_KEY, [{"id": 1}, {"id": 2}])
    store.save(BUDGETS_KEY, [{"id": 3}])
    assert store.load(BUDGETS_KEY) == [{"id": 3}]


def test_keys_are_independent(store):
    store.save(BUDGETS_KEY, [{"id": 1}])
    store.save(TRANSACTIONS_KEY, [{"id": 2}])
    assert store.load(BUDGETS_KEY) == [{"id": 1}]
    assert store.load(TRANSACTIONS_KEY) == [{"id": 2}]


def test_corrupt_json_is_logged_and_treated_as_empty(store, caplog):
    db.set_item(TRANSACTIONS_KEY, "[{not json", store.path)
    with caplog.at_level(logging.ERROR, logger="fintrack.repository"):
        assert store.load(TRANSACTIONS_KEY) == []
    assert "Failed to load" in caplog.text


def test_non_array_value_is_treated_as_empty(store):
    db.set_item(BUDGETS_KEY, '{"id": 1}', store.path)
    assert store.load(BUDGETS_KEY) == []


def test_unavailable_storage(broken_store, caplog):
    with caplog.at_level(logging.ERROR, logger="fintrack.repository"):
        assert broken_store.load(BUDGETS_KEY) == []
        assert broken_store.save(BUDGETS_KEY, [{"id": 1}]) is False
    assert "Failed to save" in caplog.text


def test_failed_save_keeps_previous_state(store, monkeypatch):
    store.save(TRANSACTIONS_KEY, [{"id": 1}])

    def fail(*args, **kwargs):
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(repository, "set_item", fail)
    assert store.save(TRANSACTIONS_KEY, [{"id": 1}, {"id": 2}]) is False
    assert store.load(TRANSACTIONS_KEY) == [{"id": 1}]


def test_unserializable_records_are_not_saved(store):
    store.save(TRANSACTIONS_KEY, [{"id": 1}])
    assert store.save(TRANSACTIONS_KEY, [{"id": object()}]) is False
    assert store.load(TRANSACTIONS_KEY) == [{"id": 1}]


def test_typed_round_trip(store):
    budgets = [make_budget(1, "Alimentação", 500.0), make_budget(2, "Lazer", 80.25)]
    transactions = [make_transaction(1, 200.0), make_transaction(2, 400.0, category="Lazer")]
    assert store.save_budgets(budgets)
    assert store.save_transactions(transactions)
    assert store.load_budgets() == budgets
    assert store.load_transactions() == transactions


def test_malformed_records_are_skipped(store, caplog):
    store.save(BUDGETS_KEY, [
        {"id": 1, "category": "Lazer", "budgetAmount": 50},
        {"id": 2, "category": "Moradia"},
    ])
    with caplog.at_level(logging.WARNING, logger="fintrack.repository"):
        budgets = store.load_budgets()
    assert [b.id for b in budgets] == [1]
    assert "Skipping malformed Budget" in caplog.text


def test_async_round_trip(store):
    async def scenario():
        assert await store.asave(BUDGETS_KEY, [{"id": 1, "category": "Lazer", "budgetAmount": 10.0}])
        return await store.aload(BUDGETS_KEY)

    assert asyncio.run(scenario()) == [{"id": 1, "category": "Lazer", "budgetAmount": 10.0}]


def test_default_path_follows_config(tmp_path, monkeypatch):
    from fintrack import config

    monkeypatch.setattr(config, "STORE_PATH", tmp_path / "default.db")
    store = repository.LedgerStore()
    assert store.save(BUDGETS_KEY, [{"id": 7}])
    assert (tmp_path / "default.db").exists()
    assert store.load(BUDGETS_KEY) == [{"id": 7}]
