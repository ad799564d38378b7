import pytest

from fintrack.config import MISSING_FIELDS_MESSAGE
from fintrack.forms import (
    FormError,
    InvalidAmountError,
    MissingFieldError,
    format_date_input,
    parse_amount,
    parse_transaction_type,
    submit_budget,
    submit_transaction,
)
from fintrack.models import TransactionType
from conftest import make_transaction


def _transaction_fields(**overrides):
    fields = {
        "description": "Supermercado",
        "amount_text": "250,00",
        "date_text": "10/06/2023",
        "category": "Alimentação",
        "type_text": "expense",
    }
    fields.update(overrides)
    return fields


def test_submit_transaction_appends_and_persists(store):
    existing = [make_transaction(1, 10)]
    store.save_transactions(existing)
    updated = submit_transaction(store, existing, **_transaction_fields())
    assert len(updated) == 2
    new = updated[-1]
    assert new.id == 2
    assert new.amount == 250.0
    assert new.type is TransactionType.EXPENSE
    assert store.load_transactions() == updated
    assert len(existing) == 1


@pytest.mark.parametrize("field", ["description", "amount_text", "date_text", "category", "type_text"])
def test_empty_field_aborts_transaction(store, field):
    existing = [make_transaction(1, 10)]
    store.save_transactions(existing)
    with pytest.raises(MissingFieldError) as excinfo:
        submit_transaction(store, existing, **_transaction_fields(**{field: "  "}))
    assert str(excinfo.value) == MISSING_FIELDS_MESSAGE
    assert store.load_transactions() == existing


def test_empty_description_leaves_storage_untouched(store):
    with pytest.raises(MissingFieldError) as excinfo:
        submit_transaction(store, [], **_transaction_fields(description=""))
    assert excinfo.value.fields == ["description"]
    assert store.load("transactions") == []


def test_submit_budget(store):
    budgets = submit_budget(store, [], "Alimentação", "500")
    budgets = submit_budget(store, budgets, "Lazer", "80.5")
    assert [(b.id, b.category, b.budget_amount) for b in budgets] == [
        (1, "Alimentação", 500.0),
        (2, "Lazer", 80.5),
    ]
    assert store.load("budgets") == [
        {"id": 1, "category": "Alimentação", "budgetAmount": 500.0},
        {"id": 2, "category": "Lazer", "budgetAmount": 80.5},
    ]


def test_submit_budget_requires_category(store):
    with pytest.raises(MissingFieldError):
        submit_budget(store, [], "", "100")
    assert store.load_budgets() == []


def test_invalid_amount_is_rejected(store):
    with pytest.raises(InvalidAmountError):
        submit_budget(store, [], "Lazer", "abc")
    assert store.load_budgets() == []


def test_save_failure_keeps_record_in_memory(broken_store):
    budgets = submit_budget(broken_store, [], "Lazer", "100")
    assert len(budgets) == 1


@pytest.mark.parametrize("text, expected", [
    ("10", 10.0),
    ("10.5", 10.5),
    ("10,5", 10.5),
    (" 1 250,75 ", 1250.75),
    ("0", 0.0),
])
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["abc", "-5", "nan", "inf", "1,2,3"])
def test_parse_amount_rejects(text):
    with pytest.raises(InvalidAmountError):
        parse_amount(text)


@pytest.mark.parametrize("text, expected", [
    ("", ""),
    ("1", "1"),
    ("12", "12"),
    ("120", "12/0"),
    ("1206", "12/06"),
    ("12062", "12/06/2"),
    ("12062023", "12/06/2023"),
    ("120620231", "12/06/2023"),
    ("12/06/2023", "12/06/2023"),
    ("12a06", "12/06"),
])
def test_format_date_input(text, expected):
    assert format_date_input(text) == expected


def test_parse_transaction_type():
    assert parse_transaction_type("income") is TransactionType.INCOME
    assert parse_transaction_type("Despesa") is TransactionType.EXPENSE
    with pytest.raises(FormError):
        parse_transaction_type("transfer")
