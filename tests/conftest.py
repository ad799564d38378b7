import pytest

from fintrack.models import Budget, Transaction, TransactionType
from fintrack.repository import LedgerStore


@pytest.fixture
def store(tmp_path):
    return LedgerStore(tmp_path / "store" / "fintrack.db")


@pytest.fixture
def broken_store(tmp_path):
    # A directory where the database file should be cannot be opened by sqlite
    path = tmp_path / "not-a-file.db"
    path.mkdir()
    return LedgerStore(path)


def make_transaction(id=1, amount=10.0, category="Alimentação", type=TransactionType.EXPENSE,
                     description="Supermercado", date="10/06/2023"):
    return Transaction(id=id, description=description, amount=amount, date=date, category=category, type=type)


def make_budget(id=1, category="Alimentação", amount=500.0):
    return Budget(id=id, category=category, budget_amount=amount)
