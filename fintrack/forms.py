"""Form validation and submission for the Budgets and Transactions screens.

Submissions validate every field before touching storage, so a rejected form
never changes what is persisted.
"""

import logging
import math
import re

from .config import MISSING_FIELDS_MESSAGE
from .models import Budget, Transaction, TransactionType, next_id
from .repository import LedgerStore

logger = logging.getLogger(__name__)

TRANSACTION_TYPE_LABELS = {
    TransactionType.INCOME: "Renda",
    TransactionType.EXPENSE: "Despesa",
}


class FormError(ValueError):
    """Form input that must be fixed before the record can be stored."""


class MissingFieldError(FormError):
    def __init__(self, fields: list[str]):
        super().__init__(MISSING_FIELDS_MESSAGE)
        self.fields = fields


class InvalidAmountError(FormError):
    pass


def _require(**fields) -> None:
    missing = [name for name, value in fields.items() if not str(value or "").strip()]
    if missing:
        raise MissingFieldError(missing)


def parse_amount(text: str) -> float:
    cleaned = str(text).strip().replace(" ", "").replace(",", ".")
    try:
        value = float(cleaned)
    except ValueError:
        raise InvalidAmountError(f"Valor inválido: {text!r}") from None
    if not math.isfinite(value) or value < 0:
        raise InvalidAmountError(f"Valor inválido: {text!r}")
    return value


def format_date_input(text: str) -> str:
    """Mask free text as DD/MM/YYYY while it is typed."""
    digits = re.sub(r"\D", "", text or "")
    formatted = digits[:2]
    if len(digits) >= 3:
        formatted += "/" + digits[2:4]
    if len(digits) >= 5:
        formatted += "/" + digits[4:8]
    return formatted


def parse_transaction_type(text: str) -> TransactionType:
    try:
        return TransactionType(str(text))
    except ValueError:
        raise FormError(f"Tipo inválido: {text!r}") from None


def submit_budget(store: LedgerStore, budgets: list[Budget], category: str, amount_text: str) -> list[Budget]:
    _require(category=category, amount=amount_text)
    budget = Budget(
        id=next_id(budgets),
        category=category.strip(),
        budget_amount=parse_amount(amount_text),
    )
    updated = [*budgets, budget]
    if not store.save_budgets(updated):
        logger.warning("Budget %s kept in memory only", budget.id)
    return updated


def submit_transaction(
    store: LedgerStore,
    transactions: list[Transaction],
    description: str,
    amount_text: str,
    date_text: str,
    category: str,
    type_text: str,
) -> list[Transaction]:
    _require(
        description=description,
        amount=amount_text,
        date=date_text,
        category=category,
        type=type_text,
    )
    transaction = Transaction(
        id=next_id(transactions),
        description=description.strip(),
        amount=parse_amount(amount_text),
        date=date_text.strip(),
        category=category.strip(),
        type=parse_transaction_type(type_text),
    )
    updated = [*transactions, transaction]
    if not store.save_transactions(updated):
        logger.warning("Transaction %s kept in memory only", transaction.id)
    return updated
