"""Budget and transaction records as stored in the ledger."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Type values written by the earlier mobile app
_LEGACY_TYPE_VALUES = {"renda": "income", "despesa": "expense"}


class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = _LEGACY_TYPE_VALUES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclass(slots=True)
class Transaction:
    """A single recorded income or expense."""
    id: int
    description: str
    amount: float
    date: str
    category: str
    type: TransactionType

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
            "category": self.category,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        return cls(
            id=int(data["id"]),
            description=str(data["description"]),
            amount=float(data["amount"]),
            date=str(data["date"]),
            category=str(data["category"]),
            type=TransactionType(data["type"]),
        )


@dataclass(slots=True)
class Budget:
    """Planned spending ceiling for a category."""
    id: int
    category: str
    budget_amount: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "budgetAmount": self.budget_amount,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Budget":
        return cls(
            id=int(data["id"]),
            category=str(data["category"]),
            budget_amount=float(data["budgetAmount"]),
        )


def next_id(records) -> int:
    return max((r.id for r in records), default=0) + 1
