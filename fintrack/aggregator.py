import operator
from dataclasses import dataclass, field
from functools import reduce
from typing import Sequence

import pandas as pd

from .models import Budget, Transaction, TransactionType

_TRANSACTION_COLUMNS = ["id", "description", "amount", "date", "category", "type"]


@dataclass(slots=True)
class BudgetStatus:
    budget: Budget
    spent: float
    exceeded: bool

    @property
    def category(self) -> str:
        return self.budget.category

    @property
    def remaining(self) -> float:
        return self.budget.budget_amount - self.spent


@dataclass(slots=True)
class ChartSeries:
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)


@dataclass(slots=True)
class BudgetReport:
    statuses: list[BudgetStatus]
    chart: ChartSeries


@dataclass(slots=True)
class LedgerTotals:
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


def transactions_frame(transactions: Sequence[Transaction]) -> pd.DataFrame:
    df = pd.DataFrame([t.to_dict() for t in transactions], columns=_TRANSACTION_COLUMNS)
    df["amount"] = df["amount"].astype(float)
    return df


def running_total(values) -> float:
    return reduce(operator.add, list(values), 0.0)


def spent_by_category(transactions: Sequence[Transaction]) -> dict[str, float]:
    """Sum of transaction amounts per category, income and expense alike.

    Amounts are added in list order with plain float addition, so boundary
    comparisons against a budget match a running total of the same values.
    """
    df = transactions_frame(transactions)
    if df.empty:
        return {}
    totals = df.groupby("category", sort=False)["amount"].agg(running_total)
    return {str(k): float(v) for k, v in totals.items()}


def summarize_budgets(budgets: Sequence[Budget], transactions: Sequence[Transaction]) -> list[BudgetStatus]:
    spent_map = spent_by_category(transactions)
    statuses = []
    for budget in budgets:
        spent = spent_map.get(budget.category, 0.0)
        statuses.append(BudgetStatus(budget=budget, spent=spent, exceeded=spent > budget.budget_amount))
    return statuses


def chart_series(budgets: Sequence[Budget]) -> ChartSeries:
    return ChartSeries(
        labels=[b.category for b in budgets],
        values=[float(b.budget_amount) for b in budgets],
    )


def aggregate(budgets: Sequence[Budget], transactions: Sequence[Transaction]) -> BudgetReport:
    """Per-budget spent/exceeded status plus the label/value series for the chart."""
    return BudgetReport(
        statuses=summarize_budgets(budgets, transactions),
        chart=chart_series(budgets),
    )


def signed_amount(transaction: Transaction) -> float:
    if transaction.type is TransactionType.INCOME:
        return transaction.amount
    return -transaction.amount


def transaction_totals(transactions: Sequence[Transaction]) -> LedgerTotals:
    df = transactions_frame(transactions)
    if df.empty:
        return LedgerTotals()
    by_type = df.groupby("type")["amount"].agg(running_total)
    return LedgerTotals(
        income=float(by_type.get(TransactionType.INCOME.value, 0.0)),
        expense=float(by_type.get(TransactionType.EXPENSE.value, 0.0)),
    )
