"""Budget period snapshot."""

from __future__ import annotations

from calendar import month_abbr
from typing import Any, Iterable

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .items import (
    BillItem,
    DebtItem,
    ExpenseItem,
    Goal,
    IncomeItem,
    InvestmentItem,
    SavingsItem,
    coerce_amount,
)


class BudgetPeriod(SQLModel):
    """One budgeting cycle with every line-item collection.

    ``created`` (epoch milliseconds) orders periods chronologically; ``month``
    is 1-12.
    """

    id: str = Field(default="")
    period: str = Field(default="monthly")
    month: int = Field(default=1)
    year: int = Field(default=1970)
    currency: str = Field(default="USD")
    created: int = Field(default=0)
    rollover: float = Field(default=0.0)

    income: list[IncomeItem] = Field(default_factory=list)
    expenses: list[ExpenseItem] = Field(default_factory=list)
    bills: list[BillItem] = Field(default_factory=list)
    debts: list[DebtItem] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    savings: list[SavingsItem] = Field(default_factory=list)
    investments: list[InvestmentItem] = Field(default_factory=list)

    @field_validator("rollover", mode="before")
    @classmethod
    def _rollover(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("month", mode="before")
    @classmethod
    def _month(cls, value: Any) -> int:
        month = int(coerce_amount(value)) or 1
        return min(max(month, 1), 12)

    @field_validator("year", "created", mode="before")
    @classmethod
    def _integer(cls, value: Any) -> int:
        return int(coerce_amount(value))

    @field_validator(
        "income", "expenses", "bills", "debts", "goals", "savings", "investments", mode="before"
    )
    @classmethod
    def _collection(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def label(self) -> str:
        return f"{month_abbr[self.month]} {self.year}"


def sort_history(history: Iterable[BudgetPeriod]) -> list[BudgetPeriod]:
    """Return periods ordered oldest first by ``created``.

    The sort is stable, so periods sharing a timestamp keep caller order.
    """

    return sorted(history, key=lambda p: p.created)
