"""Budget record exports."""

from .items import (
    BillItem,
    DebtItem,
    ExpenseItem,
    Goal,
    IncomeItem,
    InvestmentItem,
    LineItem,
    SavingsItem,
    contribute,
    toggle_goal,
)
from .period import BudgetPeriod, sort_history

__all__ = [
    "BillItem",
    "BudgetPeriod",
    "DebtItem",
    "ExpenseItem",
    "Goal",
    "IncomeItem",
    "InvestmentItem",
    "LineItem",
    "SavingsItem",
    "contribute",
    "sort_history",
    "toggle_goal",
]
