"""Pytest configuration and shared fixtures for BudgetFlow tests.

Provides factories for budget periods and goals so service tests can build
histories without repeating the full record shape.
"""

from __future__ import annotations

from datetime import date
from itertools import count

import pytest

from budgetflow.models import (
    BillItem,
    BudgetPeriod,
    DebtItem,
    ExpenseItem,
    Goal,
    IncomeItem,
    InvestmentItem,
    SavingsItem,
)

TODAY = date(2025, 3, 14)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def today() -> date:
    """Fixed reference date so completion dates are deterministic."""
    return TODAY


@pytest.fixture
def period_factory():
    """Factory for budget periods.

    Expenses may be given as ``{"Groceries": 400.0}`` (spent amounts) or as
    ExpenseItem instances. Each period gets a strictly increasing ``created``
    timestamp unless one is passed explicitly.

    Returns:
        Callable: Function that builds BudgetPeriod instances
    """
    sequence = count(1)

    def _create_period(
        *,
        income: float = 0.0,
        expenses: dict[str, float] | list[ExpenseItem] | None = None,
        bills: list[BillItem] | None = None,
        debts: list[DebtItem] | None = None,
        goals: list[Goal] | None = None,
        savings: list[SavingsItem] | None = None,
        investments: list[InvestmentItem] | None = None,
        rollover: float = 0.0,
        created: int | None = None,
        month: int = 1,
        year: int = 2025,
        period_id: str | None = None,
    ) -> BudgetPeriod:
        index = next(sequence)
        if isinstance(expenses, dict):
            expense_items = [
                ExpenseItem(id=f"e{index}-{i}", name=name, budgeted=spent, spent=spent)
                for i, (name, spent) in enumerate(expenses.items())
            ]
        else:
            expense_items = list(expenses or [])
        return BudgetPeriod(
            id=period_id or f"p{index}",
            month=month,
            year=year,
            created=created if created is not None else index * 1000,
            rollover=rollover,
            income=[IncomeItem(id="salary", name="Salary", planned=income, actual=income)] if income else [],
            expenses=expense_items,
            bills=bills or [],
            debts=debts or [],
            goals=goals or [],
            savings=savings or [],
            investments=investments or [],
        )

    return _create_period


@pytest.fixture
def goal_factory():
    """Factory for goals with sensible defaults.

    Returns:
        Callable: Function that builds Goal instances
    """

    def _create_goal(
        goal_id: str,
        *,
        target: float = 1200.0,
        current: float = 0.0,
        monthly: float = 100.0,
        checked: bool = False,
    ) -> Goal:
        return Goal(
            id=goal_id,
            name=goal_id.title(),
            target=target,
            current=current,
            monthly=monthly,
            checked=checked,
        )

    return _create_goal


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
