"""Period totals aggregation."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ..models.period import BudgetPeriod


@dataclass(slots=True)
class Totals:
    """Summary totals for one budget period.

    Actual figures drive ``total_out`` and ``left_to_spend``; the planned
    figures drive ``available_to_budget``.
    """

    total_income: float
    total_expenses: float
    total_bills: float
    total_debts: float
    total_savings: float
    total_investments: float
    total_out: float
    left_to_spend: float
    available_to_budget: float
    planned_income: float
    budgeted_expenses: float
    planned_bills: float
    planned_debts: float
    planned_savings: float
    planned_investments: float
    total_goals: float
    total_portfolio_value: float

    @property
    def savings_rate(self) -> float:
        """Savings plus investment contributions as a percentage of income."""
        if self.total_income == 0:
            return 0.0
        return (self.total_savings + self.total_investments) / self.total_income * 100

    def to_dict(self) -> dict[str, float]:
        data = asdict(self)
        data["savings_rate"] = self.savings_rate
        return data


def compute_totals(period: BudgetPeriod) -> Totals:
    """Reduce a period's line items into summary totals."""

    total_income = sum(item.actual for item in period.income)
    total_expenses = sum(item.spent for item in period.expenses)
    total_bills = sum(item.amount for item in period.bills if item.paid)
    total_debts = sum(item.payment for item in period.debts if item.paid)
    total_savings = sum(item.amount for item in period.savings)
    # Contributions only; business holdings are tracked outside personal cash flow.
    personal = [item for item in period.investments if item.is_personal]
    total_investments = sum(item.monthly for item in personal if item.contributed)

    planned_income = sum(item.planned for item in period.income)
    budgeted_expenses = sum(item.budgeted for item in period.expenses)
    planned_bills = sum(item.amount for item in period.bills)
    planned_debts = sum(item.payment for item in period.debts)
    planned_savings = sum(item.planned for item in period.savings)
    planned_investments = sum(item.monthly for item in personal)

    total_out = total_expenses + total_bills + total_debts + total_investments
    left_to_spend = total_income + period.rollover - total_out - total_savings
    available_to_budget = (
        planned_income
        + period.rollover
        - (budgeted_expenses + planned_bills + planned_debts + planned_investments)
        - planned_savings
    )

    return Totals(
        total_income=total_income,
        total_expenses=total_expenses,
        total_bills=total_bills,
        total_debts=total_debts,
        total_savings=total_savings,
        total_investments=total_investments,
        total_out=total_out,
        left_to_spend=left_to_spend,
        available_to_budget=available_to_budget,
        planned_income=planned_income,
        budgeted_expenses=budgeted_expenses,
        planned_bills=planned_bills,
        planned_debts=planned_debts,
        planned_savings=planned_savings,
        planned_investments=planned_investments,
        total_goals=sum(item.monthly for item in period.goals),
        total_portfolio_value=sum(item.amount for item in period.investments),
    )
