"""Financial health score for the current period."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from ..models.period import BudgetPeriod
from .insights import Insight, round_percent
from .totals import compute_totals


@dataclass(slots=True)
class HealthMetrics:
    cash_savings: float
    investments: float
    total_assets: float
    total_debts: float
    net_worth: float
    monthly_income: float
    savings_rate: float
    debt_service_ratio: float
    liquidity_ratio: float  # months of expenses covered by assets

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def health_metrics(period: BudgetPeriod) -> HealthMetrics:
    """Balance-sheet and ratio metrics for one period."""

    totals = compute_totals(period)
    cash_savings = sum(s.balance for s in period.savings)
    investments = sum(i.amount for i in period.investments)
    total_assets = cash_savings + investments
    total_debts = sum(d.balance for d in period.debts)

    income = totals.total_income
    monthly_expenses = totals.total_expenses + totals.total_bills

    return HealthMetrics(
        cash_savings=cash_savings,
        investments=investments,
        total_assets=total_assets,
        total_debts=total_debts,
        net_worth=total_assets - total_debts,
        monthly_income=income,
        savings_rate=totals.savings_rate,
        debt_service_ratio=totals.total_debts / income * 100 if income > 0 else 0.0,
        liquidity_ratio=total_assets / monthly_expenses if monthly_expenses > 0 else 0.0,
    )


def health_score(metrics: HealthMetrics) -> int:
    """Score 0-100: savings rate (40), debt service (30), liquidity runway (30)."""

    score = 0

    if metrics.savings_rate >= 20:
        score += 40
    elif metrics.savings_rate >= 10:
        score += 20
    elif metrics.savings_rate > 0:
        score += 10

    if metrics.debt_service_ratio == 0:
        score += 30
    elif metrics.debt_service_ratio < 15:
        score += 20
    elif metrics.debt_service_ratio < 30:
        score += 10

    if metrics.liquidity_ratio >= 6:
        score += 30
    elif metrics.liquidity_ratio >= 3:
        score += 20
    elif metrics.liquidity_ratio >= 1:
        score += 10

    return score


def health_label(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Attention"


def strategic_insights(metrics: HealthMetrics, score: int) -> list[Insight]:
    """Advice derived from the health metrics, most urgent first."""

    insights: list[Insight] = []
    if metrics.debt_service_ratio > 30:
        insights.append(
            Insight(
                type="warning",
                text=(
                    f"Debt payments take {round_percent(metrics.debt_service_ratio)}% of income. "
                    "Paying down high-interest debt frees up cash flow."
                ),
                percent=round_percent(metrics.debt_service_ratio),
            )
        )
    if metrics.liquidity_ratio < 3:
        insights.append(
            Insight(
                type="warning",
                text=(
                    f"Assets cover {metrics.liquidity_ratio:.1f} months of expenses. "
                    f"Aim for at least 3 months ({metrics.monthly_income * 3:.2f})."
                ),
            )
        )
    if metrics.savings_rate > 20 and metrics.liquidity_ratio >= 3:
        insights.append(
            Insight(
                type="positive",
                text="Savings rate is strong and the safety net is solid; consider higher-yield assets.",
                percent=round_percent(metrics.savings_rate),
            )
        )
    if score > 75:
        insights.append(
            Insight(type="positive", text="Finances are in excellent shape. Keep reviewing long-term goals.")
        )
    return insights


__all__ = ["HealthMetrics", "health_label", "health_metrics", "health_score", "strategic_insights"]
