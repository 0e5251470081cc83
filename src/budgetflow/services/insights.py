"""Insight heuristics and period-over-period performance comparison."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Iterable

from ..logging_config import get_logger
from ..models.period import BudgetPeriod, sort_history
from .totals import compute_totals

logger = get_logger("services.insights")

EXPENSE_TREND_THRESHOLD = 5.0  # percent, strict
CATEGORY_CHANGE_THRESHOLD = 10.0  # percent, strict
NOISE_FLOOR = 20.0  # currency units
TOP_CATEGORY_COUNT = 3
MAX_INSIGHTS = 5
BASELINE_WINDOW = 3

SEVERITY_ORDER = {"warning": 0, "positive": 1, "neutral": 2}


@dataclass(slots=True)
class Insight:
    """A qualitative observation; ``percent`` is the rounded change it reports."""

    type: str
    text: str
    percent: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class PerformanceComparison:
    """Latest period measured against the average of the prior periods."""

    baseline_periods: int
    income_current: float
    income_baseline: float
    income_variance: float
    income_variance_pct: float
    expenses_current: float
    expenses_baseline: float
    expenses_variance: float
    expenses_variance_pct: float
    savings_rate_current: float
    savings_rate_baseline: float
    savings_rate_delta: float

    def to_dict(self) -> dict:
        return asdict(self)


def percent_change(current: float, previous: float) -> float:
    """Percentage change from ``previous``; 0 when there is no base to compare."""

    if previous == 0:
        return 0.0
    return (current - previous) * 100 / previous


def round_percent(value: float) -> int:
    """Round a percentage half-up for display (12.5 -> 13, -12.5 -> -12)."""
    return math.floor(value + 0.5)


def _spent_by_name(period: BudgetPeriod) -> dict[str, float]:
    spent: dict[str, float] = {}
    for expense in period.expenses:
        spent[expense.name] = spent.get(expense.name, 0.0) + expense.spent
    return spent


def _top_categories(periods: list[BudgetPeriod], count: int) -> list[str]:
    totals: dict[str, float] = {}
    for period in periods:
        for name, spent in _spent_by_name(period).items():
            totals[name] = totals.get(name, 0.0) + spent
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [name for name, _ in ranked[:count]]


def generate_insights(history: Iterable[BudgetPeriod], *, limit: int = MAX_INSIGHTS) -> list[Insight]:
    """Compare the latest period with the one before and describe notable moves."""

    periods = sort_history(history)
    if len(periods) < 2:
        return [
            Insight(
                type="neutral",
                text="Track a few more periods to unlock spending insights.",
            )
        ]

    previous, latest = periods[-2], periods[-1]
    insights: list[Insight] = []

    prev_expenses = compute_totals(previous).total_expenses
    curr_expenses = compute_totals(latest).total_expenses
    pct = percent_change(curr_expenses, prev_expenses)
    if pct > EXPENSE_TREND_THRESHOLD:
        insights.append(
            Insight(
                type="warning",
                text=f"Total spending is up {round_percent(pct)}% compared with last period.",
                percent=round_percent(pct),
            )
        )
    elif pct < -EXPENSE_TREND_THRESHOLD:
        insights.append(
            Insight(
                type="positive",
                text=f"Total spending is down {abs(round_percent(pct))}% compared with last period.",
                percent=round_percent(pct),
            )
        )

    latest_spent = _spent_by_name(latest)
    previous_spent = _spent_by_name(previous)
    for name in _top_categories(periods, TOP_CATEGORY_COUNT):
        current = latest_spent.get(name, 0.0)
        before = previous_spent.get(name, 0.0)
        delta = current - before
        if abs(delta) <= NOISE_FLOOR:
            continue
        change = percent_change(current, before)
        if change > CATEGORY_CHANGE_THRESHOLD:
            insights.append(
                Insight(
                    type="warning",
                    text=f"{name} is up {round_percent(change)}% from last period.",
                    percent=round_percent(change),
                )
            )
        elif change < -CATEGORY_CHANGE_THRESHOLD:
            insights.append(
                Insight(
                    type="positive",
                    text=f"{name} is down {abs(round_percent(change))}% from last period.",
                    percent=round_percent(change),
                )
            )

    insights.sort(key=lambda insight: SEVERITY_ORDER.get(insight.type, len(SEVERITY_ORDER)))
    logger.debug(
        "Generated insights",
        extra={"periods": len(periods), "insights": len(insights), "expense_change_pct": pct},
    )
    return insights[:limit]


def compare_performance(history: Iterable[BudgetPeriod]) -> PerformanceComparison | None:
    """Compare the latest period with the average of up to three prior periods.

    Returns ``None`` when there is no prior period to compare against.
    """

    periods = sort_history(history)
    if len(periods) < 2:
        return None

    latest = compute_totals(periods[-1])
    prior = [compute_totals(p) for p in periods[:-1]]
    baseline = prior[-BASELINE_WINDOW:] if len(prior) >= 2 else prior[-1:]
    count = len(baseline)

    income_baseline = sum(t.total_income for t in baseline) / count
    expenses_baseline = sum(t.total_expenses for t in baseline) / count
    rate_baseline = sum(t.savings_rate for t in baseline) / count
    rate_current = latest.savings_rate

    return PerformanceComparison(
        baseline_periods=count,
        income_current=latest.total_income,
        income_baseline=income_baseline,
        income_variance=latest.total_income - income_baseline,
        income_variance_pct=percent_change(latest.total_income, income_baseline),
        expenses_current=latest.total_expenses,
        expenses_baseline=expenses_baseline,
        expenses_variance=latest.total_expenses - expenses_baseline,
        expenses_variance_pct=percent_change(latest.total_expenses, expenses_baseline),
        savings_rate_current=rate_current,
        savings_rate_baseline=rate_baseline,
        savings_rate_delta=rate_current - rate_baseline,
    )


__all__ = [
    "Insight",
    "PerformanceComparison",
    "compare_performance",
    "generate_insights",
    "percent_change",
    "round_percent",
]
