"""Bottom-up expense forecasting.

Each expense category gets its own Holt forecast; the total is the sum of
the category forecasts rather than a forecast of the aggregate series, so
every forecast dollar can be attributed to a category.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..logging_config import get_logger
from ..models.items import ExpenseItem
from ..models.period import BudgetPeriod, sort_history
from .forecasting import ForecastResult, forecast_series, holt_forecast

logger = get_logger("services.category_forecast")

MATCH_STRATEGIES = ("name", "id")
DEFAULT_TOP_N = 3


@dataclass(slots=True)
class CategoryForecast:
    """Forecast for a single expense category."""

    name: str
    value: float
    trend: float

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "trend": self.trend}


@dataclass(slots=True)
class ExpenseForecast:
    """Total expense forecast plus its per-category breakdown."""

    total: ForecastResult | None
    top_categories: list[CategoryForecast] = field(default_factory=list)
    categories: list[CategoryForecast] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total.to_dict() if self.total else None,
            "top_categories": [c.to_dict() for c in self.top_categories],
            "categories": [c.to_dict() for c in self.categories],
        }


def _category_key(expense: ExpenseItem, match_by: str) -> str:
    if match_by == "id" and expense.category_id:
        return f"id:{expense.category_id}"
    return f"name:{expense.name}"


def category_series(
    history: Iterable[BudgetPeriod], *, match_by: str = "name"
) -> dict[str, tuple[str, list[float]]]:
    """Return ``{key: (display_name, spent_series)}`` across the history.

    Series are oldest first and zero-filled for periods where the category
    does not appear. Keys keep first-seen order. With ``match_by="name"``
    categories are matched by exact name, so a rename starts a new series;
    ``match_by="id"`` follows ``category_id`` and falls back to the name for
    items without one.
    """

    if match_by not in MATCH_STRATEGIES:
        raise ValueError(f"match_by must be one of {MATCH_STRATEGIES}, got {match_by!r}")

    periods = sort_history(history)
    keys: list[str] = []
    names: dict[str, str] = {}
    for period in periods:
        for expense in period.expenses:
            key = _category_key(expense, match_by)
            if key not in names:
                keys.append(key)
            # Latest period's label wins for display.
            names[key] = expense.name

    series: dict[str, tuple[str, list[float]]] = {}
    for key in keys:
        points: list[float] = []
        for period in periods:
            spent = 0.0
            for expense in period.expenses:
                if _category_key(expense, match_by) == key:
                    spent += expense.spent
            points.append(spent)
        series[key] = (names[key], points)
    return series


def forecast_expenses(
    history: Iterable[BudgetPeriod],
    *,
    match_by: str = "name",
    top_n: int = DEFAULT_TOP_N,
) -> ExpenseForecast:
    """Forecast next-period spending per category and in total."""

    periods = sort_history(history)
    series = category_series(periods, match_by=match_by)

    if not series:
        logger.debug(
            "No expense categories in history; forecasting total outflow",
            extra={"periods": len(periods)},
        )
        return ExpenseForecast(total=forecast_series(periods, "total_out"))

    categories: list[CategoryForecast] = []
    for name, points in series.values():
        result = holt_forecast(points)
        if result is None:
            result = ForecastResult(value=points[-1], trend=0.0)
        value = result.value
        if value < 0:
            logger.debug(
                "Clamped negative category forecast",
                extra={"category": name, "raw_value": value},
            )
            value = 0.0
        categories.append(CategoryForecast(name=name, value=value, trend=result.trend))

    total = ForecastResult(
        value=sum(c.value for c in categories),
        trend=sum(c.trend for c in categories),
    )
    # sorted() is stable, so ties keep first-seen order.
    top = sorted(categories, key=lambda c: c.value, reverse=True)[: max(top_n, 0)]
    return ExpenseForecast(total=total, top_categories=top, categories=categories)


__all__ = [
    "CategoryForecast",
    "ExpenseForecast",
    "MATCH_STRATEGIES",
    "category_series",
    "forecast_expenses",
]
