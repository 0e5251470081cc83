"""Holt's linear (double exponential smoothing) forecaster.

The smoothing constants are a fixed policy: ``ALPHA`` weights the newest
observation in the level, ``BETA`` weights the newest level change in the
trend. Neither is user-configurable.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Sequence

from ..logging_config import get_logger
from ..models.period import BudgetPeriod, sort_history
from .totals import Totals, compute_totals

logger = get_logger("services.forecasting")

ALPHA = 0.5
BETA = 0.3


@dataclass(slots=True)
class ForecastResult:
    """One-step-ahead point estimate and the per-step slope behind it."""

    value: float
    trend: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


def holt_forecast(series: Sequence[float]) -> ForecastResult | None:
    """Forecast the next value of a chronologically ordered series.

    Returns ``None`` when fewer than two observations are available; callers
    render that as "insufficient history".
    """

    values = [float(v) for v in series]
    if len(values) < 2:
        return None

    if len(values) == 2:
        delta = values[1] - values[0]
        return ForecastResult(value=values[1] + delta, trend=delta)

    level = values[0]
    trend = values[1] - values[0]
    for observed in values[1:]:
        previous_level = level
        level = ALPHA * observed + (1 - ALPHA) * (previous_level + trend)
        trend = BETA * (level - previous_level) + (1 - BETA) * trend

    return ForecastResult(value=level + trend, trend=trend)


def metric_series(history: Iterable[BudgetPeriod], metric: str) -> list[float]:
    """Return ``metric`` from each period's totals, oldest first.

    ``metric`` is any :class:`Totals` attribute, e.g. ``"left_to_spend"``.
    """

    if metric not in Totals.__dataclass_fields__ and metric != "savings_rate":
        raise ValueError(f"Unknown totals metric: {metric}")
    return [float(getattr(compute_totals(p), metric)) for p in sort_history(history)]


def forecast_series(history: Iterable[BudgetPeriod], metric: str) -> ForecastResult | None:
    """Forecast an aggregate totals metric across the whole history."""

    series = metric_series(history, metric)
    result = holt_forecast(series)
    if result is None:
        logger.debug(
            "Insufficient history for aggregate forecast",
            extra={"metric": metric, "points": len(series)},
        )
    return result


__all__ = ["ALPHA", "BETA", "ForecastResult", "forecast_series", "holt_forecast", "metric_series"]
