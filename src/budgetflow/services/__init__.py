"""Service module exports."""

from . import (
    allocation,
    cashflow,
    category_forecast,
    forecasting,
    health,
    history_io,
    insights,
    notifications,
    totals,
)

__all__ = [
    "allocation",
    "cashflow",
    "category_forecast",
    "forecasting",
    "health",
    "history_io",
    "insights",
    "notifications",
    "totals",
]
