"""BudgetFlow forecasting and goal-allocation core."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .models import BudgetPeriod, Goal
from .services.allocation import SimulationParameters, plan_goals, simulate_allocation
from .services.category_forecast import forecast_expenses
from .services.forecasting import ForecastResult, holt_forecast
from .services.insights import compare_performance, generate_insights
from .services.totals import Totals, compute_totals

__all__ = [
    "BaseConfig",
    "BudgetPeriod",
    "DevConfig",
    "ForecastResult",
    "Goal",
    "SimulationParameters",
    "Totals",
    "compare_performance",
    "compute_totals",
    "forecast_expenses",
    "generate_insights",
    "holt_forecast",
    "plan_goals",
    "simulate_allocation",
]
