"""Goal allocation simulator.

Distributes a simulated monthly surplus across active goals and projects when
each goal completes compared with its own stored monthly contribution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..logging_config import get_logger
from ..models.items import Goal
from ..models.period import BudgetPeriod
from .totals import compute_totals

logger = get_logger("services.allocation")

PRIORITY_SHARE = 0.7  # priority pool when goals are mixed; normal goals split the rest
PAUSED_MONTHS = 999


@dataclass(slots=True)
class AllocationResult:
    """Simulated funding and completion projection for one goal."""

    goal_id: str
    name: str
    simulated_monthly: float
    months_to_complete: int
    completion_date: date
    is_accelerated: bool
    time_saved: int
    current_months: int = 0
    is_priority: bool = False

    def to_dict(self) -> dict:
        return {
            "goal_id": self.goal_id,
            "name": self.name,
            "simulated_monthly": self.simulated_monthly,
            "months_to_complete": self.months_to_complete,
            "completion_date": self.completion_date.isoformat(),
            "is_accelerated": self.is_accelerated,
            "time_saved": self.time_saved,
            "current_months": self.current_months,
            "is_priority": self.is_priority,
        }


@dataclass(slots=True)
class SimulationParameters:
    """Planner inputs supplied by the caller on every recompute."""

    income_adjustment_pct: float = 0.0
    expense_adjustment_pct: float = 0.0
    priority_goal_ids: frozenset[str] = field(default_factory=frozenset)


@dataclass(slots=True)
class SurplusProjection:
    """Income and outflow after applying the planner adjustments."""

    base_income: float
    base_expenses: float
    new_income: float
    new_expenses: float
    net_surplus: float
    current_surplus: float

    def to_dict(self) -> dict[str, float]:
        return {
            "base_income": self.base_income,
            "base_expenses": self.base_expenses,
            "new_income": self.new_income,
            "new_expenses": self.new_expenses,
            "net_surplus": self.net_surplus,
            "current_surplus": self.current_surplus,
        }


@dataclass(slots=True)
class GoalPlan:
    projection: SurplusProjection
    allocations: list[AllocationResult]

    def to_dict(self) -> dict:
        return {
            "projection": self.projection.to_dict(),
            "allocations": [a.to_dict() for a in self.allocations],
        }


def _add_months(start: date, months: int) -> date:
    """Return the first day of the month ``months`` after ``start``'s month."""

    index = start.month - 1 + months
    return date(start.year + index // 12, index % 12 + 1, 1)


def _months_needed(remaining: float, monthly: float) -> int:
    if remaining <= 0:
        return 0
    return math.ceil(remaining / monthly)


def split_surplus(
    goals: Iterable[Goal], net_surplus: float, priority_ids: Iterable[str]
) -> dict[str, float]:
    """Return the simulated monthly contribution per active goal id."""

    active = [g for g in goals if not g.checked]
    if not active:
        return {}
    if net_surplus <= 0:
        return {g.id: 0.0 for g in active}

    priority_set = set(priority_ids)
    priority = [g for g in active if g.id in priority_set]
    normal = [g for g in active if g.id not in priority_set]

    if not priority or not normal:
        share = net_surplus / len(active)
        return {g.id: share for g in active}

    priority_pool = net_surplus * PRIORITY_SHARE
    normal_pool = net_surplus - priority_pool
    shares = {g.id: priority_pool / len(priority) for g in priority}
    shares.update({g.id: normal_pool / len(normal) for g in normal})
    return shares


def simulate_allocation(
    goals: Iterable[Goal],
    net_surplus: float,
    priority_ids: Iterable[str] = (),
    *,
    today: date | None = None,
) -> list[AllocationResult]:
    """Allocate ``net_surplus`` across goals and project completion dates.

    Completed (checked) goals are returned with zeroed simulation fields and do
    not take a share. Results follow the order of ``goals``.
    """

    goals = list(goals)
    start = (today or date.today()).replace(day=1)
    priority_set = set(priority_ids)
    shares = split_surplus(goals, net_surplus, priority_set)

    results: list[AllocationResult] = []
    for goal in goals:
        if goal.checked:
            results.append(
                AllocationResult(
                    goal_id=goal.id,
                    name=goal.name,
                    simulated_monthly=0.0,
                    months_to_complete=0,
                    completion_date=start,
                    is_accelerated=False,
                    time_saved=0,
                    current_months=0,
                    is_priority=goal.id in priority_set,
                )
            )
            continue

        remaining = goal.remaining
        simulated = shares.get(goal.id, 0.0)
        current_months = _months_needed(remaining, max(goal.monthly, 1.0))
        if simulated > 0:
            simulated_months = _months_needed(remaining, simulated)
        elif remaining <= 0:
            # PAUSED_MONTHS is reserved for goals that still need money.
            simulated_months = 0
        else:
            simulated_months = PAUSED_MONTHS

        time_saved = max(0, current_months - simulated_months)
        results.append(
            AllocationResult(
                goal_id=goal.id,
                name=goal.name,
                simulated_monthly=simulated,
                months_to_complete=simulated_months,
                completion_date=_add_months(start, simulated_months),
                is_accelerated=time_saved > 0,
                time_saved=time_saved,
                current_months=current_months,
                is_priority=goal.id in priority_set,
            )
        )

    logger.debug(
        "Simulated goal allocation",
        extra={
            "goals": len(goals),
            "active": len(shares),
            "net_surplus": net_surplus,
            "priority": len(priority_set),
        },
    )
    return results


def project_surplus(period: BudgetPeriod, params: SimulationParameters) -> SurplusProjection:
    """Apply the planner's income/expense adjustments to a period's actuals."""

    totals = compute_totals(period)
    base_income = totals.total_income
    base_expenses = totals.total_expenses + totals.total_bills + totals.total_debts
    new_income = base_income * (1 + params.income_adjustment_pct / 100)
    new_expenses = base_expenses * (1 + params.expense_adjustment_pct / 100)
    return SurplusProjection(
        base_income=base_income,
        base_expenses=base_expenses,
        new_income=new_income,
        new_expenses=new_expenses,
        net_surplus=new_income - new_expenses,
        current_surplus=base_income - base_expenses,
    )


def plan_goals(
    period: BudgetPeriod,
    params: SimulationParameters | None = None,
    *,
    today: date | None = None,
) -> GoalPlan:
    """Project the adjusted surplus for ``period`` and allocate it to its goals."""

    params = params or SimulationParameters()
    projection = project_surplus(period, params)
    allocations = simulate_allocation(
        period.goals,
        projection.net_surplus,
        params.priority_goal_ids,
        today=today,
    )
    return GoalPlan(projection=projection, allocations=allocations)


__all__ = [
    "AllocationResult",
    "GoalPlan",
    "PAUSED_MONTHS",
    "PRIORITY_SHARE",
    "SimulationParameters",
    "SurplusProjection",
    "plan_goals",
    "project_surplus",
    "simulate_allocation",
    "split_surplus",
]
