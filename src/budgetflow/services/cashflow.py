"""Net cash-flow trend across budget history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..models.period import BudgetPeriod, sort_history
from .totals import compute_totals

MOVING_AVERAGE_WINDOW = 3


@dataclass(slots=True)
class PeriodCashFlow:
    period_id: str
    label: str
    net: float
    outflows: float
    top_category: str


@dataclass(slots=True)
class CashFlowSummary:
    """Per-period net flow with cumulative and moving-average views."""

    periods: list[PeriodCashFlow] = field(default_factory=list)
    cumulative: list[float] = field(default_factory=list)
    best: PeriodCashFlow | None = None
    heaviest_outflow: PeriodCashFlow | None = None
    recent_average: float = 0.0

    def to_dict(self) -> dict:
        def _row(row: PeriodCashFlow | None) -> dict | None:
            if row is None:
                return None
            return {
                "period_id": row.period_id,
                "label": row.label,
                "net": row.net,
                "outflows": row.outflows,
                "top_category": row.top_category,
            }

        return {
            "periods": [_row(p) for p in self.periods],
            "cumulative": list(self.cumulative),
            "best": _row(self.best),
            "heaviest_outflow": _row(self.heaviest_outflow),
            "recent_average": self.recent_average,
        }


def cash_flow_summary(history: Iterable[BudgetPeriod]) -> CashFlowSummary:
    """Summarise income minus paid outflows for each period, oldest first."""

    rows: list[PeriodCashFlow] = []
    for period in sort_history(history):
        totals = compute_totals(period)
        outflows = totals.total_expenses + totals.total_bills + totals.total_debts
        top = max(period.expenses, key=lambda e: e.spent, default=None)
        rows.append(
            PeriodCashFlow(
                period_id=period.id,
                label=period.label,
                net=totals.total_income - outflows,
                outflows=outflows,
                top_category=top.name if top else "General",
            )
        )

    if not rows:
        return CashFlowSummary()

    running = 0.0
    cumulative: list[float] = []
    for row in rows:
        running += row.net
        cumulative.append(running)

    recent = rows[-MOVING_AVERAGE_WINDOW:]
    return CashFlowSummary(
        periods=rows,
        cumulative=cumulative,
        best=max(rows, key=lambda r: r.net),
        heaviest_outflow=max(rows, key=lambda r: r.outflows),
        recent_average=sum(r.net for r in recent) / len(recent),
    )


__all__ = ["CashFlowSummary", "PeriodCashFlow", "cash_flow_summary"]
