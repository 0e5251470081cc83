"""Alerts for the current period: due dates, budget thresholds, anomalies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..logging_config import get_logger
from ..models.period import BudgetPeriod, sort_history
from .insights import round_percent
from .totals import compute_totals

logger = get_logger("services.notifications")

BUDGET_WARNING_RATIO = 0.8
ANOMALY_RATIO = 1.2
ANOMALY_LOOKBACK = 3
ANOMALY_MIN_SAMPLES = 2
DUE_SOON_DAYS = 3

PRIORITY = {"danger": 0, "warning": 1, "success": 2, "info": 3}


@dataclass(slots=True)
class Notification:
    id: str
    type: str  # danger | warning | success | info
    message: str
    date: date
    category: str  # Bill | Debt | Budget | Savings

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "message": self.message,
            "date": self.date.isoformat(),
            "category": self.category,
        }


def _due_notification(
    *, item_id: str, name: str, due: date | None, paid: bool, kind: str, today: date
) -> Notification | None:
    if paid or due is None:
        return None
    days = (due - today).days
    if days < 0:
        return Notification(f"{kind}-{item_id}", "danger", f"Overdue {kind}: {name}", due, kind)
    if days == 0:
        return Notification(f"{kind}-{item_id}", "warning", f"{kind} due today: {name}", due, kind)
    if days <= DUE_SOON_DAYS:
        return Notification(
            f"{kind}-{item_id}", "info", f"{kind} due in {days} days: {name}", due, kind
        )
    return None


def get_notifications(
    period: BudgetPeriod,
    history: Iterable[BudgetPeriod] = (),
    *,
    today: date | None = None,
) -> list[Notification]:
    """Build alerts for ``period``, using ``history`` for anomaly and savings checks."""

    today = today or date.today()
    notifications: list[Notification] = []

    for bill in period.bills:
        note = _due_notification(
            item_id=bill.id, name=bill.name, due=bill.due_date, paid=bill.paid, kind="Bill", today=today
        )
        if note:
            notifications.append(note)
    for debt in period.debts:
        note = _due_notification(
            item_id=debt.id, name=debt.name, due=debt.due_date, paid=debt.paid, kind="Debt", today=today
        )
        if note:
            notifications.append(note)

    for expense in period.expenses:
        if expense.budgeted <= 0:
            continue
        ratio = expense.spent / expense.budgeted
        if ratio >= 1.0:
            notifications.append(
                Notification(
                    f"budget-over-{expense.id}",
                    "danger",
                    f"{expense.name} is over budget by {expense.spent - expense.budgeted:.2f}.",
                    today,
                    "Budget",
                )
            )
        elif ratio >= BUDGET_WARNING_RATIO:
            notifications.append(
                Notification(
                    f"budget-warn-{expense.id}",
                    "warning",
                    f"{round_percent(ratio * 100)}% of the {expense.name} budget is used.",
                    today,
                    "Budget",
                )
            )

    past = [p for p in sort_history(history) if p.id != period.id]
    recent = list(reversed(past))[:ANOMALY_LOOKBACK]

    for bill in period.bills:
        if bill.amount <= 0:
            continue
        samples = [
            b.amount
            for p in recent
            for b in p.bills
            if b.name == bill.name and b.amount > 0
        ]
        if len(samples) < ANOMALY_MIN_SAMPLES:
            continue
        average = sum(samples) / len(samples)
        if bill.amount > average * ANOMALY_RATIO:
            notifications.append(
                Notification(
                    f"bill-high-{bill.id}",
                    "warning",
                    f"{bill.name} is unusually high ({bill.amount:.2f}) compared with its average ({average:.2f}).",
                    today,
                    "Bill",
                )
            )

    if past:
        current = compute_totals(period)
        previous = compute_totals(past[-1])
        current_saved = current.total_savings + current.total_investments
        previous_saved = previous.total_savings + previous.total_investments
        gain = current_saved - previous_saved
        if gain > 0 and current_saved > 0:
            notifications.append(
                Notification(
                    "savings-win",
                    "success",
                    f"Saved {gain:.2f} more this period than last.",
                    today,
                    "Savings",
                )
            )

    notifications.sort(key=lambda n: (PRIORITY[n.type], n.date))
    logger.debug(
        "Built notifications",
        extra={"period_id": period.id, "count": len(notifications)},
    )
    return notifications


__all__ = ["Notification", "get_notifications"]
