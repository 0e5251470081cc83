"""Line-item records for each budget collection.

Every numeric field defaults to ``0.0`` and every flag to ``False``. Values that
arrive as ``None``, empty strings or unparseable text are coerced here, at the
deserialization boundary, so the analytics services never have to guard
individual fields.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel


def coerce_amount(value: Any) -> float:
    """Return ``value`` as a float, treating missing or malformed input as 0."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    # NaN and infinities would poison every downstream sum.
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def coerce_date(value: Any) -> Any:
    if value in (None, ""):
        return None
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return value


class LineItem(SQLModel):
    """Common identity shared by every collection entry."""

    id: str = Field(default="")
    name: str = Field(default="")

    @field_validator("id", "name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class IncomeItem(LineItem):
    """An income source with planned and received amounts."""

    planned: float = Field(default=0.0)
    actual: float = Field(default=0.0)

    @field_validator("planned", "actual", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)


class ExpenseItem(LineItem):
    """A spending category for one period.

    ``category_id`` is an optional stable identity. When it is absent the
    category is identified across periods by its name alone.
    """

    budgeted: float = Field(default=0.0)
    spent: float = Field(default=0.0)
    category_id: Optional[str] = Field(default=None)

    @field_validator("budgeted", "spent", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("category_id", mode="before")
    @classmethod
    def _category_id(cls, value: Any) -> Optional[str]:
        if value in (None, ""):
            return None
        return str(value)


class BillItem(LineItem):
    """A recurring bill; only paid bills count toward actual outflow."""

    amount: float = Field(default=0.0)
    due_date: Optional[date] = Field(default=None)
    paid: bool = Field(default=False)

    @field_validator("amount", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _due(cls, value: Any) -> Any:
        return coerce_date(value)

    @field_validator("paid", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)


class DebtItem(LineItem):
    """An outstanding debt and its periodic payment."""

    balance: float = Field(default=0.0)
    payment: float = Field(default=0.0)
    paid: bool = Field(default=False)
    due_date: Optional[date] = Field(default=None)

    @field_validator("balance", "payment", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _due(cls, value: Any) -> Any:
        return coerce_date(value)

    @field_validator("paid", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)


class Goal(LineItem):
    """A savings goal.

    ``current`` only changes through explicit contribution events
    (:func:`toggle_goal`, :func:`contribute`); it is never recomputed from
    history.
    """

    target: float = Field(default=0.0)
    current: float = Field(default=0.0)
    monthly: float = Field(default=0.0)
    timeframe: str = Field(default="")
    checked: bool = Field(default=False)

    @field_validator("target", "current", "monthly", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("timeframe", mode="before")
    @classmethod
    def _timeframe(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("checked", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)

    @property
    def remaining(self) -> float:
        return max(0.0, self.target - self.current)

    @property
    def progress(self) -> float:
        """Percent complete, capped at 100."""
        if self.target <= 0:
            return 0.0
        return min(self.current / self.target * 100, 100.0)


class SavingsItem(LineItem):
    """A savings fund; ``amount`` is what was put aside this period."""

    planned: float = Field(default=0.0)
    amount: float = Field(default=0.0)
    balance: float = Field(default=0.0)
    paid: bool = Field(default=False)

    @field_validator("planned", "amount", "balance", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("paid", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)


class InvestmentItem(LineItem):
    """An investment position.

    ``amount`` is the current total value; ``monthly`` is the periodic
    contribution. ``type`` is ``"personal"``, ``"business"`` or unset.
    """

    amount: float = Field(default=0.0)
    monthly: float = Field(default=0.0)
    contributed: bool = Field(default=False)
    type: Optional[str] = Field(default=None)
    category: Optional[str] = Field(default=None)

    @field_validator("amount", "monthly", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("contributed", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return coerce_flag(value)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> Optional[str]:
        if value in (None, ""):
            return None
        return str(value).strip().lower()

    @property
    def is_personal(self) -> bool:
        return self.type in (None, "personal")


def toggle_goal(goal: Goal, checked: bool) -> Goal:
    """Return a copy of ``goal`` with its completion flag set for this period.

    Checking a goal credits its monthly contribution to ``current``;
    unchecking reverses the credit without letting ``current`` go negative.
    """

    if goal.checked == checked:
        return goal.model_copy()
    if checked:
        current = goal.current + goal.monthly
    else:
        current = max(goal.current - goal.monthly, 0.0)
    return goal.model_copy(update={"checked": checked, "current": current})


def contribute(goal: Goal, amount: float) -> Goal:
    """Return a copy of ``goal`` with ``amount`` added to its saved balance."""

    return goal.model_copy(update={"current": goal.current + max(coerce_amount(amount), 0.0)})
