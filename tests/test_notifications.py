"""Notification rule tests."""

from __future__ import annotations

from datetime import date, timedelta

from budgetflow.models import BillItem, DebtItem, ExpenseItem, SavingsItem
from budgetflow.services.notifications import get_notifications

TODAY = date(2025, 6, 10)


def _ids(notes):
    return [n.id for n in notes]


def test_due_date_rules(period_factory):
    period = period_factory(
        bills=[
            BillItem(id="late", name="Water", amount=40.0, due_date=TODAY - timedelta(days=2)),
            BillItem(id="now", name="Power", amount=90.0, due_date=TODAY),
            BillItem(id="soon", name="Phone", amount=30.0, due_date=TODAY + timedelta(days=3)),
            BillItem(id="later", name="Insurance", amount=80.0, due_date=TODAY + timedelta(days=9)),
            BillItem(id="paid", name="Rent", amount=900.0, paid=True, due_date=TODAY - timedelta(days=1)),
        ],
        debts=[DebtItem(id="card", name="Visa", payment=50.0, due_date=TODAY + timedelta(days=1))],
    )

    notes = get_notifications(period, today=TODAY)

    assert _ids(notes) == ["Bill-late", "Bill-now", "Debt-card", "Bill-soon"]
    assert [n.type for n in notes] == ["danger", "warning", "info", "info"]
    assert "3 days" in notes[-1].message


def test_budget_threshold_rules(period_factory):
    period = period_factory(
        expenses=[
            ExpenseItem(id="food", name="Food", budgeted=500.0, spent=410.0),
            ExpenseItem(id="fun", name="Fun", budgeted=100.0, spent=130.0),
            ExpenseItem(id="fuel", name="Fuel", budgeted=200.0, spent=100.0),
            ExpenseItem(id="gifts", name="Gifts", budgeted=0.0, spent=80.0),
        ]
    )

    notes = get_notifications(period, today=TODAY)

    assert _ids(notes) == ["budget-over-fun", "budget-warn-food"]
    assert "30.00" in notes[0].message
    assert "82%" in notes[1].message


def test_bill_anomaly_needs_two_samples(period_factory):
    history = [
        period_factory(bills=[BillItem(id="e", name="Electric", amount=100.0, paid=True)]),
        period_factory(bills=[BillItem(id="e", name="Electric", amount=110.0, paid=True)]),
    ]
    current = period_factory(bills=[BillItem(id="e", name="Electric", amount=130.0, paid=True)])

    notes = get_notifications(current, history, today=TODAY)
    assert "bill-high-e" in _ids(notes)

    notes = get_notifications(current, history[-1:], today=TODAY)
    assert "bill-high-e" not in _ids(notes)


def test_bill_within_tolerance_is_not_flagged(period_factory):
    history = [
        period_factory(bills=[BillItem(id="e", name="Electric", amount=100.0)]),
        period_factory(bills=[BillItem(id="e", name="Electric", amount=100.0)]),
    ]
    current = period_factory(bills=[BillItem(id="e", name="Electric", amount=120.0)])

    assert "bill-high-e" not in _ids(get_notifications(current, history, today=TODAY))


def test_savings_win_compares_previous_period(period_factory):
    previous = period_factory(savings=[SavingsItem(id="s", name="Fund", amount=100.0)])
    current = period_factory(savings=[SavingsItem(id="s", name="Fund", amount=175.0)])

    notes = get_notifications(current, [previous, current], today=TODAY)

    assert _ids(notes) == ["savings-win"]
    assert notes[0].type == "success"
    assert "75.00" in notes[0].message


def test_no_history_no_comparisons(period_factory):
    current = period_factory(savings=[SavingsItem(id="s", name="Fund", amount=175.0)])

    assert get_notifications(current, today=TODAY) == []
