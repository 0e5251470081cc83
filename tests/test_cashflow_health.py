"""Cash-flow summary and financial health score tests."""

from __future__ import annotations

import pytest

from budgetflow.models import BillItem, DebtItem, InvestmentItem, SavingsItem
from budgetflow.services.cashflow import cash_flow_summary
from budgetflow.services.health import (
    HealthMetrics,
    health_label,
    health_metrics,
    health_score,
    strategic_insights,
)


def _metrics(**overrides) -> HealthMetrics:
    values = dict(
        cash_savings=0.0,
        investments=0.0,
        total_assets=0.0,
        total_debts=0.0,
        net_worth=0.0,
        monthly_income=1000.0,
        savings_rate=0.0,
        debt_service_ratio=0.0,
        liquidity_ratio=0.0,
    )
    values.update(overrides)
    return HealthMetrics(**values)


class TestCashFlowSummary:
    def test_empty_history(self):
        summary = cash_flow_summary([])

        assert summary.periods == []
        assert summary.best is None
        assert summary.recent_average == 0.0

    def test_net_cumulative_and_extremes(self, period_factory):
        history = [
            period_factory(income=2000.0, expenses={"Food": 500.0, "Fuel": 700.0}, month=1),
            period_factory(
                income=2000.0,
                expenses={"Food": 400.0},
                bills=[BillItem(id="b", name="Rent", amount=900.0, paid=True)],
                month=2,
            ),
            period_factory(
                income=2500.0,
                expenses={"Food": 450.0},
                debts=[DebtItem(id="d", name="Card", payment=50.0, paid=True)],
                month=3,
            ),
            period_factory(income=1000.0, expenses={"Food": 1200.0}, month=4),
        ]

        summary = cash_flow_summary(history)

        assert [p.net for p in summary.periods] == [800.0, 700.0, 2000.0, -200.0]
        assert summary.cumulative == [800.0, 1500.0, 3500.0, 3300.0]
        assert summary.best.label == "Mar 2025"
        assert summary.heaviest_outflow.label == "Feb 2025"
        assert summary.periods[0].top_category == "Fuel"
        assert summary.recent_average == pytest.approx((700.0 + 2000.0 - 200.0) / 3)

    def test_period_without_expenses_uses_general_label(self, period_factory):
        summary = cash_flow_summary([period_factory(income=100.0)])

        assert summary.periods[0].top_category == "General"
        assert summary.to_dict()["best"]["net"] == 100.0


class TestHealthScore:
    def test_metrics_from_period(self, period_factory):
        period = period_factory(
            income=5000.0,
            expenses={"Food": 1000.0},
            bills=[BillItem(id="b", name="Rent", amount=1000.0, paid=True)],
            debts=[DebtItem(id="d", name="Car", balance=8000.0, payment=500.0, paid=True)],
            savings=[SavingsItem(id="s", name="Emergency", amount=500.0, balance=9000.0)],
            investments=[InvestmentItem(id="v", name="ETF", amount=3000.0, monthly=500.0, contributed=True)],
        )

        metrics = health_metrics(period)

        assert metrics.total_assets == 12000.0
        assert metrics.net_worth == 4000.0
        assert metrics.savings_rate == pytest.approx(20.0)
        assert metrics.debt_service_ratio == pytest.approx(10.0)
        assert metrics.liquidity_ratio == pytest.approx(6.0)
        assert health_score(metrics) == 90
        assert health_label(health_score(metrics)) == "Excellent"

    def test_zero_income_and_expenses_guard_ratios(self, period_factory):
        metrics = health_metrics(period_factory())

        assert metrics.debt_service_ratio == 0.0
        assert metrics.liquidity_ratio == 0.0
        assert health_score(metrics) == 30

    @pytest.mark.parametrize(
        "overrides, expected",
        [
            ({"savings_rate": 12.0, "debt_service_ratio": 20.0, "liquidity_ratio": 3.5}, 50),
            ({"savings_rate": 5.0, "debt_service_ratio": 40.0, "liquidity_ratio": 0.5}, 10),
            ({"savings_rate": 25.0, "debt_service_ratio": 0.0, "liquidity_ratio": 7.0}, 100),
        ],
    )
    def test_score_bands(self, overrides, expected):
        assert health_score(_metrics(**overrides)) == expected

    @pytest.mark.parametrize(
        "score, label", [(80, "Excellent"), (60, "Good"), (40, "Fair"), (39, "Needs Attention")]
    )
    def test_labels(self, score, label):
        assert health_label(score) == label

    def test_strategic_insights(self):
        stressed = strategic_insights(_metrics(debt_service_ratio=45.0, liquidity_ratio=1.2), 20)
        thriving = strategic_insights(_metrics(savings_rate=30.0, liquidity_ratio=6.0), 100)

        assert [i.type for i in stressed] == ["warning", "warning"]
        assert stressed[0].percent == 45
        assert [i.type for i in thriving] == ["positive", "positive"]
