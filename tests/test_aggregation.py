"""Tests for portfolio aggregation."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from loantrack.analytics.aggregation import (
    interest_analysis,
    lender_analysis,
    lender_risk_level,
    monthly_breakdown,
    overview,
    payment_trends,
    percentage,
    shift_month,
)
from loantrack.models.enums import RiskLevel, TrendDirection


class TestHelpers:
    """Tests for aggregation helpers."""

    def test_percentage_zero_whole(self) -> None:
        assert percentage(5, 0) == 0.0
        assert percentage(Decimal("5"), Decimal("0")) == 0.0

    def test_percentage(self) -> None:
        assert percentage(1, 4) == 25.0

    def test_shift_month_across_year(self) -> None:
        assert shift_month(date(2025, 2, 10), -3) == date(2024, 11, 1)
        assert shift_month(date(2024, 12, 31), 1) == date(2025, 1, 1)


class TestOverview:
    """Tests for overview statistics."""

    def test_scenario_totals(self, scenario_loans, today: date) -> None:
        stats = overview(scenario_loans, today)

        assert stats.total_loans == 3
        assert stats.active_loans == 2
        assert stats.paid_loans == 1
        assert stats.overdue_loans == 1
        assert stats.pending_loans == 1
        assert stats.total_debt == Decimal("156250")
        assert stats.total_interest == Decimal("6250")
        assert stats.paid_amount == Decimal("75000")
        assert stats.overdue_amount == Decimal("55000")
        assert stats.pending_amount == Decimal("26250")
        assert stats.smallest_loan == Decimal("26250")
        assert stats.largest_loan == Decimal("75000")
        assert stats.payment_rate == pytest.approx(33.333, abs=0.01)

    def test_status_amounts_sum_to_total(self, scenario_loans, today: date) -> None:
        stats = overview(scenario_loans, today)

        assert stats.paid_amount + stats.overdue_amount + stats.pending_amount == stats.total_debt
        assert stats.paid_loans + stats.overdue_loans + stats.pending_loans == stats.total_loans

    def test_empty_portfolio(self, today: date) -> None:
        stats = overview([], today)

        assert stats.total_loans == 0
        assert stats.total_debt == 0
        assert stats.average_loan_amount == 0
        assert stats.smallest_loan == 0
        assert stats.largest_loan == 0
        assert stats.payment_rate == 0.0

    def test_overdue_depends_on_now(self, make_loan, today: date) -> None:
        loans = [make_loan(days=5)]

        assert overview(loans, today).overdue_loans == 0
        assert overview(loans, today + timedelta(days=6)).overdue_loans == 1


class TestMonthlyBreakdown:
    """Tests for monthly buckets."""

    def test_window_months(self, today: date) -> None:
        buckets = monthly_breakdown([], today)

        assert len(buckets) == 12
        assert buckets[0].month == "2024-08"
        assert buckets[-1].month == "2025-07"
        assert buckets[-1].label == "Jul 2025"
        assert all(b.new_loans == 0 and b.total_amount == 0 for b in buckets)

    def test_scenario_buckets(self, scenario_loans, today: date) -> None:
        buckets = {b.month: b for b in monthly_breakdown(scenario_loans, today)}

        july = buckets["2025-07"]
        assert july.new_loans == 2
        assert july.total_amount == Decimal("81250")
        assert july.overdue_loans == 1
        assert july.paid_loans == 0
        assert july.average_amount == Decimal("40625")

        june = buckets["2025-06"]
        assert june.new_loans == 1
        assert june.paid_loans == 1
        assert june.total_amount == Decimal("75000")

    def test_loans_outside_window_ignored(self, make_loan, today: date) -> None:
        loans = [make_loan(days=60), make_loan(days=-400)]

        buckets = monthly_breakdown(loans, today)

        assert sum(b.new_loans for b in buckets) == 0

    def test_custom_window_wraps_year(self) -> None:
        buckets = monthly_breakdown([], date(2025, 2, 10), window_months=3)

        assert [b.month for b in buckets] == ["2024-12", "2025-01", "2025-02"]


class TestLenderAnalysis:
    """Tests for per-lender statistics."""

    def test_high_risk_lender(self, make_loan, today: date) -> None:
        loans = [
            make_loan(amount=1000, days=-10, lender="Acme"),
            make_loan(amount=1000, days=-3, lender="Acme"),
            make_loan(amount=1000, days=10, lender="Acme"),
        ]

        (acme,) = lender_analysis(loans, today)

        assert acme.name == "Acme"
        assert acme.total_loans == 3
        assert acme.overdue_loans == 2
        assert acme.overdue_rate == pytest.approx(66.667, abs=0.01)
        assert acme.risk_level == RiskLevel.HIGH

    def test_sorted_by_total_amount(self, scenario_loans, today: date) -> None:
        names = [stats.name for stats in lender_analysis(scenario_loans, today)]

        assert names == ["Acme", "John Doe", "Jane Roe"]

    def test_names_grouped_exactly(self, make_loan, today: date) -> None:
        loans = [make_loan(lender="John"), make_loan(lender="john")]

        assert len(lender_analysis(loans, today)) == 2

    def test_normalized_names(self, make_loan, today: date) -> None:
        loans = [make_loan(lender="John  Doe"), make_loan(lender="john doe")]

        (stats,) = lender_analysis(loans, today, normalize_names=True)

        assert stats.name == "John  Doe"
        assert stats.total_loans == 2

    @pytest.mark.parametrize(
        ("overdue_rate", "payment_rate", "expected"),
        [
            (0.0, 100.0, RiskLevel.LOW),
            (20.0, 60.0, RiskLevel.LOW),
            (25.0, 100.0, RiskLevel.MEDIUM),
            (0.0, 50.0, RiskLevel.MEDIUM),
            (50.0, 60.0, RiskLevel.MEDIUM),
            (51.0, 100.0, RiskLevel.HIGH),
            (0.0, 29.0, RiskLevel.HIGH),
        ],
    )
    def test_lender_risk_level(
        self, overdue_rate: float, payment_rate: float, expected: RiskLevel
    ) -> None:
        assert lender_risk_level(overdue_rate, payment_rate) == expected


class TestInterestAnalysis:
    """Tests for interest statistics."""

    def test_scenario(self, scenario_loans) -> None:
        stats = interest_analysis(scenario_loans)

        assert stats.total_interest == Decimal("6250")
        assert stats.interest_percentage == pytest.approx(4.1667, abs=0.001)
        assert stats.average_rate == Decimal("7.5")
        assert stats.highest_rate == Decimal("10")
        assert stats.lowest_rate == Decimal("5")
        assert stats.loans_with_interest == 2
        assert stats.interest_loan_percentage == pytest.approx(66.667, abs=0.01)
        assert stats.potential_revenue == Decimal("156250")

    def test_zero_rate_not_counted(self, make_loan) -> None:
        stats = interest_analysis([make_loan(rate=0), make_loan(rate=10)])

        assert stats.loans_with_interest == 1
        assert stats.lowest_rate == Decimal("10")

    def test_empty(self) -> None:
        stats = interest_analysis([])

        assert stats.total_interest == 0
        assert stats.average_rate == 0
        assert stats.interest_percentage == 0.0
        assert stats.loans_with_interest == 0


class TestPaymentTrends:
    """Tests for payment trend windows."""

    @pytest.fixture
    def paid_loans(self, make_loan):
        return [
            make_loan(amount=1000, days=-3, paid=True),
            make_loan(amount=2000, days=-20, paid=True),
            make_loan(amount=3000, days=-60, paid=True),
            make_loan(amount=4000, days=-400, paid=True),
            make_loan(amount=9000, days=-3),
        ]

    def test_windows(self, paid_loans, today: date) -> None:
        trends = payment_trends(paid_loans, today)

        assert [t.period for t in trends] == [
            "Last 7 days",
            "Last 30 days",
            "Last 90 days",
            "Last 6 months",
            "Last year",
        ]
        assert [t.payments for t in trends] == [1, 2, 3, 3, 3]
        assert [t.amount for t in trends] == [
            Decimal("1000"),
            Decimal("3000"),
            Decimal("6000"),
            Decimal("6000"),
            Decimal("6000"),
        ]

    def test_trend_classification(self, paid_loans, today: date) -> None:
        trends = payment_trends(paid_loans, today)

        assert trends[0].trend == TrendDirection.STABLE
        assert trends[0].change_percentage == 0.0
        assert trends[1].trend == TrendDirection.UP
        assert trends[1].change_percentage == pytest.approx(200.0)
        assert trends[2].change_percentage == pytest.approx(100.0)
        assert trends[3].trend == TrendDirection.STABLE

    def test_downward_change_is_signed(self, paid_loans, today: date) -> None:
        trends = payment_trends(paid_loans, today, windows=(30, 7))

        assert trends[1].trend == TrendDirection.DOWN
        assert trends[1].change_percentage == pytest.approx(-66.667, abs=0.01)

    def test_paid_before_due_date_counts(self, make_loan, today: date) -> None:
        trends = payment_trends([make_loan(days=10, paid=True)], today)

        assert all(t.payments == 1 for t in trends)

    def test_empty(self, today: date) -> None:
        trends = payment_trends([], today)

        assert len(trends) == 5
        assert all(t.amount == 0 and t.trend == TrendDirection.STABLE for t in trends)
