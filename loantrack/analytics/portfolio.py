"""Portfolio yield metrics, cash flow projection and period comparison."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import Decimal

from loantrack.analytics.aggregation import month_key, month_label, percentage, shift_month
from loantrack.config import ProjectionConfig
from loantrack.models.analytics import (
    CashFlowMonth,
    PerformanceComparison,
    PeriodSnapshot,
    PortfolioMetrics,
)
from loantrack.models.loan import Loan
from loantrack.records import ZERO, is_overdue, resolve_today, total_with_interest


def portfolio_metrics(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
) -> PortfolioMetrics:
    """Value, principal-weighted rate, yield, default and recovery rates."""
    today = resolve_today(now)
    loans = list(loans)

    total_value = sum((total_with_interest(loan) for loan in loans), ZERO)
    total_principal = sum((loan.amount for loan in loans), ZERO)

    weighted_rate = ZERO
    if total_principal:
        weighted_rate = sum(
            (loan.amount / total_principal * (loan.interest_rate or ZERO) for loan in loans),
            ZERO,
        )

    return PortfolioMetrics(
        total_value=total_value,
        weighted_average_rate=weighted_rate,
        portfolio_yield=percentage(total_value - total_principal, total_principal),
        default_rate=percentage(sum(1 for loan in loans if is_overdue(loan, today)), len(loans)),
        recovery_rate=percentage(sum(1 for loan in loans if loan.is_paid), len(loans)),
    )


def cash_flow_projection(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    months: int = 12,
    config: ProjectionConfig | None = None,
) -> list[CashFlowMonth]:
    """Expected repayments for the current month and the ones after it.

    Only unpaid loans due in a projected month count. Each contributes its
    total weighted by the probability of being paid, which is lower once
    the loan is overdue; the net figure deducts a collection cost on
    overdue amounts.
    """
    config = config or ProjectionConfig()
    today = resolve_today(now)
    unpaid = [loan for loan in loans if not loan.is_paid]

    pending_p = Decimal(str(config.pending_payment_probability))
    overdue_p = Decimal(str(config.overdue_payment_probability))
    cost = Decimal(str(config.collection_cost_rate))

    projection = []
    for offset in range(months):
        month = shift_month(today, offset)
        key = month_key(month)

        expected = ZERO
        overdue_amount = ZERO
        for loan in unpaid:
            if month_key(loan.repayment_date) != key:
                continue
            total = total_with_interest(loan)
            if is_overdue(loan, today):
                expected += total * overdue_p
                overdue_amount += total
            else:
                expected += total * pending_p

        projection.append(
            CashFlowMonth(
                month=key,
                label=month_label(month),
                expected_inflow=expected,
                overdue_amount=overdue_amount,
                net_cash_flow=expected - overdue_amount * cost,
            )
        )

    return projection


def percentage_change(current: float | Decimal, previous: float | Decimal) -> float:
    """Relative change in percent; 100 when growing from zero, 0 when both are zero."""
    if not previous:
        return 100.0 if current > 0 else 0.0
    return (float(current) - float(previous)) / float(previous) * 100


def performance_comparison(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    period_days: int = 90,
) -> PerformanceComparison:
    """Compare loans due in the last ``period_days`` with the period before."""
    today = resolve_today(now)
    loans = list(loans)
    current_start = today - timedelta(days=period_days)
    previous_start = today - timedelta(days=period_days * 2)

    current = [loan for loan in loans if loan.repayment_date >= current_start]
    previous = [
        loan for loan in loans if previous_start <= loan.repayment_date < current_start
    ]

    current_metrics = portfolio_metrics(current, today)
    previous_metrics = portfolio_metrics(previous, today)

    return PerformanceComparison(
        current_period=PeriodSnapshot(loans=len(current), metrics=current_metrics),
        previous_period=PeriodSnapshot(loans=len(previous), metrics=previous_metrics),
        volume_change=percentage_change(len(current), len(previous)),
        value_change=percentage_change(current_metrics.total_value, previous_metrics.total_value),
        yield_change=percentage_change(
            current_metrics.portfolio_yield, previous_metrics.portfolio_yield
        ),
        default_rate_change=percentage_change(
            current_metrics.default_rate, previous_metrics.default_rate
        ),
        recovery_rate_change=percentage_change(
            current_metrics.recovery_rate, previous_metrics.recovery_rate
        ),
    )
