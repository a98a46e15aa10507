"""Portfolio-level summaries over a snapshot of loans.

All functions are pure: they read the loans passed in plus the injected
``now`` and return new result records. Amounts are summed unrounded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import Decimal

from loantrack.models.analytics import (
    InterestStats,
    LenderStats,
    MonthlyBucket,
    OverviewStats,
    PaymentTrend,
)
from loantrack.models.enums import LoanStatus, RiskLevel, TrendDirection
from loantrack.models.loan import Loan
from loantrack.records import (
    ZERO,
    has_interest,
    interest_amount,
    loan_status,
    resolve_today,
    total_with_interest,
)

logger = logging.getLogger(__name__)

TREND_PERIODS = {
    7: "Last 7 days",
    30: "Last 30 days",
    90: "Last 90 days",
    180: "Last 6 months",
    365: "Last year",
}


def percentage(part: float | Decimal, whole: float | Decimal) -> float:
    """``part / whole * 100``, or 0 when ``whole`` is zero."""
    if not whole:
        return 0.0
    return float(part) / float(whole) * 100


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def shift_month(d: date, offset: int) -> date:
    """First day of the month ``offset`` months away from ``d``."""
    index = d.year * 12 + (d.month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


def month_label(d: date) -> str:
    return d.strftime("%b %Y")


def overview(loans: Iterable[Loan], now: date | datetime | None = None) -> OverviewStats:
    """Counts and amounts by status plus portfolio totals.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loan snapshot; order is irrelevant.
    now : date | datetime | None
        Evaluation time for overdue detection.

    Returns
    -------
    OverviewStats
        Totals; every field is zero for an empty portfolio.
    """
    today = resolve_today(now)
    loans = list(loans)

    counts = {status: 0 for status in LoanStatus}
    amounts = {status: ZERO for status in LoanStatus}
    totals: list[Decimal] = []
    total_interest = ZERO

    for loan in loans:
        status = loan_status(loan, today)
        total = total_with_interest(loan)
        counts[status] += 1
        amounts[status] += total
        totals.append(total)
        total_interest += interest_amount(loan)

    total_loans = len(loans)
    total_debt = sum(totals, ZERO)

    stats = OverviewStats(
        total_loans=total_loans,
        active_loans=total_loans - counts[LoanStatus.PAID],
        paid_loans=counts[LoanStatus.PAID],
        overdue_loans=counts[LoanStatus.OVERDUE],
        pending_loans=counts[LoanStatus.PENDING],
        total_debt=total_debt,
        total_interest=total_interest,
        paid_amount=amounts[LoanStatus.PAID],
        overdue_amount=amounts[LoanStatus.OVERDUE],
        pending_amount=amounts[LoanStatus.PENDING],
        average_loan_amount=total_debt / total_loans if total_loans else ZERO,
        smallest_loan=min(totals, default=ZERO),
        largest_loan=max(totals, default=ZERO),
        payment_rate=percentage(counts[LoanStatus.PAID], total_loans),
    )
    logger.debug("Overview generated for %d loans", total_loans)
    return stats


def monthly_breakdown(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    window_months: int = 12,
) -> list[MonthlyBucket]:
    """Bucket loans by repayment month over a trailing window.

    The window ends with the current month. Buckets are created before
    any loan is read, so empty months are reported with zeros; loans due
    outside the window are ignored.
    """
    today = resolve_today(now)

    months = [shift_month(today, -offset) for offset in range(window_months - 1, -1, -1)]
    buckets: dict[str, dict] = {
        month_key(m): {"new_loans": 0, "total_amount": ZERO, "paid_loans": 0, "overdue_loans": 0}
        for m in months
    }

    for loan in loans:
        data = buckets.get(month_key(loan.repayment_date))
        if data is None:
            continue
        data["new_loans"] += 1
        data["total_amount"] += total_with_interest(loan)
        status = loan_status(loan, today)
        if status == LoanStatus.PAID:
            data["paid_loans"] += 1
        elif status == LoanStatus.OVERDUE:
            data["overdue_loans"] += 1

    breakdown = []
    for m in months:
        data = buckets[month_key(m)]
        breakdown.append(
            MonthlyBucket(
                month=month_key(m),
                label=month_label(m),
                new_loans=data["new_loans"],
                total_amount=data["total_amount"],
                paid_loans=data["paid_loans"],
                overdue_loans=data["overdue_loans"],
                average_amount=(
                    data["total_amount"] / data["new_loans"] if data["new_loans"] else ZERO
                ),
            )
        )

    logger.debug("Monthly breakdown generated for %d months", len(breakdown))
    return breakdown


def lender_key(name: str, normalize: bool = False) -> str:
    """Grouping key for a lender name.

    Exact match by default, so "John" and "john" are different lenders.
    With ``normalize`` the name is whitespace-collapsed and case-folded.
    """
    if not normalize:
        return name
    return " ".join(name.split()).casefold()


def lender_risk_level(overdue_rate: float, payment_rate: float) -> RiskLevel:
    if overdue_rate > 50 or payment_rate < 30:
        return RiskLevel.HIGH
    if overdue_rate > 20 or payment_rate < 60:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def lender_exposure(loans: Iterable[Loan], normalize: bool = False) -> dict[str, Decimal]:
    """Total with interest owed to each lender."""
    exposure: dict[str, Decimal] = {}
    for loan in loans:
        key = lender_key(loan.lender_name, normalize)
        exposure[key] = exposure.get(key, ZERO) + total_with_interest(loan)
    return exposure


def lender_analysis(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    normalize_names: bool = False,
) -> list[LenderStats]:
    """Per-lender statistics ordered by total amount, largest first."""
    today = resolve_today(now)

    groups: dict[str, dict] = {}
    for loan in loans:
        key = lender_key(loan.lender_name, normalize_names)
        data = groups.setdefault(
            key,
            {"name": loan.lender_name, "count": 0, "total": ZERO, "paid": 0, "overdue": 0},
        )
        data["count"] += 1
        data["total"] += total_with_interest(loan)
        status = loan_status(loan, today)
        if status == LoanStatus.PAID:
            data["paid"] += 1
        elif status == LoanStatus.OVERDUE:
            data["overdue"] += 1

    analysis = []
    for data in groups.values():
        payment_rate = percentage(data["paid"], data["count"])
        overdue_rate = percentage(data["overdue"], data["count"])
        analysis.append(
            LenderStats(
                name=data["name"],
                total_loans=data["count"],
                total_amount=data["total"],
                paid_loans=data["paid"],
                overdue_loans=data["overdue"],
                payment_rate=payment_rate,
                overdue_rate=overdue_rate,
                average_amount=data["total"] / data["count"],
                risk_level=lender_risk_level(overdue_rate, payment_rate),
            )
        )

    analysis.sort(key=lambda stats: stats.total_amount, reverse=True)
    logger.debug("Lender analysis generated for %d lenders", len(analysis))
    return analysis


def interest_analysis(loans: Iterable[Loan]) -> InterestStats:
    """Interest earned/expected and the spread of rates among interest-bearing loans."""
    loans = list(loans)
    rates = [loan.interest_rate for loan in loans if has_interest(loan)]

    total_interest = sum((interest_amount(loan) for loan in loans), ZERO)
    total_principal = sum((loan.amount for loan in loans), ZERO)

    return InterestStats(
        total_interest=total_interest,
        interest_percentage=percentage(total_interest, total_principal),
        average_rate=sum(rates, ZERO) / len(rates) if rates else ZERO,
        highest_rate=max(rates, default=ZERO),
        lowest_rate=min(rates, default=ZERO),
        loans_with_interest=len(rates),
        interest_loan_percentage=percentage(len(rates), len(loans)),
        potential_revenue=sum((total_with_interest(loan) for loan in loans), ZERO),
    )


def payment_trends(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    windows: Iterable[int] = (7, 30, 90, 180, 365),
    threshold: float = 5.0,
) -> list[PaymentTrend]:
    """Paid loans per trailing window, each compared with the previous window.

    A window of ``n`` days holds paid loans whose repayment date is on or
    after ``today - n``. Change is classified ``up`` above ``threshold``
    percent, ``down`` below ``-threshold``, else ``stable``.
    """
    today = resolve_today(now)
    paid = [loan for loan in loans if loan.is_paid]

    trends: list[PaymentTrend] = []
    previous_amount: Decimal | None = None

    for days in windows:
        cutoff = today - timedelta(days=days)
        in_window = [loan for loan in paid if loan.repayment_date >= cutoff]
        amount = sum((total_with_interest(loan) for loan in in_window), ZERO)

        trend = TrendDirection.STABLE
        change = 0.0
        if previous_amount:
            change = percentage(amount - previous_amount, previous_amount)
            if change > threshold:
                trend = TrendDirection.UP
            elif change < -threshold:
                trend = TrendDirection.DOWN

        trends.append(
            PaymentTrend(
                period=TREND_PERIODS.get(days, f"Last {days} days"),
                days=days,
                payments=len(in_window),
                amount=amount,
                trend=trend,
                change_percentage=change,
            )
        )
        previous_amount = amount

    return trends
