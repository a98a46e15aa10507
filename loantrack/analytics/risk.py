"""Weighted portfolio risk heuristic.

Five factors are each scored 0-100 and combined with fixed weights into a
single score. The scoring is deliberately simple; weights and thresholds
come from ``RiskConfig`` and the recommendation texts match the wording of
existing reports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from loantrack.analytics.aggregation import lender_exposure, percentage
from loantrack.config import RiskConfig
from loantrack.models.analytics import RiskAssessment, RiskFactor
from loantrack.models.enums import Impact
from loantrack.models.loan import Loan
from loantrack.records import ZERO, has_interest, is_overdue, resolve_today

logger = logging.getLogger(__name__)

SUMMARY_HIGH = (
    "High risk portfolio requiring immediate attention. "
    "Focus on overdue collections and risk mitigation strategies."
)
SUMMARY_MODERATE = (
    "Moderate risk portfolio. Monitor key metrics closely and implement preventive measures."
)
SUMMARY_LOW = (
    "Low risk portfolio with good fundamentals. "
    "Maintain current practices and continue monitoring."
)


def overdue_rate_factor(overdue_rate: float, config: RiskConfig) -> RiskFactor:
    if overdue_rate > config.overdue_high:
        impact = Impact.HIGH
        recommendation = "Immediate action required - contact overdue borrowers"
    elif overdue_rate > config.overdue_medium:
        impact = Impact.MEDIUM
        recommendation = "Monitor closely and follow up on overdue loans"
    else:
        impact = Impact.LOW
        recommendation = "Maintain current collection practices"

    return RiskFactor(
        name="Overdue Rate",
        score=min(overdue_rate * 2, 100.0),
        impact=impact,
        recommendation=recommendation,
    )


def concentration_factor(concentration_rate: float, config: RiskConfig) -> RiskFactor:
    high, medium, low = config.concentration_scores
    if concentration_rate > config.concentration_high:
        return RiskFactor(
            name="Concentration Risk",
            score=high,
            impact=Impact.HIGH,
            recommendation="Diversify lending portfolio to reduce single-lender dependency",
        )
    if concentration_rate > config.concentration_medium:
        return RiskFactor(
            name="Concentration Risk",
            score=medium,
            impact=Impact.MEDIUM,
            recommendation="Consider diversifying to reduce concentration risk",
        )
    return RiskFactor(
        name="Concentration Risk",
        score=low,
        impact=Impact.LOW,
        recommendation="Good diversification across lenders",
    )


def interest_rate_factor(no_interest_rate: float, config: RiskConfig) -> RiskFactor:
    high, medium, low = config.interest_scores
    if no_interest_rate > config.no_interest_high:
        return RiskFactor(
            name="Interest Rate Risk",
            score=high,
            impact=Impact.MEDIUM,
            recommendation="Consider implementing interest rates to improve returns",
        )
    if no_interest_rate > config.no_interest_medium:
        return RiskFactor(
            name="Interest Rate Risk",
            score=medium,
            impact=Impact.LOW,
            recommendation="Review interest rate strategy for better profitability",
        )
    return RiskFactor(
        name="Interest Rate Risk",
        score=low,
        impact=Impact.VERY_LOW,
        recommendation="Good balance of interest-bearing loans",
    )


def payment_velocity_factor(payment_rate: float, config: RiskConfig) -> RiskFactor:
    high, medium, low = config.velocity_scores
    if payment_rate < config.velocity_low:
        return RiskFactor(
            name="Payment Velocity",
            score=high,
            impact=Impact.HIGH,
            recommendation="Improve collection processes and borrower communication",
        )
    if payment_rate < config.velocity_medium:
        return RiskFactor(
            name="Payment Velocity",
            score=medium,
            impact=Impact.MEDIUM,
            recommendation="Enhance payment reminders and follow-up procedures",
        )
    return RiskFactor(
        name="Payment Velocity",
        score=low,
        impact=Impact.LOW,
        recommendation="Excellent payment collection rate",
    )


def portfolio_size_factor(portfolio_size: int, config: RiskConfig) -> RiskFactor:
    high, medium, low = config.size_scores
    if portfolio_size < config.size_small:
        return RiskFactor(
            name="Portfolio Size",
            score=high,
            impact=Impact.MEDIUM,
            recommendation="Consider expanding portfolio for better risk distribution",
        )
    if portfolio_size < config.size_medium:
        return RiskFactor(
            name="Portfolio Size",
            score=medium,
            impact=Impact.LOW,
            recommendation="Good portfolio size, continue steady growth",
        )
    return RiskFactor(
        name="Portfolio Size",
        score=low,
        impact=Impact.VERY_LOW,
        recommendation="Well-diversified portfolio size",
    )


def weighted_score(factors: list[RiskFactor], weights: Iterable[float]) -> int:
    """Weighted sum of factor scores, rounded half-up to an integer."""
    total = sum(
        (Decimal(str(f.score)) * Decimal(str(w)) for f, w in zip(factors, weights)),
        Decimal("0"),
    )
    return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def risk_summary(score: int, config: RiskConfig) -> str:
    if score >= config.summary_high:
        return SUMMARY_HIGH
    if score >= config.summary_moderate:
        return SUMMARY_MODERATE
    return SUMMARY_LOW


def risk_assessment(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    config: RiskConfig | None = None,
    normalize_names: bool = False,
) -> RiskAssessment:
    """Score the portfolio across the five risk factors.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loan snapshot.
    now : date | datetime | None
        Evaluation time for overdue detection.
    config : RiskConfig | None
        Weights and thresholds; defaults to ``RiskConfig()``.
    normalize_names : bool
        Group lender exposure case-insensitively.

    Returns
    -------
    RiskAssessment
        Overall score, the five factors in fixed order, and a summary.
        Defined for an empty portfolio.
    """
    config = config or RiskConfig()
    today = resolve_today(now)
    loans = list(loans)
    count = len(loans)

    overdue_count = sum(1 for loan in loans if is_overdue(loan, today))
    paid_count = sum(1 for loan in loans if loan.is_paid)
    interest_count = sum(1 for loan in loans if has_interest(loan))

    exposure = lender_exposure(loans, normalize_names)
    total_debt = sum(exposure.values(), ZERO)
    largest_exposure = max(exposure.values(), default=ZERO)

    factors = [
        overdue_rate_factor(percentage(overdue_count, count), config),
        concentration_factor(percentage(largest_exposure, total_debt), config),
        interest_rate_factor(percentage(count - interest_count, count), config),
        payment_velocity_factor(percentage(paid_count, count), config),
        portfolio_size_factor(count, config),
    ]

    overall = weighted_score(factors, config.weights)
    logger.debug("Risk assessment for %d loans scored %d", count, overall)

    return RiskAssessment(
        overall_risk=overall,
        factors=factors,
        summary=risk_summary(overall, config),
    )
