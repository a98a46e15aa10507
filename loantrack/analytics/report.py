"""Combined analytics report over one loan snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timezone

from loantrack import __version__
from loantrack.analytics.aggregation import (
    interest_analysis,
    lender_analysis,
    monthly_breakdown,
    overview,
    payment_trends,
)
from loantrack.analytics.risk import risk_assessment
from loantrack.config import AnalyticsConfig
from loantrack.models.analytics import AnalyticsReport
from loantrack.models.loan import Loan
from loantrack.records import resolve_today

logger = logging.getLogger(__name__)


def build_report(
    loans: Iterable[Loan],
    now: date | datetime | None = None,
    config: AnalyticsConfig | None = None,
) -> AnalyticsReport:
    """Run every analytics view against the same loans and evaluation date.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loan snapshot.
    now : date | datetime | None
        Evaluation time. A ``datetime`` is also used as the report's
        generation timestamp.
    config : AnalyticsConfig | None
        Windows, thresholds and risk weights.

    Returns
    -------
    AnalyticsReport
        All views plus generation metadata.
    """
    config = config or AnalyticsConfig()
    loans = list(loans)
    today = resolve_today(now)
    generated_at = now if isinstance(now, datetime) else datetime.now(timezone.utc)

    logger.info("Generating analytics report for %d loans as of %s", len(loans), today)

    report = AnalyticsReport(
        overview=overview(loans, today),
        monthly=monthly_breakdown(loans, today, config.monthly_window),
        lenders=lender_analysis(loans, today, config.normalize_lender_names),
        interest=interest_analysis(loans),
        trends=payment_trends(loans, today, config.trend_windows, config.trend_threshold),
        risk=risk_assessment(loans, today, config.risk, config.normalize_lender_names),
        generated_at=generated_at,
        metadata={
            "as_of": today.isoformat(),
            "version": __version__,
            "normalize_lender_names": config.normalize_lender_names,
        },
    )

    logger.info(
        "Analytics report ready: %d loans, overall risk %d",
        report.overview.total_loans,
        report.risk.overall_risk,
    )
    return report
