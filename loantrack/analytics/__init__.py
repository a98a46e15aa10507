"""Aggregation and analytics over loan snapshots."""

from loantrack.analytics.aggregation import (
    interest_analysis,
    lender_analysis,
    monthly_breakdown,
    overview,
    payment_trends,
)
from loantrack.analytics.portfolio import (
    cash_flow_projection,
    performance_comparison,
    portfolio_metrics,
)
from loantrack.analytics.report import build_report
from loantrack.analytics.risk import risk_assessment

__all__ = [
    "build_report",
    "cash_flow_projection",
    "interest_analysis",
    "lender_analysis",
    "monthly_breakdown",
    "overview",
    "payment_trends",
    "performance_comparison",
    "portfolio_metrics",
    "risk_assessment",
]
