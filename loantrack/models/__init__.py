"""Domain models for loan bookkeeping."""

from loantrack.models.analytics import (
    AnalyticsReport,
    CashFlowMonth,
    InterestStats,
    LenderStats,
    MonthlyBucket,
    OverviewStats,
    PaymentTrend,
    PerformanceComparison,
    PeriodSnapshot,
    PortfolioMetrics,
    RiskAssessment,
    RiskFactor,
)
from loantrack.models.enums import (
    Impact,
    LoanStatus,
    RiskLevel,
    SortField,
    SortOrder,
    TrendDirection,
)
from loantrack.models.loan import Loan

__all__ = [
    "AnalyticsReport",
    "CashFlowMonth",
    "Impact",
    "InterestStats",
    "LenderStats",
    "Loan",
    "LoanStatus",
    "MonthlyBucket",
    "OverviewStats",
    "PaymentTrend",
    "PerformanceComparison",
    "PeriodSnapshot",
    "PortfolioMetrics",
    "RiskAssessment",
    "RiskFactor",
    "RiskLevel",
    "SortField",
    "SortOrder",
    "TrendDirection",
]
