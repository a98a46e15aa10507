"""Result records produced by the aggregation and analytics layers."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from loantrack.models.enums import Impact, RiskLevel, TrendDirection


@dataclass
class OverviewStats:
    """Portfolio-level totals partitioned by loan status."""

    total_loans: int
    active_loans: int
    paid_loans: int
    overdue_loans: int
    pending_loans: int
    total_debt: Decimal
    total_interest: Decimal
    paid_amount: Decimal
    overdue_amount: Decimal
    pending_amount: Decimal
    average_loan_amount: Decimal
    smallest_loan: Decimal
    largest_loan: Decimal
    payment_rate: float  # Percentage of loans marked paid


@dataclass
class MonthlyBucket:
    """Loans due in one calendar month."""

    month: str  # YYYY-MM
    label: str  # e.g. "Oct 2026"
    new_loans: int
    total_amount: Decimal
    paid_loans: int
    overdue_loans: int
    average_amount: Decimal


@dataclass
class LenderStats:
    """Per-lender totals and coarse risk label."""

    name: str
    total_loans: int
    total_amount: Decimal
    paid_loans: int
    overdue_loans: int
    payment_rate: float
    overdue_rate: float
    average_amount: Decimal
    risk_level: RiskLevel


@dataclass
class InterestStats:
    total_interest: Decimal
    interest_percentage: float  # Interest as a share of total principal
    average_rate: Decimal
    highest_rate: Decimal
    lowest_rate: Decimal
    loans_with_interest: int
    interest_loan_percentage: float
    potential_revenue: Decimal


@dataclass
class PaymentTrend:
    """Paid loans within a trailing window, compared with the previous window."""

    period: str
    days: int
    payments: int
    amount: Decimal
    trend: TrendDirection
    change_percentage: float


@dataclass
class RiskFactor:
    name: str
    score: float
    impact: Impact
    recommendation: str


@dataclass
class RiskAssessment:
    """Weighted portfolio risk score (0-100) and its contributing factors."""

    overall_risk: int
    factors: list[RiskFactor]
    summary: str


@dataclass
class PortfolioMetrics:
    total_value: Decimal
    weighted_average_rate: Decimal
    portfolio_yield: float
    default_rate: float
    recovery_rate: float


@dataclass
class CashFlowMonth:
    """Expected repayments for one upcoming month."""

    month: str
    label: str
    expected_inflow: Decimal
    overdue_amount: Decimal
    net_cash_flow: Decimal


@dataclass
class PeriodSnapshot:
    loans: int
    metrics: PortfolioMetrics


@dataclass
class PerformanceComparison:
    """Last 90 days against the 90 days before them."""

    current_period: PeriodSnapshot
    previous_period: PeriodSnapshot
    volume_change: float
    value_change: float
    yield_change: float
    default_rate_change: float
    recovery_rate_change: float


@dataclass
class AnalyticsReport:
    """Every analytics view over one snapshot of loans."""

    overview: OverviewStats
    monthly: list[MonthlyBucket]
    lenders: list[LenderStats]
    interest: InterestStats
    trends: list[PaymentTrend]
    risk: RiskAssessment
    generated_at: datetime
    metadata: dict = field(default_factory=dict)
