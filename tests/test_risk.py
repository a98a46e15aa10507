"""Tests for the portfolio risk assessment."""

from datetime import date

import pytest

from loantrack.analytics.risk import (
    SUMMARY_HIGH,
    SUMMARY_LOW,
    SUMMARY_MODERATE,
    overdue_rate_factor,
    risk_assessment,
    weighted_score,
)
from loantrack.config import RiskConfig
from loantrack.exceptions import ConfigurationError
from loantrack.models.analytics import RiskFactor
from loantrack.models.enums import Impact

FACTOR_NAMES = [
    "Overdue Rate",
    "Concentration Risk",
    "Interest Rate Risk",
    "Payment Velocity",
    "Portfolio Size",
]


class TestRiskAssessment:
    """Tests for risk_assessment."""

    def test_empty_portfolio(self, today: date) -> None:
        assessment = risk_assessment([], today)

        assert assessment.overall_risk == 25
        assert [f.name for f in assessment.factors] == FACTOR_NAMES
        size = assessment.factors[4]
        assert size.score == 40
        assert size.recommendation == "Consider expanding portfolio for better risk distribution"
        assert assessment.summary == SUMMARY_LOW

    def test_scenario(self, scenario_loans, today: date) -> None:
        assessment = risk_assessment(scenario_loans, today)
        overdue, concentration, interest, velocity, size = assessment.factors

        assert overdue.score == pytest.approx(66.667, abs=0.01)
        assert overdue.impact == Impact.HIGH
        assert concentration.score == 50
        assert concentration.impact == Impact.MEDIUM
        assert interest.score == 10
        assert interest.impact == Impact.VERY_LOW
        assert velocity.score == 70
        assert size.score == 40
        assert assessment.overall_risk == 52
        assert assessment.summary == SUMMARY_MODERATE

    def test_high_risk_portfolio(self, make_loan, today: date) -> None:
        loans = [make_loan(days=-5, lender="Acme") for _ in range(10)]

        assessment = risk_assessment(loans, today)

        assert [f.score for f in assessment.factors] == [100.0, 80, 60, 70, 10]
        assert assessment.overall_risk == 74
        assert assessment.summary == SUMMARY_HIGH

    def test_low_risk_portfolio_rounds_half_up(self, make_loan, today: date) -> None:
        loans = [
            make_loan(amount=1000, rate=10, paid=True, lender=f"Lender {chr(65 + i)}")
            for i in range(10)
        ]

        assessment = risk_assessment(loans, today)

        assert [f.score for f in assessment.factors] == [0.0, 20, 10, 20, 10]
        # 11.5 rounds up
        assert assessment.overall_risk == 12
        assert assessment.summary == SUMMARY_LOW

    def test_deterministic(self, scenario_loans, today: date) -> None:
        assert risk_assessment(scenario_loans, today) == risk_assessment(scenario_loans, today)

    def test_custom_weights(self, today: date) -> None:
        config = RiskConfig(weights=(0.0, 0.0, 0.0, 0.0, 1.0))

        assert risk_assessment([], today, config).overall_risk == 40

    def test_normalized_concentration(self, make_loan, today: date) -> None:
        loans = [make_loan(lender="Acme"), make_loan(lender="ACME"), make_loan(lender="Zed")]

        exact = risk_assessment(loans, today)
        normalized = risk_assessment(loans, today, normalize_names=True)

        assert exact.factors[1].score == 50
        assert normalized.factors[1].score == 80


class TestRiskFactors:
    """Tests for individual factor scoring."""

    def test_overdue_score_capped(self) -> None:
        factor = overdue_rate_factor(80.0, RiskConfig())

        assert factor.score == 100.0
        assert factor.recommendation == "Immediate action required - contact overdue borrowers"

    def test_overdue_medium_band(self) -> None:
        factor = overdue_rate_factor(20.0, RiskConfig())

        assert factor.score == 40.0
        assert factor.impact == Impact.MEDIUM

    def test_weighted_score_half_up(self) -> None:
        factor = RiskFactor(name="x", score=45, impact=Impact.LOW, recommendation="")

        assert weighted_score([factor], [0.1]) == 5

    def test_weights_must_have_five_entries(self) -> None:
        with pytest.raises(ConfigurationError):
            RiskConfig(weights=(0.5, 0.5))  # type: ignore[arg-type]
