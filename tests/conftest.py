"""Pytest configuration and fixtures."""

import itertools
from collections.abc import Callable
from datetime import date, timedelta
from decimal import Decimal

import pytest

from loantrack.models.loan import Loan

# A Sunday
TODAY = date(2025, 7, 27)


@pytest.fixture
def today() -> date:
    """Fixed evaluation date for deterministic tests."""
    return TODAY


@pytest.fixture
def make_loan() -> Callable[..., Loan]:
    """Factory for loans due ``days`` after TODAY."""
    counter = itertools.count(1)

    def _make(
        amount: str | int = 10000,
        days: int = 10,
        rate: str | int | None = None,
        paid: bool = False,
        lender: str = "Ada Obi",
        phone: str = "+2348012345678",
    ) -> Loan:
        return Loan(
            loan_id=f"loan-test-{next(counter):03d}",
            lender_name=lender,
            phone_number=phone,
            amount=Decimal(str(amount)),
            repayment_date=TODAY + timedelta(days=days),
            interest_rate=Decimal(str(rate)) if rate is not None else None,
            is_paid=paid,
        )

    return _make


@pytest.fixture
def scenario_loans(make_loan: Callable[..., Loan]) -> list[Loan]:
    """Overdue, pending and paid loan from three lenders."""
    return [
        make_loan(amount=50000, rate=10, days=-1, lender="John Doe"),
        make_loan(amount=25000, rate=5, days=1, lender="Jane Roe"),
        make_loan(amount=75000, days=-30, paid=True, lender="Acme"),
    ]


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible generated data."""
    return 42
