"""Tests for the synthetic loan generator."""

from datetime import date

from loantrack.generators import LoanGenerator
from loantrack.records import is_overdue
from loantrack.validation import validate_phone_number


class TestLoanGenerator:
    """Tests for LoanGenerator."""

    def test_generate_loan(self, seed: int, today: date) -> None:
        loan = LoanGenerator(seed=seed).generate(today, days_from_today=14)

        assert loan.loan_id
        assert loan.amount > 0
        assert loan.amount % 1000 == 0
        assert loan.repayment_date == date(2025, 8, 10)
        assert loan.is_paid is False
        assert loan.interest_rate in LoanGenerator.INTEREST_RATES

    def test_seeded_output_is_reproducible(self, seed: int, today: date) -> None:
        first = LoanGenerator(seed=seed).generate_portfolio(10, today)
        second = LoanGenerator(seed=seed).generate_portfolio(10, today)

        assert first == second

    def test_unique_ids(self, seed: int, today: date) -> None:
        loans = LoanGenerator(seed=seed).generate_portfolio(50, today)

        assert len({loan.loan_id for loan in loans}) == 50

    def test_phone_numbers_are_valid(self, seed: int, today: date) -> None:
        for loan in LoanGenerator(seed=seed).generate_portfolio(20, today):
            assert validate_phone_number(loan.phone_number).is_valid

    def test_lender_pool(self, seed: int, today: date) -> None:
        loans = LoanGenerator(seed=seed, lender_pool_size=3).generate_portfolio(30, today)

        assert len({loan.lender_name for loan in loans}) <= 3

    def test_all_paid(self, seed: int, today: date) -> None:
        loans = LoanGenerator(seed=seed).generate_portfolio(10, today, paid_rate=1.0)

        assert all(loan.is_paid for loan in loans)

    def test_all_overdue(self, seed: int, today: date) -> None:
        loans = LoanGenerator(seed=seed).generate_portfolio(
            10, today, paid_rate=0.0, overdue_rate=1.0
        )

        assert all(is_overdue(loan, today) for loan in loans)

    def test_all_pending(self, seed: int, today: date) -> None:
        loans = LoanGenerator(seed=seed).generate_portfolio(
            10, today, paid_rate=0.0, overdue_rate=0.0
        )

        assert not any(loan.is_paid or is_overdue(loan, today) for loan in loans)
