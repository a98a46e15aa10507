"""Tests for derived loan state."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from loantrack.models.enums import LoanStatus
from loantrack.records import (
    has_interest,
    interest_amount,
    is_overdue,
    loan_status,
    resolve_today,
    total_with_interest,
)


class TestResolveToday:
    """Tests for evaluation date resolution."""

    def test_none_reads_clock(self) -> None:
        assert resolve_today(None) == date.today()

    def test_datetime_truncated(self) -> None:
        assert resolve_today(datetime(2025, 7, 27, 23, 59)) == date(2025, 7, 27)

    def test_date_passthrough(self, today: date) -> None:
        assert resolve_today(today) is today


class TestInterest:
    """Tests for interest and total with interest."""

    def test_total_with_interest(self, make_loan) -> None:
        loan = make_loan(amount=50000, rate=10)

        assert interest_amount(loan) == Decimal("5000")
        assert total_with_interest(loan) == Decimal("55000")

    def test_no_interest(self, make_loan) -> None:
        loan = make_loan(amount=75000)

        assert not has_interest(loan)
        assert total_with_interest(loan) == Decimal("75000")

    def test_zero_rate_equals_amount(self, make_loan) -> None:
        loan = make_loan(amount=75000, rate=0)

        assert not has_interest(loan)
        assert total_with_interest(loan) == loan.amount

    def test_fractional_rate_is_exact(self, make_loan) -> None:
        loan = make_loan(amount=1000, rate="2.5")

        assert total_with_interest(loan) == Decimal("1025")


class TestOverdue:
    """Tests for overdue detection and status."""

    def test_unpaid_past_due_is_overdue(self, make_loan, today: date) -> None:
        assert is_overdue(make_loan(days=-1), today)

    def test_due_today_is_not_overdue(self, make_loan, today: date) -> None:
        loan = make_loan(days=0)

        assert not is_overdue(loan, today)
        assert loan_status(loan, today) == LoanStatus.PENDING

    def test_paid_is_never_overdue(self, make_loan, today: date) -> None:
        loan = make_loan(days=-30, paid=True)

        for offset in (-60, 0, 60):
            assert not is_overdue(loan, today + timedelta(days=offset))

    def test_datetime_end_of_day(self, make_loan) -> None:
        loan = make_loan(days=0)

        assert not is_overdue(loan, datetime(2025, 7, 27, 23, 59, 59))
        assert is_overdue(loan, datetime(2025, 7, 28, 0, 0, 1))

    def test_status_partition(self, make_loan, today: date) -> None:
        loans = [
            make_loan(days=-5),
            make_loan(days=5),
            make_loan(days=-5, paid=True),
            make_loan(days=5, paid=True),
        ]

        statuses = [loan_status(loan, today) for loan in loans]

        assert statuses == [
            LoanStatus.OVERDUE,
            LoanStatus.PENDING,
            LoanStatus.PAID,
            LoanStatus.PAID,
        ]
