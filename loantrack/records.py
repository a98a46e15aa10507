"""Derived state of a single loan.

Every other module reads status, overdue and total-with-interest through
these functions; nothing recomputes them inline.
"""

from datetime import date, datetime
from decimal import Decimal

from loantrack.models.enums import LoanStatus
from loantrack.models.loan import Loan

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def resolve_today(now: date | datetime | None = None) -> date:
    """Return the evaluation date for derived-state checks.

    Parameters
    ----------
    now : date | datetime | None
        Injected current time. ``None`` reads the wall clock; a
        ``datetime`` is truncated to its date.

    Returns
    -------
    date
        Calendar date used for overdue comparisons.
    """
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def has_interest(loan: Loan) -> bool:
    return loan.interest_rate is not None and loan.interest_rate > 0


def interest_amount(loan: Loan) -> Decimal:
    """Simple single-period interest on the principal."""
    if not loan.interest_rate:
        return ZERO
    return loan.amount * loan.interest_rate / HUNDRED


def total_with_interest(loan: Loan) -> Decimal:
    """Principal plus interest; equals ``amount`` for zero-interest loans."""
    return loan.amount + interest_amount(loan)


def is_overdue(loan: Loan, now: date | datetime | None = None) -> bool:
    """Unpaid and due strictly before the evaluation date."""
    return not loan.is_paid and loan.repayment_date < resolve_today(now)


def loan_status(loan: Loan, now: date | datetime | None = None) -> LoanStatus:
    if loan.is_paid:
        return LoanStatus.PAID
    if is_overdue(loan, now):
        return LoanStatus.OVERDUE
    return LoanStatus.PENDING
