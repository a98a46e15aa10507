"""Loan model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class Loan:
    """Money owed to a lender, due on a single repayment date.

    Derived values (total with interest, overdue, status) are never
    stored here; see ``loantrack.records``.
    """

    loan_id: str
    lender_name: str
    phone_number: str
    amount: Decimal  # Principal
    repayment_date: date
    interest_rate: Decimal | None = None  # Percentage, e.g. Decimal("10") for 10%
    is_paid: bool = False
