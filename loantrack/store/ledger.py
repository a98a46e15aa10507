"""In-memory loan ledger with lifecycle operations."""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal

from loantrack.exceptions import LoanNotFoundError
from loantrack.models.enums import LoanStatus, SortField, SortOrder
from loantrack.models.loan import Loan
from loantrack.records import ZERO, loan_status, resolve_today, total_with_interest
from loantrack.records import is_overdue as loan_is_overdue

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"lender_name", "phone_number", "amount", "repayment_date", "interest_rate", "is_paid"}
)

# Paid loans sort first, overdue last
_STATUS_ORDER = {LoanStatus.PAID: 0, LoanStatus.PENDING: 1, LoanStatus.OVERDUE: 2}


@dataclass
class LoanBook:
    """Loans keyed by id, in insertion order.

    Loans are immutable values; edits replace the stored instance. Callers
    receive snapshots and never a reference back into the book.
    """

    _loans: dict[str, Loan] = field(default_factory=dict)

    @classmethod
    def from_loans(cls, loans: list[Loan]) -> "LoanBook":
        book = cls()
        for loan in loans:
            book.add(loan)
        return book

    def __len__(self) -> int:
        return len(self._loans)

    def __contains__(self, loan_id: object) -> bool:
        return loan_id in self._loans

    def add(self, loan: Loan) -> None:
        """Add an existing loan (e.g. loaded from storage)."""
        self._loans[loan.loan_id] = loan

    def add_loan(
        self,
        lender_name: str,
        phone_number: str,
        amount: Decimal,
        repayment_date: date,
        interest_rate: Decimal | None = None,
    ) -> Loan:
        """Record a new, unpaid loan under a fresh id."""
        loan = Loan(
            loan_id=str(uuid.uuid4()),
            lender_name=lender_name,
            phone_number=phone_number,
            amount=amount,
            repayment_date=repayment_date,
            interest_rate=interest_rate,
            is_paid=False,
        )
        self._loans[loan.loan_id] = loan
        logger.info("Added loan %s from %s", loan.loan_id, lender_name)
        return loan

    def get(self, loan_id: str) -> Loan:
        try:
            return self._loans[loan_id]
        except KeyError:
            raise LoanNotFoundError(f"Loan {loan_id} not found") from None

    def update_loan(self, loan_id: str, **changes: object) -> Loan:
        """Replace stored fields of a loan. The id cannot change."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        updated = replace(self.get(loan_id), **changes)
        self._loans[loan_id] = updated
        logger.info("Updated loan %s (%s)", loan_id, ", ".join(sorted(changes)))
        return updated

    def mark_paid(self, loan_id: str) -> Loan:
        """Settle a loan. Marking an already paid loan is a no-op."""
        loan = self.get(loan_id)
        if loan.is_paid:
            return loan
        return self.update_loan(loan_id, is_paid=True)

    def delete_loan(self, loan_id: str) -> Loan:
        """Permanently remove a loan and return it."""
        loan = self.get(loan_id)
        del self._loans[loan_id]
        logger.info("Deleted loan %s", loan_id)
        return loan

    def loans(self) -> list[Loan]:
        return list(self._loans.values())

    def query(
        self,
        is_paid: bool | None = None,
        is_overdue: bool | None = None,
        sort_by: SortField | str | None = None,
        order: SortOrder | str = SortOrder.ASC,
        now: date | datetime | None = None,
    ) -> list[Loan]:
        """Filter and sort loans for listing or export.

        Parameters
        ----------
        is_paid : bool | None
            Keep only loans with this paid flag.
        is_overdue : bool | None
            Keep only loans with this overdue state.
        sort_by : SortField | str | None
            ``date``, ``amount`` (total with interest), ``lender``
            (case-insensitive) or ``status`` (paid, pending, overdue).
        order : SortOrder | str
            ``asc`` or ``desc``.
        now : date | datetime | None
            Evaluation time for overdue checks.

        Returns
        -------
        list[Loan]
            Matching loans; insertion order when unsorted.
        """
        today = resolve_today(now)
        result = self.loans()

        if is_paid is not None:
            result = [loan for loan in result if loan.is_paid == is_paid]
        if is_overdue is not None:
            result = [loan for loan in result if loan_is_overdue(loan, today) == is_overdue]

        if sort_by is not None:
            sort_field = SortField(sort_by)
            keys = {
                SortField.DATE: lambda loan: loan.repayment_date,
                SortField.AMOUNT: total_with_interest,
                SortField.LENDER: lambda loan: loan.lender_name.lower(),
                SortField.STATUS: lambda loan: _STATUS_ORDER[loan_status(loan, today)],
            }
            result.sort(key=keys[sort_field], reverse=SortOrder(order) == SortOrder.DESC)

        return result

    def total_debt(self) -> Decimal:
        return sum((total_with_interest(loan) for loan in self._loans.values()), ZERO)

    def summary(self, now: date | datetime | None = None) -> dict[str, int]:
        """Return loan counts by status."""
        today = resolve_today(now)
        counts = {"loans": len(self._loans)}
        for status in LoanStatus:
            counts[status.value.lower()] = 0
        for loan in self._loans.values():
            counts[loan_status(loan, today).value.lower()] += 1
        return counts
