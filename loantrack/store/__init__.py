"""Loan ledger and its JSON persistence."""

from loantrack.store.json_storage import JsonLoanStorage, loan_from_record, loan_to_record
from loantrack.store.ledger import LoanBook

__all__ = ["JsonLoanStorage", "LoanBook", "loan_from_record", "loan_to_record"]
