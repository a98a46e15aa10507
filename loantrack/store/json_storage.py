"""JSON file persistence for the loan collection."""

import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from loantrack.exceptions import StorageError
from loantrack.models.loan import Loan
from loantrack.sinks.serialization import serialize_value

logger = logging.getLogger(__name__)


def _finite_decimal(value: Any, field: str) -> Decimal:
    number = Decimal(str(value))
    if not number.is_finite():
        raise ValueError(f"{field} must be a finite number, got {value!r}")
    return number


def loan_from_record(record: dict[str, Any]) -> Loan:
    """Build a ``Loan`` from one entry of the loans file.

    Raises
    ------
    StorageError
        If the entry is not an object, a required key is missing or a
        value cannot be parsed. ``NaN`` and infinite numbers are rejected.
    """
    if not isinstance(record, dict):
        raise StorageError(f"Malformed loan record {record!r}: expected a JSON object")

    try:
        rate = record.get("interestRate")
        return Loan(
            loan_id=str(record["id"]),
            lender_name=record["lenderName"],
            phone_number=record["phoneNumber"],
            amount=_finite_decimal(record["amount"], "amount"),
            repayment_date=date.fromisoformat(record["repaymentDate"][:10]),
            interest_rate=_finite_decimal(rate, "interestRate") if rate is not None else None,
            is_paid=bool(record.get("isPaid", False)),
        )
    except (KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise StorageError(f"Malformed loan record {record.get('id', '?')!r}: {e}") from e


def loan_to_record(loan: Loan) -> dict[str, Any]:
    """Map a ``Loan`` onto the camelCase wire format."""
    record = {
        "id": loan.loan_id,
        "lenderName": loan.lender_name,
        "phoneNumber": loan.phone_number,
        "amount": serialize_value(loan.amount),
        "repaymentDate": loan.repayment_date.isoformat(),
        "isPaid": loan.is_paid,
    }
    if loan.interest_rate is not None:
        record["interestRate"] = serialize_value(loan.interest_rate)
    return record


class JsonLoanStorage:
    """Read and write the loans file as a JSON array."""

    def __init__(self, path: str | Path) -> None:
        """Initialize JSON loan storage.

        Parameters
        ----------
        path : str | Path
            Location of the loans file. Parent folders are created on save.
        """
        self.path = Path(path)

    def read_loans(self) -> list[Loan]:
        """Load every loan, creating an empty file when none exists."""
        if not self.path.exists():
            logger.info("Loans file %s not found, starting empty", self.path)
            self.save_loans([])
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read loans from %s: %s", self.path, e)
            raise StorageError(f"Cannot read loans file {self.path}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Loans file {self.path} must contain a JSON array")

        loans = [loan_from_record(record) for record in data]
        logger.info("Loaded %d loans from %s", len(loans), self.path)
        return loans

    def save_loans(self, loans: list[Loan]) -> None:
        """Overwrite the loans file with ``loans``."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([loan_to_record(loan) for loan in loans], f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to write loans to %s: %s", self.path, e)
            raise StorageError(f"Cannot write loans file {self.path}: {e}") from e

        logger.info("Saved %d loans to %s", len(loans), self.path)
