#!/usr/bin/env python3
"""Add, edit, settle, delete and list loans in the loans file."""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loantrack.config import LoanTrackConfig
from loantrack.exceptions import LoanTrackError, LoanValidationError
from loantrack.logging import setup_logging
from loantrack.models.enums import SortField, SortOrder
from loantrack.models.loan import Loan
from loantrack.records import loan_status, total_with_interest
from loantrack.sinks import ConsoleSink, JsonFileSink
from loantrack.store import JsonLoanStorage, LoanBook
from loantrack.validation import (
    ensure_valid,
    parse_date,
    sanitize_loan_data,
    validate_amount,
    validate_interest_rate,
    validate_lender_name,
    validate_loan,
    validate_phone_number,
    validate_repayment_date,
)

logger = logging.getLogger("loantrack.scripts.manage_loans")


def add_loan(book: LoanBook, args: argparse.Namespace, config: LoanTrackConfig) -> Loan:
    raw = {
        "lender_name": args.lender,
        "phone_number": args.phone,
        "amount": args.amount,
        "repayment_date": args.due,
        "interest_rate": args.interest,
    }
    result = ensure_valid(validate_loan(raw, config=config.validation))
    for warning in result.warnings:
        print(f"warning: {warning}")

    data = sanitize_loan_data(raw)
    loan = book.add_loan(
        lender_name=data["lender_name"],
        phone_number=data["phone_number"],
        amount=data["amount"],
        repayment_date=parse_date(data["repayment_date"]),
        interest_rate=data.get("interest_rate"),
    )
    print(f"Added loan {loan.loan_id}: total {total_with_interest(loan)}")
    return loan


def edit_loan(book: LoanBook, args: argparse.Namespace, config: LoanTrackConfig) -> Loan | None:
    raw: dict[str, str] = {}
    if args.lender is not None:
        ensure_valid(validate_lender_name(args.lender, config.validation))
        raw["lender_name"] = args.lender
    if args.phone is not None:
        ensure_valid(validate_phone_number(args.phone, config.validation))
        raw["phone_number"] = args.phone
    if args.amount is not None:
        ensure_valid(validate_amount(args.amount, config.validation))
        raw["amount"] = args.amount
    if args.due is not None:
        ensure_valid(validate_repayment_date(args.due))
        raw["repayment_date"] = args.due
    if args.interest is not None:
        ensure_valid(validate_interest_rate(args.interest, config.validation))
        raw["interest_rate"] = args.interest

    if not raw:
        print("Nothing to change")
        return None

    changes: dict[str, object] = sanitize_loan_data(raw)
    if "repayment_date" in changes:
        changes["repayment_date"] = parse_date(changes["repayment_date"])

    loan = book.update_loan(args.loan_id, **changes)
    print(f"Updated loan {loan.loan_id}")
    return loan


def list_loans(book: LoanBook, args: argparse.Namespace, config: LoanTrackConfig) -> None:
    loans = book.query(
        is_paid=args.paid,
        is_overdue=args.overdue,
        sort_by=args.sort_by,
        order=args.order,
    )
    rows = [
        {
            "id": loan.loan_id,
            "lender": loan.lender_name,
            "phone": loan.phone_number,
            "amount": loan.amount,
            "interest_rate": loan.interest_rate,
            "total_with_interest": total_with_interest(loan),
            "repayment_date": loan.repayment_date,
            "status": loan_status(loan),
        }
        for loan in loans
    ]

    if args.export:
        sink = JsonFileSink(config.storage.export_dir, pretty=config.output.pretty_json)
    else:
        sink = ConsoleSink(pretty=False, currency=config.currency)
    sink.write_batch("loans", rows)
    sink.close()


def _bool_flag(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


def main(argv: list[str] | None = None) -> None:
    """Run one ledger command against the loans file."""
    config = LoanTrackConfig.from_env()

    parser = argparse.ArgumentParser(description="Manage the loans file")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=config.storage.loans_path,
        help=f"Loans file (default: {config.storage.loans_path})",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Record a new loan")
    add.add_argument("--lender", required=True)
    add.add_argument("--phone", required=True)
    add.add_argument("--amount", required=True)
    add.add_argument("--due", required=True, help="Repayment date YYYY-MM-DD")
    add.add_argument("--interest", default=None, help="Interest rate in percent")

    edit = commands.add_parser("edit", help="Change stored fields of a loan")
    edit.add_argument("loan_id")
    edit.add_argument("--lender")
    edit.add_argument("--phone")
    edit.add_argument("--amount")
    edit.add_argument("--due")
    edit.add_argument("--interest")

    pay = commands.add_parser("pay", help="Mark a loan as paid")
    pay.add_argument("loan_id")

    delete = commands.add_parser("delete", help="Delete a loan permanently")
    delete.add_argument("loan_id")

    listing = commands.add_parser("list", help="List loans")
    listing.add_argument("--paid", type=_bool_flag, default=None)
    listing.add_argument("--overdue", type=_bool_flag, default=None)
    listing.add_argument("--sort-by", choices=[f.value for f in SortField], default=None)
    listing.add_argument("--order", choices=[o.value for o in SortOrder], default="asc")
    listing.add_argument("--export", action="store_true", help="Write a JSON export file")

    args = parser.parse_args(argv)
    setup_logging(args.log_level, config.log_format, config.storage.log_dir / "loantrack.log")

    storage = JsonLoanStorage(args.data_file)
    try:
        book = LoanBook.from_loans(storage.read_loans())

        if args.command == "add":
            add_loan(book, args, config)
        elif args.command == "edit":
            edit_loan(book, args, config)
        elif args.command == "pay":
            loan = book.mark_paid(args.loan_id)
            print(f"Loan {loan.loan_id} marked as paid")
        elif args.command == "delete":
            book.delete_loan(args.loan_id)
            print(f"Loan {args.loan_id} deleted")
        else:
            list_loans(book, args, config)
            return

        storage.save_loans(book.loans())
    except LoanValidationError as e:
        for error in e.errors:
            print(f"error: {error}", file=sys.stderr)
        sys.exit(2)
    except LoanTrackError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
