#!/usr/bin/env python3
"""Generate a demo loans file.

Writes a synthetic portfolio to the configured loans file (or --output) so
the report and management scripts have something to work with.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loantrack.config import LoanTrackConfig
from loantrack.generators import LoanGenerator
from loantrack.logging import setup_logging
from loantrack.store import JsonLoanStorage, LoanBook

logger = logging.getLogger("loantrack.scripts.generate_sample_data")


def main() -> None:
    """Generate a sample portfolio and save it."""
    config = LoanTrackConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate a demo loans file")
    parser.add_argument("--count", type=int, default=25, help="Number of loans (default: 25)")
    parser.add_argument(
        "--seed", type=int, default=config.seed or 42, help="Random seed (default: 42)"
    )
    parser.add_argument(
        "--paid-rate", type=float, default=0.4, help="Share of paid loans (default: 0.4)"
    )
    parser.add_argument(
        "--overdue-rate", type=float, default=0.2, help="Share of overdue loans (default: 0.2)"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=config.storage.loans_path,
        help=f"Loans file to write (default: {config.storage.loans_path})",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Log level (default: INFO)")
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    generator = LoanGenerator(seed=args.seed)
    book = LoanBook.from_loans(
        generator.generate_portfolio(
            args.count,
            paid_rate=args.paid_rate,
            overdue_rate=args.overdue_rate,
        )
    )

    JsonLoanStorage(args.output).save_loans(book.loans())

    print("=" * 60)
    print("Sample portfolio")
    print("=" * 60)
    for name, count in book.summary().items():
        print(f"{name + ':':12}{count}")
    print(f"\nSaved to: {args.output}")


if __name__ == "__main__":
    main()
