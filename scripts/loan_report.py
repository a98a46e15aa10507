#!/usr/bin/env python3
"""Print or export portfolio analytics for the loans file."""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loantrack.analytics import build_report, cash_flow_projection, performance_comparison
from loantrack.config import LoanTrackConfig
from loantrack.exceptions import LoanTrackError
from loantrack.logging import setup_logging
from loantrack.sinks import ConsoleSink, JsonFileSink
from loantrack.store import JsonLoanStorage

logger = logging.getLogger("loantrack.scripts.loan_report")

SECTIONS = (
    "overview",
    "monthly",
    "lenders",
    "interest",
    "trends",
    "risk",
    "cashflow",
    "comparison",
)


def main() -> None:
    """Build the analytics report and send it to the selected sink."""
    config = LoanTrackConfig.from_env()

    parser = argparse.ArgumentParser(description="Loan portfolio analytics")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=config.storage.loans_path,
        help=f"Loans file (default: {config.storage.loans_path})",
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Evaluation date YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--section",
        choices=SECTIONS,
        action="append",
        help="Report section to include; repeat for several (default: all)",
    )
    parser.add_argument(
        "--sink",
        choices=["console", "json"],
        default="console",
        help="Output destination (default: console)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.storage.export_dir,
        help=f"Directory for --sink json (default: {config.storage.export_dir})",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Log level (default: INFO)")
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)

    try:
        loans = JsonLoanStorage(args.data_file).read_loans()
    except LoanTrackError as e:
        logger.error("Cannot load loans: %s", e)
        sys.exit(1)

    report = build_report(loans, args.as_of, config.analytics)
    views = {
        "overview": [report.overview],
        "monthly": report.monthly,
        "lenders": report.lenders,
        "interest": [report.interest],
        "trends": report.trends,
        "risk": [report.risk],
        "cashflow": cash_flow_projection(
            loans, args.as_of, config=config.analytics.projection
        ),
        "comparison": [performance_comparison(loans, args.as_of)],
    }

    if args.sink == "json":
        sink = JsonFileSink(args.output_dir, pretty=config.output.pretty_json)
    else:
        sink = ConsoleSink(pretty=config.output.pretty_json, currency=config.currency)

    try:
        for section in args.section or SECTIONS:
            sink.write_batch(section, views[section])
    except LoanTrackError as e:
        logger.error("Report export failed: %s", e)
        sys.exit(1)
    sink.close()


if __name__ == "__main__":
    main()
