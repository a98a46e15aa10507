"""Console sink for reading reports and listings in a terminal."""

import json
from dataclasses import fields, is_dataclass
from decimal import Decimal
from typing import Any

from loantrack.config import CurrencyConfig
from loantrack.sinks.serialization import serialize_value


class ConsoleSink:
    """Print records to stdout, with money shown in the display currency.

    Decimal fields are money unless their name ends in ``rate``; those and
    all other values are printed the way the JSON export writes them.
    """

    def __init__(
        self,
        pretty: bool = True,
        max_records: int | None = None,
        currency: CurrencyConfig | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print each record.
        max_records : int | None
            Maximum records to print per batch (None for all).
        currency : CurrencyConfig | None
            Symbol and decimals for money values.
        """
        self.pretty = pretty
        self.max_records = max_records
        self.currency = currency or CurrencyConfig()
        self._counts: dict[str, int] = {}

    def format_money(self, value: Decimal) -> str:
        return f"{self.currency.symbol}{value:,.{self.currency.decimals}f}"

    def _display(self, value: Any, key: str = "") -> Any:
        if isinstance(value, Decimal) and not key.endswith("rate"):
            return self.format_money(value)
        if is_dataclass(value) and not isinstance(value, type):
            return {f.name: self._display(getattr(value, f.name), f.name) for f in fields(value)}
        if isinstance(value, dict):
            return {k: self._display(v, k) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return [self._display(v, key) for v in value]
        return serialize_value(value)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a titled section with one JSON object per record."""
        print(f"\n{'='*60}")
        print(f"{entity_type.upper()} ({len(records)} records)")
        print("=" * 60)

        shown = records[: self.max_records] if self.max_records else records
        for record in shown:
            data = self._display(record)
            if not isinstance(data, dict):
                data = {"value": str(record)}
            indent = 2 if self.pretty else None
            print(json.dumps(data, indent=indent, ensure_ascii=False, default=str))

        hidden = len(records) - len(shown)
        if hidden > 0:
            print(f"... and {hidden} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print per-section record counts."""
        print(f"\n{'-'*60}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
