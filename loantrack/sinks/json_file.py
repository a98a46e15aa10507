"""JSON file sink for exporting reports and loan listings."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from loantrack.exceptions import SinkError
from loantrack.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output records to timestamped JSON files."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}
        self._paths: dict[str, Path] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> Path:
        """Write a batch of records to ``<entity_type>_<timestamp>.json``."""
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        file_path = self.output_dir / f"{entity_type}_{timestamp}.json"

        data = [to_dict(record) for record in records]

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as e:
            logger.error("Failed to write %s: %s", file_path, e)
            raise SinkError(f"Cannot write {file_path}: {e}") from e

        self._counts[entity_type] = len(records)
        self._paths[entity_type] = file_path
        logger.info("Exported %d %s records to %s", len(records), entity_type, file_path)
        return file_path

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records ({self._paths[entity_type].name})")
