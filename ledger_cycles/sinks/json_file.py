"""JSON file sink for exporting ledger records."""

import json
import logging
from pathlib import Path
from typing import Any

from ledger_cycles.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output records to JSON files."""

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

    @classmethod
    def from_config(cls, config) -> "JsonFileSink":
        """Build a sink from a :class:`~ledger_cycles.config.LedgerConfig`."""
        return cls(config.output.json_output_dir, pretty=config.output.pretty_json)

    def write_batch(self, entity_type: str, records: list[Any]) -> Path:
        """Write a batch of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record) for record in records]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)

        self._counts[entity_type] = len(records)
        return file_path

    def read_batch(self, entity_type: str) -> list[dict[str, Any]]:
        """Read back the records written for ``entity_type``."""
        file_path = self.output_dir / f"{entity_type}.json"
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)

    def close(self) -> None:
        """Log a summary of what was written."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, count in self._counts.items():
            logger.info("  %s: %d records", entity_type, count)
