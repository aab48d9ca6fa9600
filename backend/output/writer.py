"""
Statement Writer Module
Exports a classified statement as JSON or CSV.
"""

import csv
import json
import logging
from pathlib import Path
from extractors.statement_classifier import StatementResult

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["id", "date", "time", "description", "amount", "type"]


class OutputWriteError(Exception):
    """Custom exception for export errors."""
    pass


class StatementWriter:
    """Writes StatementResult objects to disk."""

    def __init__(self, output_path: str, include_raw_text: bool = False):
        """
        Initialize writer.

        Args:
            output_path: Destination file; the suffix (.json or .csv) picks the format
            include_raw_text: Also store the statement text in JSON output
        """
        self.output_path = Path(output_path)
        self.include_raw_text = include_raw_text

    def write(self, result: StatementResult) -> Path:
        """
        Write the result in the format implied by the file suffix.

        Raises:
            OutputWriteError: On unsupported suffix or I/O failure
        """
        suffix = self.output_path.suffix.lower()
        if suffix == ".json":
            writer = self._write_json
        elif suffix == ".csv":
            writer = self._write_csv
        else:
            raise OutputWriteError(f"Unsupported output format: {self.output_path}")

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            writer(result)
        except OSError as e:
            logger.error(f"Failed to write {self.output_path}: {e}", exc_info=True)
            raise OutputWriteError(f"Failed to write {self.output_path}: {e}") from e

        logger.info(f"Wrote {len(result.transactions)} transactions to {self.output_path}")
        return self.output_path

    def _write_json(self, result: StatementResult):
        data = result.to_dict(include_raw_text=self.include_raw_text or result.is_empty)
        data["summary"] = result.summary()
        with open(self.output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def _write_csv(self, result: StatementResult):
        with open(self.output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
            writer.writeheader()
            for txn in result.transactions:
                writer.writerow(txn.to_dict())


def write_json(result: StatementResult, output_path: str, include_raw_text: bool = False) -> Path:
    """Convenience function to export a statement as JSON."""
    if Path(output_path).suffix.lower() != ".json":
        raise OutputWriteError(f"Expected a .json path: {output_path}")
    return StatementWriter(output_path, include_raw_text=include_raw_text).write(result)


def write_csv(result: StatementResult, output_path: str) -> Path:
    """Convenience function to export transactions as CSV."""
    if Path(output_path).suffix.lower() != ".csv":
        raise OutputWriteError(f"Expected a .csv path: {output_path}")
    return StatementWriter(output_path).write(result)
