"""
Export of the filtered benchmark list to JSON and CSV files.
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from .models import BenchmarkRecord, ExportResult, Severity
from .notifications import Notifier
from .parsing import clean_json_value

logger = logging.getLogger(__name__)

EXPORT_FIELDS = (
    "id",
    "model_path",
    "model_name",
    "model_family",
    "task",
    "benchmark_name",
    "technique",
    "created_at",
    "total",
    "correct",
    "accuracy_percent",
    "by_answer_type",
    "mode",
    "generated_max_new_tokens",
    "stop_on_answer",
    "runtime_seconds",
    "avg_seconds_per_example",
    "out_dir",
    "val_json",
    "by_answer_type_serialized",
)

# A structured value cannot fill a flat cell, CSV carries the serialized copy only
CSV_FIELDS = tuple(name for name in EXPORT_FIELDS if name != "by_answer_type")

CSV_DELIMITER = ";"
_CSV_SPECIAL = ('"', ",", ";", "\n")

FILE_PREFIX = "benchmarks-export"


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


def build_export_rows(records: Sequence[BenchmarkRecord]) -> List[Dict[str, Any]]:
    """Project records onto the export field list."""
    rows = []
    for record in records:
        row = {name: getattr(record, name) for name in EXPORT_FIELDS[:-1]}
        row["by_answer_type"] = clean_json_value(record.by_answer_type)
        row["by_answer_type_serialized"] = (
            json.dumps(row["by_answer_type"], separators=(",", ":"), ensure_ascii=False, allow_nan=False)
            if row["by_answer_type"] is not None else None
        )
        rows.append(row)
    return rows


def to_json(rows: List[Dict[str, Any]]) -> str:
    return json.dumps(rows, indent=2, ensure_ascii=False, allow_nan=False)


def escape_csv_value(value: Any) -> str:
    """Render one CSV cell, quoting it when it holds a quote, comma, semicolon or newline."""
    if value is None:
        return ""
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    if any(ch in text for ch in _CSV_SPECIAL):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(rows: List[Dict[str, Any]]) -> str:
    lines = [CSV_DELIMITER.join(CSV_FIELDS)]
    for row in rows:
        lines.append(CSV_DELIMITER.join(escape_csv_value(row.get(name)) for name in CSV_FIELDS))
    return "\n".join(lines)


def export_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with ':' and '.' replaced by '-' so it fits in a filename."""
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def export_filename(export_format: ExportFormat, now: Optional[datetime] = None) -> str:
    return f"{FILE_PREFIX}-{export_timestamp(now)}.{ExportFormat(export_format).value}"


class Exporter:
    """Writes export files into a directory and reports the outcome through a notifier."""

    def __init__(
        self,
        export_dir: str,
        notifier: Notifier,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        self.export_dir = Path(export_dir)
        self.notifier = notifier
        self.clock = clock

    def export(self, records: Sequence[BenchmarkRecord], export_format) -> Optional[ExportResult]:
        """Export records; returns None with a notice when there is nothing to export or the write fails."""
        export_format = ExportFormat(export_format)
        if len(records) == 0:
            logger.warning("Export refused: no benchmarks match the current filters")
            self.notifier.notify(
                "Nothing to export",
                "Adjust the filters to select benchmarks before exporting.",
                Severity.WARNING,
            )
            return None

        rows = build_export_rows(records)
        content = to_json(rows) if export_format is ExportFormat.JSON else to_csv(rows)

        path = self.export_dir / export_filename(export_format, self.clock())
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing export to {path}: {e}")
            self.notifier.notify(
                "Export failed",
                f"Could not write the {export_format.value.upper()} export to {self.export_dir}.",
                Severity.ERROR,
            )
            return None

        logger.info(f"Exported {len(rows)} benchmarks to {path}")
        self.notifier.notify(
            "Export complete",
            f"Exported {len(rows)} benchmark(s) to {export_format.value.upper()}.",
            Severity.SUCCESS,
        )
        return ExportResult(path=str(path), format=export_format.value, count=len(rows))
