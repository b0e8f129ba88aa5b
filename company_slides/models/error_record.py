from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

ErrorRecord is the structured entry written to the JSON Lines error log for
every skipped CSV row and every storage failure. ``row=-1`` marks file-level
errors where no single line is at fault.
"""

__all__ = [
    "ErrorRecord",
    "FILE_LEVEL_ROW",
]

FILE_LEVEL_ROW = -1


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being imported
        row: 1-based source line number, or -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable detail (skip reason or storage message)
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int  # 行番号。不明な場合 -1 許容
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry (fixed key set)."""
        return json.dumps(asdict(self), ensure_ascii=False)
