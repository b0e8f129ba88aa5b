from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

"""Sample CSV delivery.

Builds the response for the "download sample CSV" link: the bundled template
as an attachment, or a 404 with a JSON error body when the file is missing.
"""

__all__ = [
    "SAMPLE_FILE_NAME",
    "FileResponse",
    "sample_csv_response",
]

SAMPLE_FILE_NAME = "sample-companies.csv"


@dataclass(frozen=True)
class FileResponse:
    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == 200


def sample_csv_response(path: Path) -> FileResponse:
    """Serve ``path`` as a CSV attachment, or a 404 JSON error if absent."""
    try:
        content = path.read_bytes()
    except (FileNotFoundError, IsADirectoryError):
        return FileResponse(
            status=404,
            body=json.dumps({"error": "File not found"}).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
    return FileResponse(
        status=200,
        body=content,
        headers={
            "Content-Type": "text/csv",
            "Content-Disposition": f'attachment; filename="{SAMPLE_FILE_NAME}"',
        },
    )
