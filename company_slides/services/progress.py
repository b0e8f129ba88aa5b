from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

A single bar counts committed batches during an import. In non-TTY
environments (CI, piped output) the bar is disabled so that the labeled log
lines stay clean.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Batch progress bar for one import run."""

    def __init__(self, total_batches: int, *, description: str = "Importing companies") -> None:
        self.total_batches = total_batches
        self.description = description
        self.completed = 0
        self.inserted_rows = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_batches,
                desc=description,
                unit="batch",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def finish_batch(self, rows: int) -> None:
        """Record one committed batch of ``rows`` records."""
        self.completed += 1
        self.inserted_rows += rows
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(imported=self.inserted_rows)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
