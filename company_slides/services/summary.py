from __future__ import annotations

from ..models.import_result import ImportResult

"""SUMMARY line rendering and user-facing import messages."""

__all__ = [
    "format_seconds",
    "render_summary_line",
    "render_import_message",
]

MAX_LISTED_SKIPS = 10


def format_seconds(value: float) -> str:
    """Render a float without scientific notation or trailing zeros."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip('0').rstrip('.')
    return f"{value:.3f}".rstrip('0').rstrip('.')


def render_summary_line(result: ImportResult) -> str:
    """Render the SUMMARY line for one import.

    Format:
    SUMMARY file={name} rows={accepted} inserted={inserted} skipped={k}
    batches={committed}/{total} elapsed_sec={s} status={ok|failed}

    >>> r = ImportResult(file_name="a.csv", accepted=3, inserted=3, skipped=[4],
    ...                  total_batches=1, committed_batches=1, elapsed_seconds=2.0)
    >>> render_summary_line(r)
    'SUMMARY file=a.csv rows=3 inserted=3 skipped=1 batches=1/1 elapsed_sec=2 status=ok'
    """
    return (
        f"SUMMARY file={result.file_name} "
        f"rows={result.accepted} "
        f"inserted={result.inserted} "
        f"skipped={len(result.skipped)} "
        f"batches={result.committed_batches}/{result.total_batches} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)} "
        f"status={'ok' if result.ok else 'failed'}"
    )


def _skip_suffix(skipped: list[int]) -> str:
    listed = ", ".join(str(n) for n in skipped[:MAX_LISTED_SKIPS])
    more = "..." if len(skipped) > MAX_LISTED_SKIPS else ""
    return f" ({len(skipped)} row(s) skipped: {listed}{more})"


def render_import_message(result: ImportResult) -> str:
    """User-facing outcome message for an import."""
    if result.error is not None:
        return f"{result.error} ({result.inserted} companies imported before the failure)"
    if result.accepted == 0:
        if result.skipped:
            return (
                f"No valid companies found. {len(result.skipped)} row(s) were skipped "
                "due to invalid data."
            )
        return "No valid companies found in CSV file"
    message = f"Successfully imported {result.inserted} companies!"
    if result.skipped:
        message += _skip_suffix(result.skipped)
    return message
