"""Link helpers used by the CSV importer (logo URLs)."""

from .google_drive import DRIVE_HOST, direct_view_url, normalize_drive_link

__all__ = [
    "DRIVE_HOST",
    "direct_view_url",
    "normalize_drive_link",
]
