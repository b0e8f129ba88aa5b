from __future__ import annotations

import re

"""Google Drive share-link normalization.

Logo URLs are often pasted as Drive "share" links, which point at an HTML
viewer page instead of the image itself. These are rewritten to the
``uc?export=view`` form that serves the file content directly.

Recognized shapes:
- https://drive.google.com/file/d/<FILE_ID>/view?usp=sharing  (path id)
- https://drive.google.com/open?id=<FILE_ID>                  (query id)
- https://drive.google.com/uc?id=<FILE_ID>                    (already direct)
"""

__all__ = [
    "DRIVE_HOST",
    "direct_view_url",
    "normalize_drive_link",
]

DRIVE_HOST = "drive.google.com"
DIRECT_VIEW_TEMPLATE = "https://drive.google.com/uc?export=view&id={file_id}"

_PATH_ID_RE = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
_QUERY_ID_RE = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")


def direct_view_url(file_id: str) -> str:
    return DIRECT_VIEW_TEMPLATE.format(file_id=file_id)


def _extract_file_id(url: str) -> str | None:
    for pattern in (_PATH_ID_RE, _QUERY_ID_RE):
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def normalize_drive_link(url: str | None) -> str | None:
    """Convert a Drive share link into a directly fetchable image URL.

    Args:
        url: Raw link text from the CSV (may be None or blank)

    Returns:
        None for absent/blank input, the rewritten direct URL when a file id
        can be extracted, otherwise the trimmed input unchanged. Running the
        function on its own output returns the same value.
    """
    if url is None or not url.strip():
        return None

    trimmed = url.strip()
    if DRIVE_HOST not in trimmed:
        return trimmed
    if "/uc?" in trimmed:
        return trimmed

    file_id = _extract_file_id(trimmed)
    if file_id is None:
        # best effort: the viewer link may still render
        return trimmed
    return direct_view_url(file_id)
