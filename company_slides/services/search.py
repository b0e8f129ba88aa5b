from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..db.store import CompanyStore, StorageError, StorageNotConfiguredError
from ..models.company import CompanyRecord

"""Company search by name.

A search issues one case-insensitive substring query and returns the first
match. "Not found" is a normal outcome, kept distinct from storage errors and
from missing storage configuration.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "SearchStatus",
    "SearchOutcome",
    "NOT_FOUND_MESSAGE",
    "search_company",
]

NOT_FOUND_MESSAGE = "Company not found. Please try a different search term."


class SearchStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    EMPTY_QUERY = "empty_query"
    NOT_CONFIGURED = "not_configured"
    ERROR = "error"


@dataclass(frozen=True)
class SearchOutcome:
    status: SearchStatus
    company: CompanyRecord | None = None
    message: str | None = None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND


def search_company(store: CompanyStore | None, query: str) -> SearchOutcome:
    """Find the first company whose name contains ``query``.

    Args:
        store: Storage collaborator, None when not configured
        query: Free text; surrounding whitespace is ignored

    Returns:
        SearchOutcome; never raises for storage problems
    """
    needle = query.strip()
    if not needle:
        return SearchOutcome(SearchStatus.EMPTY_QUERY)
    if store is None:
        return SearchOutcome(SearchStatus.NOT_CONFIGURED, message=str(StorageNotConfiguredError()))

    try:
        company = store.find_one(needle)
    except StorageNotConfiguredError as e:
        return SearchOutcome(SearchStatus.NOT_CONFIGURED, message=str(e))
    except StorageError as e:
        logger.error("search query=%r failed: %s", needle, e)
        return SearchOutcome(SearchStatus.ERROR, message=f"Error searching for company: {e}")

    if company is None:
        logger.info("search query=%r no match", needle)
        return SearchOutcome(SearchStatus.NOT_FOUND, message=NOT_FOUND_MESSAGE)
    return SearchOutcome(SearchStatus.FOUND, company=company)
