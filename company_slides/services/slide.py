from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..ingest.row_mapper import round_half_up
from ..models.company import CompanyRecord
from .search import SearchOutcome

"""Slide display state machine and view model.

States:
    NORMAL                 slide shown inline
    FULLSCREEN_IDLE        slide shown full screen, no search in flight
    FULLSCREEN_SEARCHING   full screen search submitted, waiting for a result

Transitions:
    NORMAL          --fullscreen_changed(True)-->   FULLSCREEN_IDLE
    FULLSCREEN_*    --fullscreen_changed(False)-->  NORMAL
    FULLSCREEN_IDLE --submit_search(query)-->       FULLSCREEN_SEARCHING
    FULLSCREEN_SEARCHING --search_result/failed-->  FULLSCREEN_IDLE

toggle_fullscreen() never changes the state by itself: it returns the request
(ENTER/EXIT) for the host to perform, and the host reports the actual change
back through fullscreen_changed(). Overlapping searches are not fenced; the
last result applied wins.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "NO_LOGO",
    "SlideMode",
    "FullscreenRequest",
    "SlideView",
    "SlideDisplay",
    "format_amount",
]

NO_LOGO = "NO LOGO"


class SlideMode(Enum):
    NORMAL = "normal"
    FULLSCREEN_IDLE = "fullscreen_idle"
    FULLSCREEN_SEARCHING = "fullscreen_searching"


class FullscreenRequest(Enum):
    ENTER = "enter"
    EXIT = "exit"


def format_amount(value: float) -> str:
    """Round to an integer and group thousands en-US style (1,234,567)."""
    return f"{round_half_up(value):,}"


@dataclass(frozen=True)
class SlideView:
    """Display-ready fields of one company slide."""
    company_name: str
    origin_country: str
    sector: str  # upper-cased label
    income_first_year: str
    income_second_year: str
    base_price: str
    logo_url: str | None
    fullscreen: bool = False

    @property
    def has_logo(self) -> bool:
        return bool(self.logo_url)

    @staticmethod
    def from_company(company: CompanyRecord, fullscreen: bool = False) -> SlideView:
        logo = company.logo_url.strip() if company.logo_url else ""
        return SlideView(
            company_name=company.company_name,
            origin_country=company.origin_country,
            sector=company.sector.upper(),
            income_first_year=format_amount(company.revenue_2022),
            income_second_year=format_amount(company.revenue_2023),
            base_price=format_amount(company.base_price),
            logo_url=logo or None,
            fullscreen=fullscreen,
        )

    def render_text(self) -> str:
        """Plain text rendering (CLI)."""
        return "\n".join(
            [
                self.company_name,
                f"ORIGIN COUNTRY : {self.origin_country}",
                f"SECTOR: {self.sector}",
                f"INCOME 1st Year: {self.income_first_year}",
                f"INCOME 2nd Year: {self.income_second_year}",
                f"BASE PRICE: {self.base_price}",
                f"LOGO: {self.logo_url if self.has_logo else NO_LOGO}",
            ]
        )


class SlideDisplay:
    """Holds the displayed company and the full screen/search state."""

    def __init__(self, company: CompanyRecord) -> None:
        self.company = company
        self.mode = SlideMode.NORMAL
        self.search_bar_open = False
        self.pending_query: str | None = None
        self.last_error: str | None = None

    @property
    def fullscreen(self) -> bool:
        return self.mode is not SlideMode.NORMAL

    def view(self) -> SlideView:
        return SlideView.from_company(self.company, fullscreen=self.fullscreen)

    def toggle_fullscreen(self) -> FullscreenRequest:
        """Return the fullscreen request the host should perform."""
        return FullscreenRequest.EXIT if self.fullscreen else FullscreenRequest.ENTER

    def fullscreen_changed(self, active: bool) -> None:
        """External notification that fullscreen was entered or left."""
        if active:
            if self.mode is SlideMode.NORMAL:
                self.mode = SlideMode.FULLSCREEN_IDLE
            return
        self.mode = SlideMode.NORMAL
        self.search_bar_open = False
        self.pending_query = None

    def toggle_search_bar(self) -> bool:
        """Show/hide the full screen search bar; ignored outside full screen."""
        if self.fullscreen:
            self.search_bar_open = not self.search_bar_open
        return self.search_bar_open

    def submit_search(self, query: str) -> str | None:
        """Start a search; returns the query to run, or None if not accepted."""
        needle = query.strip()
        if self.mode is not SlideMode.FULLSCREEN_IDLE or not needle:
            return None
        self.mode = SlideMode.FULLSCREEN_SEARCHING
        self.pending_query = needle
        self.last_error = None
        return needle

    def search_result(self, company: CompanyRecord) -> None:
        """Replace the displayed company with a search hit."""
        self.company = company
        self.last_error = None
        if self.mode is SlideMode.FULLSCREEN_SEARCHING:
            self.mode = SlideMode.FULLSCREEN_IDLE
            self.search_bar_open = False
            self.pending_query = None

    def search_failed(self, message: str | None) -> None:
        """Keep the current company; remember why the search failed."""
        self.last_error = message
        if self.mode is SlideMode.FULLSCREEN_SEARCHING:
            self.mode = SlideMode.FULLSCREEN_IDLE
            self.pending_query = None
        logger.debug("slide search failed: %s", message)

    def apply(self, outcome: SearchOutcome) -> None:
        if outcome.found and outcome.company is not None:
            self.search_result(outcome.company)
        else:
            self.search_failed(outcome.message)
