"""Browsing state for one marketplace page view.

Filter, sort and page changes each trigger exactly one fetch through
BrowseListings. Fetches are not cancelled; instead every fetch carries a
sequence number and only the most recently issued one may update the state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

from motor_market.domain.errors import ListingFetchError
from motor_market.domain.listing_summary import ListingSummary
from motor_market.domain.search import (
    PAGE_SIZE,
    FilterCriteria,
    PageRequest,
    SortKey,
    extract_filter_criteria,
)
from motor_market.domain.viewer import Viewer
from motor_market.use_cases.browse_listings import BrowseListings, BrowseListingsRequest

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No vehicles found"


class MarketplaceBrowser:
    def __init__(
        self,
        browse_listings: BrowseListings,
        viewer: Viewer | None = None,
        params: Mapping[str, str | None] | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        params = params or {}
        self._browse = browse_listings
        self._viewer = viewer
        self._page_size = page_size
        self._issued = 0

        self.criteria: FilterCriteria = extract_filter_criteria(params)
        self.sort: SortKey = SortKey.parse(params.get("sort"))
        self.current_page = 1
        self.listings: list[ListingSummary] = []
        self.total_count = 0
        self.total_pages = 0
        self.loading = False
        self.error: str | None = None

    @property
    def can_go_previous(self) -> bool:
        return self.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def show_pagination(self) -> bool:
        return bool(self.listings) and self.total_pages > 1

    @property
    def page_numbers(self) -> list[int]:
        return list(range(1, self.total_pages + 1))

    @property
    def status_message(self) -> str:
        if not self.listings:
            return NO_RESULTS_MESSAGE
        return f"Showing {len(self.listings)} vehicles"

    async def load(self) -> bool:
        return await self._fetch()

    async def set_filters(self, params: Mapping[str, str | None]) -> bool:
        """New filters start again from the first page."""
        self.criteria = extract_filter_criteria(params)
        self.current_page = 1
        return await self._fetch()

    async def set_sort(self, sort: str | None) -> bool:
        self.sort = SortKey.parse(sort)
        self.current_page = 1
        return await self._fetch()

    async def set_page(self, page: int) -> bool:
        # Range is enforced by the controls (can_go_previous / can_go_next), not here.
        self.current_page = page
        return await self._fetch()

    async def previous_page(self) -> bool:
        if not self.can_go_previous:
            return False
        return await self.set_page(self.current_page - 1)

    async def next_page(self) -> bool:
        if not self.can_go_next:
            return False
        return await self.set_page(self.current_page + 1)

    async def _fetch(self) -> bool:
        """
        Issue one fetch for the current state.

        Returns:
            True if this fetch's result was applied, False if it failed or
            was superseded by a later fetch
        """
        self._issued += 1
        sequence = self._issued
        self.loading = True

        request = BrowseListingsRequest(
            page_request=PageRequest(
                criteria=self.criteria,
                sort=self.sort,
                page=self.current_page,
                page_size=self._page_size,
            ),
            viewer=self._viewer,
        )

        try:
            response = await asyncio.to_thread(self._browse.execute, request)
        except ListingFetchError as exc:
            if sequence != self._issued:
                logger.debug("Discarding stale fetch failure", extra={"sequence": sequence})
                return False

            logger.error(
                "Error fetching listings",
                exc_info=exc,
                extra={"sequence": sequence, "page": self.current_page},
            )
            self.listings = []
            self.total_count = 0
            self.total_pages = 0
            self.error = exc.message
            self.loading = False
            return False

        if sequence != self._issued:
            logger.debug(
                "Discarding stale listings response",
                extra={"sequence": sequence, "latest": self._issued},
            )
            return False

        self.listings = response.listings
        self.total_count = response.total_count
        self.total_pages = response.total_pages
        self.error = None
        self.loading = False
        return True
