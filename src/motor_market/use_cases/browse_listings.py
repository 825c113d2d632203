from __future__ import annotations

from dataclasses import dataclass

from motor_market.domain.listing import Listing
from motor_market.domain.listing_summary import ListingSummary, summarize_listing
from motor_market.domain.search import PageRequest, build_listing_query, count_pages
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository


@dataclass(frozen=True, slots=True)
class BrowseListingsRequest:
    page_request: PageRequest
    viewer: Viewer | None = None


@dataclass(frozen=True, slots=True)
class BrowseListingsResponse:
    listings: list[ListingSummary]
    total_count: int
    page: int
    page_size: int
    total_pages: int


def summarize_for_viewer(
    listings: list[Listing],
    viewer: Viewer | None,
    saved_listing_repository: SavedListingRepository,
) -> list[ListingSummary]:
    """Summaries with saved flags; one saved-listings lookup for signed-in viewers."""
    saved_ids: set[str] = set()
    if viewer is not None and listings:
        saved_ids = saved_listing_repository.saved_among(
            viewer.id, [listing.id for listing in listings]
        )

    return [summarize_listing(listing, viewer, saved=listing.id in saved_ids) for listing in listings]


class BrowseListings:
    """
    Marketplace browsing: filters, sort and page in, one page of summaries out.

    Each execution issues exactly one ``fetch_page``; nothing is cached or
    retried. Datastore failures surface as ListingFetchError.
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        saved_listing_repository: SavedListingRepository,
    ) -> None:
        self._listings = listing_repository
        self._saved = saved_listing_repository

    def execute(self, request: BrowseListingsRequest) -> BrowseListingsResponse:
        """
        Execute marketplace browsing.

        Args:
            request: Page request plus the (optional) viewer

        Returns:
            Response with listing summaries and pagination metadata

        Raises:
            ListingFetchError: If the listing datastore fails
        """
        page_request = request.page_request
        result = self._listings.fetch_page(build_listing_query(page_request))

        return BrowseListingsResponse(
            listings=summarize_for_viewer(result.listings, request.viewer, self._saved),
            total_count=result.total_count,
            page=page_request.page,
            page_size=page_request.page_size,
            total_pages=count_pages(result.total_count, page_request.page_size),
        )
