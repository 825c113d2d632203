from __future__ import annotations

from dataclasses import dataclass

from motor_market.domain.listing_summary import ListingSummary
from motor_market.domain.search import ListingQuery, SortKey, ordering_for
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository
from motor_market.use_cases.browse_listings import summarize_for_viewer

FEATURED_LIMIT = 6


@dataclass(frozen=True, slots=True)
class ListFeaturedListingsResponse:
    listings: list[ListingSummary]


class ListFeaturedListings:
    """The newest listings, for the landing page."""

    def __init__(
        self,
        listing_repository: ListingRepository,
        saved_listing_repository: SavedListingRepository,
    ) -> None:
        self._listings = listing_repository
        self._saved = saved_listing_repository

    def execute(self, viewer: Viewer | None = None) -> ListFeaturedListingsResponse:
        query = ListingQuery(ordering=ordering_for(SortKey.NEWEST), offset=0, limit=FEATURED_LIMIT)
        result = self._listings.fetch_page(query)
        return ListFeaturedListingsResponse(
            listings=summarize_for_viewer(result.listings, viewer, self._saved)
        )
