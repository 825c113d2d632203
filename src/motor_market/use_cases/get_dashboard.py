from __future__ import annotations

from dataclasses import dataclass

from motor_market.domain.errors import AuthenticationRequiredError
from motor_market.domain.listing import Listing
from motor_market.domain.listing_summary import ListingSummary
from motor_market.domain.search import ListingQuery, Operator, Predicate, SortKey, ordering_for
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository
from motor_market.use_cases.browse_listings import summarize_for_viewer

RECENT_LISTINGS_LIMIT = 3
SAVED_LISTINGS_LIMIT = 3
SAVED_IDS_LOOKUP_LIMIT = 10


@dataclass(frozen=True, slots=True)
class DashboardResponse:
    listing_count: int
    saved_count: int
    recent_listings: list[ListingSummary]
    saved_listings: list[ListingSummary]


class GetDashboard:
    """
    The signed-in viewer's dashboard: counts, newest own listings and a few
    saved listings.

    Saved ids whose listing no longer exists are skipped.
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        saved_listing_repository: SavedListingRepository,
    ) -> None:
        self._listings = listing_repository
        self._saved = saved_listing_repository

    def execute(self, viewer: Viewer | None) -> DashboardResponse:
        if viewer is None:
            raise AuthenticationRequiredError("Please log in to view your dashboard")

        newest = ordering_for(SortKey.NEWEST)

        own = self._listings.fetch_page(
            ListingQuery(
                predicates=(Predicate("owner_id", Operator.EQ, viewer.id),),
                ordering=newest,
                offset=0,
                limit=RECENT_LISTINGS_LIMIT,
            )
        )

        saved_listings: list[Listing] = []
        saved_ids = self._saved.listing_ids_for(viewer.id, limit=SAVED_IDS_LOOKUP_LIMIT)
        if saved_ids:
            saved_listings = self._listings.fetch_page(
                ListingQuery(
                    predicates=(Predicate("id", Operator.IN, tuple(saved_ids)),),
                    ordering=newest,
                    offset=0,
                    limit=SAVED_LISTINGS_LIMIT,
                )
            ).listings

        return DashboardResponse(
            listing_count=own.total_count,
            saved_count=self._saved.count_for_user(viewer.id),
            recent_listings=summarize_for_viewer(own.listings, viewer, self._saved),
            saved_listings=summarize_for_viewer(saved_listings, viewer, self._saved),
        )
