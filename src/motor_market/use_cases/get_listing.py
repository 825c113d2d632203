"""Get listing by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from motor_market.domain.errors import NotFoundError
from motor_market.domain.listing import Listing
from motor_market.domain.listing_summary import ListingSummary
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository
from motor_market.use_cases.browse_listings import summarize_for_viewer


@dataclass(frozen=True, slots=True)
class GetListingRequest:
    """Request to get a listing by ID."""

    listing_id: str
    viewer: Viewer | None = None


@dataclass(frozen=True, slots=True)
class GetListingResponse:
    """The listing plus the viewer-specific affordances."""

    listing: Listing
    summary: ListingSummary


class GetListing:
    """
    Use case for retrieving a single listing by ID.

    Responsibilities:
    - Delegate to repository for data access
    - Raise NotFoundError if the listing doesn't exist (malformed ids included)
    - Compute ownership and save affordances for the viewer
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        saved_listing_repository: SavedListingRepository,
    ) -> None:
        """
        Initialize use case with dependencies.

        Args:
            listing_repository: Repository for listing data access
            saved_listing_repository: Repository for the viewer's saved listings
        """
        self._listings = listing_repository
        self._saved = saved_listing_repository

    def execute(self, request: GetListingRequest) -> GetListingResponse:
        """
        Execute the get listing use case.

        Raises:
            NotFoundError: If listing with given ID doesn't exist
        """
        listing = self._listings.get_by_id(request.listing_id)

        if listing is None:
            raise NotFoundError(resource="Listing", identifier=request.listing_id)

        [summary] = summarize_for_viewer([listing], request.viewer, self._saved)
        return GetListingResponse(listing=listing, summary=summary)
