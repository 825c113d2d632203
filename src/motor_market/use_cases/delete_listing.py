from __future__ import annotations

import logging
from dataclasses import dataclass

from motor_market.domain.errors import AuthenticationRequiredError, ForbiddenError, NotFoundError
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeleteListingRequest:
    viewer: Viewer | None
    listing_id: str


class DeleteListing:
    """
    Delete a listing on behalf of its owner.

    Saved-listing references are removed before the listing itself so no
    user is left with a dangling saved entry.
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        saved_listing_repository: SavedListingRepository,
    ) -> None:
        self._listings = listing_repository
        self._saved = saved_listing_repository

    def execute(self, request: DeleteListingRequest) -> None:
        """
        Raises:
            AuthenticationRequiredError: If nobody is signed in
            NotFoundError: If the listing doesn't exist
            ForbiddenError: If the viewer doesn't own the listing
        """
        if request.viewer is None:
            raise AuthenticationRequiredError("Please log in to delete a listing")

        listing = self._listings.get_by_id(request.listing_id)
        if listing is None:
            raise NotFoundError(resource="Listing", identifier=request.listing_id)

        if listing.owner_id != request.viewer.id:
            raise ForbiddenError(
                "Only the owner can delete this listing", listing_id=request.listing_id
            )

        removed_saves = self._saved.delete_for_listing(listing.id)
        self._listings.delete(listing.id)

        logger.info(
            "Listing deleted",
            extra={"listing_id": listing.id, "removed_saves": removed_saves},
        )
