from __future__ import annotations

import logging
from dataclasses import dataclass

from motor_market.domain.errors import AuthenticationRequiredError
from motor_market.domain.listing import Listing, NewListing
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreateListingRequest:
    viewer: Viewer | None
    listing: NewListing


class CreateListing:
    """
    Publish a new listing owned by the signed-in viewer.

    The owner is always the viewer; it cannot be supplied by the caller.
    """

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._listings = listing_repository

    def execute(self, request: CreateListingRequest) -> Listing:
        """
        Raises:
            AuthenticationRequiredError: If nobody is signed in
            ValidationError: If the listing breaks a creation rule
        """
        if request.viewer is None:
            raise AuthenticationRequiredError("Please log in to create a listing")

        request.listing.validate()

        listing = self._listings.create(owner_id=request.viewer.id, new_listing=request.listing)

        logger.info(
            "Listing created",
            extra={"listing_id": listing.id, "owner_id": listing.owner_id},
        )
        return listing
