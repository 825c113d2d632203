from __future__ import annotations

import logging
from dataclasses import dataclass

from motor_market.domain.errors import AuthenticationRequiredError, NotFoundError
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SetListingSavedRequest:
    viewer: Viewer | None
    listing_id: str
    saved: bool


@dataclass(frozen=True, slots=True)
class SetListingSavedResponse:
    listing_id: str
    saved: bool


class SetListingSaved:
    """
    Save or unsave a listing for the signed-in viewer.

    Both directions are idempotent. Authentication is checked before any
    repository call, so an anonymous attempt writes nothing.
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        saved_listing_repository: SavedListingRepository,
    ) -> None:
        self._listings = listing_repository
        self._saved = saved_listing_repository

    def execute(self, request: SetListingSavedRequest) -> SetListingSavedResponse:
        """
        Raises:
            AuthenticationRequiredError: If nobody is signed in
            NotFoundError: If saving a listing that doesn't exist
        """
        if request.viewer is None:
            raise AuthenticationRequiredError("Please log in to save listings")

        if request.saved:
            if self._listings.get_by_id(request.listing_id) is None:
                raise NotFoundError(resource="Listing", identifier=request.listing_id)
            self._saved.save(request.viewer.id, request.listing_id)
        else:
            self._saved.unsave(request.viewer.id, request.listing_id)

        logger.info(
            "Saved state changed",
            extra={
                "listing_id": request.listing_id,
                "user_id": request.viewer.id,
                "saved": request.saved,
            },
        )
        return SetListingSavedResponse(listing_id=request.listing_id, saved=request.saved)
