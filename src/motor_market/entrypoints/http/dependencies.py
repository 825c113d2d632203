"""
Dependency injection for FastAPI routes.

Key principle: Database sessions and repositories are per-request, not cached.
Only stateless singletons (the image store) use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from motor_market.adapters.local_image_storage import LocalImageStorage
from motor_market.adapters.postgres_listing_repository import PostgresListingRepository
from motor_market.adapters.postgres_saved_listing_repository import (
    PostgresSavedListingRepository,
)
from motor_market.domain.viewer import Viewer
from motor_market.infra.db.session import get_session
from motor_market.infra.storage.config import image_public_base_url, image_storage_dir
from motor_market.ports.image_storage import ImageStorage
from motor_market.ports.listing_repository import ListingRepository
from motor_market.ports.saved_listing_repository import SavedListingRepository
from motor_market.use_cases.browse_listings import BrowseListings
from motor_market.use_cases.create_listing import CreateListing
from motor_market.use_cases.delete_listing import DeleteListing
from motor_market.use_cases.get_dashboard import GetDashboard
from motor_market.use_cases.get_listing import GetListing
from motor_market.use_cases.list_featured_listings import ListFeaturedListings
from motor_market.use_cases.set_listing_saved import SetListingSaved
from motor_market.use_cases.upload_listing_image import UploadListingImage


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() commits on success, rolls back on
    exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_current_viewer(
    x_user_id: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Viewer | None:
    """
    The signed-in viewer, as forwarded by the identity provider in front of
    the API. Requests without ``X-User-Id`` are anonymous.
    """
    if not x_user_id:
        return None
    return Viewer(id=x_user_id, email=x_user_email)


def get_listing_repository(db: Session = Depends(get_db)) -> ListingRepository:
    return PostgresListingRepository(session=db)


def get_saved_listing_repository(db: Session = Depends(get_db)) -> SavedListingRepository:
    return PostgresSavedListingRepository(session=db)


@lru_cache
def get_image_storage() -> ImageStorage:
    return LocalImageStorage(root=image_storage_dir(), public_base_url=image_public_base_url())


def get_browse_listings_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
    saved: SavedListingRepository = Depends(get_saved_listing_repository),
) -> BrowseListings:
    """
    Factory function that returns a configured BrowseListings use case.

    Both repositories share the request's session (FastAPI caches get_db
    within one request).
    """
    return BrowseListings(listing_repository=listings, saved_listing_repository=saved)


def get_featured_listings_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
    saved: SavedListingRepository = Depends(get_saved_listing_repository),
) -> ListFeaturedListings:
    return ListFeaturedListings(listing_repository=listings, saved_listing_repository=saved)


def get_get_listing_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
    saved: SavedListingRepository = Depends(get_saved_listing_repository),
) -> GetListing:
    return GetListing(listing_repository=listings, saved_listing_repository=saved)


def get_create_listing_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
) -> CreateListing:
    return CreateListing(listing_repository=listings)


def get_delete_listing_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
    saved: SavedListingRepository = Depends(get_saved_listing_repository),
) -> DeleteListing:
    return DeleteListing(listing_repository=listings, saved_listing_repository=saved)


def get_set_listing_saved_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
    saved: SavedListingRepository = Depends(get_saved_listing_repository),
) -> SetListingSaved:
    return SetListingSaved(listing_repository=listings, saved_listing_repository=saved)


def get_dashboard_use_case(
    listings: ListingRepository = Depends(get_listing_repository),
    saved: SavedListingRepository = Depends(get_saved_listing_repository),
) -> GetDashboard:
    return GetDashboard(listing_repository=listings, saved_listing_repository=saved)


def get_upload_listing_image_use_case(
    storage: ImageStorage = Depends(get_image_storage),
) -> UploadListingImage:
    return UploadListingImage(image_storage=storage)
