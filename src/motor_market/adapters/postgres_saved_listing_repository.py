"""PostgreSQL implementation of SavedListingRepository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from motor_market.domain.errors import ListingFetchError
from motor_market.infra.db.models.listing import SavedListingRow
from motor_market.ports.saved_listing_repository import SavedListingRepository

UPDATE_FAILED_MESSAGE = "Unable to update saved listings. Please try again."


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None


class PostgresSavedListingRepository(SavedListingRepository):
    """
    Saved listings in the ``saved_listings`` table.

    Every datastore failure surfaces as ListingFetchError with the driver
    error chained, whichever method hit it.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, user_id: str, listing_id: str) -> None:
        listing_uuid = _as_uuid(listing_id)
        if listing_uuid is None:
            return

        try:
            if self._find(user_id, listing_uuid) is not None:
                return
            self._session.add(SavedListingRow(user_id=user_id, listing_id=listing_uuid))
            self._session.flush()
        except SQLAlchemyError as exc:
            raise ListingFetchError(
                UPDATE_FAILED_MESSAGE, operation="save", listing_id=listing_id
            ) from exc

    def unsave(self, user_id: str, listing_id: str) -> None:
        listing_uuid = _as_uuid(listing_id)
        if listing_uuid is None:
            return

        try:
            self._session.execute(
                delete(SavedListingRow).where(
                    SavedListingRow.user_id == user_id,
                    SavedListingRow.listing_id == listing_uuid,
                )
            )
        except SQLAlchemyError as exc:
            raise ListingFetchError(
                UPDATE_FAILED_MESSAGE, operation="unsave", listing_id=listing_id
            ) from exc

    def saved_among(self, user_id: str, listing_ids: list[str]) -> set[str]:
        uuids = [uid for uid in (_as_uuid(v) for v in listing_ids) if uid is not None]
        if not uuids:
            return set()

        query = select(SavedListingRow.listing_id).where(
            SavedListingRow.user_id == user_id,
            SavedListingRow.listing_id.in_(uuids),
        )
        try:
            saved = self._session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            raise ListingFetchError(operation="saved_among") from exc

        return {str(listing_id) for listing_id in saved}

    def listing_ids_for(self, user_id: str, limit: int) -> list[str]:
        query = (
            select(SavedListingRow.listing_id)
            .where(SavedListingRow.user_id == user_id)
            .order_by(SavedListingRow.created_at.desc(), SavedListingRow.id.asc())
            .limit(limit)
        )
        try:
            saved = self._session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            raise ListingFetchError(operation="listing_ids_for") from exc

        return [str(listing_id) for listing_id in saved]

    def count_for_user(self, user_id: str) -> int:
        query = select(func.count()).where(SavedListingRow.user_id == user_id)
        try:
            return self._session.execute(query).scalar() or 0
        except SQLAlchemyError as exc:
            raise ListingFetchError(operation="count_for_user") from exc

    def delete_for_listing(self, listing_id: str) -> int:
        listing_uuid = _as_uuid(listing_id)
        if listing_uuid is None:
            return 0

        try:
            result = self._session.execute(
                delete(SavedListingRow).where(SavedListingRow.listing_id == listing_uuid)
            )
        except SQLAlchemyError as exc:
            raise ListingFetchError(
                UPDATE_FAILED_MESSAGE, operation="delete_for_listing", listing_id=listing_id
            ) from exc

        return result.rowcount or 0

    def _find(self, user_id: str, listing_id: UUID) -> SavedListingRow | None:
        query = select(SavedListingRow).where(
            SavedListingRow.user_id == user_id,
            SavedListingRow.listing_id == listing_id,
        )
        return self._session.execute(query).scalar_one_or_none()
