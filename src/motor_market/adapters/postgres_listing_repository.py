"""PostgreSQL implementation of ListingRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import false, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from motor_market.domain.errors import ListingFetchError
from motor_market.domain.listing import Listing, NewListing
from motor_market.domain.search import ListingQuery, Operator, Predicate
from motor_market.infra.db.models.listing import ListingRow
from motor_market.ports.listing_repository import ListingRepository, PageResult

if TYPE_CHECKING:
    from sqlalchemy.sql import ColumnElement, Select


_COLUMNS: dict[str, Any] = {
    "id": ListingRow.id,
    "owner_id": ListingRow.user_id,
    "brand": ListingRow.brand,
    "category": ListingRow.category,
    "price": ListingRow.price,
    "year": ListingRow.year,
    "created_at": ListingRow.created_at,
}


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(str(value))
    except ValueError:
        return None


class PostgresListingRepository(ListingRepository):
    """
    PostgreSQL implementation of ListingRepository.

    - Pushes predicates down as SQL WHERE clauses
    - Orders by the requested column, then by id for stable pages
    - Returns total_count via a COUNT(*) over the filtered query
    - Converts ListingRow (infrastructure) to Listing (domain)
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def fetch_page(self, query: ListingQuery) -> PageResult:
        """
        Fetch one page of listings.

        Executes two queries:
        1. COUNT(*) over the filtered listings (before windowing)
        2. SELECT with ORDER BY, OFFSET and LIMIT

        Raises:
            ListingFetchError: If either query fails
        """
        statement = self._build_query(query.predicates)

        column = _COLUMNS[query.ordering.field]
        order = column.desc() if query.ordering.descending else column.asc()

        try:
            count_query = select(func.count()).select_from(statement.subquery())
            total_count = self._session.execute(count_query).scalar() or 0

            statement = (
                statement.order_by(order, ListingRow.id.asc())
                .offset(query.offset)
                .limit(query.limit)
            )
            rows = self._session.execute(statement).scalars().all()
        except SQLAlchemyError as exc:
            raise ListingFetchError(operation="fetch_page") from exc

        return PageResult(listings=[self._to_domain(row) for row in rows], total_count=total_count)

    def get_by_id(self, listing_id: str) -> Listing | None:
        """
        Get listing by ID.

        Returns:
            Listing if found, None otherwise (including malformed ids)
        """
        row_id = _as_uuid(listing_id)
        if row_id is None:
            return None

        try:
            row = self._session.get(ListingRow, row_id)
        except SQLAlchemyError as exc:
            raise ListingFetchError(operation="get_by_id", listing_id=listing_id) from exc

        return self._to_domain(row) if row else None

    def create(self, owner_id: str, new_listing: NewListing) -> Listing:
        row = ListingRow(
            user_id=owner_id,
            brand=new_listing.brand,
            model=new_listing.model,
            year=new_listing.year,
            price=new_listing.price,
            mileage=new_listing.mileage,
            fuel_type=new_listing.fuel_type,
            transmission=new_listing.transmission,
            category=new_listing.category,
            color=new_listing.color,
            description=new_listing.description,
            images=list(new_listing.images),
            features=list(new_listing.features) or None,
            location=new_listing.location,
        )
        try:
            self._session.add(row)
            self._session.flush()
            # Load server-side defaults (timestamps)
            self._session.refresh(row)
        except SQLAlchemyError as exc:
            raise ListingFetchError(
                "Unable to save the listing. Please try again.", operation="create"
            ) from exc

        return self._to_domain(row)

    def delete(self, listing_id: str) -> bool:
        row_id = _as_uuid(listing_id)
        if row_id is None:
            return False

        try:
            row = self._session.get(ListingRow, row_id)
            if row is None:
                return False

            self._session.delete(row)
            self._session.flush()
        except SQLAlchemyError as exc:
            raise ListingFetchError(
                "Unable to delete the listing. Please try again.",
                operation="delete",
                listing_id=listing_id,
            ) from exc

        return True

    def _build_query(self, predicates: tuple[Predicate, ...]) -> Select[tuple[ListingRow]]:
        """Apply each predicate as a WHERE clause (AND semantics)."""
        query = select(ListingRow)
        for predicate in predicates:
            query = query.where(self._condition(predicate))
        return query

    @staticmethod
    def _condition(predicate: Predicate) -> ColumnElement[bool]:
        column = _COLUMNS[predicate.field]

        if predicate.field == "id":
            # Listing ids are UUIDs in storage; malformed ids can never match
            if predicate.operator is Operator.IN:
                ids = [uid for uid in (_as_uuid(v) for v in predicate.value) if uid is not None]
                return column.in_(ids)
            row_id = _as_uuid(predicate.value)
            return column == row_id if row_id is not None else false()

        if predicate.operator is Operator.EQ:
            return column == predicate.value
        if predicate.operator is Operator.GTE:
            return column >= predicate.value
        if predicate.operator is Operator.LTE:
            return column <= predicate.value
        if predicate.operator is Operator.IN:
            return column.in_(list(predicate.value))
        raise ValueError(f"Unsupported operator: {predicate.operator}")

    def _to_domain(self, row: ListingRow) -> Listing:
        """Convert database model (ListingRow) to domain entity (Listing)."""
        return Listing(
            id=str(row.id),  # Convert UUID to string
            owner_id=row.user_id,
            brand=row.brand,
            model=row.model,
            year=row.year,
            price=row.price,  # Already Decimal from NUMERIC column
            description=row.description,
            images=list(row.images or []),
            mileage=row.mileage,
            fuel_type=row.fuel_type,
            transmission=row.transmission,
            category=row.category,
            color=row.color,
            features=list(row.features or []),
            location=row.location,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
