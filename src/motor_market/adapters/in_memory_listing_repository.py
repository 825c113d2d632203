from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from motor_market.domain.listing import Listing, NewListing
from motor_market.domain.search import ListingQuery, Operator, Predicate
from motor_market.ports.listing_repository import ListingRepository, PageResult


class InMemoryListingRepository(ListingRepository):
    """
    Canonical contract implementation for tests.

    - Applies AND-semantics predicates
    - Orders by the requested field, ties broken by id ascending
    - Returns total_count of matching listings before windowing
    """

    def __init__(self, listings: list[Listing] | None = None) -> None:
        self._listings: list[Listing] = list(listings or [])

    def fetch_page(self, query: ListingQuery) -> PageResult:
        matches = [
            listing
            for listing in self._listings
            if all(self._matches(listing, predicate) for predicate in query.predicates)
        ]
        total_count = len(matches)  # Count BEFORE windowing

        # sort() is stable, including with reverse=True, so the id order survives ties
        ordered = sorted(matches, key=lambda listing: listing.id)
        ordered.sort(
            key=lambda listing: self._sort_value(listing, query.ordering.field),
            reverse=query.ordering.descending,
        )

        window = ordered[query.offset : query.offset + query.limit]
        return PageResult(listings=window, total_count=total_count)

    def get_by_id(self, listing_id: str) -> Listing | None:
        return next((listing for listing in self._listings if listing.id == listing_id), None)

    def create(self, owner_id: str, new_listing: NewListing) -> Listing:
        now = datetime.now(timezone.utc)
        listing = Listing(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            brand=new_listing.brand,
            model=new_listing.model,
            year=new_listing.year,
            price=new_listing.price,
            description=new_listing.description,
            images=list(new_listing.images),
            mileage=new_listing.mileage,
            fuel_type=new_listing.fuel_type,
            transmission=new_listing.transmission,
            category=new_listing.category,
            color=new_listing.color,
            features=list(new_listing.features),
            location=new_listing.location,
            created_at=now,
            updated_at=now,
        )
        self._listings.append(listing)
        return listing

    def delete(self, listing_id: str) -> bool:
        remaining = [listing for listing in self._listings if listing.id != listing_id]
        deleted = len(remaining) != len(self._listings)
        self._listings = remaining
        return deleted

    @staticmethod
    def _sort_value(listing: Listing, field: str) -> tuple[bool, Any]:
        # Nulls last ascending, first descending (PostgreSQL default)
        value = getattr(listing, field)
        return (value is None, value if value is not None else 0)

    @staticmethod
    def _matches(listing: Listing, predicate: Predicate) -> bool:
        value = getattr(listing, predicate.field)
        if predicate.operator is Operator.IN:
            return value in predicate.value
        if value is None:
            return False
        if predicate.operator is Operator.EQ:
            return value == predicate.value
        if predicate.operator is Operator.GTE:
            return value >= predicate.value
        if predicate.operator is Operator.LTE:
            return value <= predicate.value
        raise ValueError(f"Unsupported operator: {predicate.operator}")
