from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from motor_market.domain.listing import Listing, NewListing
from motor_market.domain.search import ListingQuery


@dataclass(frozen=True)
class PageResult:
    """One window of matching listings plus the count of all matches."""

    listings: list[Listing]
    total_count: int


class ListingRepository(ABC):
    """
    Port for listing data access.

    Contract (Preconditions):
        - queries are built by ``build_listing_query`` and trusted as-is
        - implementations break ordering ties by listing id ascending so that
          consecutive pages never overlap or skip rows
    """

    @abstractmethod
    def fetch_page(self, query: ListingQuery) -> PageResult:
        """
        Fetch one page of listings.

        Args:
            query: Conjunctive predicates, ordering and offset/limit window

        Returns:
            PageResult with at most ``query.limit`` listings and the exact
            number of rows matching the predicates (ignoring the window)

        Raises:
            ListingFetchError: If the datastore call fails
        """
        ...

    @abstractmethod
    def get_by_id(self, listing_id: str) -> Listing | None: ...

    @abstractmethod
    def create(self, owner_id: str, new_listing: NewListing) -> Listing:
        """Persist a validated listing owned by ``owner_id``."""
        ...

    @abstractmethod
    def delete(self, listing_id: str) -> bool:
        """Delete a listing. Returns False if it did not exist."""
        ...
