from __future__ import annotations

from abc import ABC, abstractmethod


class SavedListingRepository(ABC):
    """
    Port for a user's saved listings.

    ``save`` and ``unsave`` are idempotent. References to deleted listings must
    be removed through ``delete_for_listing``; readers skip any that remain.
    """

    @abstractmethod
    def save(self, user_id: str, listing_id: str) -> None: ...

    @abstractmethod
    def unsave(self, user_id: str, listing_id: str) -> None: ...

    @abstractmethod
    def saved_among(self, user_id: str, listing_ids: list[str]) -> set[str]:
        """Return the subset of ``listing_ids`` the user has saved."""
        ...

    @abstractmethod
    def listing_ids_for(self, user_id: str, limit: int) -> list[str]:
        """Most recently saved listing ids first."""
        ...

    @abstractmethod
    def count_for_user(self, user_id: str) -> int: ...

    @abstractmethod
    def delete_for_listing(self, listing_id: str) -> int:
        """Remove every saved reference to a listing. Returns rows removed."""
        ...
