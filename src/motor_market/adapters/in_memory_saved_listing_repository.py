from __future__ import annotations

import itertools

from motor_market.ports.saved_listing_repository import SavedListingRepository


class InMemorySavedListingRepository(SavedListingRepository):
    """Saved listings kept in a dict keyed by (user_id, listing_id)."""

    def __init__(self) -> None:
        self._saved: dict[tuple[str, str], int] = {}
        self._sequence = itertools.count()

    def save(self, user_id: str, listing_id: str) -> None:
        self._saved.setdefault((user_id, listing_id), next(self._sequence))

    def unsave(self, user_id: str, listing_id: str) -> None:
        self._saved.pop((user_id, listing_id), None)

    def saved_among(self, user_id: str, listing_ids: list[str]) -> set[str]:
        return {listing_id for listing_id in listing_ids if (user_id, listing_id) in self._saved}

    def listing_ids_for(self, user_id: str, limit: int) -> list[str]:
        mine = [(seq, listing_id) for (owner, listing_id), seq in self._saved.items() if owner == user_id]
        mine.sort(reverse=True)
        return [listing_id for _, listing_id in mine[:limit]]

    def count_for_user(self, user_id: str) -> int:
        return sum(1 for owner, _ in self._saved if owner == user_id)

    def delete_for_listing(self, listing_id: str) -> int:
        doomed = [key for key in self._saved if key[1] == listing_id]
        for key in doomed:
            del self._saved[key]
        return len(doomed)
