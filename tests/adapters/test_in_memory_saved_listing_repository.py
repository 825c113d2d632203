from __future__ import annotations

import pytest

from motor_market.adapters.in_memory_saved_listing_repository import (
    InMemorySavedListingRepository,
)


@pytest.fixture()
def repository() -> InMemorySavedListingRepository:
    return InMemorySavedListingRepository()


def test_save_is_idempotent(repository: InMemorySavedListingRepository) -> None:
    repository.save("u1", "a")
    repository.save("u1", "a")

    assert repository.count_for_user("u1") == 1


def test_unsave_is_idempotent(repository: InMemorySavedListingRepository) -> None:
    repository.save("u1", "a")
    repository.unsave("u1", "a")
    repository.unsave("u1", "a")

    assert repository.count_for_user("u1") == 0


def test_saved_among_is_per_user(repository: InMemorySavedListingRepository) -> None:
    repository.save("u1", "a")
    repository.save("u2", "b")

    assert repository.saved_among("u1", ["a", "b", "c"]) == {"a"}


def test_listing_ids_most_recent_first(repository: InMemorySavedListingRepository) -> None:
    for listing_id in ("a", "b", "c", "d"):
        repository.save("u1", listing_id)

    assert repository.listing_ids_for("u1", limit=3) == ["d", "c", "b"]


def test_resaving_keeps_original_position(repository: InMemorySavedListingRepository) -> None:
    repository.save("u1", "a")
    repository.save("u1", "b")
    repository.save("u1", "a")

    assert repository.listing_ids_for("u1", limit=10) == ["b", "a"]


def test_delete_for_listing_removes_every_users_reference(
    repository: InMemorySavedListingRepository,
) -> None:
    repository.save("u1", "a")
    repository.save("u2", "a")
    repository.save("u2", "b")

    assert repository.delete_for_listing("a") == 2
    assert repository.count_for_user("u1") == 0
    assert repository.listing_ids_for("u2", limit=10) == ["b"]
