"""Test suite for CreateListing use case."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from unittest.mock import Mock

import pytest

from motor_market.adapters.in_memory_listing_repository import InMemoryListingRepository
from motor_market.domain.errors import AuthenticationRequiredError, ValidationError
from motor_market.domain.listing import NewListing
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository
from motor_market.use_cases.create_listing import CreateListing, CreateListingRequest


@pytest.fixture()
def new_listing() -> NewListing:
    return NewListing(
        brand="Toyota",
        model="Tacoma",
        year=2019,
        price=Decimal("32000"),
        description="Lifted, tow package, clean history.",
        images=["/uploads/u1/tacoma.jpg"],
        category="truck",
    )


def test_execute_creates_listing_owned_by_viewer(new_listing: NewListing) -> None:
    repository = InMemoryListingRepository()
    use_case = CreateListing(listing_repository=repository)

    listing = use_case.execute(CreateListingRequest(viewer=Viewer(id="u1"), listing=new_listing))

    assert listing.owner_id == "u1"
    assert listing.brand == "Toyota"
    assert repository.get_by_id(listing.id) == listing


def test_execute_requires_sign_in(new_listing: NewListing) -> None:
    repository = Mock(spec=ListingRepository)
    use_case = CreateListing(listing_repository=repository)

    with pytest.raises(AuthenticationRequiredError) as exc_info:
        use_case.execute(CreateListingRequest(viewer=None, listing=new_listing))

    assert exc_info.value.message == "Please log in to create a listing"
    repository.create.assert_not_called()


def test_execute_validates_before_persisting(new_listing: NewListing) -> None:
    repository = Mock(spec=ListingRepository)
    use_case = CreateListing(listing_repository=repository)

    with pytest.raises(ValidationError) as exc_info:
        use_case.execute(
            CreateListingRequest(viewer=Viewer(id="u1"), listing=replace(new_listing, images=[]))
        )

    assert exc_info.value.errors == [
        {"field": "images", "message": "At least one image is required", "code": "REQUIRED"}
    ]
    repository.create.assert_not_called()
