"""Test suite for BrowseListings use case."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from motor_market.adapters.in_memory_listing_repository import InMemoryListingRepository
from motor_market.adapters.in_memory_saved_listing_repository import (
    InMemorySavedListingRepository,
)
from motor_market.domain.errors import ListingFetchError
from motor_market.domain.listing import Listing
from motor_market.domain.search import (
    FilterCriteria,
    ListingQuery,
    Operator,
    PageRequest,
    Predicate,
    SortKey,
)
from motor_market.domain.viewer import Viewer
from motor_market.ports.listing_repository import ListingRepository, PageResult
from motor_market.ports.saved_listing_repository import SavedListingRepository
from motor_market.use_cases.browse_listings import (
    BrowseListings,
    BrowseListingsRequest,
    BrowseListingsResponse,
)


@pytest.fixture()
def mock_listings() -> Mock:
    return Mock(spec=ListingRepository)


@pytest.fixture()
def mock_saved() -> Mock:
    return Mock(spec=SavedListingRepository)


@pytest.fixture()
def sample_listing() -> Listing:
    return Listing(
        id="l-1",
        owner_id="seller-1",
        brand="Toyota",
        model="Corolla",
        year=2020,
        price=Decimal("25000.00"),
        images=["/uploads/seller-1/corolla.jpg"],
    )


# ==============================================================================
# Delegation
# ==============================================================================


def test_execute_builds_one_query(
    mock_listings: Mock, mock_saved: Mock, sample_listing: Listing
) -> None:
    mock_listings.fetch_page.return_value = PageResult(listings=[sample_listing], total_count=1)
    use_case = BrowseListings(listing_repository=mock_listings, saved_listing_repository=mock_saved)

    request = BrowseListingsRequest(
        page_request=PageRequest(
            criteria=FilterCriteria(category="suv"), sort=SortKey.PRICE_LOW, page=2
        )
    )
    use_case.execute(request)

    mock_listings.fetch_page.assert_called_once()
    query: ListingQuery = mock_listings.fetch_page.call_args.args[0]
    assert query.predicates == (Predicate("category", Operator.EQ, "suv"),)
    assert query.ordering.field == "price"
    assert query.ordering.descending is False
    assert query.offset == 9
    assert query.limit == 9


def test_execute_anonymous_skips_saved_lookup(
    mock_listings: Mock, mock_saved: Mock, sample_listing: Listing
) -> None:
    mock_listings.fetch_page.return_value = PageResult(listings=[sample_listing], total_count=1)
    use_case = BrowseListings(listing_repository=mock_listings, saved_listing_repository=mock_saved)

    result = use_case.execute(BrowseListingsRequest(page_request=PageRequest(FilterCriteria())))

    mock_saved.saved_among.assert_not_called()
    assert result.listings[0].can_save is False
    assert result.listings[0].is_saved is False


def test_execute_signed_in_marks_saved_listings(
    mock_listings: Mock, mock_saved: Mock, sample_listing: Listing
) -> None:
    mock_listings.fetch_page.return_value = PageResult(listings=[sample_listing], total_count=1)
    mock_saved.saved_among.return_value = {"l-1"}
    use_case = BrowseListings(listing_repository=mock_listings, saved_listing_repository=mock_saved)

    result = use_case.execute(
        BrowseListingsRequest(page_request=PageRequest(FilterCriteria()), viewer=Viewer(id="buyer"))
    )

    mock_saved.saved_among.assert_called_once_with("buyer", ["l-1"])
    assert result.listings[0].is_saved is True
    assert result.listings[0].can_save is True


def test_execute_propagates_fetch_errors(mock_listings: Mock, mock_saved: Mock) -> None:
    mock_listings.fetch_page.side_effect = ListingFetchError()
    use_case = BrowseListings(listing_repository=mock_listings, saved_listing_repository=mock_saved)

    with pytest.raises(ListingFetchError):
        use_case.execute(BrowseListingsRequest(page_request=PageRequest(FilterCriteria())))

    mock_listings.fetch_page.assert_called_once()


# ==============================================================================
# Pagination metadata
# ==============================================================================


def test_execute_empty_result_has_zero_pages(mock_listings: Mock, mock_saved: Mock) -> None:
    mock_listings.fetch_page.return_value = PageResult(listings=[], total_count=0)
    use_case = BrowseListings(listing_repository=mock_listings, saved_listing_repository=mock_saved)

    result = use_case.execute(BrowseListingsRequest(page_request=PageRequest(FilterCriteria())))

    assert result == BrowseListingsResponse(
        listings=[], total_count=0, page=1, page_size=9, total_pages=0
    )


def test_suv_flow_with_in_memory_repositories() -> None:
    start = datetime(2026, 5, 1, tzinfo=timezone.utc)
    listings = [
        Listing(
            id=f"suv-{n:02d}",
            owner_id="seller-1",
            brand="Kia",
            model="Sportage",
            year=2020,
            price=Decimal(30000 - n * 500),
            category="suv",
            created_at=start + timedelta(hours=n),
        )
        for n in range(11)
    ]
    use_case = BrowseListings(
        listing_repository=InMemoryListingRepository(listings),
        saved_listing_repository=InMemorySavedListingRepository(),
    )

    def page(number: int) -> BrowseListingsResponse:
        return use_case.execute(
            BrowseListingsRequest(
                page_request=PageRequest(
                    criteria=FilterCriteria(category="suv"), sort=SortKey.PRICE_LOW, page=number
                )
            )
        )

    first, second = page(1), page(2)

    assert first.total_pages == 2
    assert first.total_count == 11
    assert len(first.listings) == 9
    assert first.listings[0].price_display == "$25,000"
    assert len(second.listings) == 2
    assert second.listings[-1].price_display == "$30,000"
