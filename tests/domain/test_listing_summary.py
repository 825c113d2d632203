"""Tests for the listing presenter."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import pytest

from motor_market.domain.listing import Listing
from motor_market.domain.listing_summary import format_price, summarize_listing
from motor_market.domain.viewer import Viewer


@pytest.fixture()
def listing() -> Listing:
    return Listing(
        id="l-1",
        owner_id="seller-1",
        brand="Honda",
        model="Civic",
        year=2020,
        price=Decimal("18999.50"),
        images=["/uploads/seller-1/front.jpg", "/uploads/seller-1/back.jpg"],
        category="sedan",
        location="Austin, TX",
    )


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (Decimal("25000"), "$25,000"),
        (Decimal("25000.00"), "$25,000"),
        (Decimal("18999.50"), "$19,000"),
        (Decimal("999.49"), "$999"),
        (Decimal("1250000"), "$1,250,000"),
        (Decimal("0"), "$0"),
    ],
)
def test_format_price(amount: Decimal, expected: str) -> None:
    assert format_price(amount) == expected


def test_anonymous_viewer(listing: Listing) -> None:
    summary = summarize_listing(listing, viewer=None, saved=True)

    assert summary.is_owner is False
    assert summary.can_save is False
    assert summary.is_saved is False
    assert summary.price_display == "$19,000"
    assert summary.image_url == "/uploads/seller-1/front.jpg"
    assert summary.has_image is True


def test_owner_cannot_save_own_listing(listing: Listing) -> None:
    summary = summarize_listing(listing, Viewer(id="seller-1"))

    assert summary.is_owner is True
    assert summary.can_save is False


def test_other_viewer_can_save(listing: Listing) -> None:
    summary = summarize_listing(listing, Viewer(id="buyer-1"), saved=True)

    assert summary.is_owner is False
    assert summary.can_save is True
    assert summary.is_saved is True


def test_listing_without_images_has_placeholder(listing: Listing) -> None:
    summary = summarize_listing(replace(listing, images=[]), None)

    assert summary.image_url is None
    assert summary.has_image is False


def test_summary_copies_card_fields(listing: Listing) -> None:
    summary = summarize_listing(listing, None)

    assert (summary.id, summary.brand, summary.model, summary.year) == ("l-1", "Honda", "Civic", 2020)
    assert summary.category == "sedan"
    assert summary.location == "Austin, TX"
