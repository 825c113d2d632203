from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from motor_market.domain.listing import Listing
from motor_market.domain.viewer import Viewer


@dataclass(frozen=True, slots=True)
class ListingSummary:
    """Card-sized view of a listing for one particular viewer."""

    id: str
    brand: str
    model: str
    year: int
    price_display: str
    image_url: str | None
    category: str | None
    location: str | None
    is_owner: bool
    can_save: bool
    is_saved: bool

    @property
    def has_image(self) -> bool:
        return self.image_url is not None


def format_price(amount: Decimal) -> str:
    """US-dollar display price with no cents, e.g. ``$25,000``."""
    whole = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${whole:,}"


def summarize_listing(listing: Listing, viewer: Viewer | None, saved: bool = False) -> ListingSummary:
    """
    Map a listing to its summary for ``viewer``.

    Owners never get the save affordance; anonymous viewers never do either.
    """
    is_owner = viewer is not None and viewer.id == listing.owner_id

    return ListingSummary(
        id=listing.id,
        brand=listing.brand,
        model=listing.model,
        year=listing.year,
        price_display=format_price(listing.price),
        image_url=listing.images[0] if listing.images else None,
        category=listing.category,
        location=listing.location,
        is_owner=is_owner,
        can_save=viewer is not None and not is_owner,
        is_saved=saved and viewer is not None,
    )
