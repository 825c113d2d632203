from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from motor_market.domain.errors import ValidationError


MIN_YEAR = 1900
MIN_DESCRIPTION_LENGTH = 10


@dataclass(frozen=True)
class Listing:
    """A vehicle for sale. Identity and ownership never change once assigned."""

    id: str
    owner_id: str
    brand: str
    model: str
    year: int
    price: Decimal
    description: str = ""
    images: list[str] = field(default_factory=list)
    mileage: int | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    category: str | None = None
    color: str | None = None
    features: list[str] = field(default_factory=list)
    location: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class NewListing:
    """Listing payload submitted by its future owner."""

    brand: str
    model: str
    year: int
    price: Decimal
    description: str
    images: list[str]
    mileage: int | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    category: str | None = None
    color: str | None = None
    features: list[str] = field(default_factory=list)
    location: str | None = None

    def validate(self, current_year: int | None = None) -> None:
        """
        Validate the listing before it is persisted.

        All rules are checked so the caller gets every failing field at once.

        Args:
            current_year: Reference year for the upper year bound (defaults to now, UTC)

        Raises:
            ValidationError: With one entry per failing field
        """
        if current_year is None:
            current_year = datetime.now(timezone.utc).year
        max_year = current_year + 1

        errors: list[dict[str, str]] = []

        if not self.brand or not self.brand.strip():
            errors.append({"field": "brand", "message": "Brand is required", "code": "REQUIRED"})
        if not self.model or not self.model.strip():
            errors.append({"field": "model", "message": "Model is required", "code": "REQUIRED"})

        if not MIN_YEAR <= self.year <= max_year:
            errors.append(
                {
                    "field": "year",
                    "message": f"Year must be between {MIN_YEAR} and {max_year}",
                    "code": "OUT_OF_RANGE",
                }
            )

        if self.price <= 0:
            errors.append(
                {"field": "price", "message": "Price must be greater than 0", "code": "OUT_OF_RANGE"}
            )

        if self.mileage is not None and self.mileage < 0:
            errors.append(
                {"field": "mileage", "message": "Mileage cannot be negative", "code": "OUT_OF_RANGE"}
            )

        if len((self.description or "").strip()) < MIN_DESCRIPTION_LENGTH:
            errors.append(
                {
                    "field": "description",
                    "message": f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters",
                    "code": "TOO_SHORT",
                }
            )

        if not self.images:
            errors.append(
                {"field": "images", "message": "At least one image is required", "code": "REQUIRED"}
            )

        if errors:
            raise ValidationError(errors=errors)
