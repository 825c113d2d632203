from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ListingsQueryDTO(BaseModel):
    """Query parameters for browsing the marketplace.

    Kept as raw text: malformed numbers, pages or sort keys fall back to
    their defaults instead of failing the request.
    """

    brand: str | None = Field(default=None, description="Exact brand match", examples=["Toyota"])
    category: str | None = Field(default=None, description="Exact category match", examples=["SUV"])
    min_price: str | None = Field(
        default=None, alias="minPrice", description="Minimum price (inclusive)", examples=["20000"]
    )
    max_price: str | None = Field(
        default=None, alias="maxPrice", description="Maximum price (inclusive)", examples=["35000"]
    )
    min_year: str | None = Field(
        default=None, alias="minYear", description="Minimum year (inclusive)", examples=["2018"]
    )
    max_year: str | None = Field(
        default=None, alias="maxYear", description="Maximum year (inclusive)", examples=["2023"]
    )
    sort: str | None = Field(
        default=None,
        description="newest | oldest | price_low | price_high | year_new | year_old",
        examples=["price_low"],
    )
    page: str | None = Field(default=None, description="1-based page number", examples=["1"])

    model_config = ConfigDict(populate_by_name=True)


class ListingSummaryDTO(BaseModel):
    id: str
    brand: str
    model: str
    year: int
    price: str = Field(description="Display price, whole US dollars", examples=["$25,000"])
    image_url: str | None = None
    has_image: bool
    category: str | None = None
    location: str | None = None
    is_owner: bool
    can_save: bool
    is_saved: bool


class ListingPageResponseDTO(BaseModel):
    listings: list[ListingSummaryDTO]
    total: int
    page: int
    page_size: int
    total_pages: int
    sort: str
    filters: dict[str, str]


class FeaturedListingsResponseDTO(BaseModel):
    listings: list[ListingSummaryDTO]


class ListingDetailDTO(BaseModel):
    """Full listing plus the viewer's affordances."""

    id: str
    owner_id: str
    brand: str
    model: str
    year: int
    price: str = Field(description="Price as decimal string", examples=["25000.00"])
    price_display: str = Field(examples=["$25,000"])
    mileage: int | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    category: str | None = None
    color: str | None = None
    description: str
    images: list[str]
    features: list[str]
    location: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_owner: bool
    can_save: bool
    is_saved: bool


class CreateListingDTO(BaseModel):
    """Request payload for publishing a listing."""

    brand: str = Field(examples=["Toyota"])
    model: str = Field(examples=["RAV4"])
    year: int = Field(examples=[2021])
    price: str = Field(
        description="Price as decimal string",
        examples=["28500.00"],
        pattern=r"^\d+(\.\d{1,2})?$",
    )
    mileage: int | None = Field(default=None, examples=[42000])
    fuel_type: str | None = Field(default=None, examples=["Hybrid"])
    transmission: str | None = Field(default=None, examples=["Automatic"])
    category: str | None = Field(default=None, examples=["SUV"])
    color: str | None = Field(default=None, examples=["Silver"])
    description: str = Field(examples=["One owner, full service history."])
    images: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    location: str | None = Field(default=None, examples=["Austin, TX"])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "brand": "Toyota",
                "model": "RAV4",
                "year": 2021,
                "price": "28500.00",
                "mileage": 42000,
                "fuel_type": "Hybrid",
                "transmission": "Automatic",
                "category": "SUV",
                "description": "One owner, full service history.",
                "images": ["https://cdn.example.com/u1/rav4-front.jpg"],
                "location": "Austin, TX",
            }
        }
    )


class SavedStatusDTO(BaseModel):
    listing_id: str
    saved: bool
