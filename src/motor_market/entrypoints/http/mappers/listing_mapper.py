from __future__ import annotations

from decimal import Decimal, InvalidOperation

from motor_market.domain.errors import ValidationError
from motor_market.domain.listing import Listing, NewListing
from motor_market.domain.listing_summary import ListingSummary, format_price
from motor_market.domain.search import PageRequest, page_request_from_params
from motor_market.domain.viewer import Viewer
from motor_market.entrypoints.http.dtos.dashboard import DashboardResponseDTO
from motor_market.entrypoints.http.dtos.listings import (
    CreateListingDTO,
    FeaturedListingsResponseDTO,
    ListingDetailDTO,
    ListingPageResponseDTO,
    ListingsQueryDTO,
    ListingSummaryDTO,
)
from motor_market.use_cases.browse_listings import BrowseListingsRequest, BrowseListingsResponse
from motor_market.use_cases.get_dashboard import DashboardResponse
from motor_market.use_cases.list_featured_listings import ListFeaturedListingsResponse


class ListingMapper:
    """Maps between REST DTOs and domain models for listings."""

    @staticmethod
    def to_page_request(dto: ListingsQueryDTO) -> PageRequest:
        """
        Converts raw query params to a domain page request.

        Uses the query-string names (``minPrice`` etc.) so the domain extractor
        sees exactly what the client sent.
        """
        return page_request_from_params(dto.model_dump(by_alias=True))

    @staticmethod
    def to_browse_request(dto: ListingsQueryDTO, viewer: Viewer | None) -> BrowseListingsRequest:
        return BrowseListingsRequest(
            page_request=ListingMapper.to_page_request(dto),
            viewer=viewer,
        )

    @staticmethod
    def to_summary_response(summary: ListingSummary) -> ListingSummaryDTO:
        return ListingSummaryDTO(
            id=summary.id,
            brand=summary.brand,
            model=summary.model,
            year=summary.year,
            price=summary.price_display,
            image_url=summary.image_url,
            has_image=summary.has_image,
            category=summary.category,
            location=summary.location,
            is_owner=summary.is_owner,
            can_save=summary.can_save,
            is_saved=summary.is_saved,
        )

    @staticmethod
    def to_page_response(
        result: BrowseListingsResponse, page_request: PageRequest
    ) -> ListingPageResponseDTO:
        """
        Converts a browse result to the REST page, echoing the effective
        (normalized) sort and filters.
        """
        return ListingPageResponseDTO(
            listings=[ListingMapper.to_summary_response(s) for s in result.listings],
            total=result.total_count,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            sort=page_request.sort.value,
            filters=page_request.criteria.to_query_params(),
        )

    @staticmethod
    def to_featured_response(result: ListFeaturedListingsResponse) -> FeaturedListingsResponseDTO:
        return FeaturedListingsResponseDTO(
            listings=[ListingMapper.to_summary_response(s) for s in result.listings]
        )

    @staticmethod
    def to_detail_response(listing: Listing, summary: ListingSummary) -> ListingDetailDTO:
        """Handles Decimal → str conversion at the boundary."""
        return ListingDetailDTO(
            id=listing.id,
            owner_id=listing.owner_id,
            brand=listing.brand,
            model=listing.model,
            year=listing.year,
            price=str(listing.price),
            price_display=format_price(listing.price),
            mileage=listing.mileage,
            fuel_type=listing.fuel_type,
            transmission=listing.transmission,
            category=listing.category,
            color=listing.color,
            description=listing.description,
            images=list(listing.images),
            features=list(listing.features),
            location=listing.location,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
            is_owner=summary.is_owner,
            can_save=summary.can_save,
            is_saved=summary.is_saved,
        )

    @staticmethod
    def to_new_listing(dto: CreateListingDTO) -> NewListing:
        """
        Converts the create payload to a domain NewListing.

        Raises:
            ValidationError: If price cannot be converted to a Decimal
        """
        try:
            price = Decimal(dto.price)
        except (InvalidOperation, ValueError):
            raise ValidationError(
                errors=[
                    {
                        "field": "price",
                        "message": f"Must be a valid decimal: {dto.price}",
                        "code": "INVALID_DECIMAL",
                    }
                ]
            )

        return NewListing(
            brand=dto.brand,
            model=dto.model,
            year=dto.year,
            price=price,
            description=dto.description,
            images=list(dto.images),
            mileage=dto.mileage,
            fuel_type=dto.fuel_type,
            transmission=dto.transmission,
            category=dto.category,
            color=dto.color,
            features=list(dto.features),
            location=dto.location,
        )

    @staticmethod
    def to_dashboard_response(result: DashboardResponse) -> DashboardResponseDTO:
        return DashboardResponseDTO(
            listing_count=result.listing_count,
            saved_count=result.saved_count,
            recent_listings=[ListingMapper.to_summary_response(s) for s in result.recent_listings],
            saved_listings=[ListingMapper.to_summary_response(s) for s in result.saved_listings],
        )
