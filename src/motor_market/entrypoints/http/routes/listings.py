from fastapi import APIRouter, Depends, Query, Response, status

from motor_market.domain.listing_summary import summarize_listing
from motor_market.domain.viewer import Viewer
from motor_market.entrypoints.http.dependencies import (
    get_browse_listings_use_case,
    get_create_listing_use_case,
    get_current_viewer,
    get_delete_listing_use_case,
    get_featured_listings_use_case,
    get_get_listing_use_case,
    get_set_listing_saved_use_case,
)
from motor_market.entrypoints.http.dtos.listings import (
    CreateListingDTO,
    FeaturedListingsResponseDTO,
    ListingDetailDTO,
    ListingPageResponseDTO,
    ListingsQueryDTO,
    SavedStatusDTO,
)
from motor_market.entrypoints.http.error_responses import ErrorResponse
from motor_market.entrypoints.http.mappers.listing_mapper import ListingMapper
from motor_market.use_cases.browse_listings import BrowseListings
from motor_market.use_cases.create_listing import CreateListing, CreateListingRequest
from motor_market.use_cases.delete_listing import DeleteListing, DeleteListingRequest
from motor_market.use_cases.get_listing import GetListing, GetListingRequest
from motor_market.use_cases.list_featured_listings import ListFeaturedListings
from motor_market.use_cases.set_listing_saved import SetListingSaved, SetListingSavedRequest


router = APIRouter(tags=["Listings"])


def get_listings_query(
    brand: str | None = Query(default=None, description="Exact brand match"),
    category: str | None = Query(default=None, description="Exact category match"),
    min_price: str | None = Query(default=None, alias="minPrice"),
    max_price: str | None = Query(default=None, alias="maxPrice"),
    min_year: str | None = Query(default=None, alias="minYear"),
    max_year: str | None = Query(default=None, alias="maxYear"),
    sort: str | None = Query(default=None),
    page: str | None = Query(default=None),
) -> ListingsQueryDTO:
    """Collects the browse parameters as raw text (never a 422)."""
    return ListingsQueryDTO(
        brand=brand,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_year=min_year,
        max_year=max_year,
        sort=sort,
        page=page,
    )


@router.get(
    "/listings",
    response_model=ListingPageResponseDTO,
    summary="Browse marketplace listings",
    description="""
    Browse listings with optional filters, sorting and pagination.

    ## Filters
    - All filters use AND semantics
    - brand/category: exact match
    - minPrice/maxPrice/minYear/maxYear: inclusive bounds, whole numbers
    - Malformed numbers are ignored (treated as not set)

    ## Sorting
    newest (default), oldest, price_low, price_high, year_new, year_old.
    Unknown values sort by newest. Ties are broken by listing id.

    ## Pagination
    Fixed page size of 9. `total_pages` is 0 when nothing matches.

    ## Example
    ```
    GET /v1/listings?category=SUV&sort=price_low&page=2
    ```
    """,
    responses={503: {"model": ErrorResponse, "description": "Listing datastore unavailable"}},
)
def browse_listings(
    query: ListingsQueryDTO = Depends(get_listings_query),
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: BrowseListings = Depends(get_browse_listings_use_case),
) -> ListingPageResponseDTO:
    """Browse endpoint following parse → execute → map → return pattern."""
    # 1. Map to domain request
    request = ListingMapper.to_browse_request(query, viewer)

    # 2. Execute use case
    result = use_case.execute(request)

    # 3. Map to response
    return ListingMapper.to_page_response(result, request.page_request)


@router.get(
    "/listings/featured",
    response_model=FeaturedListingsResponseDTO,
    summary="Newest listings for the landing page",
)
def featured_listings(
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: ListFeaturedListings = Depends(get_featured_listings_use_case),
) -> FeaturedListingsResponseDTO:
    return ListingMapper.to_featured_response(use_case.execute(viewer))


@router.get(
    "/listings/{listing_id}",
    response_model=ListingDetailDTO,
    summary="Get listing details",
    responses={404: {"model": ErrorResponse, "description": "Listing not found"}},
)
def get_listing(
    listing_id: str,
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: GetListing = Depends(get_get_listing_use_case),
) -> ListingDetailDTO:
    result = use_case.execute(GetListingRequest(listing_id=listing_id, viewer=viewer))
    return ListingMapper.to_detail_response(result.listing, result.summary)


@router.post(
    "/listings",
    response_model=ListingDetailDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a listing",
    description="""
    Publish a listing owned by the signed-in user.

    ## Rules
    - brand and model are required
    - year between 1900 and next year
    - price greater than 0, decimal string with up to 2 places
    - description at least 10 characters
    - at least one image URL (upload via `POST /v1/uploads/images`)
    """,
    responses={
        401: {"model": ErrorResponse, "description": "Not signed in"},
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
)
def create_listing(
    payload: CreateListingDTO,
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: CreateListing = Depends(get_create_listing_use_case),
) -> ListingDetailDTO:
    listing = use_case.execute(
        CreateListingRequest(viewer=viewer, listing=ListingMapper.to_new_listing(payload))
    )
    return ListingMapper.to_detail_response(listing, summarize_listing(listing, viewer))


@router.delete(
    "/listings/{listing_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete one of your listings",
    responses={
        401: {"model": ErrorResponse, "description": "Not signed in"},
        403: {"model": ErrorResponse, "description": "Not the owner"},
        404: {"model": ErrorResponse, "description": "Listing not found"},
    },
)
def delete_listing(
    listing_id: str,
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: DeleteListing = Depends(get_delete_listing_use_case),
) -> Response:
    use_case.execute(DeleteListingRequest(viewer=viewer, listing_id=listing_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/listings/{listing_id}/save",
    response_model=SavedStatusDTO,
    summary="Save a listing",
    responses={
        401: {"model": ErrorResponse, "description": "Not signed in"},
        404: {"model": ErrorResponse, "description": "Listing not found"},
    },
)
def save_listing(
    listing_id: str,
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: SetListingSaved = Depends(get_set_listing_saved_use_case),
) -> SavedStatusDTO:
    result = use_case.execute(
        SetListingSavedRequest(viewer=viewer, listing_id=listing_id, saved=True)
    )
    return SavedStatusDTO(listing_id=result.listing_id, saved=result.saved)


@router.delete(
    "/listings/{listing_id}/save",
    response_model=SavedStatusDTO,
    summary="Remove a listing from your saved items",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
def unsave_listing(
    listing_id: str,
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: SetListingSaved = Depends(get_set_listing_saved_use_case),
) -> SavedStatusDTO:
    result = use_case.execute(
        SetListingSavedRequest(viewer=viewer, listing_id=listing_id, saved=False)
    )
    return SavedStatusDTO(listing_id=result.listing_id, saved=result.saved)
