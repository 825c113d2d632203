from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from motor_market.domain.viewer import Viewer
from motor_market.entrypoints.http.dependencies import (
    get_current_viewer,
    get_upload_listing_image_use_case,
)
from motor_market.entrypoints.http.dtos.uploads import ImageUploadResponseDTO
from motor_market.entrypoints.http.error_responses import ErrorResponse
from motor_market.use_cases.upload_listing_image import (
    MAX_IMAGE_BYTES,
    UploadListingImage,
    UploadListingImageRequest,
)


router = APIRouter(tags=["Uploads"])


@router.post(
    "/uploads/images",
    response_model=ImageUploadResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a listing photo",
    description="Images only (`image/*`), at most 5 MB. Returns the URL to use in a listing.",
    responses={
        401: {"model": ErrorResponse, "description": "Not signed in"},
        422: {"model": ErrorResponse, "description": "Too large or not an image"},
        503: {"model": ErrorResponse, "description": "Object store unavailable"},
    },
)
async def upload_image(
    file: UploadFile = File(...),
    viewer: Viewer | None = Depends(get_current_viewer),
    use_case: UploadListingImage = Depends(get_upload_listing_image_use_case),
) -> ImageUploadResponseDTO:
    # One byte past the limit is enough to reject oversized files
    data = await file.read(MAX_IMAGE_BYTES + 1)

    result = await run_in_threadpool(
        use_case.execute,
        UploadListingImageRequest(
            viewer=viewer,
            filename=file.filename or "",
            content_type=file.content_type or "",
            data=data,
        ),
    )
    return ImageUploadResponseDTO(url=result.url)
