from __future__ import annotations

from dataclasses import dataclass

from motor_market.domain.errors import AuthenticationRequiredError, ValidationError
from motor_market.domain.viewer import Viewer
from motor_market.ports.image_storage import ImageStorage

MAX_IMAGE_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class UploadListingImageRequest:
    viewer: Viewer | None
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True, slots=True)
class UploadListingImageResponse:
    url: str


class UploadListingImage:
    """Store a listing photo under the viewer's prefix and return its public URL."""

    def __init__(self, image_storage: ImageStorage) -> None:
        self._storage = image_storage

    def execute(self, request: UploadListingImageRequest) -> UploadListingImageResponse:
        """
        Raises:
            AuthenticationRequiredError: If nobody is signed in
            ValidationError: If the file is larger than 5 MB or not an image
            ImageStorageError: If the object store fails
        """
        if request.viewer is None:
            raise AuthenticationRequiredError("Please log in to upload images")

        if len(request.data) > MAX_IMAGE_BYTES:
            raise ValidationError(
                errors=[
                    {
                        "field": "file",
                        "message": "File size too large. Maximum size is 5MB.",
                        "code": "FILE_TOO_LARGE",
                    }
                ]
            )

        if not (request.content_type or "").startswith("image/"):
            raise ValidationError(
                errors=[
                    {
                        "field": "file",
                        "message": "Invalid file type. Only images are allowed.",
                        "code": "INVALID_FILE_TYPE",
                    }
                ]
            )

        url = self._storage.store(
            owner_id=request.viewer.id,
            filename=request.filename,
            content_type=request.content_type,
            data=request.data,
        )
        return UploadListingImageResponse(url=url)
