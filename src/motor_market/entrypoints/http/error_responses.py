"""Body of every non-2xx response the API sends.

Routes reference ErrorResponse in ``responses=`` so the documented schema
matches what the exception handlers emit.
"""

from pydantic import BaseModel, ConfigDict, Field

_FETCH_FAILED = {
    "detail": "Unable to load listings. Please try again.",
    "code": "REMOTE_FETCH_FAILED",
}

_SIGN_IN_REQUIRED = {"detail": "Please log in to save listings", "code": "UNAUTHORIZED"}

_FIELD_ERRORS = {
    "detail": "Validation failed",
    "code": "VALIDATION_ERROR",
    "errors": [
        {"field": "images", "message": "At least one image is required", "code": "REQUIRED"},
        {"field": "price", "message": "Price must be greater than 0"},
    ],
}


class ErrorDetail(BaseModel):
    """One offending field. ``code`` is a machine tag such as TOO_SHORT, when known."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "description",
                "message": "Description must be at least 10 characters",
                "code": "TOO_SHORT",
            }
        }
    )

    field: str = Field(description="Dotted path of the rejected input")
    message: str
    code: str | None = None


class ErrorResponse(BaseModel):
    """``detail`` is user-readable, ``code`` is stable, ``errors`` only on validation failures."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [_SIGN_IN_REQUIRED, _FETCH_FAILED, _FIELD_ERRORS]}
    )

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None
