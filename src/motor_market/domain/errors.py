"""Failures the marketplace can report, independent of transport.

Each error carries a stable ``error_code``. The HTTP layer looks the code up
to pick a status and echoes it in the response body, so clients can branch
on the code instead of parsing messages.
"""

from typing import Any


class DomainError(Exception):
    """Root of the marketplace error tree.

    ``message`` is safe to show to an end user. ``context`` holds structured
    details for logs (listing id, operation name) and is never sent to clients.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """Input that breaks a listing or upload rule.

    Either a single message, or a list of per-field problems shaped like
    ``{"field": "price", "message": "Price must be greater than 0"}``
    (an optional ``code`` key is passed through). Rendered as 422.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[dict[str, str]] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


class NotFoundError(DomainError):
    """A listing (or other resource) id that does not exist. Rendered as 404."""

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        message = (
            f"{resource} with identifier '{identifier}' not found"
            if identifier
            else f"{resource} not found"
        )
        super().__init__(message, resource=resource, identifier=identifier, **context)


class UnauthorizedError(DomainError):
    """No usable identity on the request. Rendered as 401."""

    error_code: str = "UNAUTHORIZED"


class AuthenticationRequiredError(UnauthorizedError):
    """Anonymous viewer tried to create, delete, save or upload.

    Raised before any repository call, so nothing is written.
    """

    def __init__(self, message: str = "Please log in to continue", **context: Any) -> None:
        super().__init__(message, **context)


class ForbiddenError(DomainError):
    """Signed in, but acting on someone else's listing. Rendered as 403."""

    error_code: str = "FORBIDDEN"


class ListingFetchError(DomainError):
    """Listing datastore unreachable, timed out or errored. Rendered as 503.

    The user-facing message stays generic; the driver exception is chained
    as ``__cause__``. Never retried automatically.
    """

    error_code: str = "REMOTE_FETCH_FAILED"

    def __init__(
        self, message: str = "Unable to load listings. Please try again.", **context: Any
    ) -> None:
        super().__init__(message, **context)


class ImageStorageError(DomainError):
    """Image upload could not be persisted. Rendered as 503."""

    error_code: str = "STORAGE_UNAVAILABLE"


class InternalError(DomainError):
    """A state that should be impossible. Rendered as 500."""

    error_code: str = "INTERNAL_ERROR"
