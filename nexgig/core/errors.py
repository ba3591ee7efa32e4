"""Domain errors raised by the service layer.

The API layer never builds these responses by hand: ``nexgig.main`` registers a
single handler for ``MarketplaceError`` that renders ``{"detail": ...}`` with
the status code carried by the exception.
"""


class MarketplaceError(Exception):
    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ForbiddenError(MarketplaceError):
    status_code = 403
    default_detail = "Forbidden"


class NotFoundError(MarketplaceError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(MarketplaceError):
    status_code = 409
    default_detail = "Conflict"


class StoreError(MarketplaceError):
    """A write failed and its transaction was rolled back."""

    status_code = 500
    default_detail = "Store operation failed"


class ValidationFailedError(MarketplaceError):
    status_code = 422
    default_detail = "Invalid request"
