"""Domain errors and their HTTP status mapping."""


class MacroMateError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    error = "Request failed"

    def __init__(self, message: str, *, error: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error


class ValidationError(MacroMateError):
    """Missing or malformed input."""

    status_code = 400
    error = "Invalid request"


class NotFoundError(MacroMateError):
    """The requested row does not exist or belongs to another user."""

    status_code = 404
    error = "Not found"


class ConflictError(MacroMateError):
    """The row already exists."""

    status_code = 409
    error = "Already exists"


class InsufficientDataError(MacroMateError):
    """An upstream record exists but lacks usable nutrient data."""

    status_code = 422
    error = "Insufficient nutrient data for this product"


class UpstreamUnavailableError(MacroMateError):
    """An external service could not be reached or returned an error."""

    status_code = 502
    error = "Upstream service unavailable"


class StoreError(MacroMateError):
    """The relational store rejected an operation."""

    status_code = 500
    error = "Database operation failed"
