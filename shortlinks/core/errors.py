"""Error types for the Short Links Service.

Two layers live here:

- Storage errors, raised by a URL store. ``AliasExistsError`` and
  ``AliasNotFoundError`` are the outcomes callers are expected to branch on;
  anything else surfaces as a plain ``StorageError``.
- Service errors, raised by the assignment and resolution services. Each one
  carries the HTTP status and machine-readable code the API renders.
"""

from typing import Optional


class StorageError(Exception):
    """Raised when a URL store operation fails."""


class AliasExistsError(StorageError):
    """Raised when a save targets an alias that is already bound."""

    def __init__(self, alias: str):
        super().__init__(f"Alias '{alias}' already exists")
        self.alias = alias


class AliasNotFoundError(StorageError):
    """Raised when no URL is bound to the requested alias."""

    def __init__(self, alias: str):
        super().__init__(f"Alias '{alias}' not found")
        self.alias = alias


class ShortLinkError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, alias: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.alias = alias

    def to_response(self) -> dict:
        """Convert to the API error envelope."""
        return {"detail": self.message, "error_code": self.error_code}


class AssignmentError(ShortLinkError):
    """Raised when an alias could not be bound to a URL."""


class AliasTakenError(AssignmentError):
    """The caller asked for an alias that is already in use."""

    status_code = 409
    error_code = "alias_taken"


class AliasSpaceExhaustedError(AssignmentError):
    """Every generated candidate collided with an existing alias."""

    status_code = 503
    error_code = "alias_space_exhausted"

    def __init__(self, message: str, attempts: int):
        super().__init__(message)
        self.attempts = attempts


class AssignmentCancelledError(AssignmentError):
    """The caller went away before a free alias was found."""

    status_code = 499
    error_code = "cancelled"


class StorageFailureError(ShortLinkError):
    """The store failed for a reason other than a collision."""

    status_code = 500
    error_code = "storage_failure"


class LinkNotFoundError(ShortLinkError):
    """No short link exists for the requested alias."""

    status_code = 404
    error_code = "not_found"
