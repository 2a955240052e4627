"""Base classes and errors for domain models."""

from enum import Enum


class GalleryError(Exception):
    """Base class for all gallery errors.

    Every instance carries a human-readable ``message`` suitable for display.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailureKind(str, Enum):
    """Which creation rule rejected an input."""

    EMPTY_CONTENT = "empty_content"
    INVALID_URL = "invalid_url"
    INVALID_TYPE = "invalid_type"


class ValidationFailure(GalleryError):  # noqa: N818
    """Raised when a creation input breaks a validation rule.

    Always raised before any store call is made.
    """

    def __init__(self, kind: ValidationFailureKind, message: str):
        super().__init__(message)
        self.kind = kind

    def __repr__(self) -> str:
        return f"ValidationFailure({self.kind.name}, {self.message!r})"


class QueryFailure(GalleryError):  # noqa: N818
    """Raised when a store round trip fails.

    Wraps connection errors, constraint violations and unreadable rows alike.
    Never retried.
    """

    def __init__(self, operation: str, message: str):
        super().__init__(f"Failed to {operation}: {message}")
        self.operation = operation
        self.detail = message

    def __repr__(self) -> str:
        return f"QueryFailure({self.operation!r}, {self.detail!r})"
