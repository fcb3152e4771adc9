"""
Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``main.create_app`` registers handlers
that translate them into ``{"success": false, "message": ...}``
responses with the matching status code.
"""

from typing import Optional


class ClassCartError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ClassCartError):
    """Malformed or missing client input."""

    status_code = 400


class NotFoundError(ClassCartError):
    """A well-formed identifier matched no record."""

    status_code = 404


class CapacityExceededError(ClassCartError):
    """A lesson has fewer available spaces than requested."""

    status_code = 409


class StoreError(ClassCartError):
    """The database rejected an operation or could not be reached.

    ``message`` describes the failed operation; ``detail`` carries the
    driver's own message for diagnostics.
    """

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.detail = detail


class StoreConnectionError(Exception):
    """The database connection could not be established at startup."""
