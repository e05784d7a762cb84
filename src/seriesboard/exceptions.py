"""
seriesboard exceptions module.

Contains exception classes shared by the HTTP client, the dashboard core and the TUI.
"""

from __future__ import annotations


class ValidationError(Exception):
    """Exception raised when operator input is rejected before any network call."""

    pass


class FetchError(Exception):
    """Exception raised when a series or measurement list could not be retrieved."""

    pass


class MutationError(Exception):
    """Exception raised when the server rejects a create, update or delete.

    Attributes:
        detail: Server-provided detail message, if the server sent one.
    """

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


class ApiError(Exception):
    """Exception raised by the HTTP client for any failed call.

    Attributes:
        detail: Value of the ``detail`` field of the error body, if present.
        status_code: HTTP status code, or None for transport failures.
    """

    def __init__(self, message: str, detail: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.detail = detail
        self.status_code = status_code


class SeriesNotFoundError(Exception):
    """Exception raised when a series is not found."""

    pass
