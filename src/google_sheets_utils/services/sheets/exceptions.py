"""
Errors raised by the sheets client.

Remote failures (googleapiclient.errors.HttpError, transport errors) are
not wrapped and reach the caller unchanged.
"""
from typing import Optional


class SheetsUtilsError(Exception):
    """Base class for errors raised by this package."""
    pass


class AuthenticationError(SheetsUtilsError):
    """Raised when credentials cannot be resolved."""
    pass


class ConfigConflictError(SheetsUtilsError):
    """Raised when the shared instance is requested with different auth options."""
    pass


class SheetNotFoundError(SheetsUtilsError):
    """
    Raised when no sheet matches the requested title.

    title is None when the file has no sheet at index 0.
    """

    def __init__(self, title: Optional[str] = None):
        self.title = title
        if title is None:
            message = "No sheet found at index 0."
        else:
            message = f"Sheet '{title}' not found."
        super().__init__(message)
