"""Google Sheets services module."""
from google_sheets_utils.services.sheets.auth import AuthConfig, resolve_credentials
from google_sheets_utils.services.sheets.client import SheetsClient
from google_sheets_utils.services.sheets.exceptions import (
    SheetsUtilsError,
    AuthenticationError,
    ConfigConflictError,
    SheetNotFoundError,
)
from google_sheets_utils.services.sheets.registry import (
    SheetsRegistry,
    get_instance,
    get_registry,
)

__all__ = [
    "AuthConfig",
    "resolve_credentials",
    "SheetsClient",
    "SheetsUtilsError",
    "AuthenticationError",
    "ConfigConflictError",
    "SheetNotFoundError",
    "SheetsRegistry",
    "get_instance",
    "get_registry",
]
