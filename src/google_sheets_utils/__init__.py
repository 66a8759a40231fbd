"""Google Sheets Utils. Get rid of boilerplate code."""
from loguru import logger

from google_sheets_utils.log import configure_logging
from google_sheets_utils.services.sheets import (
    AuthConfig,
    SheetsClient,
    SheetsRegistry,
    SheetsUtilsError,
    AuthenticationError,
    ConfigConflictError,
    SheetNotFoundError,
    get_instance,
    get_registry,
)

logger.disable("google_sheets_utils")

__version__ = "0.9.15"

__all__ = [
    "AuthConfig",
    "SheetsClient",
    "SheetsRegistry",
    "SheetsUtilsError",
    "AuthenticationError",
    "ConfigConflictError",
    "SheetNotFoundError",
    "configure_logging",
    "get_instance",
    "get_registry",
]
