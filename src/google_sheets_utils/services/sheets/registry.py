"""
Shared SheetsClient instance.

SheetsRegistry holds at most one client together with the auth config it
was created with. Create one registry at process start and pass it to the
code that needs spreadsheet access, or use the module-level get_instance()
which is backed by a process-wide default registry.
"""
import asyncio
from typing import Optional

from loguru import logger

from google_sheets_utils.config.settings import get_settings
from google_sheets_utils.services.sheets.auth import AuthConfig
from google_sheets_utils.services.sheets.client import SheetsClient
from google_sheets_utils.services.sheets.exceptions import ConfigConflictError


class SheetsRegistry:
    """Holds one lazily created SheetsClient."""

    def __init__(self):
        self._client: Optional[SheetsClient] = None
        self._auth_config: Optional[AuthConfig] = None
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _get_lock(self) -> asyncio.Lock:
        """Lock bound to the running loop; each asyncio.run() gets a fresh one."""
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    @property
    def auth_config(self) -> Optional[AuthConfig]:
        """Config the stored client was created with, None if empty."""
        return self._auth_config

    async def get_instance(self, auth_config: Optional[AuthConfig] = None) -> SheetsClient:
        """
        Create or get the shared client.

        Use SheetsClient.create() if you need a separate instance.

        Args:
            auth_config: Authentication options. Defaults come from settings.

        Raises:
            ConfigConflictError: If the client already exists and auth_config
                                 differs from the config it was created with
            AuthenticationError: If credentials cannot be resolved
        """
        async with self._get_lock():
            if self._client is None:
                effective = auth_config or AuthConfig.from_settings(get_settings())
                self._client = await SheetsClient.create(effective)
                self._auth_config = effective
                logger.debug("Shared Google Sheets client created")
            elif auth_config is not None and auth_config.canonical() != self._auth_config.canonical():
                raise ConfigConflictError(
                    "Shared instance has already been created with different auth options. "
                    "Use SheetsClient.create() to create another instance with these options."
                )

            return self._client

    async def reset(self) -> None:
        """Close and forget the stored client."""
        async with self._get_lock():
            if self._client is not None:
                await self._client.close()
            self._client = None
            self._auth_config = None


# Process-wide default registry
_registry = SheetsRegistry()


def get_registry() -> SheetsRegistry:
    """Get the process-wide default registry."""
    return _registry


async def get_instance(auth_config: Optional[AuthConfig] = None) -> SheetsClient:
    """Get or create the process-wide shared client."""
    return await _registry.get_instance(auth_config)
