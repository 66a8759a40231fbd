"""
Google credential resolution.

AuthConfig describes how to authenticate; resolve_credentials turns it into
a google-auth Credentials object. Resolution is blocking (it may read key
files or query the metadata server), so callers run it in an executor.
"""
import json
from typing import Any, Dict, List, Optional

import google.auth
from google.auth.credentials import Credentials
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from loguru import logger
from pydantic import BaseModel, Field

from google_sheets_utils.config.settings import DEFAULT_SCOPE, Settings
from google_sheets_utils.services.sheets.exceptions import AuthenticationError


class AuthConfig(BaseModel):
    """Authentication options for the Sheets API."""

    scopes: List[str] = Field(default_factory=lambda: [DEFAULT_SCOPE])
    credentials_file: Optional[str] = None     # Service account key path
    credentials_info: Optional[Dict[str, Any]] = None  # Parsed service account key
    subject: Optional[str] = None              # User to impersonate (domain-wide delegation)
    quota_project_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        """Build the default config from library settings."""
        return cls(
            scopes=settings.scopes_list,
            credentials_file=settings.CREDENTIALS_FILE,
            quota_project_id=settings.QUOTA_PROJECT_ID,
        )

    def canonical(self) -> str:
        """
        Serialized form used for equality checks.

        Two configs that serialize to the same JSON are treated as the same
        authentication setup.
        """
        return json.dumps(self.model_dump(), sort_keys=True, default=str)


def resolve_credentials(auth_config: AuthConfig) -> Credentials:
    """
    Resolve credentials for the given config (sync).

    Order:
    1. credentials_info (parsed service account key)
    2. credentials_file (service account key path)
    3. application default credentials

    Raises:
        AuthenticationError: If credentials cannot be loaded
    """
    scopes = auth_config.scopes or [DEFAULT_SCOPE]

    try:
        if auth_config.credentials_info is not None:
            credentials = service_account.Credentials.from_service_account_info(
                auth_config.credentials_info,
                scopes=scopes
            )
            source = "service account info"
        elif auth_config.credentials_file:
            credentials = service_account.Credentials.from_service_account_file(
                auth_config.credentials_file,
                scopes=scopes
            )
            source = f"service account file {auth_config.credentials_file}"
        else:
            credentials, _ = google.auth.default(
                scopes=scopes,
                quota_project_id=auth_config.quota_project_id
            )
            source = "application default credentials"
    except (GoogleAuthError, ValueError, OSError) as e:
        logger.error(f"Failed to resolve Google credentials: {e}")
        raise AuthenticationError(f"Failed to resolve Google credentials: {e}") from e

    if auth_config.subject:
        if not hasattr(credentials, "with_subject"):
            raise AuthenticationError(
                f"Credentials from {source} do not support impersonating '{auth_config.subject}'"
            )
        credentials = credentials.with_subject(auth_config.subject)

    if auth_config.quota_project_id and hasattr(credentials, "with_quota_project"):
        credentials = credentials.with_quota_project(auth_config.quota_project_id)

    logger.debug(f"Resolved Google credentials from {source}")
    return credentials
