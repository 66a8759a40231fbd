"""
Library settings loaded from environment variables or a .env file.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List, Optional
from functools import lru_cache


DEFAULT_SCOPE = "https://www.googleapis.com/auth/spreadsheets"


class Settings(BaseSettings):
    """Main library settings."""

    # Google auth
    CREDENTIALS_FILE: Optional[str] = Field(
        default=None,
        description="Path to service account JSON. Unset means application default credentials"
    )
    SCOPES: str = Field(default=DEFAULT_SCOPE, description="Comma-separated OAuth scopes")
    QUOTA_PROJECT_ID: Optional[str] = Field(default=None, description="Project billed for API quota")

    # Client
    MAX_WORKERS: int = Field(default=1, description="Threads used to run blocking API calls")

    @field_validator("MAX_WORKERS")
    @classmethod
    def check_max_workers(cls, v: int) -> int:
        """Executor needs at least one thread."""
        if v < 1:
            raise ValueError("MAX_WORKERS must be >= 1")
        return v

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Level for configure_logging()")
    LOG_FILE: Optional[str] = Field(default=None, description="Optional rotating log file path")

    class Config:
        env_prefix = "GOOGLE_SHEETS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def scopes_list(self) -> List[str]:
        """Return SCOPES as a list, falling back to the default scope."""
        scopes = [s.strip() for s in self.SCOPES.split(",") if s.strip()]
        return scopes or [DEFAULT_SCOPE]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
