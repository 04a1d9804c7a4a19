"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOCAL_STORAGE_PATH = "/usr/src/app/local-storage"


class FilesComSettings(BaseSettings):
    """Files.com integration settings loaded from FILES_COM_* variables.

    Immutable once loaded. Completeness is checked by
    ``validate_configuration`` before any service is built.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILES_COM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    enable: bool = Field(default=False, description="Enable the Files.com integration")
    base_url: str | None = Field(
        default=None,
        description="Files.com site URL, e.g. https://example.files.com",
    )
    api_key: str | None = Field(default=None, description="Files.com API key")
    username: str | None = Field(default=None, description="Session login username")
    password: str | None = Field(default=None, description="Session login password")
    local_storage_path: str = Field(
        default=DEFAULT_LOCAL_STORAGE_PATH,
        description="Local directory for files downloaded to disk",
    )

    @computed_field
    @property
    def api_root(self) -> str:
        """REST root under the configured site URL."""
        return f"{(self.base_url or '').rstrip('/')}/api/rest/v1"

    @property
    def has_session_credentials(self) -> bool:
        """Check if both session credentials are present."""
        return bool(self.username and self.password)


class ApiSettings(BaseSettings):
    """HTTP server settings for the bundled Litestar app."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    debug: bool = Field(default=False, description="Enable debug mode")


@lru_cache
def get_settings() -> FilesComSettings:
    """Get cached Files.com settings instance."""
    return FilesComSettings()


@lru_cache
def get_api_settings() -> ApiSettings:
    """Get cached API server settings instance."""
    return ApiSettings()


def reset_settings() -> None:
    """Reset cached settings (useful for testing)."""
    get_settings.cache_clear()
    get_api_settings.cache_clear()
