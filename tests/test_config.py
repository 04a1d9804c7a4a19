"""Tests for Files.com configuration and service factories."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from files_com.api.services.storage import (
    FilesComApiService,
    FilesComConfigurationError,
    FilesComService,
    create_files_com_service,
    create_files_com_services,
    create_files_com_services_async,
    validate_configuration,
)
from files_com.core.config import DEFAULT_LOCAL_STORAGE_PATH, FilesComSettings, reset_settings


def make_settings(**overrides: object) -> FilesComSettings:
    return FilesComSettings(**overrides)  # type: ignore[arg-type]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host FILES_COM_* variables out of these tests."""
    for name in (
        "FILES_COM_ENABLE",
        "FILES_COM_BASE_URL",
        "FILES_COM_API_KEY",
        "FILES_COM_USERNAME",
        "FILES_COM_PASSWORD",
        "FILES_COM_LOCAL_STORAGE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()


class TestValidateConfiguration:
    """Tests for the enable invariant."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"base_url": None, "api_key": None},
            {"username": "only-user"},
            {"base_url": "https://example.files.com", "password": "only-password"},
        ],
    )
    def test_disabled_never_raises(self, overrides: dict[str, object]) -> None:
        """Test that a disabled integration passes whatever else is set."""
        validate_configuration(make_settings(enable=False, **overrides))

    def test_enabled_requires_base_url(self) -> None:
        """Test that enabling without a base URL fails."""
        with pytest.raises(FilesComConfigurationError, match="baseUrl"):
            validate_configuration(make_settings(enable=True, api_key="key"))

    @pytest.mark.parametrize(
        "credentials",
        [
            {},
            {"username": "robot"},
            {"password": "s3cret"},
            {"username": "", "password": "s3cret"},
        ],
    )
    def test_enabled_requires_credentials(self, credentials: dict[str, str]) -> None:
        """Test that an API key or a full username/password pair is required."""
        with pytest.raises(FilesComConfigurationError, match="API key"):
            validate_configuration(
                make_settings(enable=True, base_url="https://example.files.com", **credentials)
            )

    def test_enabled_with_api_key(self) -> None:
        """Test that an API key alone is enough."""
        validate_configuration(
            make_settings(enable=True, base_url="https://example.files.com", api_key="key")
        )

    def test_enabled_with_session_credentials(self) -> None:
        """Test that username and password are enough without an API key."""
        validate_configuration(
            make_settings(
                enable=True,
                base_url="https://example.files.com",
                username="robot",
                password="s3cret",
            )
        )


class TestFilesComSettings:
    """Tests for settings loading."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = make_settings()
        assert settings.enable is False
        assert settings.base_url is None
        assert settings.api_key is None
        assert settings.local_storage_path == DEFAULT_LOCAL_STORAGE_PATH

    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test FILES_COM_* variables are read."""
        monkeypatch.setenv("FILES_COM_ENABLE", "true")
        monkeypatch.setenv("FILES_COM_BASE_URL", "https://acme.files.com")
        monkeypatch.setenv("FILES_COM_API_KEY", "env-key")
        monkeypatch.setenv("FILES_COM_LOCAL_STORAGE_PATH", "/tmp/files")

        settings = make_settings()

        assert settings.enable is True
        assert settings.base_url == "https://acme.files.com"
        assert settings.api_key == "env-key"
        assert settings.local_storage_path == "/tmp/files"

    def test_api_root(self) -> None:
        """Test REST root is built from the site URL."""
        settings = make_settings(base_url="https://acme.files.com/")
        assert settings.api_root == "https://acme.files.com/api/rest/v1"

    def test_settings_are_immutable(self) -> None:
        """Test settings can't change after loading."""
        settings = make_settings(enable=True)
        with pytest.raises(ValidationError):
            settings.enable = False  # type: ignore[misc]

    def test_has_session_credentials(self) -> None:
        """Test session credential detection needs both values."""
        assert make_settings(username="u", password="p").has_session_credentials
        assert not make_settings(username="u").has_session_credentials


class TestFactories:
    """Tests for service factories."""

    def test_factory_validates_before_building(self) -> None:
        """Test that an invalid configuration never produces a service."""
        with pytest.raises(FilesComConfigurationError):
            create_files_com_service(make_settings(enable=True))

    def test_factory_builds_services(self, settings: FilesComSettings) -> None:
        """Test both services are built from one configuration."""
        services = create_files_com_services(settings)
        assert isinstance(services.service, FilesComService)
        assert isinstance(services.api, FilesComApiService)

    def test_disabled_factory_builds_inert_service(self) -> None:
        """Test a disabled configuration still yields a service."""
        assert isinstance(create_files_com_service(make_settings()), FilesComService)

    @pytest.mark.asyncio
    async def test_async_factory_accepts_coroutine(self, settings: FilesComSettings) -> None:
        """Test async settings factories are awaited."""

        async def load_settings(api_key: str) -> FilesComSettings:
            return settings.model_copy(update={"api_key": api_key})

        services = await create_files_com_services_async(load_settings, "from-vault")
        assert services.service.settings.api_key == "from-vault"

    @pytest.mark.asyncio
    async def test_async_factory_accepts_plain_function(self, settings: FilesComSettings) -> None:
        """Test sync settings factories are supported."""
        services = await create_files_com_services_async(lambda: settings)
        assert services.service.settings is settings

    @pytest.mark.asyncio
    async def test_async_factory_without_settings(self) -> None:
        """Test a factory returning nothing is a configuration error."""
        with pytest.raises(FilesComConfigurationError, match="Failed to get configuration"):
            await create_files_com_services_async(lambda: None)

    @pytest.mark.asyncio
    async def test_async_factory_validates(self) -> None:
        """Test settings from the async factory are validated."""
        with pytest.raises(FilesComConfigurationError, match="baseUrl"):
            await create_files_com_services_async(lambda: make_settings(enable=True))
