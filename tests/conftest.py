"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Any

import httpx
import pytest

from files_com.api.services.storage import FilesComApiService, FilesComService, NetworkOptions
from files_com.core.config import FilesComSettings

API_PREFIX = "/api/rest/v1"
SITE_URL = "https://example.files.com"
NO_RETRY = NetworkOptions(max_network_retries=0)


def file_payload(path: str, *, type: str = "file", size: int = 10, **extra: Any) -> dict[str, Any]:
    """Build a Files.com file record."""
    return {
        "path": path,
        "display_name": path.rsplit("/", 1)[-1],
        "type": type,
        "size": size,
        **extra,
    }


class FakeFilesComAPI:
    """Records requests and answers them from registered responses.

    Responses are keyed by method and URL path. When several responses are
    registered for one route they are returned in order, the last one
    repeating.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], list[dict[str, Any]]] = defaultdict(list)
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, **kwargs: Any) -> None:
        self._routes[(method.upper(), path)].append({"status_code": status_code, **kwargs})

    def api(self, method: str, endpoint: str, status_code: int = 200, **kwargs: Any) -> None:
        """Register a response for an endpoint under the REST root."""
        self.add(method, f"{API_PREFIX}{endpoint}", status_code, **kwargs)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def api_calls(self, method: str, endpoint: str) -> list[httpx.Request]:
        return self.calls(method, f"{API_PREFIX}{endpoint}")

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responses = self._routes.get((request.method, request.url.path))
        if not responses:
            return httpx.Response(404, json={"error": "Not Found"})
        response_kwargs = responses.pop(0) if len(responses) > 1 else responses[0]
        return httpx.Response(**response_kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


@pytest.fixture
def fake_api() -> FakeFilesComAPI:
    """Provide an in-memory Files.com API."""
    return FakeFilesComAPI()


@pytest.fixture
def settings(tmp_path: Path) -> FilesComSettings:
    """Provide enabled settings authenticated by API key."""
    return FilesComSettings(
        enable=True,
        base_url=SITE_URL,
        api_key="test-api-key",
        local_storage_path=str(tmp_path / "local-storage"),
    )


@pytest.fixture
def session_settings(tmp_path: Path) -> FilesComSettings:
    """Provide enabled settings authenticated by username and password."""
    return FilesComSettings(
        enable=True,
        base_url=SITE_URL,
        username="robot",
        password="s3cret",
        local_storage_path=str(tmp_path / "local-storage"),
    )


@pytest.fixture
def files_com_service(settings: FilesComSettings, fake_api: FakeFilesComAPI) -> FilesComService:
    """Provide facade service wired to the fake API (not yet connected)."""
    return FilesComService(settings, network=NO_RETRY, transport=fake_api.transport)


@pytest.fixture
def files_com_api_service(
    settings: FilesComSettings,
    fake_api: FakeFilesComAPI,
) -> FilesComApiService:
    """Provide raw REST client wired to the fake API (not yet connected)."""
    return FilesComApiService(settings, network=NO_RETRY, transport=fake_api.transport)
