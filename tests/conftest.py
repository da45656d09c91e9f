"""
Pytest configuration and fixtures for ytreader tests.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import SecretStr

from ytreader.config.settings import Settings
from ytreader.services.fetcher import HttpFetcher


@pytest.fixture
def mock_settings() -> Settings:
    """Settings that do not depend on the environment or a .env file."""
    return Settings(
        _env_file=None,
        proxy_username="",
        container_name="ytreader",
        resource_group="ytreader-rg",
        container_registry="registry.example.com",
        container_registry_username="registry-user",
        container_registry_password=SecretStr("registry-pass"),
        container_image_name="ytreader:1.0",
        container_command="ytreader-worker --verbose",
        storage_connection_string=SecretStr("DefaultEndpointsProtocol=https;AccountName=test"),
        environment="test",
        channels_per_container=3,
        precheck_parallel=2,
        create_parallel=2,
    )


@pytest.fixture
def make_fetcher() -> Callable[[Callable[[httpx.Request], httpx.Response]], HttpFetcher]:
    """Build an ``HttpFetcher`` whose client answers through a handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> HttpFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpFetcher(client=client, max_attempts=3, backoff_base=0.0)

    return _make


@pytest.fixture
def mock_fetcher() -> MagicMock:
    """Fetcher double whose ``fetch_text`` is an AsyncMock."""
    fetcher = MagicMock(spec=HttpFetcher)
    fetcher.fetch_text = AsyncMock()
    return fetcher
