"""
Tests for the retrying HTTP fetcher.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, call, patch

import httpx
import pytest

from ytreader.config.settings import Settings
from ytreader.exceptions import NetworkError
from ytreader.services.fetcher import HttpFetcher, with_retry

pytestmark = pytest.mark.asyncio


@pytest.fixture
def mock_sleep():
    """Patch out backoff delays."""
    with patch("ytreader.services.fetcher.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


class TestWithRetry:
    """Tests for with_retry."""

    async def test_returns_first_success(self, mock_sleep: AsyncMock) -> None:
        operation = AsyncMock(return_value="ok")

        assert await with_retry(operation) == "ok"
        operation.assert_awaited_once()
        mock_sleep.assert_not_awaited()

    async def test_retries_transport_errors(self, mock_sleep: AsyncMock) -> None:
        operation = AsyncMock(side_effect=[httpx.ConnectError("refused"), "ok"])

        assert await with_retry(operation, backoff_base=1.0) == "ok"
        assert operation.await_count == 2
        mock_sleep.assert_awaited_once_with(1.0)

    async def test_retries_timeouts(self, mock_sleep: AsyncMock) -> None:
        operation = AsyncMock(side_effect=[httpx.ReadTimeout("slow"), "ok"])

        assert await with_retry(operation) == "ok"

    async def test_exponential_backoff_then_network_error(
        self, mock_sleep: AsyncMock
    ) -> None:
        last_error = httpx.ConnectError("refused 4")
        operation = AsyncMock(
            side_effect=[
                httpx.ConnectError("refused 1"),
                httpx.ConnectError("refused 2"),
                httpx.ConnectError("refused 3"),
                last_error,
            ]
        )

        with pytest.raises(NetworkError) as exc_info:
            await with_retry(operation, max_attempts=4, backoff_base=1.0)

        assert operation.await_count == 4
        assert mock_sleep.await_args_list == [call(1.0), call(2.0), call(4.0)]
        assert exc_info.value.retry_count == 4
        assert exc_info.value.original_error is last_error
        assert exc_info.value.__cause__ is last_error

    async def test_non_retryable_error_propagates(self, mock_sleep: AsyncMock) -> None:
        operation = AsyncMock(side_effect=ValueError("bad payload"))

        with pytest.raises(ValueError, match="bad payload"):
            await with_retry(operation)

        operation.assert_awaited_once()
        mock_sleep.assert_not_awaited()

    async def test_custom_retry_on(self, mock_sleep: AsyncMock) -> None:
        operation = AsyncMock(side_effect=[KeyError("x"), "ok"])

        assert await with_retry(operation, retry_on=(KeyError,)) == "ok"

    async def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError):
            await with_retry(AsyncMock(), max_attempts=0)


class TestHttpFetcher:
    """Tests for HttpFetcher over a mock transport."""

    async def test_fetch_text(self, make_fetcher) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>hello</html>")

        async with make_fetcher(handler) as fetcher:
            assert await fetcher.fetch_text("https://example.test/page") == "<html>hello</html>"

    async def test_status_error_not_retried(self, make_fetcher, mock_sleep) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(404, text="missing")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(httpx.HTTPStatusError):
                await fetcher.fetch_text("https://example.test/missing")

        assert len(calls) == 1

    async def test_transport_errors_exhaust_retries(
        self, make_fetcher, mock_sleep
    ) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(NetworkError) as exc_info:
                await fetcher.fetch_text("https://example.test/down", "channel page")

        assert len(calls) == 3
        assert exc_info.value.retry_count == 3
        assert "channel page" in exc_info.value.message

    async def test_recovers_after_transient_failure(
        self, make_fetcher, mock_sleep
    ) -> None:
        attempts = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            attempts["n"] += 1
            if attempts["n"] == 1:
                raise httpx.ReadTimeout("slow", request=request)
            return httpx.Response(200, text="ok")

        async with make_fetcher(handler) as fetcher:
            assert await fetcher.fetch_text("https://example.test/flaky") == "ok"

    async def test_cookies_not_persisted(self, make_fetcher) -> None:
        seen_cookies: list[str | None] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_cookies.append(request.headers.get("cookie"))
            return httpx.Response(
                200, text="ok", headers={"Set-Cookie": "VISITOR_INFO=abc; Path=/"}
            )

        async with make_fetcher(handler) as fetcher:
            await fetcher.fetch_text("https://example.test/one")
            await fetcher.fetch_text("https://example.test/two")

        assert seen_cookies == [None, None]

    async def test_default_client_headers(self) -> None:
        fetcher = HttpFetcher()
        try:
            assert fetcher._client.headers["Accept-Language"] == "en"
            assert fetcher._client.headers["User-Agent"].startswith("ytreader/")
            assert fetcher._client.follow_redirects is True
        finally:
            await fetcher.aclose()

    async def test_from_settings(self) -> None:
        settings = Settings(
            _env_file=None, request_timeout=7.5, retry_attempts=2, retry_backoff=0.5
        )
        fetcher = HttpFetcher.from_settings(settings)
        try:
            assert fetcher.max_attempts == 2
            assert fetcher.backoff_base == 0.5
            assert fetcher._client.timeout.read == 7.5
        finally:
            await fetcher.aclose()
