"""
Tests for the async HTTP transport.

Uses httpx.MockTransport so no network access happens.
"""
import pytest
import httpx


def _fetcher(handler):
    from elaws.infrastructure.async_fetcher import AsyncFetcher
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncFetcher(client=client), client


class TestFetchResponse:
    """Tests for FetchResponse."""

    def test_ok_for_2xx(self):
        """ok is True for 2xx status codes only."""
        from elaws.infrastructure.async_fetcher import FetchResponse
        assert FetchResponse("u", 200, b"").ok is True
        assert FetchResponse("u", 204, b"").ok is True
        assert FetchResponse("u", 404, b"").ok is False
        assert FetchResponse("u", 500, b"").ok is False

    def test_text_strips_bom(self):
        """UTF-8 BOM is dropped from text."""
        from elaws.infrastructure.async_fetcher import FetchResponse
        response = FetchResponse("u", 200, "\ufeff<DataRoot/>".encode("utf-8"))
        assert response.text == "<DataRoot/>"

    def test_text_with_other_encoding(self):
        """Declared encodings other than UTF-8 are honoured."""
        from elaws.infrastructure.async_fetcher import FetchResponse
        response = FetchResponse("u", 200, "法令".encode("shift_jis"), encoding="shift_jis")
        assert response.text == "法令"

    def test_satisfies_fetch_result_port(self):
        """FetchResponse satisfies the FetchResult protocol."""
        from elaws.infrastructure.async_fetcher import FetchResponse
        from elaws.domain.elaws_ports import FetchResult
        assert isinstance(FetchResponse("u", 200, b""), FetchResult)


class TestAsyncFetcher:
    """Tests for AsyncFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_returns_body(self):
        """A 200 response returns its body."""
        fetcher, client = _fetcher(lambda request: httpx.Response(200, content=b"<DataRoot/>"))
        response = await fetcher.fetch("https://elaws.e-gov.go.jp/api/1/lawlists/1")
        assert response.ok is True
        assert response.status_code == 200
        assert response.content == b"<DataRoot/>"
        assert response.url == "https://elaws.e-gov.go.jp/api/1/lawlists/1"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned_not_raised(self):
        """Non-2xx responses come back with ok False."""
        fetcher, client = _fetcher(lambda request: httpx.Response(404, content=b"Not Found"))
        response = await fetcher.fetch("https://elaws.e-gov.go.jp/api/1/lawdata/x")
        assert response.ok is False
        assert response.status_code == 404
        await client.aclose()

    @pytest.mark.asyncio
    async def test_sends_get(self):
        """One GET per fetch."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, content=b"")

        fetcher, client = _fetcher(handler)
        await fetcher.fetch("https://elaws.e-gov.go.jp/api/1/lawlists/1")
        assert len(calls) == 1
        assert calls[0].method == "GET"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self):
        """httpx errors become ElawsTransportError."""
        from elaws.infrastructure.adapters.elaws_errors import ElawsTransportError

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher, client = _fetcher(handler)
        with pytest.raises(ElawsTransportError) as exc_info:
            await fetcher.fetch("https://elaws.e-gov.go.jp/api/1/lawlists/1")
        assert exc_info.value.response is None
        assert exc_info.value.url == "https://elaws.e-gov.go.jp/api/1/lawlists/1"
        assert exc_info.value.recoverable is True
        await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        """Timeouts become ElawsTransportError."""
        from elaws.infrastructure.adapters.elaws_errors import ElawsTransportError

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        fetcher, client = _fetcher(handler)
        with pytest.raises(ElawsTransportError):
            await fetcher.fetch("https://elaws.e-gov.go.jp/api/1/lawlists/1")
        await client.aclose()

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self):
        """close() leaves an injected client open."""
        fetcher, client = _fetcher(lambda request: httpx.Response(200))
        await fetcher.close()
        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        """The context manager closes a client it created."""
        from elaws.infrastructure.async_fetcher import AsyncFetcher
        async with AsyncFetcher(timeout=5.0, user_agent="test-agent") as fetcher:
            assert fetcher._client.headers["User-Agent"] == "test-agent"
        assert fetcher._client.is_closed is True
