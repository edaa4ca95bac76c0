"""Tests for HTTP client service"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from specweaver.services import HTTPClient


@pytest.fixture
def http_client() -> HTTPClient:
    """Create HTTP client for testing"""
    return HTTPClient(timeout=5, max_retries=2)


def _mock_async_client(mock_client_class, method: str, response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    setattr(mock_client, method, AsyncMock(return_value=response, side_effect=side_effect))
    mock_client_class.return_value = mock_client
    return mock_client


class TestHTTPClientInitialization:
    """Tests for HTTPClient initialization"""

    def test_creates_client_with_defaults(self) -> None:
        """Test client creation with default settings"""
        client = HTTPClient()
        assert client.max_retries == 3
        assert client.timeout == 30
        assert "User-Agent" in client.default_headers

    def test_creates_client_with_custom_timeout(self) -> None:
        """Test client creation with custom timeout"""
        assert HTTPClient(timeout=10).timeout == 10

    def test_creates_client_with_custom_headers(self) -> None:
        """Test custom headers are merged with defaults"""
        client = HTTPClient(headers={"Authorization": "Bearer t"})
        assert client.default_headers["Authorization"] == "Bearer t"
        assert "User-Agent" in client.default_headers

    def test_settings_override(self, monkeypatch) -> None:
        """Test timeout and retries come from the environment"""
        monkeypatch.setenv("REQUEST_TIMEOUT", "1500")
        monkeypatch.setenv("MAX_RETRIES", "5")
        client = HTTPClient()
        assert client.timeout == 1.5
        assert client.max_retries == 5


class TestHTTPClientGet:
    """Tests for GET requests"""

    @pytest.mark.asyncio
    async def test_get_successful_request(self, http_client: HTTPClient) -> None:
        """Test successful GET request"""
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 200
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client_class:
            _mock_async_client(mock_client_class, "get", response=mock_response)
            response = await http_client.get("https://example.com")
            assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_fetch_text(self, http_client: HTTPClient) -> None:
        """Test fetch_text returns the body text"""
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.text = '{"openapi": "3.0.0"}'
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client_class:
            _mock_async_client(mock_client_class, "get", response=mock_response)
            assert await http_client.fetch_text("https://example.com/openapi.json") == (
                '{"openapi": "3.0.0"}'
            )

    @pytest.mark.asyncio
    async def test_get_raises_http_status_error(self, http_client: HTTPClient) -> None:
        """Test GET surfaces status errors without retrying"""
        request = httpx.Request("GET", "https://example.com")
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "404", request=request, response=httpx.Response(404, request=request)
            )
        )

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_async_client(mock_client_class, "get", response=mock_response)
            with pytest.raises(httpx.HTTPStatusError):
                await http_client.get("https://example.com")
            assert mock_client.get.await_count == 1


class TestHTTPClientPost:
    """Tests for POST requests"""

    @pytest.mark.asyncio
    async def test_post_sends_json_and_headers(self, http_client: HTTPClient) -> None:
        """Test POST body and merged headers"""
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_async_client(mock_client_class, "post", response=mock_response)
            await http_client.post("https://example.com/api", json={"name": "pets"}, headers={"X-Trace": "1"})

            kwargs = mock_client.post.call_args.kwargs
            assert kwargs["json"] == {"name": "pets"}
            assert kwargs["headers"]["X-Trace"] == "1"
            assert "User-Agent" in kwargs["headers"]

    @pytest.mark.asyncio
    async def test_post_does_not_retry_read_timeouts(self, http_client: HTTPClient) -> None:
        """Test a request that may have reached the server is not repeated"""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_async_client(
                mock_client_class, "post", side_effect=httpx.ReadTimeout("slow")
            )
            with pytest.raises(httpx.ReadTimeout):
                await http_client.post("https://example.com/api", json={})
            assert mock_client.post.await_count == 1
