"""HTTP client service for fetching documents and calling the persistence API"""

from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from specweaver.config import get_settings


class HTTPClient:
    """
    HTTP client for fetching source documents and issuing creation requests.

    Features:
    - Async support
    - Automatic retries on failures
    - Timeout handling
    - Custom headers support
    """

    def __init__(
        self,
        timeout: float | None = None,
        max_retries: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds (default from settings)
            max_retries: Maximum number of retry attempts (default from settings)
            headers: Default headers to include in all requests
        """
        self.settings = get_settings()
        self.timeout = timeout or (self.settings.request_timeout / 1000)
        self.max_retries = max_retries or self.settings.max_retries
        self.default_headers = {
            "User-Agent": "specweaver/0.1.0 (OpenAPI Importer)",
            "Accept": "*/*",
            **(headers or {}),
        }

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        follow_redirects: bool = True,
    ) -> httpx.Response:
        """
        Make a GET request.

        Args:
            url: URL to request
            headers: Additional headers to include
            params: Query parameters
            follow_redirects: Whether to follow redirects

        Returns:
            httpx.Response object

        Raises:
            httpx.HTTPError: On request failure
        """
        merged_headers = {**self.default_headers, **(headers or {})}

        @retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True,
        )
        async def _make_request() -> httpx.Response:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=follow_redirects,
            ) as client:
                response = await client.get(url, headers=merged_headers, params=params)
                response.raise_for_status()
                return response

        return await _make_request()

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make a POST request.

        Creation requests are not idempotent, so only failures to connect
        (the request never reached the server) are retried.

        Args:
            url: URL to request
            json: JSON data to send
            headers: Additional headers

        Returns:
            httpx.Response object

        Raises:
            httpx.HTTPError: On request failure
        """
        merged_headers = {**self.default_headers, **(headers or {})}

        @retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
            reraise=True,
        )
        async def _make_request() -> httpx.Response:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=json, headers=merged_headers)
                response.raise_for_status()
                return response

        return await _make_request()

    async def fetch_text(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> str:
        """
        Fetch URL and return text content.

        Args:
            url: URL to fetch
            headers: Additional headers

        Returns:
            Response text content

        Raises:
            httpx.HTTPError: On request failure
        """
        response = await self.get(url, headers=headers)
        return response.text
