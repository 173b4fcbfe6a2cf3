"""
Async HTTP Transport for ForkLens.

Handles async communication with the GitHub REST API using httpx: header
construction, 202 retry with bounded exponential backoff, and error response
classification.
"""

import asyncio
import logging
import time
from typing import Any

import httpx

from forklens.exceptions import StatsUnavailableError, UpstreamError
from forklens.logging import get_logger, log_api_error, log_http_request, log_http_response
from forklens.transport import (
    GITHUB_API_URL,
    ApiResponse,
    RetryConfig,
    build_headers,
    parse_error_response,
    read_error_body,
)

logger = get_logger("http")


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for the GitHub REST API.

    Handles:
    - Accept/Authorization headers (per-call token wins over the default)
    - Redirects for renamed or transferred repositories
    - Bounded retry of 202 Accepted responses
    - 404 tolerance for listing endpoints
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str = GITHUB_API_URL,
        token: str | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (default: https://api.github.com)
            token: Default access token, used when a call does not supply one
            timeout: Request timeout in seconds
            retry_config: Configuration for 202 retry behavior
            http_transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
            transport=http_transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        token: str | None = None,
        empty_on_not_found: bool = False,
    ) -> ApiResponse:
        """
        Make a GET request against the GitHub API.

        Args:
            path: API path (e.g., "/repos/o/r") or an absolute URL from a Link header
            params: Query parameters
            token: Access token for this call; overrides the default token
            empty_on_not_found: Treat 404 as an empty listing instead of an error

        Returns:
            ApiResponse with the decoded JSON body and response headers

        Raises:
            ForkLensError: On API errors, or StatsUnavailableError when 202
                retries are exhausted
        """
        headers = build_headers(token or self.token)
        attempt = 0

        while True:
            response = await self._send(path, params, headers)

            if response.status_code not in self.retry_config.retry_on:
                return self._handle_response(path, response, empty_on_not_found)

            if attempt >= self.retry_config.max_retries:
                logger.warning(
                    "Giving up on %s after %d attempts (still 202)", path, attempt + 1
                )
                raise StatsUnavailableError(path, attempt + 1)

            wait_time = self.retry_config.delay_for(attempt)
            logger.info("GitHub is computing %s, retrying in %.1fs", path, wait_time)
            await asyncio.sleep(wait_time)
            attempt += 1

    async def _send(
        self,
        path: str,
        params: dict[str, Any] | None,
        headers: dict[str, str],
    ) -> httpx.Response:
        log_http_request("GET", path, headers=headers, params=params)
        started = time.monotonic()
        try:
            response = await self._client.get(path, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise UpstreamError(str(e), code="CONNECTION_ERROR") from e

        log_http_response(
            response.status_code,
            str(response.url),
            elapsed_ms=(time.monotonic() - started) * 1000,
            link=response.headers.get("link"),
        )
        return response

    def _handle_response(
        self,
        path: str,
        response: httpx.Response,
        empty_on_not_found: bool,
    ) -> ApiResponse:
        if response.is_success:
            return ApiResponse(
                status_code=response.status_code,
                body=self._decode(response),
                headers=response.headers,
            )

        if response.status_code == 404 and empty_on_not_found:
            log_api_error(404, response.reason_phrase, path, read_error_body(response), level=logging.DEBUG)
            return ApiResponse(status_code=404, body=[], headers=response.headers)

        log_api_error(
            response.status_code,
            response.reason_phrase,
            path,
            read_error_body(response) or response.text,
        )
        raise parse_error_response(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"GitHub returned a non-JSON body for {response.url}",
                status_code=response.status_code,
            ) from e
