"""
Async Alpha Vantage client with a custom exception hierarchy.

One GET per call, no retries. Transport failures are raised as typed
exceptions so handlers can translate them into tool-level errors.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx

from stock_market_mcp.config import PROVIDER
from stock_market_mcp.utils.logging import audit_logger

logger = logging.getLogger(__name__)


# Exception hierarchy with recoverability flags
class AlphaVantageError(RuntimeError):
    """Base exception for Alpha Vantage operations."""

    recoverable: bool = False


class AlphaVantageConnectionError(AlphaVantageError):
    """Network connectivity issues - recoverable."""

    recoverable: bool = True


class AlphaVantageTimeoutError(AlphaVantageError):
    """Request timeout - recoverable."""

    recoverable: bool = True


class AlphaVantageStatusError(AlphaVantageError):
    """Non-success HTTP status."""

    recoverable: bool = False

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class AlphaVantageResponseError(AlphaVantageError):
    """Body is not a JSON object - not recoverable."""

    recoverable: bool = False


class AlphaVantageClient:
    """Async HTTP client for the Alpha Vantage query endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Query endpoint. Defaults to config.
            timeout: Read timeout in seconds. Defaults to config.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url or PROVIDER.BASE_URL
        self.timeout = timeout or PROVIDER.REQUEST_TIMEOUT
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=PROVIDER.CONNECT_TIMEOUT),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AlphaVantageClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def query(self, function: str, api_key: str, **params: str) -> dict[str, Any]:
        """
        Call one provider function and return the decoded JSON object.

        Args:
            function: Provider function code, e.g. GLOBAL_QUOTE.
            api_key: Provider API key, sent as the ``apikey`` parameter.
            **params: Function-specific query parameters.

        Returns:
            The parsed JSON body.

        Raises:
            AlphaVantageConnectionError: Network connectivity issues.
            AlphaVantageTimeoutError: Request timeout.
            AlphaVantageStatusError: Non-2xx response.
            AlphaVantageResponseError: Body is not a JSON object.
        """
        start_time = time.time()
        status_code: int | None = None
        success = False
        error_msg = None

        client = await self._get_client()
        query_params = {"function": function, **params, "apikey": api_key}

        try:
            response = await client.get(self.base_url, params=query_params)
            status_code = response.status_code

            if not response.is_success:
                error_msg = f"Alpha Vantage returned status {response.status_code}"
                logger.error(f"{error_msg} for {function}: {response.text[:200]}")
                raise AlphaVantageStatusError(error_msg, response.status_code)

            try:
                data = response.json()
            except json.JSONDecodeError as e:
                error_msg = f"Invalid JSON response: {e}"
                raise AlphaVantageResponseError(error_msg) from e

            if not isinstance(data, dict):
                error_msg = f"Expected JSON object, got {type(data).__name__}"
                raise AlphaVantageResponseError(error_msg)

            success = True
            return data

        except httpx.ConnectError as e:
            error_msg = f"Failed to connect to Alpha Vantage: {e}"
            logger.warning(f"Connection error to Alpha Vantage: {e}")
            raise AlphaVantageConnectionError(error_msg) from e
        except httpx.TimeoutException as e:
            error_msg = f"Alpha Vantage request timed out: {e}"
            logger.warning(f"Timeout calling Alpha Vantage: {e}")
            raise AlphaVantageTimeoutError(error_msg) from e
        except httpx.HTTPError as e:
            error_msg = f"HTTP error: {e}"
            logger.error(f"HTTP error calling Alpha Vantage: {e}")
            raise AlphaVantageConnectionError(error_msg) from e
        finally:
            audit_logger.log_upstream_call(
                operation=function,
                params=params,
                status_code=status_code,
                duration_ms=(time.time() - start_time) * 1000,
                success=success,
                error=error_msg,
            )
