"""
REST JSON Client

This module provides the async HTTP client shared by every REST source
(CoinGecko, Binance, Bybit, OKX). It handles:
- Session lifecycle (async context manager)
- Per-request timeout
- Mapping non-200 responses, timeouts and malformed JSON to SourceRequestError
- Request / response logging

One attempt per call. Falling through to the next source in the cascade is
the only retry in this core.

Usage:
    async with HTTPJSONClient(timeout=10) as client:
        data = await client.get_json("https://api.coingecko.com/api/v3/ping")
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from core.exceptions import SourceRequestError
from core.logging import get_logger, log_api_request, log_api_response


class HTTPJSONClient:
    """
    Async HTTP client returning decoded JSON.

    Attributes:
        timeout: Total request timeout in seconds
        session: aiohttp ClientSession (None until opened)

    Example:
        >>> client = HTTPJSONClient()
        >>> await client.open()
        >>> data = await client.get_json(url, {"symbol": "BTCUSDT"}, source="Binance")
        >>> await client.close()
    """

    def __init__(self, timeout: float = 10):
        self.timeout = timeout
        self.logger = get_logger(__name__)
        self.session: Optional[aiohttp.ClientSession] = None

    # ============================================
    # Session Management
    # ============================================

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def open(self) -> None:
        """Create the HTTP session (idempotent)."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self.logger.debug("HTTPJSONClient session created")

    async def close(self) -> None:
        """Close the HTTP session if open."""
        if self.session and not self.session.closed:
            await self.session.close()
            self.logger.debug("HTTPJSONClient session closed")
        self.session = None

    # ============================================
    # Requests
    # ============================================

    async def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        source: str = "http"
    ) -> Any:
        """
        GET a URL and decode the JSON body.

        Args:
            url: Full request URL
            params: Optional query parameters
            source: Source name used in log lines

        Returns:
            Decoded JSON payload

        Raises:
            RuntimeError: If the session has not been opened
            SourceRequestError: On non-200 status, timeout, transport error or bad JSON
        """
        if not self.session:
            raise RuntimeError("Client session not initialized. Use 'async with' or open().")

        log_api_request(source, url, params)
        started = asyncio.get_running_loop().time()

        try:
            async with self.session.get(url, params=params) as resp:
                elapsed = asyncio.get_running_loop().time() - started
                log_api_response(source, url, resp.status, elapsed)

                if resp.status != 200:
                    text = await resp.text()
                    raise SourceRequestError(f"HTTP {resp.status} on {url}: {text[:200]}")

                try:
                    return await resp.json(content_type=None)
                except ValueError as e:
                    raise SourceRequestError(f"Malformed JSON from {url}: {e}") from e

        except asyncio.TimeoutError as e:
            raise SourceRequestError(f"Timeout on {url}") from e
        except aiohttp.ClientError as e:
            raise SourceRequestError(f"Request failed on {url}: {e}") from e
