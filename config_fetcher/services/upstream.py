"""Shared GET helper for upstream calls: deadline, transport errors, status check."""

import asyncio

import httpx

from config_fetcher.core.errors import (
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from config_fetcher.core.telemetry import record_upstream_error


async def get_bytes(source: str, url: str, timeout: float) -> bytes:
    """
    GET ``url`` and return the body. One attempt, no retries.
    The whole exchange (connect, headers, body) is bounded by ``timeout``.
    """

    async def _get() -> httpx.Response:
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.get(url)

    try:
        resp = await asyncio.wait_for(_get(), timeout=timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        record_upstream_error()
        raise UpstreamTimeoutError(source, url, timeout) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        record_upstream_error()
        raise UpstreamUnavailableError(source, url, message=f"{source} request failed: {e}") from e

    if not resp.is_success:
        record_upstream_error()
        raise UpstreamStatusError(source, url, resp.status_code)
    return resp.content
