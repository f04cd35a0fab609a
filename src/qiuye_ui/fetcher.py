#!/usr/bin/env python3
# src/qiuye_ui/fetcher.py
"""
Registry fetcher - single-request JSON retrieval with a hard deadline.

No retries happen here; a failed request surfaces immediately as one of
NetworkError, HttpStatusError or MalformedJsonError.
"""

import asyncio
import logging
from typing import Any

import httpx
import orjson

from .config import RegistryConfig
from .constants import DESCRIPTOR_SUFFIX, HEADER_ACCEPT, MAX_ERROR_BODY_CHARS, MIME_JSON
from .errors import HttpStatusError, MalformedJsonError, NetworkError
from .names import normalize_name

logger = logging.getLogger(__name__)


async def fetch_json(
    url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """GET ``url`` and decode the body as JSON.

    Args:
        url: Absolute URL to fetch.
        timeout: Upper bound in seconds for the whole request.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).

    Returns:
        The decoded JSON value.
    """
    logger.debug(f"GET {url}")
    try:
        async with asyncio.timeout(timeout):
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.get(url, headers={HEADER_ACCEPT: MIME_JSON})
    except TimeoutError as e:
        raise NetworkError(url, f"timed out after {timeout:g}s") from e
    except httpx.TimeoutException as e:
        raise NetworkError(url, f"timed out after {timeout:g}s") from e
    except httpx.TransportError as e:
        raise NetworkError(url, str(e) or type(e).__name__) from e

    if not response.is_success:
        body = response.text[:MAX_ERROR_BODY_CHARS]
        raise HttpStatusError(url, response.status_code, response.reason_phrase, body)

    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        raise MalformedJsonError(url, str(e)) from e


def descriptor_url(config: RegistryConfig, name: str) -> str:
    """URL of the descriptor document for an already-canonical name."""
    return config.url_for(f"{name}{DESCRIPTOR_SUFFIX}")


async def fetch_descriptor(
    config: RegistryConfig,
    name: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Fetch the full descriptor (``{base}/{name}.json``) of one component."""
    canonical = normalize_name(name)
    url = descriptor_url(config, canonical)
    data = await fetch_json(url, config.timeout, transport=transport)
    if not isinstance(data, dict):
        raise MalformedJsonError(url, f"expected a JSON object, got {type(data).__name__}")
    return data


__all__ = ["fetch_json", "fetch_descriptor", "descriptor_url"]
