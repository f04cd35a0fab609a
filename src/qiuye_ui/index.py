#!/usr/bin/env python3
# src/qiuye_ui/index.py
"""
Index builder.

Prefers the registry's published ``index.json``; when that document is
missing or unusable, rebuilds the index by fetching each fallback name
individually and keeping whatever succeeds.
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

from .config import RegistryConfig
from .constants import (
    INDEX_DOCUMENT,
    INDEX_FILE_KEYS,
    KEY_AUTHOR,
    KEY_DEPENDENCIES,
    KEY_FILE_COUNT,
    KEY_FILES,
    KEY_NAME,
    KEY_REGISTRY_DEPENDENCIES,
    KEY_TITLE,
    KEY_TYPE,
)
from .errors import InvalidIndexError, RegistryError
from .fetcher import fetch_descriptor, fetch_json

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ============================================================================
# Shape helpers
# ============================================================================


def is_descriptor_like(value: Any) -> bool:
    """True when ``value`` has the full descriptor shape (``files`` list and string ``name``)."""
    return isinstance(value, dict) and isinstance(value.get(KEY_FILES), list) and isinstance(value.get(KEY_NAME), str)


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _or_empty(value: Any) -> Any:
    return "" if value is None else value


def to_index_entry(descriptor: dict[str, Any]) -> dict[str, Any]:
    """Project a descriptor to an index entry (file contents dropped)."""
    files = [
        {key: file.get(key) for key in INDEX_FILE_KEYS if key in file} if isinstance(file, dict) else {}
        for file in _as_list(descriptor.get(KEY_FILES))
    ]
    return {
        KEY_NAME: _or_empty(descriptor.get(KEY_NAME)),
        KEY_TITLE: _or_empty(descriptor.get(KEY_TITLE)),
        KEY_TYPE: _or_empty(descriptor.get(KEY_TYPE)),
        KEY_AUTHOR: _or_empty(descriptor.get(KEY_AUTHOR)),
        KEY_DEPENDENCIES: _as_list(descriptor.get(KEY_DEPENDENCIES)),
        KEY_REGISTRY_DEPENDENCIES: _as_list(descriptor.get(KEY_REGISTRY_DEPENDENCIES)),
        KEY_FILE_COUNT: len(files),
        KEY_FILES: files,
    }


def sort_entries(entries: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop entries without a string name and repeated names (first one wins), then sort by name."""
    unique: dict[str, dict[str, Any]] = {}
    for entry in entries:
        name = entry.get(KEY_NAME)
        if isinstance(name, str):
            unique.setdefault(name, entry)
    return sorted(unique.values(), key=lambda entry: entry[KEY_NAME])


# ============================================================================
# Settle-all combinator
# ============================================================================


@dataclass
class Settled(Generic[T]):
    """Outcome of ``settle_all``: successful values and the errors of the rest."""

    values: list[T] = field(default_factory=list)
    errors: list[BaseException] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.values) + len(self.errors)


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> Settled[T]:
    """Await everything concurrently and collect successes, keeping failures aside.

    A failing awaitable never cancels the others and never raises out of
    this function. Cancellation of the caller still propagates.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    settled: Settled[T] = Settled()
    for result in results:
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            settled.errors.append(result)
        else:
            settled.values.append(result)
    return settled


# ============================================================================
# Index building
# ============================================================================


async def fetch_remote_index(
    config: RegistryConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Fetch ``{base}/index.json`` and normalize its elements to index entries.

    Raises:
        InvalidIndexError: If the document is not a JSON array.
        RegistryError: Any fetch error from ``fetch_json``.
    """
    url = config.url_for(INDEX_DOCUMENT)
    data = await fetch_json(url, config.timeout, transport=transport)
    if not isinstance(data, list):
        raise InvalidIndexError(url, type(data).__name__)

    entries = []
    for element in data:
        if is_descriptor_like(element):
            entries.append(to_index_entry(element))
        elif isinstance(element, dict) and isinstance(element.get(KEY_NAME), str):
            entries.append(element)
    return entries


async def build_fallback_index(
    config: RegistryConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Rebuild the index from the fallback names, best effort."""

    async def entry_for(name: str) -> dict[str, Any]:
        return to_index_entry(await fetch_descriptor(config, name, transport=transport))

    settled = await settle_all(entry_for(name) for name in config.fallback_names)

    if settled.errors:
        logger.warning(f"{len(settled.errors)} of {settled.total} fallback registry items could not be fetched")
        for error in settled.errors:
            logger.debug(f"Fallback item skipped: {error}")

    return sort_entries(settled.values)


async def build_index(
    config: RegistryConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Build the registry index, sorted by name."""
    try:
        entries = await fetch_remote_index(config, transport=transport)
    except RegistryError as e:
        logger.info(f"Remote index unavailable, using fallback list: {e}")
        return await build_fallback_index(config, transport=transport)
    return sort_entries(entries)


__all__ = [
    "is_descriptor_like",
    "to_index_entry",
    "sort_entries",
    "Settled",
    "settle_all",
    "fetch_remote_index",
    "build_fallback_index",
    "build_index",
]
