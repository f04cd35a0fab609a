#!/usr/bin/env python3
# src/qiuye_ui/queries.py
"""
Query service - the five read-only registry operations.

Each operation is independent and stateless: it resolves what it needs from
the registry on every call and never mutates shared state.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from .config import RegistryConfig
from .constants import (
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_REGISTRY_ALIAS,
    KEY_AUTHOR,
    KEY_CONTENT,
    KEY_DEPENDENCIES,
    KEY_FILES,
    KEY_NAME,
    KEY_PATH,
    KEY_REGISTRY_DEPENDENCIES,
    KEY_TARGET,
    KEY_TITLE,
    KEY_TYPE,
    PACKAGE_MANAGER_PREFIXES,
)
from .errors import UnsupportedPackageManagerError
from .fetcher import fetch_descriptor
from .index import build_index
from .names import normalize_name

logger = logging.getLogger(__name__)


# ============================================================================
# Result models
# ============================================================================


class FileContent(BaseModel):
    """One file of a descriptor, with its source text."""

    index: int
    path: str | None = None
    target: str | None = None
    type: str | None = None
    content: str = ""


class AvailableFile(BaseModel):
    """Summary of a file that can be requested by index."""

    index: int
    path: str | None = None
    target: str | None = None
    type: str | None = None


class FileNotFoundResult(BaseModel):
    """Returned instead of raising when ``files[index]`` does not exist."""

    error: str
    available: list[AvailableFile]


# ============================================================================
# Pure helpers
# ============================================================================


def strip_file_content(descriptor: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``descriptor`` with ``content`` removed from every file."""
    files = descriptor.get(KEY_FILES)
    stripped = [
        {key: value for key, value in file.items() if key != KEY_CONTENT} if isinstance(file, dict) else file
        for file in (files if isinstance(files, list) else [])
    ]
    return {**descriptor, KEY_FILES: stripped}


def strip_files(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Index entries without their ``files`` field."""
    return [{key: value for key, value in entry.items() if key != KEY_FILES} for entry in entries]


def _haystack(entry: dict[str, Any]) -> str:
    values = [entry.get(KEY_NAME), entry.get(KEY_TITLE), entry.get(KEY_TYPE), entry.get(KEY_AUTHOR)]
    for key in (KEY_DEPENDENCIES, KEY_REGISTRY_DEPENDENCIES):
        extra = entry.get(key)
        if isinstance(extra, list):
            values.extend(extra)
    return " ".join(str(value) for value in values if value).lower()


def search_index(entries: list[dict[str, Any]], query: str) -> list[dict[str, Any]]:
    """Case-insensitive substring search over name, title, type, author and dependencies."""
    needle = query.strip().lower()
    if not needle:
        return entries
    return [entry for entry in entries if needle in _haystack(entry)]


def format_install_command(
    name: str,
    package_manager: str = DEFAULT_PACKAGE_MANAGER,
    alias: str | None = DEFAULT_REGISTRY_ALIAS,
) -> str:
    """Build the ``shadcn add`` command for a component.

    Raises:
        InvalidNameError: If ``name`` cannot be normalized.
        UnsupportedPackageManagerError: If ``package_manager`` is not npx or pnpm.
    """
    canonical = normalize_name(name)
    prefix = PACKAGE_MANAGER_PREFIXES.get(package_manager)
    if prefix is None:
        raise UnsupportedPackageManagerError(package_manager, list(PACKAGE_MANAGER_PREFIXES))
    registry_alias = (alias or "").strip() or DEFAULT_REGISTRY_ALIAS
    return f"{prefix} shadcn@latest add {registry_alias}/{canonical}"


# ============================================================================
# Query service
# ============================================================================


class RegistryQueries:
    """Read-only registry operations bound to one ``RegistryConfig``.

    Usage:
        queries = RegistryQueries(RegistryConfig.from_sources())
        items = await queries.search_items("button")
        item = await queries.get_item("@qiuye-ui/animated-button")
    """

    def __init__(self, config: RegistryConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport

    async def list_items(self, include_files: bool = False) -> list[dict[str, Any]]:
        """All index entries, with per-file summaries only when ``include_files``."""
        entries = await build_index(self.config, transport=self._transport)
        return entries if include_files else strip_files(entries)

    async def search_items(self, query: str, include_files: bool = False) -> list[dict[str, Any]]:
        """Index entries matching ``query``; an empty query matches everything."""
        entries = search_index(await build_index(self.config, transport=self._transport), query)
        logger.debug(f"Search {query!r} matched {len(entries)} item(s)")
        return entries if include_files else strip_files(entries)

    async def get_item(self, name: str, include_content: bool = False) -> dict[str, Any]:
        """Full descriptor of one component, file contents removed unless requested."""
        descriptor = await fetch_descriptor(self.config, normalize_name(name), transport=self._transport)
        return descriptor if include_content else strip_file_content(descriptor)

    async def get_file_content(self, name: str, index: int = 0) -> FileContent | FileNotFoundResult:
        """Source text of ``files[index]``, or the list of valid indices when out of range."""
        descriptor = await fetch_descriptor(self.config, normalize_name(name), transport=self._transport)
        raw_files = descriptor.get(KEY_FILES)
        files = [file if isinstance(file, dict) else {} for file in (raw_files if isinstance(raw_files, list) else [])]

        if 0 <= index < len(files):
            file = files[index]
            return FileContent(
                index=index,
                path=file.get(KEY_PATH),
                target=file.get(KEY_TARGET),
                type=file.get(KEY_TYPE),
                content=file.get(KEY_CONTENT) or "",
            )

        return FileNotFoundResult(
            error=f"files[{index}] does not exist",
            available=[
                AvailableFile(index=i, path=file.get(KEY_PATH), target=file.get(KEY_TARGET), type=file.get(KEY_TYPE))
                for i, file in enumerate(files)
            ],
        )

    def get_install_command(
        self,
        name: str,
        package_manager: str = DEFAULT_PACKAGE_MANAGER,
        alias: str | None = DEFAULT_REGISTRY_ALIAS,
    ) -> str:
        """``npx``/``pnpm dlx`` shadcn add command; no network access."""
        return format_install_command(name, package_manager, alias)


__all__ = [
    "FileContent",
    "AvailableFile",
    "FileNotFoundResult",
    "strip_file_content",
    "strip_files",
    "search_index",
    "format_install_command",
    "RegistryQueries",
]
