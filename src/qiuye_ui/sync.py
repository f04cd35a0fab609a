#!/usr/bin/env python3
# src/qiuye_ui/sync.py
"""
Registry synchronization.

Keeps every descriptor's ``files[].content`` identical to the component
source tree and regenerates the shadcn ``registry.json`` manifest from the
descriptors found under the registry directory.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import orjson

from .constants import (
    DEFAULT_REGISTRY_HOMEPAGE,
    DEFAULT_REGISTRY_NAME,
    KEY_AUTHOR,
    KEY_CONTENT,
    KEY_DEPENDENCIES,
    KEY_DESCRIPTION,
    KEY_DEV_DEPENDENCIES,
    KEY_FILES,
    KEY_NAME,
    KEY_PATH,
    KEY_REGISTRY_DEPENDENCIES,
    KEY_TITLE,
    KEY_TYPE,
    REGISTRY_MANIFEST_NAME,
    REGISTRY_SCHEMA_URL,
    SYNC_SKIP_FILE_NAMES,
    SYNCABLE_FILE_TYPES,
)
from .errors import MalformedDocumentError
from .index import is_descriptor_like
from .serialization import to_json_file_bytes

logger = logging.getLogger(__name__)


@dataclass
class DescriptorSyncResult:
    """What happened to one descriptor document."""

    path: Path
    updated: bool = False
    skipped: bool = False
    error: str | None = None
    details: list[str] = field(default_factory=list)


@dataclass
class SyncReport:
    """Summary of a ``sync_registry`` run."""

    registry_dir: Path
    source_base: Path
    dry_run: bool
    results: list[DescriptorSyncResult] = field(default_factory=list)
    manifest_path: Path | None = None
    manifest_items: int = 0
    manifest_error: str | None = None

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def updated(self) -> int:
        return sum(1 for result in self.results if result.updated)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.error is not None)


# ============================================================================
# Reading
# ============================================================================


def iter_registry_documents(registry_dir: Path) -> Iterator[Path]:
    """Descriptor JSON files under ``registry_dir`` (recursive, sorted), minus index/manifest."""
    if not registry_dir.is_dir():
        raise FileNotFoundError(f"Registry directory not found: {registry_dir}")
    for path in sorted(registry_dir.rglob("*.json")):
        if path.is_file() and path.name not in SYNC_SKIP_FILE_NAMES:
            yield path


def read_json_document(path: Path) -> Any:
    try:
        return orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise MalformedDocumentError(str(path), str(e)) from e


def resolve_source(source_base: Path, relative_path: str) -> Path | None:
    """First existing source file for a descriptor path.

    Tries the path as given, then without a leading ``src/``, then without
    a leading ``./``.
    """
    candidates = [
        source_base / relative_path,
        source_base / relative_path.removeprefix("src/"),
        source_base / relative_path.removeprefix("./"),
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def read_registry_meta(package_json: Path) -> tuple[str, str]:
    """Registry name and homepage from ``package.json`` (``registryName``/``homepage``)."""
    try:
        data = read_json_document(package_json)
    except (OSError, MalformedDocumentError) as e:
        logger.debug(f"Using default registry meta: {e}")
        return DEFAULT_REGISTRY_NAME, DEFAULT_REGISTRY_HOMEPAGE

    if not isinstance(data, dict):
        return DEFAULT_REGISTRY_NAME, DEFAULT_REGISTRY_HOMEPAGE

    name = data.get("registryName")
    homepage = data.get("homepage")
    return (
        name.strip() if isinstance(name, str) and name.strip() else DEFAULT_REGISTRY_NAME,
        homepage.strip() if isinstance(homepage, str) and homepage.strip() else DEFAULT_REGISTRY_HOMEPAGE,
    )


# ============================================================================
# Content sync
# ============================================================================


def sync_descriptor(path: Path, source_base: Path, dry_run: bool = False) -> DescriptorSyncResult:
    """Refresh ``files[].content`` of one descriptor from the source tree."""
    result = DescriptorSyncResult(path=path)
    try:
        data = read_json_document(path)
    except (OSError, MalformedDocumentError) as e:
        result.error = str(e)
        return result

    if not is_descriptor_like(data):
        result.skipped = True
        result.details.append("skipped: not a registry item")
        return result

    files = data[KEY_FILES]
    for i, file in enumerate(files):
        if not isinstance(file, dict):
            continue

        file_type = file.get(KEY_TYPE)
        if file_type not in SYNCABLE_FILE_TYPES:
            result.details.append(f"skipped files[{i}] (type={file_type or 'N/A'})")
            continue

        relative_path = file.get(KEY_PATH)
        if not isinstance(relative_path, str) or not relative_path:
            result.details.append(f"skipped files[{i}]: missing path")
            continue

        source = resolve_source(source_base, relative_path)
        if source is None:
            result.details.append(f"files[{i}] source not found: {relative_path}")
            continue

        try:
            content = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            result.error = f"files[{i}] source unreadable: {source} ({e})"
            result.updated = False
            return result

        if file.get(KEY_CONTENT) == content:
            result.details.append(f"files[{i}] unchanged: {relative_path}")
            continue

        result.updated = True
        result.details.append(f"files[{i}] content updated: {relative_path} <- {source}")
        if not dry_run:
            files[i] = {**file, KEY_CONTENT: content}

    if result.updated and not dry_run:
        path.write_bytes(to_json_file_bytes(data))

    return result


# ============================================================================
# Manifest
# ============================================================================


def to_manifest_item(descriptor: dict[str, Any]) -> dict[str, Any]:
    """Manifest projection of a descriptor (file contents dropped)."""
    files = descriptor.get(KEY_FILES)
    item: dict[str, Any] = {
        KEY_NAME: descriptor.get(KEY_NAME) or "",
        KEY_TYPE: descriptor.get(KEY_TYPE) or "",
        KEY_TITLE: descriptor.get(KEY_TITLE) or "",
        KEY_AUTHOR: descriptor.get(KEY_AUTHOR) or "",
        KEY_DEPENDENCIES: list(descriptor.get(KEY_DEPENDENCIES) or []),
        KEY_REGISTRY_DEPENDENCIES: list(descriptor.get(KEY_REGISTRY_DEPENDENCIES) or []),
        KEY_FILES: [
            {key: value for key, value in file.items() if key != KEY_CONTENT} if isinstance(file, dict) else file
            for file in (files if isinstance(files, list) else [])
        ],
    }

    description = descriptor.get(KEY_DESCRIPTION)
    if isinstance(description, str) and description.strip():
        item[KEY_DESCRIPTION] = description

    dev_dependencies = descriptor.get(KEY_DEV_DEPENDENCIES)
    if isinstance(dev_dependencies, list) and dev_dependencies:
        item[KEY_DEV_DEPENDENCIES] = dev_dependencies

    return item


def build_manifest_items(registry_dir: Path) -> list[dict[str, Any]]:
    items = []
    for path in iter_registry_documents(registry_dir):
        data = read_json_document(path)
        if is_descriptor_like(data):
            items.append(to_manifest_item(data))
    return sorted(items, key=lambda item: item[KEY_NAME])


def write_registry_manifest(
    registry_dir: Path,
    package_json: Path,
    dry_run: bool = False,
) -> tuple[Path, int]:
    """Generate ``registry.json`` in ``registry_dir``.

    Returns:
        The manifest path and the number of items in it.
    """
    manifest_path = registry_dir / REGISTRY_MANIFEST_NAME
    name, homepage = read_registry_meta(package_json)
    items = build_manifest_items(registry_dir)
    manifest = {
        "$schema": REGISTRY_SCHEMA_URL,
        "name": name,
        "homepage": homepage,
        "items": items,
    }
    if not dry_run:
        manifest_path.write_bytes(to_json_file_bytes(manifest))
        logger.info(f"Wrote {manifest_path} ({len(items)} items)")
    return manifest_path, len(items)


def sync_registry(
    registry_dir: Path,
    source_base: Path,
    dry_run: bool = False,
    package_json: Path | None = None,
) -> SyncReport:
    """Sync every descriptor under ``registry_dir`` and rewrite the manifest.

    Per-descriptor failures and a failed manifest are recorded in the report;
    only a missing registry directory raises.
    """
    report = SyncReport(registry_dir=registry_dir, source_base=source_base, dry_run=dry_run)

    for path in iter_registry_documents(registry_dir):
        result = sync_descriptor(path, source_base, dry_run=dry_run)
        if result.error is not None:
            logger.error(f"Failed to sync {path}: {result.error}")
        report.results.append(result)

    meta_path = package_json if package_json is not None else Path.cwd() / "package.json"
    try:
        report.manifest_path, report.manifest_items = write_registry_manifest(
            registry_dir, meta_path, dry_run=dry_run
        )
    except (OSError, MalformedDocumentError) as e:
        report.manifest_error = str(e)
        logger.error(f"Failed to generate {REGISTRY_MANIFEST_NAME}: {e}")
    return report


__all__ = [
    "DescriptorSyncResult",
    "SyncReport",
    "iter_registry_documents",
    "read_json_document",
    "resolve_source",
    "read_registry_meta",
    "sync_descriptor",
    "to_manifest_item",
    "build_manifest_items",
    "write_registry_manifest",
    "sync_registry",
]
