#!/usr/bin/env python3
# src/qiuye_ui/names.py
"""
Component name normalization.

Accepts the forms users and agents actually type and reduces them to the
canonical lowercase kebab-case identifier:

    typing-text
    typing-text.json
    @qiuye-ui/typing-text
    https://ui.qiuyedx.com/registry/typing-text.json
"""

from urllib.parse import urlsplit

from .constants import CANONICAL_NAME_PATTERN, DESCRIPTOR_SUFFIX
from .errors import InvalidNameError


def _last_url_segment(value: str) -> str | None:
    """Return the last non-empty path segment if ``value`` is an absolute URL."""
    parts = urlsplit(value)
    if not parts.scheme or not (parts.netloc or parts.path.startswith("/")):
        return None
    segments = [segment for segment in parts.path.split("/") if segment]
    return segments[-1] if segments else None


def is_canonical_name(value: str) -> bool:
    """Check whether ``value`` is already a canonical component name."""
    return bool(CANONICAL_NAME_PATTERN.match(value))


def normalize_name(value: str) -> str:
    """Normalize a component reference to its canonical name.

    Args:
        value: Bare name, ``@scope/name``, ``name.json`` or a registry URL.

    Returns:
        The canonical name.

    Raises:
        InvalidNameError: If the reduced value is not lowercase kebab-case.
    """
    if not isinstance(value, str):
        raise InvalidNameError(value)

    name = value.strip()

    if name.startswith("@"):
        parts = name.split("/")
        if len(parts) >= 2:
            name = parts[1]

    segment = _last_url_segment(name)
    if segment is not None:
        name = segment

    if name.endswith(DESCRIPTOR_SUFFIX):
        name = name[: -len(DESCRIPTOR_SUFFIX)]

    if not is_canonical_name(name):
        raise InvalidNameError(value)

    return name


__all__ = ["normalize_name", "is_canonical_name"]
