#!/usr/bin/env python3
# src/qiuye_ui/config.py
"""
Registry configuration.

The registry base URL is resolved once per invocation with the precedence
explicit override > environment > built-in default, and then carried around
in an immutable ``RegistryConfig``.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import (
    DEFAULT_COMPONENT_NAMES,
    DEFAULT_REGISTRY_BASE,
    DEFAULT_TIMEOUT_SECONDS,
    REGISTRY_BASE_ENV_VAR,
)

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_registry_base(override: str | None = None, environ: Mapping[str, str] | None = None) -> str:
    """Resolve the registry base URL.

    Args:
        override: Value given on the command line (``--registry-base``/``--base``).
        environ: Environment mapping, ``os.environ`` when omitted.

    Returns:
        The base URL without a trailing slash.
    """
    env = os.environ if environ is None else environ

    from_flag = _clean(override)
    from_env = _clean(env.get(REGISTRY_BASE_ENV_VAR))

    if from_flag:
        logger.debug(f"Registry base from flag: {from_flag}")
        base = from_flag
    elif from_env:
        logger.debug(f"Registry base from {REGISTRY_BASE_ENV_VAR}: {from_env}")
        base = from_env
    else:
        base = DEFAULT_REGISTRY_BASE

    return base[:-1] if base.endswith("/") else base


def join_url(base: str, path: str) -> str:
    """Join ``base`` and ``path`` with exactly one slash between them."""
    base = base[:-1] if base.endswith("/") else base
    path = path if path.startswith("/") else f"/{path}"
    return f"{base}{path}"


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable per-process registry settings."""

    registry_base: str = DEFAULT_REGISTRY_BASE
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    fallback_names: tuple[str, ...] = DEFAULT_COMPONENT_NAMES

    @classmethod
    def from_sources(
        cls,
        override: str | None = None,
        environ: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "RegistryConfig":
        """Build a config from flag/environment precedence."""
        return cls(registry_base=resolve_registry_base(override, environ), timeout=timeout)

    def url_for(self, path: str) -> str:
        """Absolute URL of ``path`` under the registry base."""
        return join_url(self.registry_base, path)


__all__ = ["RegistryConfig", "resolve_registry_base", "join_url"]
