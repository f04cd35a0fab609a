#!/usr/bin/env python3
"""Shared fixtures: an in-memory registry served through httpx.MockTransport."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from qiuye_ui.config import RegistryConfig

REGISTRY_BASE = "https://registry.test/registry"


def make_descriptor(name: str, **overrides: Any) -> dict[str, Any]:
    descriptor: dict[str, Any] = {
        "name": name,
        "title": name.replace("-", " ").title(),
        "type": "registry:component",
        "author": "qiuye",
        "dependencies": ["clsx"],
        "registryDependencies": [],
        "files": [
            {
                "type": "registry:component",
                "path": f"components/qiuye-ui/{name}.tsx",
                "target": f"components/qiuye-ui/{name}.tsx",
                "content": f"export function {name.replace('-', '_')}() {{}}",
            }
        ],
    }
    descriptor.update(overrides)
    return descriptor


def make_transport(routes: dict[str, Any], calls: list[str] | None = None) -> httpx.MockTransport:
    """Serve ``routes`` keyed by document name (``index.json``, ``typing-text.json``).

    Values may be JSON-serializable data, an ``httpx.Response`` or an exception
    to raise. Unknown documents answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        document = request.url.path.rsplit("/", 1)[-1]
        if calls is not None:
            calls.append(document)
        if document not in routes:
            return httpx.Response(404, text="Not Found")
        value = routes[document]
        if isinstance(value, httpx.Response):
            return value
        if isinstance(value, Exception):
            raise value
        return httpx.Response(200, json=value)

    return httpx.MockTransport(handler)


@pytest.fixture
def config() -> RegistryConfig:
    return RegistryConfig(registry_base=REGISTRY_BASE, timeout=2.0)


@pytest.fixture
def transport_factory() -> Callable[..., httpx.MockTransport]:
    return make_transport
