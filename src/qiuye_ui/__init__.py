#!/usr/bin/env python3
"""
qiuye_ui - QiuYe UI component registry client and MCP server.

Resolve components from the QiuYe UI registry:

    from qiuye_ui import RegistryConfig, RegistryQueries

    queries = RegistryQueries(RegistryConfig.from_sources())
    items = await queries.search_items("button")
    command = queries.get_install_command("typing-text", "pnpm")

Or expose it to MCP clients over stdio:

    qiuye-ui mcp --registry-base http://localhost:3000/registry
"""

from .catalog import (
    ComponentInfo,
    get_all_components,
    get_categories,
    get_component,
    get_components_by_category,
    search_components,
)
from .config import RegistryConfig, resolve_registry_base
from .errors import (
    HttpStatusError,
    InvalidNameError,
    MalformedDocumentError,
    MalformedJsonError,
    NetworkError,
    RegistryError,
)
from .fetcher import fetch_descriptor
from .index import build_index
from .names import normalize_name
from .queries import FileContent, FileNotFoundResult, RegistryQueries

__version__ = "1.0.0"
__all__ = [
    "RegistryConfig",
    "resolve_registry_base",
    "RegistryQueries",
    "FileContent",
    "FileNotFoundResult",
    "normalize_name",
    "fetch_descriptor",
    "build_index",
    "ComponentInfo",
    "get_all_components",
    "get_categories",
    "get_component",
    "get_components_by_category",
    "search_components",
    "RegistryError",
    "InvalidNameError",
    "NetworkError",
    "HttpStatusError",
    "MalformedJsonError",
    "MalformedDocumentError",
]
