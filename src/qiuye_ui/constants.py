#!/usr/bin/env python3
# src/qiuye_ui/constants.py
"""
Top-level constants shared across the qiuye_ui package.
"""

import re
from enum import IntEnum

# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
DEFAULT_REGISTRY_BASE = "https://ui.qiuyedx.com/registry"
REGISTRY_BASE_ENV_VAR = "QIUIYE_UI_REGISTRY_BASE"
DEFAULT_TIMEOUT_SECONDS = 12.0

# Names fetched one by one when the registry does not publish index.json
DEFAULT_COMPONENT_NAMES: tuple[str, ...] = (
    "animated-button",
    "gradient-card",
    "responsive-tabs",
    "scrollable-dialog",
    "typing-text",
)

INDEX_DOCUMENT = "index.json"
DESCRIPTOR_SUFFIX = ".json"
CANONICAL_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")

# Error bodies are truncated before being attached to HttpStatusError
MAX_ERROR_BODY_CHARS = 400

HEADER_ACCEPT = "accept"
MIME_JSON = "application/json"

# ---------------------------------------------------------------------------
# Descriptor keys
# ---------------------------------------------------------------------------
KEY_NAME = "name"
KEY_TITLE = "title"
KEY_TYPE = "type"
KEY_AUTHOR = "author"
KEY_DESCRIPTION = "description"
KEY_DEPENDENCIES = "dependencies"
KEY_DEV_DEPENDENCIES = "devDependencies"
KEY_REGISTRY_DEPENDENCIES = "registryDependencies"
KEY_FILES = "files"
KEY_FILE_COUNT = "fileCount"
KEY_PATH = "path"
KEY_TARGET = "target"
KEY_CONTENT = "content"

INDEX_FILE_KEYS: tuple[str, ...] = (KEY_TYPE, KEY_PATH, KEY_TARGET)

# ---------------------------------------------------------------------------
# Install command
# ---------------------------------------------------------------------------
DEFAULT_REGISTRY_ALIAS = "@qiuye-ui"
PACKAGE_MANAGER_PREFIXES: dict[str, str] = {
    "npx": "npx",
    "pnpm": "pnpm dlx",
}
DEFAULT_PACKAGE_MANAGER = "npx"

# ---------------------------------------------------------------------------
# MCP host
# ---------------------------------------------------------------------------
SERVER_NAME = "qiuye-ui-registry"
SERVER_VERSION = "1.0.0"


class ToolName:
    LIST_REGISTRY_ITEMS = "qiuye_ui_list_registry_items"
    SEARCH_REGISTRY_ITEMS = "qiuye_ui_search_registry_items"
    GET_REGISTRY_ITEM = "qiuye_ui_get_registry_item"
    GET_REGISTRY_FILE_CONTENT = "qiuye_ui_get_registry_file_content"
    GET_SHADCN_ADD_COMMAND = "qiuye_ui_get_shadcn_add_command"


RESOURCE_INDEX_URI = "qiuye-ui://registry/index"
RESOURCE_ITEM_URI_TEMPLATE = "qiuye-ui://registry/{name}"

JSONRPC_VERSION = "2.0"


class JsonRpcError(IntEnum):
    """JSON-RPC 2.0 error codes used for resource reads served here."""

    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# ---------------------------------------------------------------------------
# Registry synchronization
# ---------------------------------------------------------------------------
REGISTRY_MANIFEST_NAME = "registry.json"
REGISTRY_SCHEMA_URL = "https://ui.shadcn.com/schema/registry.json"
DEFAULT_REGISTRY_NAME = "qiuye-ui"
DEFAULT_REGISTRY_HOMEPAGE = "https://ui.qiuyedx.com"
SYNC_SKIP_FILE_NAMES = frozenset({INDEX_DOCUMENT, REGISTRY_MANIFEST_NAME})
SYNCABLE_FILE_TYPES = frozenset({"registry:component", "registry:hook", "registry:lib"})
