#!/usr/bin/env python3
# src/qiuye_ui/server.py
"""
MCP host binding.

Exposes the registry queries as MCP tools and resources on a ChukMCPServer.
The transport (stdio JSON-RPC) belongs to chuk-mcp-server; this module only
maps tool names and arguments onto ``RegistryQueries``.
"""

import logging
from typing import Any

import httpx
from chuk_mcp_server import ChukMCPServer

from .config import RegistryConfig
from .constants import (
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_REGISTRY_ALIAS,
    JSONRPC_VERSION,
    MIME_JSON,
    RESOURCE_INDEX_URI,
    RESOURCE_ITEM_URI_TEMPLATE,
    SERVER_NAME,
    SERVER_VERSION,
    JsonRpcError,
    ToolName,
)
from .errors import InvalidNameError, RegistryError
from .queries import RegistryQueries
from .serialization import to_json_text

logger = logging.getLogger(__name__)


# ============================================================================
# Tool bodies (text payloads as returned to MCP clients)
# ============================================================================


async def list_registry_items_text(queries: RegistryQueries, include_files: bool = False) -> str:
    return to_json_text(await queries.list_items(include_files=include_files))


async def search_registry_items_text(queries: RegistryQueries, query: str, include_files: bool = False) -> str:
    return to_json_text(await queries.search_items(query, include_files=include_files))


async def get_registry_item_text(queries: RegistryQueries, name: str, include_content: bool = False) -> str:
    return to_json_text(await queries.get_item(name, include_content=include_content))


async def get_registry_file_content_text(queries: RegistryQueries, name: str, index: int = 0) -> str:
    return to_json_text(await queries.get_file_content(name, index=index))


async def read_index_resource(queries: RegistryQueries) -> str:
    return to_json_text(await queries.list_items(include_files=True))


async def read_item_resource(queries: RegistryQueries, name: str) -> str:
    return to_json_text(await queries.get_item(name, include_content=True))


# ============================================================================
# Item resources
# ============================================================================


def item_resource_uri(name: str) -> str:
    return RESOURCE_ITEM_URI_TEMPLATE.format(name=name)


def item_name_from_uri(uri: str) -> str | None:
    """The ``{name}`` part of an item resource URI, or None when ``uri`` is not one."""
    prefix = item_resource_uri("")
    if uri.startswith(prefix) and len(uri) > len(prefix):
        return uri[len(prefix) :]
    return None


def register_item_resource(mcp: ChukMCPServer, queries: RegistryQueries, name: str) -> None:
    """Register ``qiuye-ui://registry/{name}`` as a concrete, listed resource."""

    @mcp.resource(  # type: ignore[untyped-decorator]
        item_resource_uri(name),
        name=f"QiuYe UI registry item: {name}",
        description=f"Registry item JSON for {name} (includes files[].content).",
        mime_type=MIME_JSON,
    )
    async def registry_item() -> str:
        return await read_item_resource(queries, name)


def route_item_reads(mcp: ChukMCPServer, queries: RegistryQueries) -> None:
    """Serve ``resources/read`` for any item URI matching the template.

    The protocol handler only reads URIs registered verbatim, so reads of
    unregistered ``qiuye-ui://registry/{name}`` URIs are answered here and
    everything else goes to the handler as before.
    """
    protocol = mcp.protocol
    read_registered = protocol._handle_resources_read

    async def read_resource(params: dict[str, Any], msg_id: Any) -> tuple[dict[str, Any], None]:
        uri = params.get("uri")
        name = item_name_from_uri(uri) if isinstance(uri, str) and uri not in protocol.resources else None
        if name is None:
            return await read_registered(params, msg_id)

        try:
            text = await read_item_resource(queries, name)
        except RegistryError as e:
            code = JsonRpcError.INVALID_PARAMS if isinstance(e, InvalidNameError) else JsonRpcError.INTERNAL_ERROR
            logger.error(f"Resource read error for {uri}: {e}")
            error = {"code": int(code), "message": e.to_message()}
            return {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "error": error}, None

        content = {"uri": uri, "mimeType": MIME_JSON, "text": text}
        logger.debug(f"Read item resource {uri}")
        return {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "result": {"contents": [content]}}, None

    protocol._handle_resources_read = read_resource  # type: ignore[method-assign]


# ============================================================================
# Server factory
# ============================================================================


def create_registry_server(
    config: RegistryConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChukMCPServer:
    """Create the QiuYe UI registry MCP server.

    Args:
        config: Resolved registry configuration.
        transport: Optional httpx transport for registry requests.

    Returns:
        A ChukMCPServer with five read-only tools, the index resource, one
        item resource per fallback name and the item resource template.
    """
    queries = RegistryQueries(config, transport=transport)
    mcp = ChukMCPServer(name=SERVER_NAME, version=SERVER_VERSION)

    @mcp.tool(  # type: ignore[untyped-decorator]
        name=ToolName.LIST_REGISTRY_ITEMS,
        description=(
            "List QiuYe UI registry items (from the remote index.json, or rebuilt from the "
            "built-in component list when the registry publishes no index)."
        ),
        read_only_hint=True,
    )
    async def list_registry_items(include_files: bool = False) -> str:
        """List registry items; include_files adds per-file path/target (never content)."""
        return await list_registry_items_text(queries, include_files)

    @mcp.tool(  # type: ignore[untyped-decorator]
        name=ToolName.SEARCH_REGISTRY_ITEMS,
        description="Search registry items by name, title, type, author, dependencies and registryDependencies.",
        read_only_hint=True,
    )
    async def search_registry_items(query: str, include_files: bool = False) -> str:
        """Search registry items (case-insensitive substring)."""
        return await search_registry_items_text(queries, query, include_files)

    @mcp.tool(  # type: ignore[untyped-decorator]
        name=ToolName.GET_REGISTRY_ITEM,
        description=(
            "Get the registry JSON of one component. Accepts name, name.json, @qiuye-ui/name or a URL. "
            "files[].content is only included when include_content is true."
        ),
        read_only_hint=True,
    )
    async def get_registry_item(name: str, include_content: bool = False) -> str:
        """Get a registry item."""
        return await get_registry_item_text(queries, name, include_content)

    @mcp.tool(  # type: ignore[untyped-decorator]
        name=ToolName.GET_REGISTRY_FILE_CONTENT,
        description="Read files[index].content of a registry item (default index 0).",
        read_only_hint=True,
    )
    async def get_registry_file_content(name: str, index: int = 0) -> str:
        """Get the source text of one registry file."""
        return await get_registry_file_content_text(queries, name, index)

    @mcp.tool(  # type: ignore[untyped-decorator]
        name=ToolName.GET_SHADCN_ADD_COMMAND,
        description="Build the shadcn install command (npx or pnpm dlx) using the @qiuye-ui registry alias.",
        read_only_hint=True,
    )
    def get_shadcn_add_command(
        name: str, pm: str = DEFAULT_PACKAGE_MANAGER, alias: str = DEFAULT_REGISTRY_ALIAS
    ) -> str:
        """Get the shadcn add command for a component."""
        return queries.get_install_command(name, package_manager=pm, alias=alias)

    @mcp.resource(  # type: ignore[untyped-decorator]
        RESOURCE_INDEX_URI,
        name="QiuYe UI registry index",
        description="List of all QiuYe UI registry items.",
        mime_type=MIME_JSON,
    )
    async def registry_index() -> str:
        """Registry index."""
        return await read_index_resource(queries)

    @mcp.resource_template(  # type: ignore[untyped-decorator]
        RESOURCE_ITEM_URI_TEMPLATE,
        name="QiuYe UI registry item",
        description="Registry item JSON for a specific component (includes files[].content).",
        mime_type=MIME_JSON,
    )
    async def registry_item(name: str) -> str:
        """Registry item with file contents."""
        return await read_item_resource(queries, name)

    for name in config.fallback_names:
        register_item_resource(mcp, queries, name)
    route_item_reads(mcp, queries)

    logger.debug(f"Registry MCP server created (base={config.registry_base})")
    return mcp


__all__ = [
    "create_registry_server",
    "list_registry_items_text",
    "search_registry_items_text",
    "get_registry_item_text",
    "get_registry_file_content_text",
    "read_index_resource",
    "read_item_resource",
    "item_resource_uri",
    "item_name_from_uri",
    "register_item_resource",
    "route_item_reads",
]
