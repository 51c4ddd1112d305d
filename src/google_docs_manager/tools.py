"""
Tool registry and dispatcher.

Maps each of the fixed tool names to an async handler that unpacks the
call arguments and invokes the matching GoogleDocsClient operation.
"""

from enum import Enum
from typing import Any, Awaitable, Callable

from fastmcp.exceptions import ToolError

from google_docs_manager.client import GoogleDocsClient
from google_docs_manager.errors import UnknownToolError
from google_docs_manager.types import (
    DEFAULT_EXPORT_MIME_TYPE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SHARE_ROLE,
)
from google_docs_manager.utils import log


class ToolName(str, Enum):
    """Names of the tools exposed over MCP."""

    CREATE = "google_docs_create"
    GET = "google_docs_get"
    UPDATE = "google_docs_update"
    LIST = "google_docs_list"
    DELETE = "google_docs_delete"
    EXPORT = "google_docs_export"
    SHARE = "google_docs_share"
    SEARCH = "google_docs_search"
    VERIFY_CONNECTION = "google_docs_verify_connection"


ToolHandler = Callable[[GoogleDocsClient, dict[str, Any]], Awaitable[Any]]


def _optional(arguments: dict[str, Any], key: str, default: Any = None) -> Any:
    value = arguments.get(key)
    return default if value is None else value


async def _create(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.create_document(arguments["title"], arguments.get("content"))


async def _get(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.get_document(arguments["documentId"])


async def _update(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.update_document(
        arguments["documentId"],
        arguments["content"],
        bool(_optional(arguments, "replaceAll", False)),
    )


async def _list(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.list_documents(
        _optional(arguments, "pageSize", DEFAULT_PAGE_SIZE),
        arguments.get("pageToken"),
    )


async def _delete(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.delete_document(arguments["documentId"])


async def _export(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.export_document(
        arguments["documentId"],
        _optional(arguments, "mimeType", DEFAULT_EXPORT_MIME_TYPE),
    )


async def _share(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.share_document(
        arguments["documentId"],
        arguments["emailAddress"],
        _optional(arguments, "role", DEFAULT_SHARE_ROLE),
    )


async def _search(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.search_documents(
        arguments["query"],
        _optional(arguments, "pageSize", DEFAULT_PAGE_SIZE),
        arguments.get("pageToken"),
    )


async def _verify_connection(client: GoogleDocsClient, arguments: dict[str, Any]) -> Any:
    return await client.verify_connection()


TOOL_HANDLERS: dict[ToolName, ToolHandler] = {
    ToolName.CREATE: _create,
    ToolName.GET: _get,
    ToolName.UPDATE: _update,
    ToolName.LIST: _list,
    ToolName.DELETE: _delete,
    ToolName.EXPORT: _export,
    ToolName.SHARE: _share,
    ToolName.SEARCH: _search,
    ToolName.VERIFY_CONNECTION: _verify_connection,
}


def resolve_tool(name: str) -> ToolName:
    """Look up a registered tool by name, raising UnknownToolError if absent."""
    try:
        return ToolName(name)
    except ValueError:
        raise UnknownToolError(name) from None


async def dispatch(
    client: GoogleDocsClient, name: str, arguments: dict[str, Any] | None = None
) -> Any:
    """
    Route a tool call to its client operation.

    Args:
        client: The authenticated Google Docs client
        name: Tool name
        arguments: Tool call arguments, keyed by parameter name

    Returns:
        The operation result (JSON-serializable)

    Raises:
        UnknownToolError: If the name is not a registered tool
        ToolError: If the operation raised; reported to the caller as an
            error result
    """
    tool = resolve_tool(name)

    try:
        return await TOOL_HANDLERS[tool](client, arguments or {})
    except Exception as e:
        log(f"Error executing tool {name}: {e!r}")
        raise ToolError(f"Google Docs API error: {e}") from e
