"""
Google Docs Manager MCP Server

Main MCP server entry point with all tool definitions.
Uses FastMCP framework for MCP protocol implementation.

IMPORTANT: All logging must use stderr, never stdout.
The MCP protocol uses stdout for JSON-RPC communication.
"""

import asyncio
import json
import sys
import threading
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastmcp import FastMCP
from mcp.types import CallToolRequest

from google_docs_manager.client import GoogleDocsClient
from google_docs_manager.config import Settings
from google_docs_manager.errors import ConfigurationError, UnknownToolError
from google_docs_manager.tools import ToolName, dispatch, resolve_tool
from google_docs_manager.utils import log


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    exception = context.get("exception")
    if exception is not None:
        log(f"Unhandled exception in event loop: {type(exception).__name__}: {exception}")
    else:
        log(f"Unhandled event loop error: {context.get('message')}")


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Log errors from tasks nobody awaits instead of dropping them."""
    loop = asyncio.get_running_loop()
    previous = loop.get_exception_handler()
    loop.set_exception_handler(_log_loop_exception)
    try:
        yield {}
    finally:
        loop.set_exception_handler(previous)


# Create MCP server
mcp = FastMCP(
    name="google-docs-manager",
    instructions="""
    This MCP server manages Google Documents through the Docs and Drive APIs.

    Key capabilities:
    - Create documents (optionally with initial plain text)
    - Read a document's full structure
    - Insert text at the start of a document, optionally replacing everything
    - List and search Google Docs, with page tokens for pagination
    - Export documents (PDF by default, base64 encoded)
    - Share documents with a user by email
    - Delete documents
    - Verify the API connection and credentials

    Document indexing uses 1-based positions (index 1 is start of document).
    """,
    lifespan=_lifespan,
)


def _install_unknown_tool_guard(server: FastMCP) -> None:
    """
    Reject calls to unregistered tools with a METHOD_NOT_FOUND protocol error.

    The tool call handler reports every exception as an error result, so
    the name is checked before it runs.
    """
    handlers = server._mcp_server.request_handlers
    handle_call_tool = handlers[CallToolRequest]

    async def guarded_call_tool(request: CallToolRequest):
        try:
            resolve_tool(request.params.name)
        except UnknownToolError:
            log(f"Unknown tool requested: {request.params.name}")
            raise
        return await handle_call_tool(request)

    handlers[CallToolRequest] = guarded_call_tool


_install_unknown_tool_guard(mcp)


# Global client (initialized by main() or lazily on first call)
_client: GoogleDocsClient | None = None


def get_client() -> GoogleDocsClient:
    """
    Get the Google Docs client, creating it from the environment if needed.

    Raises:
        ConfigurationError: If credentials or the project id are missing
    """
    global _client

    if _client is None:
        _client = GoogleDocsClient()

    return _client


def set_client(client: GoogleDocsClient | None) -> None:
    """Install the client used to serve tool calls."""
    global _client
    _client = client


async def _call(tool: ToolName, **arguments: Any) -> str:
    """Dispatch a tool call and render the result as indented JSON."""
    provided = {key: value for key, value in arguments.items() if value is not None}
    result = await dispatch(get_client(), tool.value, provided)
    return json.dumps(result, indent=2, default=str)


# === DOCUMENT TOOLS ===


@mcp.tool(name=ToolName.CREATE.value)
async def google_docs_create(
    title: Annotated[str, "Title of the document"],
    content: Annotated[
        str | None, "Initial content of the document (plain text)"
    ] = None,
) -> str:
    """
    Create a new Google Doc.

    Returns the document ID, title, edit URL and the full document structure.
    """
    return await _call(ToolName.CREATE, title=title, content=content)


@mcp.tool(name=ToolName.GET.value, annotations={"readOnlyHint": True})
async def google_docs_get(
    documentId: Annotated[str, "ID of the document to retrieve"],
) -> str:
    """
    Get a Google Doc by ID.
    """
    return await _call(ToolName.GET, documentId=documentId)


@mcp.tool(name=ToolName.UPDATE.value)
async def google_docs_update(
    documentId: Annotated[str, "ID of the document to update"],
    content: Annotated[str, "New content to add or replace (plain text)"],
    replaceAll: Annotated[
        bool, "Whether to replace all content (true) or insert at the start (false)"
    ] = False,
) -> str:
    """
    Update a Google Doc with new content.

    Content is inserted at the start of the document. With replaceAll the
    existing body is deleted first.
    """
    return await _call(
        ToolName.UPDATE, documentId=documentId, content=content, replaceAll=replaceAll
    )


# === DRIVE TOOLS ===


@mcp.tool(name=ToolName.LIST.value, annotations={"readOnlyHint": True})
async def google_docs_list(
    pageSize: Annotated[int | None, "Number of documents to return (default: 10)"] = None,
    pageToken: Annotated[str | None, "Token for pagination"] = None,
) -> str:
    """
    List Google Docs accessible to the authenticated user.
    """
    return await _call(ToolName.LIST, pageSize=pageSize, pageToken=pageToken)


@mcp.tool(name=ToolName.DELETE.value, annotations={"destructiveHint": True})
async def google_docs_delete(
    documentId: Annotated[str, "ID of the document to delete"],
) -> str:
    """
    Delete a Google Doc.

    WARNING: The document is permanently deleted, not moved to trash.
    """
    return await _call(ToolName.DELETE, documentId=documentId)


@mcp.tool(name=ToolName.EXPORT.value, annotations={"readOnlyHint": True})
async def google_docs_export(
    documentId: Annotated[str, "ID of the document to export"],
    mimeType: Annotated[
        str | None, 'MIME type for export (e.g., "application/pdf", "text/plain")'
    ] = None,
) -> str:
    """
    Export a Google Doc to different formats.

    The exported file content is returned base64 encoded.
    """
    return await _call(ToolName.EXPORT, documentId=documentId, mimeType=mimeType)


@mcp.tool(name=ToolName.SHARE.value)
async def google_docs_share(
    documentId: Annotated[str, "ID of the document to share"],
    emailAddress: Annotated[str, "Email address to share with"],
    role: Annotated[str | None, "Role to assign (reader, writer, commenter)"] = None,
) -> str:
    """
    Share a Google Doc with specific users.
    """
    return await _call(
        ToolName.SHARE, documentId=documentId, emailAddress=emailAddress, role=role
    )


@mcp.tool(name=ToolName.SEARCH.value, annotations={"readOnlyHint": True})
async def google_docs_search(
    query: Annotated[str, "Search query for document title or content"],
    pageSize: Annotated[int | None, "Number of results to return (default: 10)"] = None,
    pageToken: Annotated[str | None, "Token for pagination"] = None,
) -> str:
    """
    Search for Google Docs by title or content.
    """
    return await _call(
        ToolName.SEARCH, query=query, pageSize=pageSize, pageToken=pageToken
    )


@mcp.tool(name=ToolName.VERIFY_CONNECTION.value, annotations={"readOnlyHint": True})
async def google_docs_verify_connection() -> str:
    """
    Verify connection with Google Docs API and check credentials.
    """
    return await _call(ToolName.VERIFY_CONNECTION)


def _log_uncaught_exception(exc_type, exc_value, exc_traceback) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    log(f"Uncaught exception: {exc_type.__name__}: {exc_value}")


def _log_uncaught_thread_exception(args: threading.ExceptHookArgs) -> None:
    log(
        f"Uncaught exception in thread {args.thread.name if args.thread else '?'}: "
        f"{args.exc_type.__name__}: {args.exc_value}"
    )


def main(argv: list[str] | None = None) -> None:
    """Run the Google Docs Manager MCP Server."""
    sys.excepthook = _log_uncaught_exception
    threading.excepthook = _log_uncaught_thread_exception

    settings = Settings.from_args(argv, description="Google Docs Manager MCP Server")

    try:
        set_client(GoogleDocsClient(settings))
    except ConfigurationError as e:
        log(f"Configuration error: {e.message}")
        sys.exit(1)

    log("Starting Google Docs Manager MCP Server...")
    try:
        mcp.run()
    except KeyboardInterrupt:
        log("Interrupted, shutting down Google Docs Manager MCP Server.")


if __name__ == "__main__":
    main()
