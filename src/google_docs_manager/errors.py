"""Exceptions for the Google Docs Manager MCP server.

Configuration problems are fatal and raised while the client is built.
Remote API failures are converted into RemoteOperationError values and
returned as error payloads instead of being raised to the caller.
"""

from typing import Any

from googleapiclient.errors import HttpError
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData

UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"


class GoogleDocsManagerError(Exception):
    """Base exception for all google-docs-manager errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(GoogleDocsManagerError):
    """Raised when credentials or the project id cannot be resolved."""


class RemoteOperationError(GoogleDocsManagerError):
    """A failed call to the Docs or Drive API.

    Attributes:
        message: Human-readable error description.
        code: HTTP status code for API errors, UNKNOWN_ERROR otherwise.
        details: Structured error details reported by the API, if any.
    """

    def __init__(
        self,
        message: str,
        code: int | str = UNKNOWN_ERROR_CODE,
        details: Any = None,
    ) -> None:
        self.code = code
        self.details = details
        super().__init__(message)

    @classmethod
    def from_exception(cls, error: Exception) -> "RemoteOperationError":
        """Convert a googleapiclient HttpError (or any exception) to a RemoteOperationError."""
        if isinstance(error, RemoteOperationError):
            return error

        if isinstance(error, HttpError):
            status = getattr(error.resp, "status", None)
            message = error.reason or str(error)
            details = error.error_details or None
            return cls(message, int(status) if status else UNKNOWN_ERROR_CODE, details)

        return cls(str(error) or type(error).__name__)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.code, "details": self.details}


class UnknownToolError(McpError):
    """Raised by the dispatcher for a tool name outside the registry."""

    def __init__(self, name: str) -> None:
        self.tool_name = name
        super().__init__(
            ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
        )
