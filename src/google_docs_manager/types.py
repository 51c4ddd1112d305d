"""
Result types for Google Docs Manager operations.

Keys use the camelCase names of the tool protocol so results can be
serialized as-is.
"""

from typing import Any, TypedDict

# Google Docs mime type used for listing, searching and creating documents
DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"

DEFAULT_EXPORT_MIME_TYPE = "application/pdf"

DEFAULT_PAGE_SIZE = 10

DEFAULT_SHARE_ROLE = "reader"

API_VERSION = "v1"


class ErrorResult(TypedDict):
    error: str


class FailureResult(TypedDict):
    success: bool
    error: str


class CreateDocumentResult(TypedDict):
    documentId: str
    title: str
    url: str
    document: dict[str, Any]


class DocumentSummary(TypedDict, total=False):
    """A Drive file entry as returned by list and search."""

    id: str
    name: str
    createdTime: str
    modifiedTime: str
    webViewLink: str


class DocumentListResult(TypedDict):
    documents: list[DocumentSummary]
    nextPageToken: str | None


class DeleteDocumentResult(TypedDict):
    success: bool
    documentId: str
    message: str


class ExportDocumentResult(TypedDict):
    documentId: str
    mimeType: str
    content: str  # base64


class ShareDocumentResult(TypedDict):
    success: bool
    documentId: str
    permission: dict[str, Any]


class ConnectionDetails(TypedDict):
    authType: str
    apiVersion: str
    documentCount: int


class ConnectionErrorInfo(TypedDict):
    message: str
    code: int | str
    details: Any


class ConnectionResult(TypedDict, total=False):
    connected: bool
    projectId: str
    timestamp: str
    details: ConnectionDetails
    error: ConnectionErrorInfo
