"""
Google Drive operations for Google Docs Manager.

Handles listing, searching, exporting, sharing and deleting documents,
plus the connectivity check.
"""

import base64
from datetime import datetime, timezone
from typing import Any

from google_docs_manager.api import helpers
from google_docs_manager.errors import RemoteOperationError
from google_docs_manager.types import (
    API_VERSION,
    DEFAULT_EXPORT_MIME_TYPE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SHARE_ROLE,
    ConnectionResult,
    DeleteDocumentResult,
    DocumentListResult,
    ErrorResult,
    ExportDocumentResult,
    FailureResult,
    ShareDocumentResult,
)
from google_docs_manager.utils import log


class DriveMixin:
    """Drive file operations. Requires ``drive``, ``auth_type`` and ``project_id``."""

    drive: Any
    auth_type: str
    project_id: str

    async def _list_files(
        self, query_string: str, page_size: int, page_token: str | None
    ) -> DocumentListResult:
        list_params: dict[str, Any] = {
            "q": query_string,
            "pageSize": page_size,
            "fields": helpers.DOCUMENT_LIST_FIELDS,
        }
        if page_token:
            list_params["pageToken"] = page_token

        response = await helpers.execute(self.drive.files().list(**list_params))

        return {
            "documents": response.get("files", []),
            "nextPageToken": response.get("nextPageToken"),
        }

    async def list_documents(
        self, page_size: int = DEFAULT_PAGE_SIZE, page_token: str | None = None
    ) -> DocumentListResult | ErrorResult:
        """
        List Google Documents accessible to the authenticated identity.

        Args:
            page_size: Number of documents to return
            page_token: Continuation token from a previous call

        Returns:
            Documents (id, name, createdTime, modifiedTime, webViewLink) and
            the next page token
        """
        log(f"Listing Google Docs. Page size: {page_size}")

        try:
            return await self._list_files(
                helpers.build_document_query(), page_size, page_token
            )
        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error listing documents: {error.message}")
            return {"error": error.message}

    async def search_documents(
        self,
        query: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_token: str | None = None,
    ) -> DocumentListResult | ErrorResult:
        """
        Search Google Documents by title or full text.

        Args:
            query: Text matched against the document name or content
            page_size: Number of results to return
            page_token: Continuation token from a previous call

        Returns:
            Matching documents and the next page token
        """
        log(f'Searching Google Docs for: "{query}"')

        try:
            return await self._list_files(
                helpers.build_document_query(query), page_size, page_token
            )
        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error searching documents: {error.message}")
            return {"error": error.message}

    async def delete_document(self, document_id: str) -> DeleteDocumentResult | FailureResult:
        """Permanently delete a document."""
        log(f"Deleting document {document_id}")

        try:
            await helpers.execute(self.drive.files().delete(fileId=document_id))

            return {
                "success": True,
                "documentId": document_id,
                "message": f"Document {document_id} successfully deleted",
            }

        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error deleting document: {error.message}")
            return {"success": False, "error": error.message}

    async def export_document(
        self, document_id: str, mime_type: str = DEFAULT_EXPORT_MIME_TYPE
    ) -> ExportDocumentResult | ErrorResult:
        """
        Export a document to another format.

        Args:
            document_id: The ID of the Google Document
            mime_type: Target MIME type, e.g. "application/pdf" or "text/plain"

        Returns:
            The exported bytes encoded as base64
        """
        log(f"Exporting document {document_id} as {mime_type}")

        try:
            data = await helpers.execute(
                self.drive.files().export(fileId=document_id, mimeType=mime_type)
            )
            if isinstance(data, str):
                data = data.encode("utf-8")

            return {
                "documentId": document_id,
                "mimeType": mime_type,
                "content": base64.b64encode(data).decode("ascii"),
            }

        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error exporting document: {error.message}")
            return {"error": error.message}

    async def share_document(
        self, document_id: str, email_address: str, role: str = DEFAULT_SHARE_ROLE
    ) -> ShareDocumentResult | FailureResult:
        """
        Share a document with a specific user.

        Args:
            document_id: The ID of the document to share
            email_address: Email address of the user to share with
            role: Permission role ("reader", "writer", "commenter")

        Returns:
            The created permission
        """
        log(f"Sharing document {document_id} with {email_address} as {role}")

        try:
            permission = await helpers.execute(
                self.drive.permissions().create(
                    fileId=document_id,
                    body={"type": "user", "role": role, "emailAddress": email_address},
                )
            )

            return {"success": True, "documentId": document_id, "permission": permission}

        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error sharing document: {error.message}")
            return {"success": False, "error": error.message}

    async def verify_connection(self) -> ConnectionResult:
        """
        Check connectivity and credentials by listing at most one document.

        Returns:
            connected=True with auth details, or connected=False with the
            error message, HTTP status code and API error details
        """
        log("Verifying Google Docs API connection...")
        timestamp = datetime.now(timezone.utc).isoformat()

        try:
            response = await helpers.execute(
                self.drive.files().list(
                    pageSize=1,
                    q=helpers.build_document_query(),
                    fields="files(id, name)",
                )
            )

            return {
                "connected": True,
                "projectId": self.project_id,
                "timestamp": timestamp,
                "details": {
                    "authType": self.auth_type,
                    "apiVersion": API_VERSION,
                    "documentCount": len(response.get("files") or []),
                },
            }

        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error verifying Google Docs API connection: {error.message}")
            return {
                "connected": False,
                "projectId": self.project_id,
                "timestamp": timestamp,
                "error": error.to_dict(),
            }
