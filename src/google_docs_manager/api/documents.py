"""
Google Docs content operations: create, read and update documents.

Creating a document goes through the Drive API; reading and editing the
body goes through the Docs API batchUpdate endpoint.
"""

from typing import Any

from google_docs_manager.api import helpers
from google_docs_manager.errors import RemoteOperationError
from google_docs_manager.types import DOCUMENT_MIME_TYPE, CreateDocumentResult, ErrorResult
from google_docs_manager.utils import log


class DocumentsMixin:
    """Document content operations. Requires ``docs`` and ``drive`` resources."""

    docs: Any
    drive: Any

    async def _batch_update(self, document_id: str, requests: list[dict]) -> dict:
        return await helpers.execute(
            self.docs.documents().batchUpdate(
                documentId=document_id, body={"requests": requests}
            )
        )

    async def _fetch_document(self, document_id: str) -> dict:
        return await helpers.execute(self.docs.documents().get(documentId=document_id))

    async def create_document(
        self, title: str, content: str | None = None
    ) -> CreateDocumentResult | ErrorResult:
        """
        Create a new Google Document.

        Args:
            title: Title of the document
            content: Optional plain text inserted at the start of the document

        Returns:
            Document id, title, edit link and the full document resource
        """
        log(f'Creating new Google Doc: "{title}"')

        try:
            response = await helpers.execute(
                self.drive.files().create(
                    body={"name": title, "mimeType": DOCUMENT_MIME_TYPE}
                )
            )
            document_id = response.get("id")

            if content and document_id:
                await self._batch_update(
                    document_id, [helpers.build_insert_text_request(content)]
                )

            document = await self._fetch_document(document_id or "")

            return {
                "documentId": document_id,
                "title": title,
                "url": helpers.document_url(document_id),
                "document": document,
            }

        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error creating document: {error.message}")
            return {"error": error.message}

    async def get_document(self, document_id: str) -> dict[str, Any]:
        """Fetch the full structure of a document."""
        log(f"Reading Google Doc {document_id}")

        try:
            return await self._fetch_document(document_id)
        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error getting document: {error.message}")
            return {"error": error.message}

    async def update_document(
        self, document_id: str, content: str, replace_all: bool = False
    ) -> dict[str, Any]:
        """
        Insert text at the start of a document, optionally clearing it first.

        Args:
            document_id: The ID of the Google Document
            content: Plain text to insert at index 1
            replace_all: Delete the existing body before inserting

        Returns:
            The updated document resource
        """
        log(f"Updating Google Doc {document_id} (replace_all={replace_all})")

        try:
            if replace_all:
                current = await self._fetch_document(document_id)
                clear_range = helpers.get_clearable_range(current)
                if clear_range:
                    await self._batch_update(
                        document_id,
                        [helpers.build_delete_content_range_request(*clear_range)],
                    )
                else:
                    log(f"Document {document_id} has no content to clear")

            await self._batch_update(
                document_id, [helpers.build_insert_text_request(content)]
            )

            return await self._fetch_document(document_id)

        except Exception as e:
            error = RemoteOperationError.from_exception(e)
            log(f"Error updating document: {error.message}")
            return {"error": error.message}
