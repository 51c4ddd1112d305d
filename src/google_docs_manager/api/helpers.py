"""
Helper functions for Google Docs and Drive API requests.
"""

import asyncio
from typing import Any

from google_docs_manager.types import DOCUMENT_MIME_TYPE

DOCUMENT_URL_TEMPLATE = "https://docs.google.com/document/d/{document_id}/edit"

# Index of the first character in a document body
DOCUMENT_START_INDEX = 1

DOCUMENT_LIST_FIELDS = "nextPageToken, files(id, name, createdTime, modifiedTime, webViewLink)"


async def execute(request) -> Any:
    """
    Run a googleapiclient request in a worker thread and await its result.

    Args:
        request: An HttpRequest returned by a discovery resource method

    Returns:
        The decoded response body
    """
    return await asyncio.to_thread(request.execute)


def document_url(document_id: str) -> str:
    """Browser edit link for a document."""
    return DOCUMENT_URL_TEMPLATE.format(document_id=document_id)


def build_insert_text_request(text: str, index: int = DOCUMENT_START_INDEX) -> dict:
    """
    Build an insertText request.

    Content is inserted as one plain text run; no markup is interpreted.
    """
    return {"insertText": {"location": {"index": index}, "text": text}}


def build_delete_content_range_request(start_index: int, end_index: int) -> dict:
    """Build a deleteContentRange request for [start_index, end_index)."""
    return {
        "deleteContentRange": {
            "range": {"startIndex": start_index, "endIndex": end_index}
        }
    }


def get_clearable_range(document: dict) -> tuple[int, int] | None:
    """
    Find the body range that can be deleted to clear a document.

    A document body always ends with a sentinel block that cannot be
    deleted. When the body holds only that block there is nothing to clear.

    The range stops one index short of the last block's endIndex to keep the
    final newline. A body of a section break plus one empty paragraph still
    has two blocks, but that range would be empty and the API rejects an
    empty deleteContentRange, so it is also reported as nothing to clear.

    Args:
        document: Document resource as returned by documents.get

    Returns:
        (start_index, end_index) to delete, or None if nothing can be deleted
    """
    content = document.get("body", {}).get("content") or []
    if len(content) <= 1:
        return None

    end_index = (content[-1].get("endIndex") or DOCUMENT_START_INDEX) - 1
    if end_index <= DOCUMENT_START_INDEX:
        return None

    return DOCUMENT_START_INDEX, end_index


def escape_query_value(value: str) -> str:
    """Escape a string for use inside a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_document_query(search_text: str | None = None) -> str:
    """
    Build a Drive files.list query restricted to Google Docs.

    Args:
        search_text: Optional text matched against the name or full text

    Returns:
        Drive query string
    """
    query_string = f"mimeType='{DOCUMENT_MIME_TYPE}'"
    if search_text is not None:
        escaped = escape_query_value(search_text)
        query_string += f" and (name contains '{escaped}' or fullText contains '{escaped}')"
    return query_string
