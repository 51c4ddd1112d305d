"""
Pytest configuration and fixtures for Google Docs Manager tests.
"""

import httplib2
import pytest
from unittest.mock import MagicMock
from googleapiclient.errors import HttpError

from google_docs_manager.client import GoogleDocsClient
from google_docs_manager.config import SETTINGS_SOURCES, Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """
    Remove credential variables and .env loading so tests never pick up
    the developer's real configuration.
    """
    for _, env_var in SETTINGS_SOURCES.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setattr("google_docs_manager.config.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def mock_docs_client():
    """
    Provide a mock Google Docs API client.
    """
    return MagicMock()


@pytest.fixture
def mock_drive_client():
    """
    Provide a mock Google Drive API client.
    """
    return MagicMock()


@pytest.fixture
def api_key_settings():
    return Settings(project_id="test-project", api_key="AIzaTestKey123")


@pytest.fixture
def client(api_key_settings, mock_docs_client, mock_drive_client):
    """
    Provide a GoogleDocsClient wired to mock Docs and Drive clients.
    """
    return GoogleDocsClient(
        api_key_settings, docs=mock_docs_client, drive=mock_drive_client
    )


@pytest.fixture
def empty_document():
    """
    Provide a document whose body holds only the sentinel section break.
    """
    return {
        "documentId": "doc123",
        "title": "Empty",
        "body": {"content": [{"endIndex": 1, "sectionBreak": {}}]},
    }


@pytest.fixture
def sample_document():
    """
    Provide sample document content matching Google Docs API structure.
    """
    return {
        "documentId": "doc123",
        "title": "Sample",
        "body": {
            "content": [
                {"endIndex": 1, "sectionBreak": {}},
                {
                    "startIndex": 1,
                    "endIndex": 25,
                    "paragraph": {
                        "elements": [
                            {
                                "startIndex": 1,
                                "endIndex": 25,
                                "textRun": {"content": "This is a test sentence\n"},
                            }
                        ]
                    },
                },
                {
                    "startIndex": 25,
                    "endIndex": 40,
                    "paragraph": {
                        "elements": [
                            {
                                "startIndex": 25,
                                "endIndex": 40,
                                "textRun": {"content": "Second para. \n"},
                            }
                        ]
                    },
                },
            ]
        },
    }


def make_http_error(status: int, message: str = "Request failed") -> HttpError:
    """Build a googleapiclient HttpError like the API returns."""
    content = (
        '{"error": {"code": %d, "message": "%s", '
        '"errors": [{"reason": "forbidden", "message": "%s"}]}}'
        % (status, message, message)
    ).encode()
    return HttpError(httplib2.Response({"status": status}), content)


@pytest.fixture
def http_error():
    """
    Provide a factory for HttpError instances.
    """
    return make_http_error
