"""
Credential resolution for Google Docs Manager.

Supports three mutually exclusive authentication methods, checked in order:
1. API key - static key sent with every request
2. Service account key file - for automated/server environments
3. OAuth2 client id, client secret and refresh token - access tokens are
   refreshed automatically by google-auth
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from google.oauth2.credentials import Credentials
from google.oauth2.service_account import Credentials as ServiceAccountCredentials
from googleapiclient.discovery import build

from google_docs_manager.config import Settings
from google_docs_manager.errors import ConfigurationError
from google_docs_manager.utils import log, mask_secret

# Scopes required for Google Docs and Drive access
SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive",
]

TOKEN_URI = "https://oauth2.googleapis.com/token"


class AuthType(str, Enum):
    """Authentication strategy selected at client construction."""

    API_KEY = "API Key"
    SERVICE_ACCOUNT = "Service Account"
    OAUTH2 = "OAuth2"


@dataclass(frozen=True)
class ResolvedAuth:
    """The single credential set chosen for this process."""

    auth_type: AuthType
    credentials: Any = None
    api_key: str | None = None

    def build_service(self, service_name: str, version: str):
        """
        Build a Google API client resource authenticated with these credentials.

        Args:
            service_name: API name, e.g. "docs" or "drive"
            version: API version, e.g. "v1"

        Returns:
            Google API client resource
        """
        if self.auth_type is AuthType.API_KEY:
            return build(service_name, version, developerKey=self.api_key)
        return build(service_name, version, credentials=self.credentials)


def _authorize_with_service_account(service_account_path: str) -> ServiceAccountCredentials:
    """
    Authorize using a service account key file.

    Raises:
        ConfigurationError: If the key file is missing or invalid
    """
    path = Path(service_account_path)
    if not path.exists():
        raise ConfigurationError(
            f"Service account key file not found at: {service_account_path}"
        )

    try:
        return ServiceAccountCredentials.from_service_account_file(
            str(path), scopes=SCOPES
        )
    except (ValueError, KeyError, OSError) as e:
        log(f"Error loading service account key: {e}")
        raise ConfigurationError(
            f"Failed to load service account key file {service_account_path}. "
            "Ensure the key file is valid."
        ) from e


def _authorize_with_refresh_token(
    client_id: str, client_secret: str, refresh_token: str
) -> Credentials:
    """Build OAuth2 user credentials that refresh themselves from a refresh token."""
    return Credentials(
        token=None,
        refresh_token=refresh_token,
        token_uri=TOKEN_URI,
        client_id=client_id,
        client_secret=client_secret,
    )


def resolve_auth(settings: Settings) -> ResolvedAuth:
    """
    Pick exactly one authentication strategy from the configured inputs.

    The project id is required regardless of the strategy. Precedence is
    API key, then service account, then the OAuth2 triple.

    Args:
        settings: Credential inputs and project id

    Returns:
        Immutable resolved authentication

    Raises:
        ConfigurationError: If the project id is missing, no credential set is
            complete, or the service account key file cannot be loaded
    """
    if not settings.project_id:
        raise ConfigurationError(
            "GOOGLE_CLOUD_PROJECT_ID environment variable or --project-id is required"
        )

    if settings.api_key:
        log(f"Using API key authentication: {mask_secret(settings.api_key)}")
        return ResolvedAuth(AuthType.API_KEY, api_key=settings.api_key)

    if settings.service_account_path:
        log(f"Using service account authentication: {settings.service_account_path}")
        credentials = _authorize_with_service_account(settings.service_account_path)
        return ResolvedAuth(AuthType.SERVICE_ACCOUNT, credentials=credentials)

    if (
        settings.oauth_client_id
        and settings.oauth_client_secret
        and settings.oauth_refresh_token
    ):
        log(
            "Using OAuth2 authentication with client ID: "
            f"{mask_secret(settings.oauth_client_id)}"
        )
        credentials = _authorize_with_refresh_token(
            settings.oauth_client_id,
            settings.oauth_client_secret,
            settings.oauth_refresh_token,
        )
        return ResolvedAuth(AuthType.OAUTH2, credentials=credentials)

    raise ConfigurationError(
        "No usable credential set: provide GOOGLE_API_KEY, "
        "GOOGLE_APPLICATION_CREDENTIALS, or GOOGLE_OAUTH_CLIENT_ID, "
        "GOOGLE_OAUTH_CLIENT_SECRET and GOOGLE_OAUTH_REFRESH_TOKEN"
    )
