"""
Standalone connectivity check for the Google Docs API.

Builds a client from the same flags and environment variables as the
server, runs verify_connection and exits 0 when connected, 1 otherwise.

Usage:
    google-docs-manager-check [--project-id ID] [--credentials-path PATH]
        [--api-key KEY] [--oauth-client-id ID] [--oauth-client-secret SECRET]
        [--oauth-refresh-token TOKEN]
"""

import asyncio
import json
import sys

from google_docs_manager.client import GoogleDocsClient
from google_docs_manager.config import Settings
from google_docs_manager.errors import ConfigurationError
from google_docs_manager.types import ConnectionResult
from google_docs_manager.utils import mask_secret

PERMISSION_DENIED = 403

PERMISSION_HINT = """\
Connection failed due to permission issues!

This is likely because:
1. The service account does not have the necessary permissions
2. The Google Docs API is not enabled in your Google Cloud project
3. The OAuth credentials might be invalid or expired

To fix this:
1. Make sure the Docs API is enabled: https://console.cloud.google.com/apis/library/docs.googleapis.com
2. Grant the service account access to the documents it should manage
3. If using OAuth, ensure your credentials are valid and have the correct scopes"""


def describe_settings(settings: Settings) -> list[str]:
    """Credential summary lines, with keys and client ids masked."""
    lines = []
    if settings.service_account_path:
        lines.append(f"Using credentials: {settings.service_account_path}")
    if settings.api_key:
        lines.append(f"Using API key: {mask_secret(settings.api_key)}")
    if settings.oauth_client_id and settings.oauth_client_secret and settings.oauth_refresh_token:
        lines.append(
            f"Using OAuth credentials with client ID: {mask_secret(settings.oauth_client_id)}"
        )
    lines.append(f"Using project ID: {settings.project_id}")
    return lines


def exit_code_for(result: ConnectionResult) -> int:
    return 0 if result.get("connected") else 1


def failure_message(result: ConnectionResult) -> str:
    """Hint shown for a failed check; permission errors get specific advice."""
    error = result.get("error") or {}
    if error.get("code") == PERMISSION_DENIED:
        return PERMISSION_HINT
    return "Connection failed!"


def run_check(settings: Settings, client: GoogleDocsClient | None = None) -> int:
    """
    Verify the connection and report it on stdout.

    Args:
        settings: Credential inputs and project id
        client: Prebuilt client (constructed from settings if None)

    Returns:
        Process exit code
    """
    print("Google Docs API Connection Test")
    print("===============================")

    try:
        for line in describe_settings(settings):
            print(line)
        print()

        if client is None:
            client = GoogleDocsClient(settings)

        print("Testing connection...")
        result = asyncio.run(client.verify_connection())
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print()
    print("Connection Result:")
    print(json.dumps(result, indent=2, default=str))
    print()

    if result.get("connected"):
        print("Connection successful!")
    else:
        print(failure_message(result))

    return exit_code_for(result)


def main(argv: list[str] | None = None) -> None:
    settings = Settings.from_args(argv, description="Verify the Google Docs API connection")
    sys.exit(run_check(settings))


if __name__ == "__main__":
    main()
