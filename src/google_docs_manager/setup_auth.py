"""
Obtain an OAuth2 refresh token for the OAuth2 authentication method.

Runs the installed-app loopback flow against an OAuth client secrets file
(downloaded from the Google Cloud console) and prints the environment
variables the server needs. Nothing is written to disk.

Usage:
    google-docs-manager-auth path/to/credentials.json [--port 0]
"""

import argparse
import json
import sys
from pathlib import Path

from google_auth_oauthlib.flow import InstalledAppFlow

from google_docs_manager.auth import SCOPES
from google_docs_manager.errors import ConfigurationError
from google_docs_manager.utils import log


def _load_client_secrets(path: Path) -> dict:
    """
    Load OAuth client secrets from a credentials file.

    Raises:
        ConfigurationError: If the file is missing or holds no client secrets
    """
    if not path.exists():
        raise ConfigurationError(f"Credentials file not found at {path}")

    with open(path) as f:
        keys = json.load(f)

    key = keys.get("installed") or keys.get("web")
    if not key:
        raise ConfigurationError(f"Could not find client secrets in {path}")

    return key


def obtain_refresh_token(client_secrets_path: Path, port: int = 0) -> dict[str, str]:
    """
    Authorize in the browser and return the OAuth2 settings for the server.

    Args:
        client_secrets_path: OAuth client secrets JSON file
        port: Loopback port for the redirect (0 picks a free port)

    Returns:
        Mapping of environment variable name to value
    """
    key = _load_client_secrets(client_secrets_path)

    flow = InstalledAppFlow.from_client_secrets_file(str(client_secrets_path), scopes=SCOPES)
    credentials = flow.run_local_server(
        port=port, access_type="offline", prompt="consent", open_browser=True
    )

    if not credentials.refresh_token:
        raise ConfigurationError(
            "Did not receive a refresh token. Revoke the app's access and try again."
        )

    return {
        "GOOGLE_OAUTH_CLIENT_ID": key["client_id"],
        "GOOGLE_OAUTH_CLIENT_SECRET": key["client_secret"],
        "GOOGLE_OAUTH_REFRESH_TOKEN": credentials.refresh_token,
    }


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Obtain OAuth2 credentials for the Google Docs Manager server"
    )
    parser.add_argument("client_secrets", type=Path, help="OAuth client secrets JSON file")
    parser.add_argument("--port", type=int, default=0, help="Loopback redirect port")
    args = parser.parse_args(argv)

    try:
        values = obtain_refresh_token(args.client_secrets, args.port)
    except ConfigurationError as e:
        log(f"Authentication failed: {e.message}")
        sys.exit(1)

    log("Authentication successful! Add these to your environment or .env file:")
    for name, value in values.items():
        print(f"{name}={value}")


if __name__ == "__main__":
    main()
