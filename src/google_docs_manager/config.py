"""
Process configuration for Google Docs Manager.

Every setting can come from a command-line flag or an environment variable;
a flag always takes precedence. A .env file in the working directory is
loaded into the environment first (existing variables win).
"""

import argparse
import os
from dataclasses import dataclass, fields

from dotenv import load_dotenv

# Settings field -> (command-line flag, environment variable)
SETTINGS_SOURCES = {
    "project_id": ("--project-id", "GOOGLE_CLOUD_PROJECT_ID"),
    "api_key": ("--api-key", "GOOGLE_API_KEY"),
    "service_account_path": ("--credentials-path", "GOOGLE_APPLICATION_CREDENTIALS"),
    "oauth_client_id": ("--oauth-client-id", "GOOGLE_OAUTH_CLIENT_ID"),
    "oauth_client_secret": ("--oauth-client-secret", "GOOGLE_OAUTH_CLIENT_SECRET"),
    "oauth_refresh_token": ("--oauth-refresh-token", "GOOGLE_OAUTH_REFRESH_TOKEN"),
}

_FLAG_HELP = {
    "project_id": "Google Cloud project ID",
    "api_key": "Google API key (alternative to a service account)",
    "service_account_path": "Path to a service account key file",
    "oauth_client_id": "OAuth client ID",
    "oauth_client_secret": "OAuth client secret",
    "oauth_refresh_token": "OAuth refresh token",
}


@dataclass(frozen=True)
class Settings:
    """Raw credential inputs and project id, before credential resolution."""

    project_id: str | None = None
    api_key: str | None = None
    service_account_path: str | None = None
    oauth_client_id: str | None = None
    oauth_client_secret: str | None = None
    oauth_refresh_token: str | None = None

    @classmethod
    def from_env(cls, **overrides: str | None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            **overrides: Explicit values (e.g. from flags). Empty values fall
                back to the matching environment variable.

        Returns:
            Settings with every field resolved
        """
        load_dotenv()
        values = {}
        for name, (_, env_var) in SETTINGS_SOURCES.items():
            values[name] = overrides.get(name) or os.environ.get(env_var) or None
        return cls(**values)

    @classmethod
    def from_args(cls, argv: list[str] | None = None, description: str | None = None) -> "Settings":
        """Parse command-line flags and fill the rest from the environment."""
        args = build_arg_parser(description).parse_args(argv)
        return cls.from_env(**{f.name: getattr(args, f.name) for f in fields(cls)})


def build_arg_parser(description: str | None = None) -> argparse.ArgumentParser:
    """Argument parser shared by the server and the connectivity check."""
    parser = argparse.ArgumentParser(description=description)
    for name, (flag, env_var) in SETTINGS_SOURCES.items():
        parser.add_argument(
            flag,
            dest=name,
            default=None,
            help=f"{_FLAG_HELP[name]} (env: {env_var})",
        )
    return parser
