"""Tests for the refresh token helper."""

import json

import pytest
from unittest.mock import MagicMock, patch

from google_docs_manager.auth import SCOPES
from google_docs_manager.errors import ConfigurationError
from google_docs_manager.setup_auth import main, obtain_refresh_token


@pytest.fixture
def client_secrets(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text(
        json.dumps(
            {
                "installed": {
                    "client_id": "1234.apps.googleusercontent.com",
                    "client_secret": "shh",
                    "redirect_uris": ["http://localhost"],
                }
            }
        )
    )
    return path


class TestObtainRefreshToken:
    @patch("google_docs_manager.setup_auth.InstalledAppFlow")
    def test_returns_environment_values(self, mock_flow_cls, client_secrets):
        flow = mock_flow_cls.from_client_secrets_file.return_value
        flow.run_local_server.return_value = MagicMock(refresh_token="1//refresh")

        values = obtain_refresh_token(client_secrets)

        mock_flow_cls.from_client_secrets_file.assert_called_once_with(
            str(client_secrets), scopes=SCOPES
        )
        assert values == {
            "GOOGLE_OAUTH_CLIENT_ID": "1234.apps.googleusercontent.com",
            "GOOGLE_OAUTH_CLIENT_SECRET": "shh",
            "GOOGLE_OAUTH_REFRESH_TOKEN": "1//refresh",
        }

    @patch("google_docs_manager.setup_auth.InstalledAppFlow")
    def test_missing_refresh_token_fails(self, mock_flow_cls, client_secrets):
        flow = mock_flow_cls.from_client_secrets_file.return_value
        flow.run_local_server.return_value = MagicMock(refresh_token=None)

        with pytest.raises(ConfigurationError):
            obtain_refresh_token(client_secrets)

    def test_missing_file_fails(self, tmp_path):
        with pytest.raises(ConfigurationError):
            obtain_refresh_token(tmp_path / "missing.json")

    def test_file_without_client_section_fails(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text("{}")

        with pytest.raises(ConfigurationError):
            obtain_refresh_token(path)


def test_main_prints_env_lines(client_secrets, capsys):
    values = {"GOOGLE_OAUTH_REFRESH_TOKEN": "1//refresh"}
    with patch("google_docs_manager.setup_auth.obtain_refresh_token", return_value=values):
        main([str(client_secrets)])

    assert capsys.readouterr().out == "GOOGLE_OAUTH_REFRESH_TOKEN=1//refresh\n"
