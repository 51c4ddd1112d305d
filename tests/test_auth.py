"""Tests for credential resolution and client construction."""

import pytest
from unittest.mock import MagicMock, patch

from google_docs_manager.auth import SCOPES, AuthType, resolve_auth
from google_docs_manager.client import GoogleDocsClient
from google_docs_manager.config import Settings
from google_docs_manager.errors import ConfigurationError


OAUTH = {
    "oauth_client_id": "1234-client.apps.googleusercontent.com",
    "oauth_client_secret": "secret",
    "oauth_refresh_token": "1//refresh",
}


class TestResolveAuth:
    """Tests for the credential precedence rules."""

    def test_no_credentials_and_no_project_fails(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_auth(Settings())

        assert "GOOGLE_CLOUD_PROJECT_ID" in exc_info.value.message

    def test_missing_project_id_fails_even_with_credentials(self):
        with pytest.raises(ConfigurationError):
            resolve_auth(Settings(api_key="AIzaKey"))

    def test_no_usable_credential_set(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_auth(Settings(project_id="proj"))

        assert "No usable credential set" in str(exc_info.value)

    def test_incomplete_oauth_triple_is_not_usable(self):
        settings = Settings(
            project_id="proj",
            oauth_client_id=OAUTH["oauth_client_id"],
            oauth_client_secret=OAUTH["oauth_client_secret"],
        )

        with pytest.raises(ConfigurationError):
            resolve_auth(settings)

    def test_api_key_wins_over_everything(self, tmp_path):
        key_file = tmp_path / "sa.json"
        key_file.write_text("{}")
        settings = Settings(
            project_id="proj",
            api_key="AIzaKey",
            service_account_path=str(key_file),
            **OAUTH,
        )

        auth = resolve_auth(settings)

        assert auth.auth_type is AuthType.API_KEY
        assert auth.api_key == "AIzaKey"
        assert auth.credentials is None

    def test_missing_service_account_file_names_path(self, tmp_path):
        missing = tmp_path / "nope.json"

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_auth(Settings(project_id="proj", service_account_path=str(missing)))

        assert str(missing) in exc_info.value.message

    @patch("google_docs_manager.auth.ServiceAccountCredentials")
    def test_service_account_used_before_oauth(self, mock_sa, tmp_path):
        key_file = tmp_path / "sa.json"
        key_file.write_text("{}")
        sentinel = MagicMock()
        mock_sa.from_service_account_file.return_value = sentinel

        auth = resolve_auth(
            Settings(project_id="proj", service_account_path=str(key_file), **OAUTH)
        )

        assert auth.auth_type is AuthType.SERVICE_ACCOUNT
        assert auth.credentials is sentinel
        mock_sa.from_service_account_file.assert_called_once_with(
            str(key_file), scopes=SCOPES
        )

    @patch("google_docs_manager.auth.ServiceAccountCredentials")
    def test_invalid_service_account_file_is_configuration_error(self, mock_sa, tmp_path):
        key_file = tmp_path / "sa.json"
        key_file.write_text("not json")
        mock_sa.from_service_account_file.side_effect = ValueError("bad key")

        with pytest.raises(ConfigurationError):
            resolve_auth(Settings(project_id="proj", service_account_path=str(key_file)))

    def test_oauth_credentials_carry_refresh_token(self):
        auth = resolve_auth(Settings(project_id="proj", **OAUTH))

        assert auth.auth_type is AuthType.OAUTH2
        assert auth.credentials.refresh_token == OAUTH["oauth_refresh_token"]
        assert auth.credentials.client_id == OAUTH["oauth_client_id"]
        assert auth.credentials.client_secret == OAUTH["oauth_client_secret"]
        assert auth.credentials.token is None

    def test_selection_log_masks_secrets(self, capsys):
        resolve_auth(Settings(project_id="proj", api_key="AIzaSuperSecretKey"))

        err = capsys.readouterr().err
        assert "AIza..." in err
        assert "SuperSecret" not in err


class TestBuildService:
    """Tests for building API resources from the resolved auth."""

    @patch("google_docs_manager.auth.build")
    def test_api_key_uses_developer_key(self, mock_build):
        auth = resolve_auth(Settings(project_id="proj", api_key="AIzaKey"))

        auth.build_service("docs", "v1")

        mock_build.assert_called_once_with("docs", "v1", developerKey="AIzaKey")

    @patch("google_docs_manager.auth.build")
    def test_oauth_uses_credentials(self, mock_build):
        auth = resolve_auth(Settings(project_id="proj", **OAUTH))

        auth.build_service("drive", "v3")

        mock_build.assert_called_once_with("drive", "v3", credentials=auth.credentials)


class TestClientConstruction:
    """Construction fails before any API resource is built."""

    @patch("google_docs_manager.auth.build")
    def test_construction_without_configuration_fails(self, mock_build):
        with pytest.raises(ConfigurationError):
            GoogleDocsClient(Settings())

        mock_build.assert_not_called()

    @patch("google_docs_manager.auth.build")
    def test_construction_reads_environment(self, mock_build, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT_ID", "env-project")
        monkeypatch.setenv("GOOGLE_API_KEY", "AIzaEnvKey")

        client = GoogleDocsClient()

        assert client.project_id == "env-project"
        assert client.auth_type == "API Key"
        assert mock_build.call_count == 2

    def test_partial_settings_fall_back_to_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT_ID", "env-project")

        client = GoogleDocsClient(
            Settings(api_key="AIzaExplicitKey"), docs=MagicMock(), drive=MagicMock()
        )

        assert client.project_id == "env-project"
        assert client.auth.api_key == "AIzaExplicitKey"

    def test_explicit_settings_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT_ID", "env-project")
        monkeypatch.setenv("GOOGLE_API_KEY", "AIzaEnvKey")

        client = GoogleDocsClient(
            Settings(project_id="flag-project", api_key="AIzaFlagKey"),
            docs=MagicMock(),
            drive=MagicMock(),
        )

        assert client.project_id == "flag-project"
        assert client.auth.api_key == "AIzaFlagKey"
