"""
Google Docs client combining the document and Drive operations.

Credentials are resolved once, when the client is constructed; the
resulting auth and API resources are only read afterwards.
"""

from dataclasses import asdict

from google_docs_manager.api.documents import DocumentsMixin
from google_docs_manager.api.drive import DriveMixin
from google_docs_manager.auth import ResolvedAuth, resolve_auth
from google_docs_manager.config import Settings
from google_docs_manager.utils import log


class GoogleDocsClient(DocumentsMixin, DriveMixin):
    """Authenticated client for the Google Docs (v1) and Drive (v3) APIs."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        docs=None,
        drive=None,
    ) -> None:
        """
        Args:
            settings: Explicit credential inputs. Fields left unset fall back to
                the environment and .env file
            docs: Prebuilt Docs API resource (built from the credentials if None)
            drive: Prebuilt Drive API resource (built from the credentials if None)

        Raises:
            ConfigurationError: If no credential set or project id is available
        """
        overrides = asdict(settings) if settings is not None else {}
        settings = Settings.from_env(**overrides)

        self.auth: ResolvedAuth = resolve_auth(settings)
        self.project_id: str = settings.project_id
        log(f"Using project ID: {self.project_id}")

        self.docs = docs if docs is not None else self.auth.build_service("docs", "v1")
        self.drive = drive if drive is not None else self.auth.build_service("drive", "v3")

        log("Google Docs client initialized")

    @property
    def auth_type(self) -> str:
        return self.auth.auth_type.value
