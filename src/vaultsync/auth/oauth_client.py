"""OAuth client utilities for vaultsync."""

from __future__ import annotations

from typing import Sequence

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from vaultsync.errors import AuthError, InvalidStateError

from .auth_info import AuthInfo

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive.file",)


class OAuthClient:
    """Token provider: turns a stored refresh token into valid credentials."""

    def __init__(self, auth_info: AuthInfo, *, scopes: Sequence[str] = DEFAULT_SCOPES) -> None:
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidStateError("scopes must be a non-empty sequence of strings")
        self._auth_info = auth_info
        self._scopes = list(scopes)
        self._credentials: Credentials | None = None

    def get_credentials(self, ensure_valid: bool = True) -> Credentials:
        """
        Return OAuth credentials, refreshing the access token when needed.

        Raises:
            AuthError: if the refresh token is revoked/expired or the token
                endpoint cannot be reached.
        """
        if self._credentials is None:
            self._credentials = Credentials(
                token=None,
                refresh_token=self._auth_info.refresh_token,
                token_uri=self._auth_info.token_uri,
                client_id=self._auth_info.client_id,
                client_secret=self._auth_info.client_secret,
                scopes=self._scopes,
            )

        creds = self._credentials
        if not ensure_valid or creds.valid:
            return creds

        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            raise AuthError(
                "Failed to refresh OAuth credentials",
                details={"client_id": self._auth_info.client_id},
                cause=exc,
            ) from exc
        return creds

    def build_drive_service(self):
        """
        Build a Drive API service resource bound to these credentials.

        Returns:
            googleapiclient.discovery.Resource
        """
        creds = self.get_credentials(ensure_valid=True)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc
