"""Authentication information for vaultsync (OAuth refresh token)."""

from __future__ import annotations

from dataclasses import dataclass

from vaultsync.store import SyncSettings

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    OAuth client identity plus an already obtained refresh token.

    All three values must be non-empty; acquiring the refresh token happens
    outside this library.
    """

    client_id: str
    client_secret: str
    refresh_token: str
    token_uri: str = DEFAULT_TOKEN_URI

    def __post_init__(self) -> None:
        for key in ("client_id", "client_secret", "refresh_token", "token_uri"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.{key} must be a non-empty string")

    @classmethod
    def from_settings(cls, settings: SyncSettings) -> "AuthInfo":
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            refresh_token=settings.refresh_token,
        )
