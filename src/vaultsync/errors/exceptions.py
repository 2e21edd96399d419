"""Exception hierarchy and HTTP error mapping for vaultsync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class VaultSyncError(Exception):
    """
    Base exception for vaultsync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidStateError(VaultSyncError):
    """Raised when the library is used in an invalid state (e.g., a pass is already running)."""


class AuthError(VaultSyncError):
    """Raised when the OAuth credential is missing or cannot be refreshed."""


class SyncCancelledError(VaultSyncError):
    """Raised inside a pass when cancellation was requested between files."""


class RemoteError(VaultSyncError):
    """
    Base class for failures reported by the remote store.

    `transient` tells whether the same call may succeed when repeated later
    (rate limit, network blip, server error).
    """

    @property
    def transient(self) -> bool:
        return False


class PermissionError(RemoteError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(RemoteError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(RemoteError):
    """Raised when a remote object is not found (HTTP 404)."""


class ConflictError(RemoteError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(RemoteError):
    """Raised when rate-limited (HTTP 429)."""

    @property
    def transient(self) -> bool:
        return True


class QuotaExceededError(RemoteError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""

    @property
    def transient(self) -> bool:
        return True


class NetworkError(RemoteError):
    """Raised when network/timeout issues prevent the request."""

    @property
    def transient(self) -> bool:
        return True


class ApiError(RemoteError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""

    @property
    def transient(self) -> bool:
        status_code = self.details.get("status_code")
        return isinstance(status_code, int) and 500 <= status_code <= 599


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to vaultsync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> VaultSyncError:
    """
    Map an HTTP error to a vaultsync exception.

    Policy:
        - 401 -> AuthError
        - 403 -> PermissionError (default), but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - otherwise (5xx included) -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
