"""Google Drive v3 implementation of the remote store."""

from __future__ import annotations

import io
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union

from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from vaultsync.auth import OAuthClient
from vaultsync.errors import (
    ApiError,
    AuthError,
    HttpErrorInfo,
    NetworkError,
    RemoteError,
    map_http_error,
)
from vaultsync.models import RemoteItem
from vaultsync.util.mime import FOLDER_MIME

from .fields import LIST_FIELDS

T = TypeVar("T")

Content = Union[str, bytes]


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive API controller.

    Notes:
        - The Drive `service` object is NOT exposed.
        - Transient failures (429, 5xx, network) of list/get/update calls are
          retried with exponential backoff before being raised as RemoteError.
        - Create calls are never retried.
    """

    def __init__(self, oauth_client: OAuthClient, *, max_retries: int = 3) -> None:
        self._retry_policy = _RetryPolicy(max_retries=max_retries)
        self._service = oauth_client.build_drive_service()

    @classmethod
    def from_service(cls, service: Any, *, max_retries: int = 3) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy(max_retries=max_retries)
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def list_children(
        self,
        parent_id: str,
        *,
        name: Optional[str] = None,
        folders_only: bool = False,
    ) -> list[RemoteItem]:
        """List non-trashed children of parent_id, optionally filtered by exact name/folder type."""
        q = build_query(parent_id=parent_id, name=name, folders_only=folders_only)
        return self._find_by_query(q)

    def find_folders(self, name: str, *, parent_id: Optional[str] = None) -> list[RemoteItem]:
        """Find non-trashed folders named `name`, anywhere or under parent_id."""
        q = build_query(parent_id=parent_id, name=name, folders_only=True)
        return self._find_by_query(q)

    def create_folder(self, name: str, parent_id: Optional[str]) -> str:
        body: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME}
        if parent_id:
            body["parents"] = [parent_id]
        req = self._service.files().create(body=body, fields="id")
        data = self._execute(req.execute, retry=False)
        return _require_id(data)

    def create_file(
        self,
        name: str,
        parent_id: str,
        mime_type: str,
        content: Content,
    ) -> str:
        body = {"name": name, "parents": [parent_id], "mimeType": mime_type}
        req = self._service.files().create(
            body=body,
            media_body=_media(content, mime_type),
            fields="id",
        )
        data = self._execute(req.execute, retry=False)
        return _require_id(data)

    def update_file(
        self,
        file_id: str,
        name: str,
        mime_type: str,
        content: Content,
        *,
        parent_id: Optional[str] = None,
    ) -> str:
        """
        Replace content and metadata of an existing file.

        If parent_id is given and differs from the current parents, the file
        is moved there in the same request.
        """
        kwargs: dict[str, Any] = {}
        if parent_id is not None:
            current = self._service.files().get(fileId=file_id, fields="parents")
            old_parents = self._execute(current.execute).get("parents", []) or []
            if parent_id not in old_parents:
                kwargs["addParents"] = parent_id
                if old_parents:
                    kwargs["removeParents"] = ",".join(old_parents)

        req = self._service.files().update(
            fileId=file_id,
            body={"name": name, "mimeType": mime_type},
            media_body=_media(content, mime_type),
            fields="id",
            **kwargs,
        )
        data = self._execute(req.execute)
        return _require_id(data)

    # ----------------------------
    # Internals
    # ----------------------------
    def _find_by_query(self, q: str) -> list[RemoteItem]:
        items: list[RemoteItem] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                spaces="drive",
            )
            data = self._execute(req.execute)
            for f in data.get("files", []):
                items.append(_file_dict_to_remote_item(f))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return items

    def _execute(self, func: Callable[[], T], *, retry: bool = True) -> T:
        # retry=False for creates: a replayed create may leave a duplicate object.
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if retry and self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        return isinstance(exc, RemoteError) and exc.transient

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, RefreshError):
            return AuthError("Failed to refresh OAuth credentials", cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def escape_query_value(value: str) -> str:
    """Escape a string literal for the Drive `q` query language."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_query(
    *,
    parent_id: Optional[str] = None,
    name: Optional[str] = None,
    folders_only: bool = False,
) -> str:
    clauses: list[str] = []
    if name is not None:
        clauses.append(f"name='{escape_query_value(name)}'")
    if folders_only:
        clauses.append(f"mimeType='{FOLDER_MIME}'")
    if parent_id is not None:
        clauses.append(f"'{escape_query_value(parent_id)}' in parents")
    clauses.append("trashed=false")
    return " and ".join(clauses)


def _media(content: Content, mime_type: str) -> MediaIoBaseUpload:
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
    return MediaIoBaseUpload(io.BytesIO(data), mimetype=mime_type, resumable=True)


def _require_id(data: dict[str, Any]) -> str:
    file_id = data.get("id")
    if not isinstance(file_id, str) or not file_id:
        raise ApiError("Drive did not return an id", details={"response": data})
    return file_id


def _file_dict_to_remote_item(data: dict[str, Any]) -> RemoteItem:
    item_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")

    return RemoteItem(
        item_id=item_id if isinstance(item_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
    )


def _http_error_to_info(exc: HttpError) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = {}
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
