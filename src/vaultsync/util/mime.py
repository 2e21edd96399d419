from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_MIME: str = "application/octet-stream"

# Extension (lowercase, no dot) -> content type sent as remote metadata.
EXTENSION_MIMES: dict[str, str] = {
    "md": "text/markdown",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "json": "application/json",
}


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def mime_type_for_extension(extension: str) -> str:
    """Return the content type for a file extension (case-insensitive, leading dot allowed)."""
    ext = extension.lower().lstrip(".")
    return EXTENSION_MIMES.get(ext, DEFAULT_MIME)


def is_text_mime(mime_type: str) -> bool:
    """
    Returns True if content of this type is read as text.

    Everything else is read and uploaded as raw bytes.
    """
    return mime_type.startswith("text/") or mime_type == "application/json"
