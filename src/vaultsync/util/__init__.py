from .mime import (
    DEFAULT_MIME,
    EXTENSION_MIMES,
    FOLDER_MIME,
    is_folder,
    is_text_mime,
    mime_type_for_extension,
)
from .paths import ROOT_PATH, join_path, normalize_path, split_parent, split_path
from .time import format_millis, millis_from_mtime, millis_to_datetime, now_millis

__all__ = [
    "DEFAULT_MIME",
    "EXTENSION_MIMES",
    "FOLDER_MIME",
    "is_folder",
    "is_text_mime",
    "mime_type_for_extension",
    "ROOT_PATH",
    "join_path",
    "normalize_path",
    "split_parent",
    "split_path",
    "now_millis",
    "millis_from_mtime",
    "millis_to_datetime",
    "format_millis",
]
