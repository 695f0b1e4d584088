"""
Validation utilities - Pure validation functions for uploaded invoices.
"""
from pathlib import PurePath
from typing import Optional
from ..api.exceptions import UnsupportedFileTypeError, FileTooLargeError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

MAX_UPLOAD_SIZE_BYTES = 5 * 1024 * 1024

ALLOWED_MEDIA_TYPES = ("application/pdf", "image/jpeg", "image/png")

# Non-standard spellings some clients send
MEDIA_TYPE_ALIASES = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
    "image/x-png": "image/png",
}

EXTENSION_MEDIA_TYPES = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}

GENERIC_MEDIA_TYPES = ("", "application/octet-stream")


def normalize_media_type(filename: str, content_type: Optional[str]) -> str:
    """
    Resolve the effective media type of an upload.

    Parameters such as '; charset=...' are dropped, aliases are mapped to
    their canonical type and a missing or generic type is inferred from the
    file extension.
    """
    media_type = (content_type or "").split(";")[0].strip().lower()
    media_type = MEDIA_TYPE_ALIASES.get(media_type, media_type)
    if media_type in GENERIC_MEDIA_TYPES:
        media_type = EXTENSION_MEDIA_TYPES.get(PurePath(filename or "").suffix.lower(), media_type)
    return media_type


def validate_upload(filename: str, content_type: Optional[str], size_bytes: int) -> str:
    """
    Validate an uploaded file before any processing.

    Returns:
        The normalized media type

    Raises:
        UnsupportedFileTypeError: If the file is not a PDF, JPEG or PNG
        FileTooLargeError: If the file is larger than 5 MB
    """
    media_type = normalize_media_type(filename, content_type)
    if media_type not in ALLOWED_MEDIA_TYPES:
        raise UnsupportedFileTypeError(
            f"Unsupported file type '{content_type or 'unknown'}'. Please upload a PDF, JPEG or PNG file."
        )

    if size_bytes > MAX_UPLOAD_SIZE_BYTES:
        raise FileTooLargeError(
            f"File is too large ({size_bytes} bytes). Maximum size is 5 MB."
        )

    return media_type
