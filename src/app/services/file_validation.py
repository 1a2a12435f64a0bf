"""File validation utilities for document uploads."""

import os
import re
from typing import Optional

from libs.result import Error

MAX_DESCRIPTION_LENGTH = 500
MAX_FILENAME_LENGTH = 255

# Extension -> accepted MIME types
ALLOWED_FILE_TYPES = {
    ".pdf": {"application/pdf"},
    ".jpg": {"image/jpeg"},
    ".jpeg": {"image/jpeg"},
    ".png": {"image/png"},
    ".doc": {"application/msword"},
    ".docx": {
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    },
}

# Leading bytes for formats with a reliable signature
FILE_SIGNATURES = {
    ".pdf": (b"%PDF",),
    ".png": (b"\x89PNG\r\n\x1a\n",),
    ".jpg": (b"\xff\xd8\xff",),
    ".jpeg": (b"\xff\xd8\xff",),
    ".doc": (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1",),
    ".docx": (b"PK\x03\x04",),
}

SCRIPT_MARKERS = (
    "<script",
    "javascript:",
    "onerror=",
    "onload=",
    "onclick=",
    "<iframe",
    "data:text/html",
)


def sanitize_filename(file_name: str) -> str:
    """Basename only, restricted to alphanumerics, dot, dash and underscore."""
    base = os.path.basename(file_name.replace("\\", "/"))
    stem, extension = os.path.splitext(base)
    stem = re.sub(r"[^A-Za-z0-9._-]+", "_", stem).strip("._") or "document"
    extension = re.sub(r"[^A-Za-z0-9.]", "", extension).lower()
    return (stem[: MAX_FILENAME_LENGTH - len(extension)] + extension)


def file_extension(file_name: str) -> str:
    return os.path.splitext(file_name)[1].lower()


def validate_upload(
    file_name: str, content_type: Optional[str], content: bytes, max_size: int
) -> Optional[Error]:
    """Check size, extension, declared MIME type and file signature."""
    if not content:
        return Error("INVALID_FILE", "Uploaded file is empty")

    if len(content) > max_size:
        limit_mb = max_size // (1024 * 1024)
        return Error("FILE_TOO_LARGE", f"File exceeds the {limit_mb} MB upload limit")

    extension = file_extension(file_name)
    allowed_mime_types = ALLOWED_FILE_TYPES.get(extension)
    if allowed_mime_types is None:
        allowed = ", ".join(sorted(ext.lstrip(".") for ext in ALLOWED_FILE_TYPES))
        return Error(
            "INVALID_FILE", f"File type not allowed. Allowed types: {allowed}"
        )

    if content_type and content_type.split(";")[0].strip() not in allowed_mime_types:
        return Error(
            "INVALID_FILE",
            f"Content type {content_type} does not match a {extension} file",
        )

    if not content.startswith(FILE_SIGNATURES[extension]):
        return Error("INVALID_FILE", "File content does not match its extension")

    return None


def sanitize_description(description: Optional[str]) -> Optional[str]:
    """Strip and validate a free-text description.

    Raises:
        ValueError: if the description is too long or contains script markers
    """
    if description is None:
        return None
    description = description.strip()
    if not description:
        return None
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    lowered = description.lower()
    if any(marker in lowered for marker in SCRIPT_MARKERS):
        raise ValueError("Description contains disallowed content")
    return description
