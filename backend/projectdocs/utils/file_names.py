"""File name helpers for uploaded file metadata.

Derives the stored name, extension, synthetic URL and MIME type from the
name a file was uploaded with.
"""

import re

MIME_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "dwg": "application/acad",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "txt": "text/plain",
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
}

DEFAULT_MIME_TYPE = "application/octet-stream"

# Extension used when the name has no suffix
DEFAULT_EXTENSION = "file"

_SUFFIX_PATTERN = re.compile(r"\.[^/.]+$")


def split_extension(filename: str) -> str:
    """Suffix after the last dot, or "file" when there is none.

    Examples:
        split_extension("Plan B.dwg") -> "dwg"
        split_extension("README") -> "file"
    """
    if "." not in filename:
        return DEFAULT_EXTENSION
    return filename.rsplit(".", 1)[1] or DEFAULT_EXTENSION


def sanitize_base_name(filename: str) -> str:
    """Name without its extension, spaces replaced by underscores."""
    return _SUFFIX_PATTERN.sub("", filename).replace(" ", "_")


def build_file_url(base_name: str, extension: str) -> str:
    """Synthetic storage locator for a file record."""
    return f"/files/{base_name.lower()}.{extension}"


def guess_mime_type(extension: str) -> str:
    """MIME type for a known extension, octet-stream otherwise."""
    return MIME_TYPES.get(extension.lower(), DEFAULT_MIME_TYPE)
