# SPDX-License-Identifier: MIT
"""Small shared helpers."""

from typing import Optional

colors = {
    "bold": "\x1b[1m",
    "green": "\x1b[32m",
    "red": "\x1b[31m",
    "reset": "\x1b[0m",
}

MIME_TYPES = {
    "gif": "image/gif",
    "png": "image/png",
}


def mime_type_from_extension(ext: str) -> Optional[str]:
    """
    Return the MIME type for a file extension (without the leading dot),
    or None if the extension is not an image format we upload.
    """
    return MIME_TYPES.get(ext.lower())
