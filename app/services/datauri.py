"""``data:`` URI helpers and download file naming."""

import base64
import binascii
import re
import time
from typing import NamedTuple, Optional

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^;,]*)*?);base64,(?P<data>.*)$", re.DOTALL)


class DecodedDataUri(NamedTuple):
    mime_type: str
    data: bytes


def encode_data_uri(data: bytes, mime_type: str = "image/jpeg") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> DecodedDataUri:
    """Split a base64 ``data:`` URI into its MIME type and raw bytes.

    Raises:
        ValueError: if *uri* is not a base64 data URI.
    """
    match = _DATA_URI_RE.match(uri.strip())
    if not match:
        raise ValueError("Expected a base64-encoded data: URI.")
    try:
        data = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("The data: URI payload is not valid base64.") from exc
    return DecodedDataUri(match.group("mime") or "application/octet-stream", data)


def download_filename(prefix: str, extension: str = "jpeg", now_ms: Optional[int] = None) -> str:
    """Return ``<prefix>-<epoch milliseconds>.<extension>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{prefix}-{now_ms}.{extension}"
