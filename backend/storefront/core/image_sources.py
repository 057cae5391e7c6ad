"""Image Sources — classify and decode the image reference a client submits.

Invariants:
    - All functions are PURE: decoding only, no network
    - Accepted sources: base64 `data:image/...` URIs and http(s) URLs
    - Anything else is rejected before the image store is touched

Design Decisions:
    - The dashboard uploads a data URI produced by the browser file reader;
      http(s) sources cover re-hosting an image already on the web
"""

import base64
import binascii
import mimetypes
from enum import Enum


class SourceKind(str, Enum):
    DATA_URI = "data_uri"
    REMOTE = "remote"
    UNSUPPORTED = "unsupported"


DEFAULT_CONTENT_TYPE = "application/octet-stream"


def classify_source(source: str) -> SourceKind:
    lowered = source.strip().lower()
    if lowered.startswith("data:"):
        return SourceKind.DATA_URI
    if lowered.startswith(("http://", "https://")):
        return SourceKind.REMOTE
    return SourceKind.UNSUPPORTED


def decode_data_uri(source: str) -> tuple[bytes, str]:
    """Return (payload, content_type) for a base64 data URI.

    Raises ValueError on a malformed URI or a non-image content type.
    """
    header, sep, payload = source.strip().partition(",")
    if not sep:
        raise ValueError("data URI has no payload separator")
    meta = header[len("data:"):].split(";")
    content_type = meta[0] or DEFAULT_CONTENT_TYPE
    if "base64" not in meta[1:]:
        raise ValueError("only base64 data URIs are supported")
    if not content_type.startswith("image/"):
        raise ValueError(f"unsupported content type {content_type!r}")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"invalid base64 payload: {e}") from e
    if not data:
        raise ValueError("empty image payload")
    return data, content_type


def extension_for(content_type: str) -> str:
    """File extension (with dot) for a content type; '' if unknown."""
    ext = mimetypes.guess_extension(content_type.split(";")[0].strip())
    if ext == ".jpe":
        return ".jpg"
    return ext or ""
