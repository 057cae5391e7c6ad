"""Firebase Image Store — uploads category images to Firebase Storage, returns public URLs.

Invariants:
    - upload() returns blob.public_url, the only URL handlers may persist
    - Blobs live at <folder>/<uuid4 hex><ext>: client file names never reach the bucket
    - Every SDK or network failure is mapped to ImageUploadError (core/errors.py)
    - No retries: a failed upload fails the request

Design Decisions:
    - Firebase Admin SDK is blocking: calls run in asyncio.to_thread so the
      event loop keeps serving other requests during an upload
    - Remote sources fetched with httpx and re-uploaded: the bucket never
      hot-links a URL the client controls
    - One store per process via get_image_store() (lru_cache), same lifetime
      as the database engine
    - Routes receive a provider, not the store: the bucket is only built once
      a request has passed validation, so bad input never depends on Firebase
"""

import asyncio
import json
import logging
import uuid
from functools import lru_cache
from typing import Callable
from urllib.parse import urlparse, unquote

import firebase_admin
import httpx
from firebase_admin import credentials, storage

from storefront.config import get_settings
from storefront.core.errors import ImageUploadError, ErrorContext
from storefront.core.image_sources import (
    SourceKind, classify_source, decode_data_uri, extension_for,
)

logger = logging.getLogger(__name__)


class FirebaseImageStore:
    """Image store backed by a Firebase Storage bucket."""

    def __init__(
        self,
        bucket,
        fetch_timeout_seconds: float = 15.0,
        max_image_bytes: int = 10 * 1024 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._bucket = bucket
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self.max_image_bytes = max_image_bytes
        self._transport = transport

    async def upload(self, source: str, folder: str) -> str:
        """Upload a data URI or remote image under `folder`; return its public URL."""
        context = ErrorContext(entity="image", debug_info={"folder": folder})
        kind = classify_source(source)
        if kind == SourceKind.DATA_URI:
            try:
                data, content_type = decode_data_uri(source)
            except ValueError as e:
                raise ImageUploadError(str(e), "decode", context=context)
        elif kind == SourceKind.REMOTE:
            data, content_type = await self._fetch(source, context)
        else:
            raise ImageUploadError(
                "unsupported image source", "decode", context=context,
            )

        if len(data) > self.max_image_bytes:
            raise ImageUploadError(
                f"image exceeds {self.max_image_bytes} bytes", "upload",
                context=context,
            )

        blob_name = (
            f"{folder.strip('/')}/{uuid.uuid4().hex}{extension_for(content_type)}"
        )
        try:
            url = await asyncio.to_thread(
                self._put_blob, blob_name, data, content_type,
            )
        except Exception as e:
            logger.error(f"Firebase upload failed: {e}", exc_info=True)
            raise ImageUploadError(str(e), "upload", context=context)

        logger.info(
            f"Uploaded image {blob_name} ({len(data)} bytes)",
            extra={"folder": folder},
        )
        return url

    async def delete(self, url: str) -> bool:
        """Delete the blob behind a public URL from this bucket."""
        blob_name = self.blob_name_from_url(url)
        if blob_name is None:
            logger.warning(f"Not a URL of bucket {self._bucket.name}: {url}")
            return False
        try:
            return await asyncio.to_thread(self._delete_blob, blob_name)
        except Exception as e:
            logger.error(f"Firebase delete failed: {e}", exc_info=True)
            raise ImageUploadError(
                str(e), "delete", context=ErrorContext(entity="image"),
            )

    def blob_name_from_url(self, url: str) -> str | None:
        """Map https://storage.googleapis.com/<bucket>/<path> back to <path>."""
        path = unquote(urlparse(url).path).lstrip("/")
        prefix = f"{self._bucket.name}/"
        if not path.startswith(prefix) or len(path) == len(prefix):
            return None
        return path[len(prefix):]

    # ─── Blocking SDK calls (run in worker thread) ─────────────────

    def _put_blob(self, blob_name: str, data: bytes, content_type: str) -> str:
        blob = self._bucket.blob(blob_name)
        blob.upload_from_string(data, content_type=content_type)
        blob.make_public()
        return blob.public_url

    def _delete_blob(self, blob_name: str) -> bool:
        blob = self._bucket.blob(blob_name)
        if not blob.exists():
            return False
        blob.delete()
        return True

    # ─── Remote source fetch ───────────────────────────────────────

    async def _fetch(
        self, source: str, context: ErrorContext,
    ) -> tuple[bytes, str]:
        try:
            async with httpx.AsyncClient(
                timeout=self.fetch_timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(source)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ImageUploadError(
                f"could not fetch source image: {e}", "fetch", context=context,
            )

        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        if not content_type.startswith("image/"):
            raise ImageUploadError(
                f"source is not an image ({content_type or 'no content type'})",
                "fetch", context=context,
            )
        if not response.content:
            raise ImageUploadError("source image is empty", "fetch", context=context)
        return response.content, content_type


def _initialize_firebase(
    bucket_name: str,
    credentials_path: str | None,
    credentials_json: str | None,
) -> None:
    """Initialize the default Firebase app once per process."""
    if firebase_admin._apps:
        return
    if credentials_json:
        cred = credentials.Certificate(json.loads(credentials_json))
    elif credentials_path:
        cred = credentials.Certificate(credentials_path)
    else:
        cred = credentials.ApplicationDefault()
    firebase_admin.initialize_app(cred, {"storageBucket": bucket_name})


@lru_cache
def get_image_store() -> FirebaseImageStore:
    """Process-wide image store, built on first call."""
    settings = get_settings()
    _initialize_firebase(
        settings.firebase_storage_bucket,
        settings.firebase_credentials_path,
        settings.firebase_credentials_json,
    )
    return FirebaseImageStore(
        storage.bucket(settings.firebase_storage_bucket),
        fetch_timeout_seconds=settings.image_fetch_timeout_seconds,
        max_image_bytes=settings.max_image_bytes,
    )


def get_image_store_provider() -> Callable[[], FirebaseImageStore]:
    """FastAPI dependency — hands out the factory; handlers call it when they upload."""
    return get_image_store
