"""Object store gateway for uploaded images."""

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol
from uuid import uuid4

_logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Interface for a bucket-style binary store."""

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        """Write bytes under a key."""

    def create_signed_url(self, key: str, expires_in: int) -> str:
        """Return a credential-free URL for the key, valid for expires_in seconds."""


@dataclass
class ImageStorageService:
    """Stores image bytes and hands out time-limited access URLs.

    Locators are stable URLs of the form
    ``{base_url}/storage/v1/object/{bucket}/{prefix}/{uuid}{ext}``. They are
    not fetchable without a signature; callers get access through ``sign``.
    """

    store: ObjectStore
    base_url: str
    bucket: str
    prefix: str = "images"
    signed_url_ttl_seconds: int = 3600

    @property
    def _locator_marker(self) -> str:
        return f"/storage/v1/object/{self.bucket}/"

    def put(self, data: bytes, content_type: str, suggested_name: str | None) -> str:
        """Store bytes under a fresh random key and return its locator."""
        key = f"{self.prefix}/{uuid4()}{_extension(suggested_name, content_type)}"
        self.store.upload(key, data, content_type)
        _logger.info("Stored image object: key=%s bytes=%s", key, len(data))
        return f"{self.base_url.rstrip('/')}{self._locator_marker}{key}"

    def sign(self, locator: str) -> str:
        """Return a signed URL for the locator, or the locator itself on failure."""
        parts = locator.split(self._locator_marker, maxsplit=1)
        if len(parts) < 2 or not parts[1]:
            return locator
        try:
            signed = self.store.create_signed_url(parts[1], self.signed_url_ttl_seconds)
        except Exception:
            _logger.exception("Failed to sign image URL: key=%s", parts[1])
            return locator
        return signed or locator


def _extension(suggested_name: str | None, content_type: str) -> str:
    """Keep the original file extension, falling back to the MIME type."""
    if suggested_name:
        suffix = PurePosixPath(suggested_name).suffix
        if suffix:
            return suffix.lower()
    return mimetypes.guess_extension(content_type) or ""
