"""Captioning workflow: draft, save, regenerate and browse captions."""

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID, uuid4

from snap_caption.domain.errors import MediaNotFound, StorageFailure, ValidationError
from snap_caption.domain.models import GalleryItem, MediaRecord, PublicUser
from snap_caption.services.captions import CaptionService
from snap_caption.services.media import MediaIndexService
from snap_caption.services.storage import ImageStorageService

_logger = logging.getLogger(__name__)


@dataclass
class CaptioningWorkflow:
    """Composes captioning, object storage and the media index per user."""

    caption_service: CaptionService
    storage_service: ImageStorageService
    media_service: MediaIndexService

    async def draft_caption(
        self, user: PublicUser, image_bytes: bytes, mime_type: str
    ) -> str:
        """Caption an upload without storing anything."""
        _logger.info(
            "Drafting caption: user_id=%s mime_type=%s bytes=%s",
            user.user_id,
            mime_type,
            len(image_bytes),
        )
        return await self.caption_service.caption_from_bytes(image_bytes, mime_type)

    def save_image(  # noqa: PLR0913
        self,
        user: PublicUser,
        image_bytes: bytes,
        caption: str,
        mime_type: str,
        original_name: str | None,
    ) -> MediaRecord:
        """Store the bytes, then index the caption under the user.

        The object write happens before the index write. If indexing fails
        the stored object is left behind; it is logged, not cleaned up.
        """
        if not image_bytes or not caption or not caption.strip():
            raise ValidationError("Image and caption are required")

        image_id = uuid4()
        try:
            locator = self.storage_service.put(image_bytes, mime_type, original_name)
        except Exception as exc:
            _logger.exception("Image upload failed: user_id=%s", user.user_id)
            raise StorageFailure("Failed to upload image") from exc

        try:
            record = self.media_service.create(
                image_id, locator, caption.strip(), user.user_id
            )
        except Exception as exc:
            _logger.exception(
                "Saving image metadata failed, object orphaned: locator=%s", locator
            )
            raise StorageFailure("Failed to save image metadata") from exc

        _logger.info("Saved image: user_id=%s image_id=%s", user.user_id, image_id)
        return record

    async def regenerate_caption(
        self, user: PublicUser, image_id: UUID
    ) -> MediaRecord:
        """Caption a stored image again and replace only its caption.

        The record must belong to ``user``. The image is fetched through a
        freshly signed URL for the stored locator.
        """
        record = self._get_owned(user, image_id)
        fetch_url = await asyncio.to_thread(
            self.storage_service.sign, record.image_url
        )
        new_caption = await self.caption_service.caption_from_url(fetch_url)
        try:
            updated = self.media_service.update_caption(image_id, new_caption)
        except MediaNotFound:
            raise
        except Exception as exc:
            _logger.exception("Caption update failed: image_id=%s", image_id)
            raise StorageFailure("Failed to update caption") from exc
        _logger.info("Regenerated caption: image_id=%s", image_id)
        return updated

    async def list_gallery(
        self, user: PublicUser, search_term: str | None = None
    ) -> list[GalleryItem]:
        """Return the user's records, newest first, with signed URLs."""
        try:
            records = self.media_service.search(search_term, user.user_id)
        except Exception as exc:
            _logger.exception("Gallery query failed: user_id=%s", user.user_id)
            raise StorageFailure("Failed to fetch images") from exc

        signed_urls = await asyncio.gather(
            *(
                asyncio.to_thread(self.storage_service.sign, record.image_url)
                for record in records
            )
        )
        return [
            GalleryItem(record=record, signed_url=url)
            for record, url in zip(records, signed_urls, strict=True)
        ]

    def _get_owned(self, user: PublicUser, image_id: UUID) -> MediaRecord:
        try:
            record = self.media_service.get(image_id)
        except Exception as exc:
            _logger.exception("Image lookup failed: image_id=%s", image_id)
            raise StorageFailure("Failed to fetch image") from exc
        if record is None or record.owner_id != user.user_id:
            raise MediaNotFound()
        return record
