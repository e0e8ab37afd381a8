"""Per-user media metadata index."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from snap_caption.domain.errors import MediaNotFound
from snap_caption.domain.models import MediaRecord


class MediaRepository(Protocol):
    """Persistence interface for media records."""

    def insert_media(self, record: MediaRecord) -> None:
        """Persist a new media record."""

    def get_media(self, image_id: UUID) -> MediaRecord | None:
        """Return a media record by id, if present."""

    def list_by_owner(self, owner_id: UUID) -> list[MediaRecord]:
        """Return every record owned by the user, in no particular order."""

    def update_caption(self, image_id: UUID, caption: str) -> MediaRecord | None:
        """Replace the caption and return the updated record, if it exists."""


@dataclass
class MediaIndexService:
    """Application service owning media records."""

    repository: MediaRepository

    def create(
        self, image_id: UUID, image_url: str, caption: str, owner_id: UUID
    ) -> MediaRecord:
        """Store a record stamped with the current time."""
        record = MediaRecord(
            image_id=image_id,
            image_url=image_url,
            caption=caption,
            owner_id=owner_id,
            created_at=datetime.now(tz=UTC),
        )
        self.repository.insert_media(record)
        return record

    def get(self, image_id: UUID) -> MediaRecord | None:
        """Return a record by id, if present."""
        return self.repository.get_media(image_id)

    def list_by_owner(self, owner_id: UUID) -> list[MediaRecord]:
        """Return the owner's records, newest first."""
        records = self.repository.list_by_owner(owner_id)
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    def update_caption(self, image_id: UUID, caption: str) -> MediaRecord:
        """Replace only the caption of an existing record."""
        updated = self.repository.update_caption(image_id, caption)
        if updated is None:
            raise MediaNotFound()
        return updated

    def search(self, term: str | None, owner_id: UUID) -> list[MediaRecord]:
        """Filter the owner's records by caption or creation date substring."""
        records = self.list_by_owner(owner_id)
        if not term:
            return records
        needle = term.lower()
        return [
            record
            for record in records
            if needle in record.caption.lower() or needle in record.created_date
        ]
