"""Supabase-backed media metadata repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from snap_caption.domain.models import MediaRecord
from snap_caption.services.media import MediaRepository

_COLUMNS = "image_id, image_url, caption, owner_id, created_at"


@dataclass
class SupabaseMediaRepository(MediaRepository):
    """Supabase implementation for media records."""

    client: Client
    table_name: str = "media"

    def insert_media(self, record: MediaRecord) -> None:
        """Insert a media row."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "image_id": str(record.image_id),
                    "image_url": record.image_url,
                    "caption": record.caption,
                    "owner_id": str(record.owner_id),
                    "created_at": record.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save image metadata")

    def get_media(self, image_id: UUID) -> MediaRecord | None:
        """Return a media row by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("image_id", str(image_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_media(response.data[0])

    def list_by_owner(self, owner_id: UUID) -> list[MediaRecord]:
        """Return every row owned by the user."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("owner_id", str(owner_id))
            .execute()
        )
        return [_to_media(row) for row in response.data or []]

    def update_caption(self, image_id: UUID, caption: str) -> MediaRecord | None:
        """Set the caption column and return the updated row."""
        response = (
            self.client.table(self.table_name)
            .update({"caption": caption})
            .eq("image_id", str(image_id))
            .execute()
        )
        if not response.data:
            return None
        return _to_media(response.data[0])


def _to_media(row: dict[str, object]) -> MediaRecord:
    return MediaRecord(
        image_id=UUID(str(row["image_id"])),
        image_url=str(row["image_url"]),
        caption=str(row.get("caption") or ""),
        owner_id=UUID(str(row["owner_id"])),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
