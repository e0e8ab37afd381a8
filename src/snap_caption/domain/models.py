"""Domain models for SnapCaption."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PublicUser:
    """User as exposed to sessions and callers; never carries the hash."""

    user_id: UUID
    email: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    user_id: UUID
    email: str
    password_hash: str
    name: str
    created_at: datetime

    def public(self) -> PublicUser:
        """Return the user without the password hash."""
        return PublicUser(
            user_id=self.user_id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class MediaRecord:
    """Caption metadata for one stored image."""

    image_id: UUID
    image_url: str
    caption: str
    owner_id: UUID
    created_at: datetime

    @property
    def created_date(self) -> str:
        """Date portion of the creation timestamp, as YYYY-MM-DD."""
        return self.created_at.date().isoformat()


@dataclass(frozen=True)
class GalleryItem:
    """A media record paired with a display-ready signed URL."""

    record: MediaRecord
    signed_url: str
