"""Pydantic models for request and response payloads."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from snap_caption.domain.models import GalleryItem, MediaRecord, PublicUser


class UserOut(BaseModel):
    """User as returned to the browser."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(serialization_alias="userId")
    email: str
    name: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_user(cls, user: PublicUser) -> "UserOut":
        return cls(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
        )


class ImageOut(BaseModel):
    """Media record as returned to the browser."""

    model_config = ConfigDict(populate_by_name=True)

    image_id: UUID = Field(serialization_alias="imageId")
    image_url: str = Field(serialization_alias="imageUrl")
    caption: str
    owner_id: UUID = Field(serialization_alias="ownerId")
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_record(
        cls, record: MediaRecord, image_url: str | None = None
    ) -> "ImageOut":
        return cls(
            image_id=record.image_id,
            image_url=image_url or record.image_url,
            caption=record.caption,
            owner_id=record.owner_id,
            created_at=record.created_at,
        )

    @classmethod
    def from_gallery_item(cls, item: GalleryItem) -> "ImageOut":
        return cls.from_record(item.record, image_url=item.signed_url)


class SaveImageRequest(BaseModel):
    """Body of a save request; the image arrives base64 encoded."""

    model_config = ConfigDict(populate_by_name=True)

    image_buffer: str | None = Field(default=None, alias="imageBuffer")
    caption: str | None = None
    mime_type: str = Field(default="image/jpeg", alias="mimeType")
    original_name: str | None = Field(default=None, alias="originalName")

