"""Caption drafting, saving, regeneration and gallery endpoints."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Request, UploadFile

from snap_caption.api.auth import require_user
from snap_caption.api.models import (
    ImageOut,
    SaveImageRequest,
    UserOut,
)
from snap_caption.domain.errors import ValidationError
from snap_caption.domain.models import PublicUser  # noqa: TC001

if TYPE_CHECKING:
    from snap_caption.containers import AppContainer
    from snap_caption.domain.models import GalleryItem

router = APIRouter(tags=["images"])


@router.get("/")
async def gallery(
    request: Request, user: PublicUser = Depends(require_user)
) -> dict[str, object]:
    """Return the signed-in user's images, newest first."""
    container: AppContainer = request.app.state.container
    items = await container.workflow.list_gallery(user)
    return _gallery_payload(items, "", user)


@router.get("/search")
async def search(
    request: Request,
    q: str | None = None,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Filter the user's images by caption text or creation date."""
    container: AppContainer = request.app.state.container
    items = await container.workflow.list_gallery(user, q)
    return _gallery_payload(items, q or "", user)


@router.post("/generate-caption")
async def generate_caption(
    request: Request,
    image: UploadFile | None = File(default=None),
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Caption an uploaded image without saving it."""
    container: AppContainer = request.app.state.container
    if image is None:
        raise ValidationError("No image file provided")
    mime_type = image.content_type or ""
    _require_image_type(mime_type)
    image_bytes = await image.read()
    _require_upload_size(image_bytes, container.settings.max_upload_bytes)
    if not image_bytes:
        raise ValidationError("No image file provided")

    caption = await container.workflow.draft_caption(user, image_bytes, mime_type)
    return {
        "success": True,
        "caption": caption,
        "mimeType": mime_type,
        "originalName": image.filename,
    }


@router.post("/save-image")
async def save_image(
    payload: SaveImageRequest,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Store an image and its reviewed caption."""
    container: AppContainer = request.app.state.container
    if not payload.image_buffer or not payload.caption:
        raise ValidationError("Image and caption are required")
    _require_image_type(payload.mime_type)
    image_bytes = _decode_image(payload.image_buffer)
    _require_upload_size(image_bytes, container.settings.max_upload_bytes)

    record = container.workflow.save_image(
        user,
        image_bytes=image_bytes,
        caption=payload.caption,
        mime_type=payload.mime_type,
        original_name=payload.original_name,
    )
    return {
        "success": True,
        "image": ImageOut.from_record(record).model_dump(by_alias=True, mode="json"),
    }


@router.post("/regenerate-caption/{image_id}")
async def regenerate_caption(
    image_id: UUID,
    request: Request,
    user: PublicUser = Depends(require_user),
) -> dict[str, object]:
    """Generate a fresh caption for a stored image.

    Browsers still post the displayed `imageUrl`; it is not read, the stored
    locator is always used.
    """
    container: AppContainer = request.app.state.container
    record = await container.workflow.regenerate_caption(user, image_id)
    return {
        "success": True,
        "caption": record.caption,
        "image": ImageOut.from_record(record).model_dump(by_alias=True, mode="json"),
    }


def _gallery_payload(
    items: list[GalleryItem], search_term: str, user: PublicUser
) -> dict[str, object]:
    return {
        "images": [
            ImageOut.from_gallery_item(item).model_dump(by_alias=True, mode="json")
            for item in items
        ],
        "totalCount": len(items),
        "searchTerm": search_term,
        "user": UserOut.from_user(user).model_dump(by_alias=True, mode="json"),
    }


def _require_image_type(mime_type: str) -> None:
    if not mime_type.startswith("image/"):
        raise ValidationError(
            "Only image files are allowed! Please upload a valid image."
        )


def _require_upload_size(image_bytes: bytes, max_bytes: int) -> None:
    if len(image_bytes) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationError(f"File size too large. Maximum size is {limit_mb}MB.")


def _decode_image(encoded: str) -> bytes:
    """Decode base64 image data, accepting an optional data URL prefix."""
    if encoded.startswith("data:") and "," in encoded:
        encoded = encoded.split(",", maxsplit=1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Invalid image data") from exc
