"""Caption generation using a vision-language model."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from snap_caption.domain.errors import CaptionGenerationFailed

_logger = logging.getLogger(__name__)

CAPTION_PROMPT = (
    "Analyze this image and provide a detailed, creative caption that describes "
    "what you see. Keep it concise but informative (2-3 sentences max)."
)
DEFAULT_MIME_TYPE = "image/jpeg"


class CaptionClient(Protocol):
    """Interface for LLM image description."""

    async def describe(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        """Return free text describing the image."""


class ImageFetcher(Protocol):
    """Interface for downloading image bytes by URL."""

    async def fetch(self, url: str) -> tuple[bytes, str | None]:
        """Return the body and the reported content type, if any."""


@dataclass
class CaptionService:
    """Service that prepares caption prompts and validates results."""

    client: CaptionClient
    fetcher: ImageFetcher
    model: str
    reasoning_effort: str | None
    store: bool

    async def caption_from_bytes(self, image_bytes: bytes, mime_type: str) -> str:
        """Caption raw image bytes of a known MIME type."""
        return await self._describe(_to_data_url(image_bytes, mime_type))

    async def caption_from_url(self, url: str) -> str:
        """Download an image and caption it."""
        try:
            image_bytes, content_type = await self.fetcher.fetch(url)
        except Exception as exc:
            _logger.exception("Failed to fetch image for captioning")
            raise CaptionGenerationFailed("Failed to regenerate caption") from exc
        if not image_bytes:
            raise CaptionGenerationFailed("Failed to regenerate caption")
        mime_type = _resolve_mime_type(image_bytes, content_type)
        try:
            return await self._describe(_to_data_url(image_bytes, mime_type))
        except CaptionGenerationFailed as exc:
            raise CaptionGenerationFailed("Failed to regenerate caption") from exc

    async def _describe(self, data_url: str) -> str:
        try:
            text = await self.client.describe(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=data_url,
                prompt=CAPTION_PROMPT,
            )
        except Exception as exc:
            _logger.exception("Caption model call failed: model=%s", self.model)
            raise CaptionGenerationFailed() from exc
        caption = (text or "").strip()
        if not caption:
            _logger.warning("Caption model returned empty text: model=%s", self.model)
            raise CaptionGenerationFailed()
        return caption


def _to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _resolve_mime_type(image_bytes: bytes, content_type: str | None) -> str:
    """Prefer the server's image content type, then the file signature."""
    if content_type:
        declared = content_type.split(";", maxsplit=1)[0].strip().lower()
        if declared.startswith("image/"):
            return declared
    return _detect_mime_type(image_bytes)


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_MIME_TYPE
