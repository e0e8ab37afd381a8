"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from snap_caption.adapters.http_image_fetcher import HttpxImageFetcher
from snap_caption.adapters.openai_caption_client import OpenAICaptionClient
from snap_caption.adapters.supabase_media_repository import SupabaseMediaRepository
from snap_caption.adapters.supabase_object_store import SupabaseObjectStore
from snap_caption.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from snap_caption.adapters.supabase_user_repository import SupabaseUserRepository
from snap_caption.config import Settings
from snap_caption.services.captions import CaptionService
from snap_caption.services.media import MediaIndexService
from snap_caption.services.sessions import SessionService
from snap_caption.services.storage import ImageStorageService
from snap_caption.services.users import UserService
from snap_caption.services.workflow import CaptioningWorkflow


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_service: SessionService
    caption_service: CaptionService
    storage_service: ImageStorageService
    media_service: MediaIndexService
    workflow: CaptioningWorkflow
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(
        repository=SupabaseUserRepository(
            supabase_client, table_name=resolved_settings.users_table
        ),
        bcrypt_rounds=resolved_settings.bcrypt_rounds,
    )
    session_service = SessionService(
        user_service=user_service,
        repository=SupabaseSessionRepository(
            supabase_client, table_name=resolved_settings.sessions_table
        ),
        ttl_days=resolved_settings.session_ttl_days,
    )
    image_fetcher = HttpxImageFetcher.create(
        timeout=resolved_settings.image_fetch_timeout_seconds
    )
    caption_service = CaptionService(
        client=OpenAICaptionClient.create(resolved_settings.openai_api_key),
        fetcher=image_fetcher,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    storage_service = ImageStorageService(
        store=SupabaseObjectStore(
            supabase_client, bucket=resolved_settings.storage_bucket
        ),
        base_url=resolved_settings.supabase_url,
        bucket=resolved_settings.storage_bucket,
        prefix=resolved_settings.storage_prefix,
        signed_url_ttl_seconds=resolved_settings.signed_url_ttl_seconds,
    )
    media_service = MediaIndexService(
        SupabaseMediaRepository(
            supabase_client, table_name=resolved_settings.media_table
        )
    )
    workflow = CaptioningWorkflow(
        caption_service=caption_service,
        storage_service=storage_service,
        media_service=media_service,
    )

    async def close_resources() -> None:
        await image_fetcher.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        session_service=session_service,
        caption_service=caption_service,
        storage_service=storage_service,
        media_service=media_service,
        workflow=workflow,
        close_resources=close_resources,
    )
