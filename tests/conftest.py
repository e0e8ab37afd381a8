"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import pytest

from snap_caption.config import Settings
from snap_caption.containers import AppContainer
from snap_caption.domain.models import MediaRecord, UserRecord
from snap_caption.domain.sessions import WebSessionRecord
from snap_caption.services.captions import CaptionClient, CaptionService, ImageFetcher
from snap_caption.services.media import MediaIndexService, MediaRepository
from snap_caption.services.sessions import SessionService, WebSessionRepository
from snap_caption.services.storage import ImageStorageService, ObjectStore
from snap_caption.services.users import UserRepository, UserService
from snap_caption.services.workflow import CaptioningWorkflow

SUPABASE_URL = "https://example.supabase.co"
SUPABASE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    fail_lookups: bool = False
    fail_inserts: bool = False

    def get_by_email(self, email: str) -> UserRecord | None:
        if self.fail_lookups:
            raise RuntimeError("users table unavailable")
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        if self.fail_lookups:
            raise RuntimeError("users table unavailable")
        return self.users.get(user_id)

    def insert_user(self, user: UserRecord) -> None:
        if self.fail_inserts:
            raise RuntimeError("users table unavailable")
        self.users[user.user_id] = user


@dataclass
class InMemoryMediaRepository(MediaRepository):
    """In-memory media repository for tests."""

    records: dict[UUID, MediaRecord] = field(default_factory=dict)
    fail_writes: bool = False

    def insert_media(self, record: MediaRecord) -> None:
        if self.fail_writes:
            raise RuntimeError("media table unavailable")
        self.records[record.image_id] = record

    def get_media(self, image_id: UUID) -> MediaRecord | None:
        return self.records.get(image_id)

    def list_by_owner(self, owner_id: UUID) -> list[MediaRecord]:
        return [
            record for record in self.records.values() if record.owner_id == owner_id
        ]

    def update_caption(self, image_id: UUID, caption: str) -> MediaRecord | None:
        current = self.records.get(image_id)
        if current is None:
            return None
        updated = MediaRecord(
            image_id=current.image_id,
            image_url=current.image_url,
            caption=caption,
            owner_id=current.owner_id,
            created_at=current.created_at,
        )
        self.records[image_id] = updated
        return updated


@dataclass
class InMemoryWebSessionRepository(WebSessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, WebSessionRecord] = field(default_factory=dict)
    fail_creates: bool = False

    def create_session(self, token: str, user_id: UUID, expires_at: datetime) -> None:
        if self.fail_creates:
            raise RuntimeError("sessions table unavailable")
        self.sessions[token] = WebSessionRecord(
            token=token, user_id=user_id, expires_at=expires_at
        )

    def get_session(self, token: str) -> WebSessionRecord | None:
        return self.sessions.get(token)

    def delete_session(self, token: str) -> None:
        self.sessions.pop(token, None)


@dataclass
class FakeObjectStore(ObjectStore):
    """Object store that keeps bytes in a dict and signs with a fake query."""

    objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)
    fail_uploads: bool = False
    fail_signing: bool = False

    def upload(self, key: str, data: bytes, content_type: str) -> None:
        if self.fail_uploads:
            raise RuntimeError("bucket unavailable")
        self.objects[key] = (data, content_type)

    def create_signed_url(self, key: str, expires_in: int) -> str:
        if self.fail_signing:
            raise RuntimeError("bucket unavailable")
        return f"https://signed.test/{key}?expires_in={expires_in}"


@dataclass
class FakeCaptionClient(CaptionClient):
    """Caption client returning a fixed caption and recording requests."""

    caption: str = "  A red bicycle leaning against a wall.  "
    error: Exception | None = None
    requests: list[dict[str, object]] = field(default_factory=list)

    async def describe(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        prompt: str,
    ) -> str:
        self.requests.append(
            {"model": model, "image_data_url": image_data_url, "prompt": prompt}
        )
        if self.error is not None:
            raise self.error
        return self.caption


@dataclass
class FakeImageFetcher(ImageFetcher):
    """Image fetcher returning static bytes."""

    content: bytes = b"\xff\xd8\xff-fake-jpeg"
    content_type: str | None = None
    fetched: list[str] = field(default_factory=list)

    async def fetch(self, url: str) -> tuple[bytes, str | None]:
        self.fetched.append(url)
        return self.content, self.content_type


def build_caption_service(
    client: FakeCaptionClient | None = None,
    fetcher: FakeImageFetcher | None = None,
) -> CaptionService:
    return CaptionService(
        client=client or FakeCaptionClient(),
        fetcher=fetcher or FakeImageFetcher(),
        model="gpt-5-mini",
        reasoning_effort="low",
        store=False,
    )


def build_storage_service(store: FakeObjectStore | None = None) -> ImageStorageService:
    return ImageStorageService(
        store=store or FakeObjectStore(),
        base_url=SUPABASE_URL,
        bucket="images",
        prefix="images",
        signed_url_ttl_seconds=3600,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url=SUPABASE_URL,
        supabase_service_key=SUPABASE_KEY,
        openai_api_key="openai-key",
        bcrypt_rounds=4,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    user_service = UserService(
        InMemoryUserRepository(), bcrypt_rounds=settings.bcrypt_rounds
    )
    session_service = SessionService(
        user_service=user_service,
        repository=InMemoryWebSessionRepository(),
        ttl_days=settings.session_ttl_days,
    )
    caption_service = build_caption_service()
    storage_service = build_storage_service()
    media_service = MediaIndexService(InMemoryMediaRepository())
    workflow = CaptioningWorkflow(
        caption_service=caption_service,
        storage_service=storage_service,
        media_service=media_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        session_service=session_service,
        caption_service=caption_service,
        storage_service=storage_service,
        media_service=media_service,
        workflow=workflow,
        close_resources=close_resources,
    )
