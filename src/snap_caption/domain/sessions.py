"""Domain models for web sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WebSessionRecord:
    """Represents a persisted sign-in session."""

    token: str
    user_id: UUID
    expires_at: datetime
