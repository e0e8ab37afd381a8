"""Supabase-backed sign-in session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from snap_caption.domain.sessions import WebSessionRecord
from snap_caption.services.sessions import WebSessionRepository


@dataclass
class SupabaseSessionRepository(WebSessionRepository):
    """Supabase implementation for sign-in sessions."""

    client: Client
    table_name: str = "web_sessions"

    def create_session(self, token: str, user_id: UUID, expires_at: datetime) -> None:
        """Insert a session row."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "token": token,
                    "user_id": str(user_id),
                    "expires_at": expires_at.isoformat(),
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")

    def get_session(self, token: str) -> WebSessionRecord | None:
        """Return a session by token, if present."""
        response = (
            self.client.table(self.table_name)
            .select("token, user_id, expires_at")
            .eq("token", token)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return WebSessionRecord(
            token=row["token"],
            user_id=UUID(row["user_id"]),
            expires_at=datetime.fromisoformat(row["expires_at"]),
        )

    def delete_session(self, token: str) -> None:
        """Delete a session row."""
        self.client.table(self.table_name).delete().eq("token", token).execute()
