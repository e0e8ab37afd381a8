"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from snap_caption.domain.models import UserRecord
from snap_caption.services.users import UserRepository

_COLUMNS = "user_id, email, password_hash, name, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client
    table_name: str = "users"

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for a normalized email, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for a primary key, if present."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def insert_user(self, user: UserRecord) -> None:
        """Insert a new user row."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "user_id": str(user.user_id),
                    "email": user.email,
                    "password_hash": user.password_hash,
                    "name": user.name,
                    "created_at": user.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")


def _to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        user_id=UUID(str(row["user_id"])),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        name=str(row.get("name") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
