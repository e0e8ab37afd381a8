"""Credential store: user signup, lookup and password validation."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from snap_caption.domain.errors import DuplicateEmail, StorageFailure
from snap_caption.domain.models import PublicUser, UserRecord
from snap_caption.services.passwords import hash_password, verify_password

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user records."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this normalized email, if present."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for a primary key, if present."""

    def insert_user(self, user: UserRecord) -> None:
        """Persist a new user record."""


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively."""
    return email.strip().lower()


@dataclass
class UserService:
    """Application service owning user records."""

    repository: UserRepository
    bcrypt_rounds: int = 10

    def create_user(self, email: str, password: str, name: str) -> PublicUser:
        """Create a user after checking the email is still free."""
        normalized = normalize_email(email)
        if self.get_user_by_email(normalized) is not None:
            raise DuplicateEmail()

        user = UserRecord(
            user_id=uuid4(),
            email=normalized,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            name=name,
            created_at=datetime.now(tz=UTC),
        )
        try:
            self.repository.insert_user(user)
        except Exception as exc:
            _logger.exception("Failed to insert user")
            raise StorageFailure("Failed to create account") from exc
        _logger.info("Created user: user_id=%s", user.user_id)
        return user.public()

    def get_user_by_email(self, email: str) -> UserRecord | None:
        """Return the full stored record, hash included, or None."""
        try:
            return self.repository.get_by_email(normalize_email(email))
        except Exception:
            _logger.exception("User lookup by email failed")
            return None

    def get_user_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the stored record for a user id, or None."""
        try:
            return self.repository.get_by_id(user_id)
        except Exception:
            _logger.exception("User lookup by id failed: user_id=%s", user_id)
            return None

    def validate_user(self, email: str, password: str) -> PublicUser | None:
        """Return the user when the password matches, otherwise None.

        Unknown emails and wrong passwords are indistinguishable to the
        caller, and lookup errors fail closed the same way.
        """
        user = self.get_user_by_email(email)
        if user is None:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user.public()
