"""Sign-in sessions on top of the credential store."""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from snap_caption.domain.errors import (
    AuthenticationFailure,
    StorageFailure,
    ValidationError,
)
from snap_caption.domain.models import PublicUser
from snap_caption.domain.sessions import WebSessionRecord
from snap_caption.services.users import UserService

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class WebSessionRepository(Protocol):
    """Persistence interface for sign-in sessions."""

    def create_session(self, token: str, user_id: UUID, expires_at: datetime) -> None:
        """Persist a new session."""

    def get_session(self, token: str) -> WebSessionRecord | None:
        """Return a session by token, if present."""

    def delete_session(self, token: str) -> None:
        """Remove a session."""


@dataclass
class SessionService:
    """Creates, resolves and destroys sign-in sessions."""

    user_service: UserService
    repository: WebSessionRepository
    ttl_days: int = 7

    def sign_up(
        self, email: str, password: str, confirm_password: str, name: str
    ) -> tuple[PublicUser, str]:
        """Register a user and open a session for them."""
        if not name or not email or not password or not confirm_password:
            raise ValidationError("All fields are required")
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        user = self.user_service.create_user(email, password, name)
        return user, self._open(user)

    def sign_in(self, email: str, password: str) -> tuple[PublicUser, str]:
        """Check credentials and open a session."""
        if not email or not password:
            raise ValidationError("Email and password are required")
        user = self.user_service.validate_user(email, password)
        if user is None:
            raise AuthenticationFailure()
        return user, self._open(user)

    def sign_out(self, token: str) -> None:
        """Destroy a session; errors are logged and ignored."""
        try:
            self.repository.delete_session(token)
        except Exception:
            _logger.exception("Failed to delete session")

    def current_user(self, token: str | None) -> PublicUser | None:
        """Resolve a session token to its user, if still valid."""
        if not token:
            return None
        try:
            session = self.repository.get_session(token)
        except Exception:
            _logger.exception("Session lookup failed")
            return None
        if session is None:
            return None
        if session.expires_at <= datetime.now(tz=UTC):
            self.sign_out(token)
            return None
        user = self.user_service.get_user_by_id(session.user_id)
        return user.public() if user else None

    def _open(self, user: PublicUser) -> str:
        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(tz=UTC) + timedelta(days=self.ttl_days)
        try:
            self.repository.create_session(token, user.user_id, expires_at)
        except Exception as exc:
            _logger.exception("Failed to open session: user_id=%s", user.user_id)
            raise StorageFailure("Failed to sign in. Please try again.") from exc
        return token
