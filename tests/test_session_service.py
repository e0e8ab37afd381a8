"""Tests for sign-in sessions."""

from datetime import UTC, datetime, timedelta

import pytest

from snap_caption.domain.errors import (
    AuthenticationFailure,
    DuplicateEmail,
    StorageFailure,
    ValidationError,
)
from snap_caption.services.sessions import SessionService
from snap_caption.services.users import UserService
from tests.conftest import InMemoryUserRepository, InMemoryWebSessionRepository


def _service() -> tuple[SessionService, InMemoryWebSessionRepository]:
    sessions = InMemoryWebSessionRepository()
    service = SessionService(
        user_service=UserService(InMemoryUserRepository(), bcrypt_rounds=4),
        repository=sessions,
    )
    return service, sessions


@pytest.mark.parametrize(
    ("email", "password", "confirm", "name", "message"),
    [
        ("", "secret1", "secret1", "Ada", "All fields are required"),
        ("ada@example.com", "secret1", "secret2", "Ada", "Passwords do not match"),
        (
            "ada@example.com",
            "short",
            "short",
            "Ada",
            "Password must be at least 6 characters",
        ),
    ],
)
def test_sign_up_validation(email, password, confirm, name, message) -> None:
    service, sessions = _service()

    with pytest.raises(ValidationError) as excinfo:
        service.sign_up(email, password, confirm, name)

    assert excinfo.value.message == message
    assert sessions.sessions == {}


def test_sign_up_opens_session() -> None:
    service, sessions = _service()

    user, token = service.sign_up("Ada@example.com", "secret1", "secret1", "Ada")

    assert token in sessions.sessions
    assert service.current_user(token) == user


def test_sign_up_duplicate_email() -> None:
    service, _ = _service()
    service.sign_up("ada@example.com", "secret1", "secret1", "Ada")

    with pytest.raises(DuplicateEmail):
        service.sign_up("ADA@example.com", "secret2", "secret2", "Other")


def test_sign_in_with_bad_credentials_is_generic() -> None:
    service, _ = _service()
    service.sign_up("ada@example.com", "secret1", "secret1", "Ada")

    with pytest.raises(AuthenticationFailure) as wrong_password:
        service.sign_in("ada@example.com", "nope-nope")
    with pytest.raises(AuthenticationFailure) as unknown_email:
        service.sign_in("who@example.com", "secret1")

    assert wrong_password.value.message == unknown_email.value.message


def test_sign_in_requires_fields() -> None:
    service, _ = _service()

    with pytest.raises(ValidationError):
        service.sign_in("", "secret1")


def test_sign_out_destroys_session() -> None:
    service, sessions = _service()
    _, token = service.sign_up("ada@example.com", "secret1", "secret1", "Ada")

    service.sign_out(token)

    assert token not in sessions.sessions
    assert service.current_user(token) is None


def test_expired_session_resolves_to_none() -> None:
    service, sessions = _service()
    user, token = service.sign_up("ada@example.com", "secret1", "secret1", "Ada")
    sessions.create_session(
        token, user.user_id, datetime.now(tz=UTC) - timedelta(minutes=1)
    )

    assert service.current_user(token) is None
    assert token not in sessions.sessions


def test_unknown_or_missing_token() -> None:
    service, _ = _service()

    assert service.current_user(None) is None
    assert service.current_user("missing") is None


def test_sign_up_reports_user_write_failure() -> None:
    service, sessions = _service()
    service.user_service.repository.fail_inserts = True

    with pytest.raises(StorageFailure) as excinfo:
        service.sign_up("ada@example.com", "secret1", "secret1", "Ada")

    assert excinfo.value.message == "Failed to create account"
    assert sessions.sessions == {}


def test_sign_in_reports_session_write_failure() -> None:
    service, sessions = _service()
    service.sign_up("ada@example.com", "secret1", "secret1", "Ada")
    sessions.fail_creates = True

    with pytest.raises(StorageFailure) as excinfo:
        service.sign_in("ada@example.com", "secret1")

    assert "unavailable" not in excinfo.value.message
