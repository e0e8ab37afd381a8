"""Session cookie helpers and auth dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, Response

from snap_caption.domain.models import PublicUser  # noqa: TC001

if TYPE_CHECKING:
    from snap_caption.containers import AppContainer


class SignInRequired(Exception):
    """Raised when a protected route is hit without a valid session."""


class AlreadySignedIn(Exception):
    """Raised when a signed-in user opens signin or signup."""


def _session_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return request.cookies.get(container.settings.session_cookie_name)


def optional_user(request: Request) -> PublicUser | None:
    """Return the signed-in user, if any."""
    container: AppContainer = request.app.state.container
    return container.session_service.current_user(_session_token(request))


def require_user(request: Request) -> PublicUser:
    """Ensure the request carries a valid session."""
    user = optional_user(request)
    if user is None:
        raise SignInRequired
    return user


def redirect_if_signed_in(request: Request) -> None:
    """Send signed-in users away from the signin and signup forms."""
    if optional_user(request) is not None:
        raise AlreadySignedIn


def set_session_cookie(request: Request, response: Response, token: str) -> None:
    """Attach the session token as an http-only cookie."""
    container: AppContainer = request.app.state.container
    settings = container.settings
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


def clear_session(request: Request, response: Response) -> None:
    """Destroy the current session and drop its cookie."""
    container: AppContainer = request.app.state.container
    token = _session_token(request)
    if token:
        container.session_service.sign_out(token)
    response.delete_cookie(container.settings.session_cookie_name)
