"""Signup, signin and signout endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from snap_caption.api.auth import (
    clear_session,
    redirect_if_signed_in,
    set_session_cookie,
)

if TYPE_CHECKING:
    from snap_caption.containers import AppContainer

router = APIRouter(tags=["auth"])


@router.get(
    "/signup",
    response_class=HTMLResponse,
    dependencies=[Depends(redirect_if_signed_in)],
)
async def signup_page() -> HTMLResponse:
    """Minimal signup form."""
    return HTMLResponse(_SIGNUP_HTML)


@router.post("/signup", dependencies=[Depends(redirect_if_signed_in)])
async def signup(
    request: Request,
    name: str = Form(default=""),
    email: str = Form(default=""),
    password: str = Form(default=""),
    confirm_password: str = Form(default="", alias="confirmPassword"),
) -> RedirectResponse:
    """Create an account and sign the new user in."""
    container: AppContainer = request.app.state.container
    _, token = container.session_service.sign_up(
        email=email, password=password, confirm_password=confirm_password, name=name
    )
    response = RedirectResponse("/", status_code=303)
    set_session_cookie(request, response, token)
    return response


@router.get(
    "/signin",
    response_class=HTMLResponse,
    dependencies=[Depends(redirect_if_signed_in)],
)
async def signin_page() -> HTMLResponse:
    """Minimal signin form."""
    return HTMLResponse(_SIGNIN_HTML)


@router.post("/signin", dependencies=[Depends(redirect_if_signed_in)])
async def signin(
    request: Request,
    email: str = Form(default=""),
    password: str = Form(default=""),
) -> RedirectResponse:
    """Check credentials and start a session."""
    container: AppContainer = request.app.state.container
    _, token = container.session_service.sign_in(email=email, password=password)
    response = RedirectResponse("/", status_code=303)
    set_session_cookie(request, response, token)
    return response


@router.api_route("/signout", methods=["GET", "POST"])
async def signout(request: Request) -> RedirectResponse:
    """End the current session."""
    response = RedirectResponse("/signin", status_code=303)
    clear_session(request, response)
    return response


_SIGNUP_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>SnapCaption - Sign up</title>
  </head>
  <body>
    <h1>Create your account</h1>
    <form method="post" action="/signup">
      <input name="name" placeholder="Name" />
      <input name="email" type="email" placeholder="Email" />
      <input name="password" type="password" placeholder="Password" />
      <input name="confirmPassword" type="password" placeholder="Confirm password" />
      <button type="submit">Sign up</button>
    </form>
    <a href="/signin">Already have an account?</a>
  </body>
</html>
"""

_SIGNIN_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>SnapCaption - Sign in</title>
  </head>
  <body>
    <h1>Sign in</h1>
    <form method="post" action="/signin">
      <input name="email" type="email" placeholder="Email" />
      <input name="password" type="password" placeholder="Password" />
      <button type="submit">Sign in</button>
    </form>
    <a href="/signup">Create an account</a>
  </body>
</html>
"""
