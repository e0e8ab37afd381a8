"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from snap_caption.api.auth import AlreadySignedIn, SignInRequired
from snap_caption.api.auth_routes import router as auth_router
from snap_caption.api.images import router as images_router
from snap_caption.app_logging import configure_logging
from snap_caption.containers import AppContainer
from snap_caption.domain.errors import (
    AuthenticationFailure,
    CaptionGenerationFailed,
    DuplicateEmail,
    MediaNotFound,
    SnapCaptionError,
    StorageFailure,
    ValidationError,
)

_ERROR_STATUS: dict[type[SnapCaptionError], int] = {
    ValidationError: 400,
    AuthenticationFailure: 401,
    MediaNotFound: 404,
    DuplicateEmail: 409,
    StorageFailure: 502,
    CaptionGenerationFailed: 502,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    max_request_bytes = container.settings.max_request_bytes

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(images_router)

    @app.middleware("http")
    async def limit_body_size(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject requests that declare an oversized body."""
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > max_request_bytes:
            return JSONResponse(
                status_code=413, content={"error": "Request body too large"}
            )
        return await call_next(request)

    @app.exception_handler(SignInRequired)
    async def sign_in_required(_request: Request, _exc: SignInRequired) -> Response:
        return RedirectResponse("/signin", status_code=303)

    @app.exception_handler(AlreadySignedIn)
    async def already_signed_in(_request: Request, _exc: AlreadySignedIn) -> Response:
        return RedirectResponse("/", status_code=303)

    @app.exception_handler(SnapCaptionError)
    async def snap_caption_error(request: Request, exc: SnapCaptionError) -> Response:
        status_code = _status_for(exc)
        logger.warning(
            "Request failed: path=%s error=%s status=%s",
            request.url.path,
            type(exc).__name__,
            status_code,
        )
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: SnapCaptionError) -> int:
    """Map an error to its HTTP status, honoring subclasses."""
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return 500
