"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from macromate.api import presenters
from macromate.api.favorites import router as favorites_router
from macromate.api.macros import router as macros_router
from macromate.api.users import router as users_router
from macromate.app_logging import configure_logging
from macromate.config import parse_allowed_origins
from macromate.containers import AppContainer
from macromate.domain.errors import MacroMateError

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="MacroMate API", lifespan=lifespan)
    app.state.container = container

    @app.middleware("http")
    async def rate_limit(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Apply the fixed-window limit per client address to every route."""
        limiter = request.app.state.container.rate_limiter
        client_key = request.client.host if request.client else "unknown"
        if not limiter.hit(client_key):
            logger.warning("Rate limit exceeded", extra={"client": client_key})
            response = presenters.error_response(
                429, "Too many requests", RATE_LIMIT_MESSAGE
            )
            response.headers["Retry-After"] = str(limiter.retry_after(client_key))
            return response
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MacroMateError)
    async def handle_domain_error(
        request: Request, exc: MacroMateError
    ) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "Request failed: %s", exc.message, extra={"path": request.url.path}
            )
        return presenters.error_response(exc.status_code, exc.error, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return presenters.error_response(
            400, "Invalid request", _describe_validation_errors(exc)
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return presenters.error_response(
            500,
            "Internal server error",
            _format_error(container.settings.environment, exc),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "OK", "timestamp": datetime.now(tz=UTC).isoformat()}

    app.include_router(macros_router)
    app.include_router(favorites_router)
    app.include_router(users_router)

    return app


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Summarize request validation errors in one line."""
    parts = []
    for error in exc.errors():
        loc = error.get("loc", ())
        location = ".".join(str(part) for part in loc if part != "body")
        parts.append(f"{location}: {error.get('msg', 'invalid')}".strip(": "))
    return "; ".join(parts) or "Malformed request"


def _format_error(environment: str, exc: Exception) -> str:
    """Return the error message, with the exception type in local runs."""
    message = str(exc) or "Unexpected error"
    if environment == "local":
        return f"{type(exc).__name__}: {message}"
    return message
