"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutriflow.api.routes import router
from nutriflow.app_logging import configure_logging
from nutriflow.config import parse_allowed_origins
from nutriflow.containers import AppContainer
from nutriflow.domain.errors import (
    AuthError,
    MalformedResponse,
    NoFoodRecognized,
    NotFound,
    NutriFlowError,
    RegistrationRejected,
    Unauthenticated,
    ValidationError,
)

_STATUS_CODES: tuple[tuple[type[NutriFlowError], int], ...] = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NoFoodRecognized, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RegistrationRejected, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (Unauthenticated, status.HTTP_401_UNAUTHORIZED),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (MalformedResponse, status.HTTP_502_BAD_GATEWAY),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    origins = parse_allowed_origins(container.settings.allowed_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(NutriFlowError)
    async def handle_app_error(request: Request, exc: NutriFlowError) -> JSONResponse:
        code = error_status(exc)
        if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("Upstream failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=code, content=error_body(exc))

    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: NutriFlowError) -> int:
    """Return the HTTP status for an application error."""
    for error_type, code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_body(exc: NutriFlowError) -> dict[str, object]:
    """Serialize an application error for clients."""
    body: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, ValidationError):
        body["field"] = exc.field
    return body
