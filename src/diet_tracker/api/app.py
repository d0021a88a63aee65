"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from diet_tracker.api.routes import router
from diet_tracker.app_logging import configure_logging
from diet_tracker.containers import AppContainer
from diet_tracker.domain.errors import (
    CyclicReferenceError,
    DietTrackerError,
    DuplicateIdError,
    EmptyUndoStackError,
    IndexOutOfRangeError,
    NoProfileEstablishedError,
    NotLoggedInError,
    UnknownComponentError,
    UnknownFoodError,
)

_ERROR_STATUS: tuple[tuple[type[DietTrackerError], int], ...] = (
    (NotLoggedInError, status.HTTP_401_UNAUTHORIZED),
    (UnknownComponentError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (UnknownFoodError, status.HTTP_404_NOT_FOUND),
    (NoProfileEstablishedError, status.HTTP_404_NOT_FOUND),
    (DuplicateIdError, status.HTTP_409_CONFLICT),
    (CyclicReferenceError, status.HTTP_409_CONFLICT),
    (EmptyUndoStackError, status.HTTP_409_CONFLICT),
    (IndexOutOfRangeError, status.HTTP_400_BAD_REQUEST),
)


def error_status(exc: DietTrackerError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_422_UNPROCESSABLE_ENTITY


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.session.open_catalog()
        yield
        session = app.state.container.session
        if session.username is not None:
            session.logout()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(router)

    @app.exception_handler(DietTrackerError)
    async def domain_error_handler(
        request: Request, exc: DietTrackerError
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=error_status(exc),
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
