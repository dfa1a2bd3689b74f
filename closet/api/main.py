"""FastAPI entrypoint and HTTP routes."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from closet.api.dependencies import ClosetServices
from closet.api.routes import closet_items, outfits, profile, suggestions
from closet.config.settings import Settings, get_settings
from closet.db.session import create_engine, create_session_factory, init_db
from closet.domain.errors import (
    ClosetError,
    NotFoundError,
    OwnershipError,
    StoreError,
    ValidationError,
)
from closet.monitoring.logging import configure_logging

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[ClosetError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    OwnershipError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _register_error_handlers(app: FastAPI) -> None:
    async def handle_closet_error(request: Request, exc: ClosetError) -> JSONResponse:
        status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        body: dict[str, object] = {"error": exc.message}
        if isinstance(exc, OwnershipError) and exc.invalid_ids:
            body["invalidItemIds"] = exc.invalid_ids
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content=body)

    async def handle_request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request.", "details": jsonable_errors(exc)},
        )

    app.add_exception_handler(ClosetError, handle_closet_error)
    app.add_exception_handler(RequestValidationError, handle_request_error)


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


def create_app(
    services: ClosetServices | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Initialise the FastAPI application.

    Tests pass ready-made ``services``; otherwise the SQL stores are wired
    against ``settings.database_url`` when the app starts.
    """

    settings = settings or (services.settings if services else get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if services is not None:
            app.state.services = services
            yield
            return

        configure_logging()
        engine = create_engine(settings.database_url)
        await init_db(engine)
        app.state.services = ClosetServices.from_session_factory(
            create_session_factory(engine), settings
        )
        logger.info("Closet API started (environment=%s)", settings.environment)
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Closet API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    if services is not None:
        app.state.services = services

    _register_error_handlers(app)
    app.include_router(closet_items.router)
    app.include_router(outfits.router)
    app.include_router(suggestions.router)
    app.include_router(profile.router)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/metrics", tags=["system"], include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()
