"""FastAPI application entrypoint for the QA corpus tool."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from qacorpus.api.middleware.body_limit import BodySizeLimitMiddleware
from qacorpus.api.middleware.logging import LoggingMiddleware
from qacorpus.api.routes import documents, health, ingestion, stats, taxonomy
from qacorpus.core.config import settings
from qacorpus.core.database import DocumentStore
from qacorpus.core.exceptions import ApplicationError
from qacorpus.validation import INVALID_BATCH_MESSAGE

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the document store on shutdown; the connection itself opens lazily."""

    app.state.shutdown_error = None
    logger.info(
        "%s starting; database %s, collection %s",
        settings.API_TITLE,
        settings.MONGODB_DATABASE,
        settings.MONGODB_COLLECTION,
    )
    try:
        yield
    finally:
        logger.info("Shutting down server")
        try:
            await app.state.store.close()
        except Exception as exc:
            logger.exception("Error during shutdown")
            app.state.shutdown_error = exc


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """Build the application around an explicitly owned document store."""

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else DocumentStore()
    app.state.shutdown_error = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)

    # Routers
    app.include_router(ingestion.router, prefix="/api")
    app.include_router(taxonomy.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")
    app.include_router(documents.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(ApplicationError)
    async def handle_application_error(_: Request, exc: ApplicationError):
        """Return standardized responses for application layer exceptions."""

        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "code": exc.code})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(error.get("loc", ("",))[0] == "body" for error in errors):
            message = INVALID_BATCH_MESSAGE
        else:
            fields = ", ".join(str(error.get("loc", ("",))[-1]) for error in errors)
            message = f"Invalid request parameters: {fields}"
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message, "code": "validation_error"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return app


app = create_app()
