"""FastAPI application entry point with lifespan management and error envelopes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meeting_search.api.routes import router
from meeting_search.core import InputMalformed, SearchError
from meeting_search.observability import init_tracing, shutdown_tracing
from meeting_search.search.service import SearchService

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Malformed request"


def create_app(service: SearchService | None = None) -> FastAPI:
    """
    Build the API.

    Args:
        service: Pre-built SearchService (tests inject one). When omitted,
            the default service is created at startup from the environment.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting meeting search API...")
        init_tracing()
        if service is None:
            from meeting_search.search.service import get_search_service

            app.state.service = get_search_service()
        else:
            app.state.service = service
        logger.info("Startup complete")
        yield
        shutdown_tracing()
        logger.info("Shutdown complete")

    app = FastAPI(title="Meeting Record Search", lifespan=lifespan)
    app.include_router(router)

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(InputMalformed)
    async def on_input_malformed(request: Request, exc: InputMalformed):
        return _error(400, str(exc))

    @app.exception_handler(SearchError)
    async def on_search_error(request: Request, exc: SearchError):
        logger.error("Search failed: %s", exc)
        return _error(500, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def on_unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error")
        return _error(500, str(exc))

    return app
