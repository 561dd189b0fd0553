# app/main.py
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import ConfigurationError, Settings, get_log_options, get_settings
from app.core.cors import setup_cors
from app.core.logger import configure_logging
from app.db.repositories.disease_repo import DiseaseRepo
from app.db.supabase_client import get_supabase_client
from app.schemas.common import HealthResponse, MessageResponse, ServiceInfo
from app.services.disease_service import (
    GENERIC_ERROR_MESSAGE,
    INVALID_QUESTION_MESSAGE,
    QueryValidationError,
)
from app.services.search_service import DiseaseLookupError

logger = logging.getLogger("app")


def _message_json(*, status_code: int, message: str) -> JSONResponse:
    body = MessageResponse(success=False, message=message).model_dump()
    return JSONResponse(status_code=status_code, content=body)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    if app.state.db is None:
        app.state.db = get_supabase_client(settings)

    if settings.check_supabase_on_startup:
        try:
            DiseaseRepo.probe(app.state.db, table=settings.disease_table)
            logger.info("Supabase startup check: OK")
        except Exception:
            logger.exception("Supabase startup check failed")
            raise

    yield


def create_app(settings: Optional[Settings] = None, *, db: Optional[Any] = None) -> FastAPI:
    """
    Build the API.

    `db` is the store client; when omitted it is created once during startup.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_options)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = db
    setup_cors(app, settings)

    # -------------------------
    # Global exception handlers
    # -------------------------
    @app.exception_handler(QueryValidationError)
    async def _handle_invalid_query(request: Request, exc: QueryValidationError):
        return _message_json(status_code=400, message=INVALID_QUESTION_MESSAGE)

    @app.exception_handler(DiseaseLookupError)
    async def _handle_lookup(request: Request, exc: DiseaseLookupError):
        logger.error("Disease query failed", extra={"error": str(exc), "tier": exc.tier})
        return _message_json(status_code=500, message=GENERIC_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def _handle_unknown(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _message_json(status_code=500, message=GENERIC_ERROR_MESSAGE)

    # ---- system routes ----
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    def health(request: Request) -> HealthResponse:
        return HealthResponse(
            status="healthy",
            database=request.app.state.db is not None,
            timestamp=datetime.now(timezone.utc),
        )

    @app.get("/", response_model=ServiceInfo, tags=["system"])
    def root() -> ServiceInfo:
        return ServiceInfo(service=settings.app_name, env=settings.env)

    # ---- API Router include ----
    from app.api.router import router as api_router

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


def run() -> None:
    """Console entry point: validate config, then serve with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging(get_log_options())
        logger.error("Initialization error: %s", e, extra={"error": str(e)})
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
