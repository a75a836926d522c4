"""
FastAPI application for the WOTC screening and credit engine.

Run with: uvicorn web.app:app --app-dir src
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from config.settings import get_settings
from services.logging_config import configure_logging, request_id_var
from services.wotc_engine import get_wotc_engine
from web.wotc_api import router as wotc_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.json_logs)
    # Fail fast on a bad catalog before serving traffic
    get_wotc_engine()
    yield


def create_app() -> FastAPI:
    settings = get_settings()

    application = FastAPI(
        title=settings.name,
        debug=settings.debug,
        lifespan=lifespan,
    )

    @application.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response

    @application.get("/health")
    async def health():
        return {"status": "ok", "environment": settings.environment}

    application.include_router(wotc_router)
    return application


app = create_app()
