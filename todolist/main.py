"""Main FastAPI application for the todo list API."""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from . import __version__
from .api.dependencies import get_todo_store
from .api.routes import router as api_router
from .logging_utils import configure_logging, reset_request_id, set_request_id
from .settings import get_settings

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Starting todo API (ENVIRONMENT=%s, storage_key=%s, strict_age=%s)",
        settings.environment,
        settings.storage_key,
        settings.strict_age,
    )
    store = app.dependency_overrides.get(get_todo_store, get_todo_store)()
    logger.info("Todo store ready with %d todos", len(store))
    yield
    logger.info("Shutting down todo API")


app = FastAPI(
    title="Todo List API",
    description="Create, edit, delete and search todos persisted in local storage",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request_token = set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        reset_request_id(request_token)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with basic API info."""
    return {
        "message": "Todo List API",
        "endpoints": "/api/todos",
    }


@app.get("/health")
def read_health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")
