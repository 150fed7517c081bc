# backend/cloudtools/main.py
from __future__ import annotations

"""
FastAPI application setup.

This module depends on:
- cloudtools.config.get_settings for configuration
- cloudtools.api.api_router for route registration
- cloudtools.errors for mapping invocation failures to HTTP responses

Route handlers are plain `def` functions; FastAPI runs them on its worker
thread pool, so a slow tool never blocks the event loop or other requests.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cloudtools.api import api_router
from cloudtools.config import get_settings
from cloudtools.errors import ToolInvocationError

logger = logging.getLogger(__name__)

settings = get_settings()

logging.getLogger("cloudtools").setLevel(settings.log_level.upper())

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


# ---- CORS ----

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(o) for o in settings.allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Routes ----

app.include_router(api_router, prefix="/api")


# ---- Errors ----


@app.exception_handler(ToolInvocationError)
async def tool_invocation_error_handler(
    request: Request, exc: ToolInvocationError
) -> JSONResponse:
    """Return invocation failures as `{"detail": message}` with a mapped status."""
    logger.warning(
        "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


# ---- Healthcheck ----


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}
