# backend/cloudtools/api/__init__.py
from __future__ import annotations

"""
API router aggregation.

This module exposes a single `api_router` that the FastAPI app
can include with a prefix such as `/api`.
"""

from fastapi import APIRouter

from . import azure, proxy, repl, tools

api_router = APIRouter()
api_router.include_router(tools.router)
api_router.include_router(repl.router)
api_router.include_router(azure.router)
api_router.include_router(proxy.router)
