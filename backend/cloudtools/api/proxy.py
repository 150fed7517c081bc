# backend/cloudtools/api/proxy.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from cloudtools import schemas
from cloudtools.services import invocation

router = APIRouter(prefix="/proxy", tags=["proxy"])


@router.post("")
def proxy_request(payload: schemas.HttpProxyRequest) -> Any:
    """Forward a request and return the upstream JSON body unchanged."""
    return invocation.proxy_http(
        payload.url,
        payload.method,
        payload.headers,
        payload.body,
    )
