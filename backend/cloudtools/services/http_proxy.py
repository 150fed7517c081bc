from __future__ import annotations

"""backend/cloudtools/services/http_proxy.py

Generic JSON HTTP passthrough for the desktop UI.

Only JSON bodies come back to the caller. Unsupported methods, transport
failures, non-2xx statuses and non-JSON bodies raise HttpProxyError.
"""

import logging
from typing import Any, Mapping

import httpx

from cloudtools.errors import HttpProxyError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
BODY_METHODS = ("POST", "PUT", "PATCH")


def proxy_http(
    url: str,
    method: str | None = None,
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
    *,
    timeout: float = 30.0,
    client: httpx.Client | None = None,
) -> Any:
    """Send one request and return its JSON body.

    Raises HttpProxyError for unsupported methods, transport failures,
    non-2xx statuses and bodies that are not JSON.
    """
    verb = (method or "GET").upper()
    if verb not in SUPPORTED_METHODS:
        raise HttpProxyError(f"Unsupported HTTP method: {method}")

    content = body if body is not None and verb in BODY_METHODS else None

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        try:
            response = http.request(verb, url, headers=dict(headers or {}), content=content)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", verb, url, exc)
            raise HttpProxyError(f"Request failed: {exc}") from exc
    finally:
        if owns_client:
            http.close()

    if not response.is_success:
        raise HttpProxyError(f"HTTP error: {response.status_code} {response.reason_phrase}".rstrip())

    try:
        return response.json()
    except ValueError as exc:
        raise HttpProxyError(f"Failed to parse JSON: {exc}") from exc
