from __future__ import annotations

"""backend/cloudtools/services/invocation.py

Entry points called by the API layer.

Each function is a blocking call that owns its subprocess from spawn to
exit; nothing is shared between calls, so they are safe to run
concurrently from FastAPI's worker threads.

This is the only place the live process environment is read. It is copied
once per call and handed down explicitly; the lower layers never look at
``os.environ`` themselves.
"""

import logging
import os
from typing import Any, Dict, Mapping, Sequence

from cloudtools.config import Settings, get_settings
from cloudtools.errors import ToolUnavailableError
from cloudtools.services import azure
from cloudtools.services.diagnostics.error_classifier import annotate_credential_failure
from cloudtools.services.http_proxy import proxy_http as _proxy_http
from cloudtools.services.tools.base import (
    ExecutionResult,
    Platform,
    ToolResolution,
    current_platform,
    run,
)
from cloudtools.services.tools.environment import build_environment
from cloudtools.services.tools.registry import AZURE_RESOURCE_FINDER, discover, get_descriptor
from cloudtools.services.tools.repl import run_statement

logger = logging.getLogger(__name__)


def _host_environment() -> Dict[str, str]:
    return dict(os.environ)


def discover_tool(
    tool_id: str,
    *,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
    settings: Settings | None = None,
) -> ToolResolution:
    settings = settings or get_settings()
    return discover(
        tool_id,
        platform=platform or current_platform(),
        env=_host_environment() if env is None else env,
        overrides=settings.tool_path_overrides,
    )


def _require(
    tool_id: str,
    env: Mapping[str, str],
    platform: Platform,
    settings: Settings,
) -> str:
    """Return the tool's path or raise ToolUnavailableError with guidance."""
    resolution = discover_tool(tool_id, env=env, platform=platform, settings=settings)
    if not resolution.available or not resolution.path:
        raise ToolUnavailableError(
            tool_id,
            resolution.error or f"{get_descriptor(tool_id).display_name} not available",
        )
    return resolution.path


def run_tool(
    tool_id: str,
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
    settings: Settings | None = None,
) -> ExecutionResult:
    """Resolve ``tool_id`` and run it with ``args``.

    A non-zero exit comes back as ``succeeded=False``; only discovery and
    spawn failures raise.
    """
    settings = settings or get_settings()
    platform = platform or current_platform()
    base = _host_environment() if env is None else env

    path = _require(tool_id, base, platform, settings)
    child_env = build_environment(base, platform)
    result = run(path, args, child_env, timeout=settings.tool_timeout_seconds)

    if tool_id == AZURE_RESOURCE_FINDER.id:
        result = annotate_credential_failure(result)
    if not result.succeeded:
        logger.info("%s exited with %s", tool_id, result.return_code)
    return result


def run_repl_statement(
    statement: str,
    *,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
    settings: Settings | None = None,
) -> ExecutionResult:
    settings = settings or get_settings()
    platform = platform or current_platform()
    base = _host_environment() if env is None else env

    path = _require(settings.repl_tool_id, base, platform, settings)
    return run_statement(
        path,
        statement,
        build_environment(base, platform),
        timeout=settings.repl_timeout_seconds,
    )


def get_auth_diagnosis(
    *,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
    settings: Settings | None = None,
) -> azure.AuthDiagnosis:
    settings = settings or get_settings()
    platform = platform or current_platform()
    base = _host_environment() if env is None else env

    resolution = discover_tool(settings.azure_tool_id, env=base, platform=platform, settings=settings)
    return azure.diagnose_auth(
        resolution,
        build_environment(base, platform),
        platform,
        timeout=settings.tool_timeout_seconds,
    )


def check_azure_cli(
    *,
    env: Mapping[str, str] | None = None,
    platform: Platform | None = None,
    settings: Settings | None = None,
) -> azure.AzureCliReport:
    settings = settings or get_settings()
    platform = platform or current_platform()
    base = _host_environment() if env is None else env

    resolution = discover_tool(settings.azure_tool_id, env=base, platform=platform, settings=settings)
    az_path = resolution.path if resolution.available and resolution.path else (
        get_descriptor(settings.azure_tool_id).search_name
    )
    return azure.check_cli(
        az_path,
        build_environment(base, platform),
        platform,
        timeout=settings.tool_timeout_seconds,
    )


def proxy_http(
    url: str,
    method: str | None = None,
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
    *,
    settings: Settings | None = None,
) -> Any:
    settings = settings or get_settings()
    return _proxy_http(url, method, headers, body, timeout=settings.http_timeout_seconds)
