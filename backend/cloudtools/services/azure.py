from __future__ import annotations

"""backend/cloudtools/services/azure.py

Azure CLI state checks used by the UI before running the resource finder.

- diagnose_auth: is the CLI installed, is the user logged in, which account
- check_cli: self-test reporting CLI version and account in one payload

Both return data in every case. A missing CLI, a failed login check or an
unparsable account payload are described in the result, never raised.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from cloudtools.errors import ExecutionError, SpawnError
from cloudtools.services.diagnostics.error_classifier import (
    CLI_EXECUTION_FAILED,
    classify_auth_failure,
)
from cloudtools.services.tools.base import ExecutionResult, Platform, ToolResolution, run
from cloudtools.services.tools.environment import AZURE_CONFIG_DIR_VAR, home_directory

logger = logging.getLogger(__name__)

ACCOUNT_SHOW_ARGS = ("account", "show")
VERSION_ARGS = ("--version",)

CLI_NOT_FOUND = "Azure CLI not found"
CLI_NOT_AVAILABLE = "Azure CLI not available"
UNKNOWN_VERSION = "Unknown version"


@dataclass
class AuthDiagnosis:
    cli_available: bool
    logged_in: bool
    account_info: Any = field(default_factory=dict)
    error: str | None = None
    debug_info: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AzureCliReport:
    version_available: bool
    version_info: str
    account_available: bool
    account_info: Any = field(default_factory=dict)
    error: str | None = None
    debug_info: Dict[str, Any] = field(default_factory=dict)


def debug_info(env: Mapping[str, str], platform: Platform) -> Dict[str, Any]:
    """Environment facts worth showing when an auth check goes wrong."""
    return {
        "path": env.get("PATH"),
        "azure_config_dir": env.get(AZURE_CONFIG_DIR_VAR),
        "home": home_directory(env, platform),
        "platform": platform.value,
    }


def parse_account_info(stdout: str) -> Any:
    try:
        return json.loads(stdout)
    except json.JSONDecodeError:
        logger.debug("az account show returned non-JSON output")
        return {}


def _account_show(
    az_path: str,
    env: Mapping[str, str],
    timeout: float | None,
) -> tuple[ExecutionResult | None, str | None]:
    """Run `az account show`; return the result or a diagnosis of why not."""
    try:
        return run(az_path, ACCOUNT_SHOW_ARGS, env, timeout=timeout), None
    except SpawnError:
        return None, CLI_EXECUTION_FAILED
    except ExecutionError as exc:
        return None, str(exc)


def diagnose_auth(
    resolution: ToolResolution,
    env: Mapping[str, str],
    platform: Platform,
    *,
    timeout: float | None = None,
) -> AuthDiagnosis:
    info = debug_info(env, platform)
    if not resolution.available or not resolution.path:
        return AuthDiagnosis(
            cli_available=False,
            logged_in=False,
            error=CLI_NOT_FOUND,
            debug_info=info,
        )

    result, failure = _account_show(resolution.path, env, timeout)
    if result is None:
        return AuthDiagnosis(
            cli_available=True, logged_in=False, error=failure, debug_info=info
        )

    if result.succeeded:
        return AuthDiagnosis(
            cli_available=True,
            logged_in=True,
            account_info=parse_account_info(result.stdout),
            debug_info=info,
        )

    diagnosis = classify_auth_failure(result.stderr, result.stdout)
    logger.info("Azure auth check failed: %s", diagnosis)
    return AuthDiagnosis(
        cli_available=True, logged_in=False, error=diagnosis, debug_info=info
    )


def check_cli(
    az_path: str,
    env: Mapping[str, str],
    platform: Platform,
    *,
    timeout: float | None = None,
) -> AzureCliReport:
    """Report CLI version and account state.

    ``az_path`` may be a bare command name when discovery found nothing; the
    spawn failure is then reported as an unavailable CLI.
    """
    try:
        version = run(az_path, VERSION_ARGS, env, timeout=timeout)
    except ExecutionError as exc:
        logger.info("az --version could not run: %s", exc)
        version = None

    version_available = False
    version_info = CLI_NOT_AVAILABLE
    if version is not None and version.succeeded:
        version_available = True
        lines = version.stdout.splitlines()
        version_info = lines[0] if lines else UNKNOWN_VERSION

    result, failure = _account_show(az_path, env, timeout)
    account_available = result is not None and result.succeeded
    account_info: Any = {}
    error: str | None = None
    if result is None:
        error = failure
    elif result.succeeded:
        account_info = parse_account_info(result.stdout)
    else:
        error = classify_auth_failure(result.stderr, result.stdout)

    return AzureCliReport(
        version_available=version_available,
        version_info=version_info,
        account_available=account_available,
        account_info=account_info,
        error=error,
        debug_info=debug_info(env, platform),
    )
