from __future__ import annotations

"""backend/cloudtools/services/diagnostics/error_classifier.py

Centralized classification of Azure tool output.

The Azure CLI and the resource finder report authentication problems as free
text on stderr. This module matches that text against known signatures and
produces messages a user can act on.

The classification is:
- deterministic (ordered tables, first match wins)
- text-based (substring matching, case-sensitive as the tools print it)
- tolerant (unrecognized output degrades to a generic diagnosis)

Adding a new signature means adding a row to one of the tables below.
"""

from typing import Optional

from cloudtools.services.tools.base import ExecutionResult

# (stderr marker, diagnosis) for `az account show` failures.
AUTH_FAILURE_PATTERNS: tuple[tuple[str, str], ...] = (
    (
        "Please run 'az login'",
        "User not authenticated. Please run 'az login' in your terminal.",
    ),
    (
        "No subscriptions found",
        "Authenticated but no subscriptions found. Please check your Azure account.",
    ),
    (
        "DefaultAzureCredential",
        "Authentication failed. Please ensure you are logged in with 'az login'.",
    ),
)

AUTH_ERROR_PREFIX = "Authentication error: "
UNEXPECTED_OUTPUT = "Unexpected output during authentication check."
UNKNOWN_AUTH_ERROR = "Unknown authentication error."
CLI_EXECUTION_FAILED = "Failed to execute Azure CLI command."

# stderr markers of a credential-chain failure inside the resource finder.
CREDENTIAL_FAILURE_MARKERS: tuple[str, ...] = (
    "DefaultAzureCredential",
    "failed to acquire a token",
)

CREDENTIAL_FAILURE_GUIDANCE = (
    "Azure authentication failed. Please ensure you are logged in with 'az login' "
    "and have the necessary permissions."
)


def _text(value: Optional[str]) -> str:
    return value or ""


def _contains_any(haystack: str, needles: tuple[str, ...]) -> bool:
    return any(n in haystack for n in needles)


def classify_auth_failure(stderr: Optional[str], stdout: Optional[str]) -> str:
    """Diagnose a failed `az account show` from its output.

    Never raises and never returns an empty string.
    """
    stderr = _text(stderr)
    stdout = _text(stdout)

    for marker, diagnosis in AUTH_FAILURE_PATTERNS:
        if marker in stderr:
            return diagnosis

    if stderr:
        return f"{AUTH_ERROR_PREFIX}{stderr}"
    if stdout:
        return UNEXPECTED_OUTPUT
    return UNKNOWN_AUTH_ERROR


def is_credential_failure(result: ExecutionResult) -> bool:
    return not result.succeeded and _contains_any(
        _text(result.stderr), CREDENTIAL_FAILURE_MARKERS
    )


def annotate_credential_failure(result: ExecutionResult) -> ExecutionResult:
    """Prefix a resource-finder credential failure with login guidance.

    Results that succeeded, or failed for another reason, are returned
    unchanged.
    """
    if not is_credential_failure(result):
        return result
    return ExecutionResult(
        stdout=result.stdout,
        stderr=f"{CREDENTIAL_FAILURE_GUIDANCE}\n\nError details:\n{result.stderr}",
        succeeded=False,
        return_code=result.return_code,
    )
