import pytest

from cloudtools.services.diagnostics.error_classifier import (
    annotate_credential_failure,
    classify_auth_failure,
)
from cloudtools.services.tools.base import ExecutionResult


def test_not_logged_in() -> None:
    stderr = "ERROR: Please run 'az login' to setup account.\n"

    assert classify_auth_failure(stderr, "") == (
        "User not authenticated. Please run 'az login' in your terminal."
    )


def test_no_subscriptions() -> None:
    assert classify_auth_failure("No subscriptions found for user@example.com.", "") == (
        "Authenticated but no subscriptions found. Please check your Azure account."
    )


def test_credential_chain_failure() -> None:
    assert classify_auth_failure("DefaultAzureCredential failed to retrieve a token", "") == (
        "Authentication failed. Please ensure you are logged in with 'az login'."
    )


def test_first_matching_pattern_wins() -> None:
    stderr = "No subscriptions found. Please run 'az login' to setup account."

    assert classify_auth_failure(stderr, "").startswith("User not authenticated.")


def test_unrecognized_stderr_is_echoed() -> None:
    assert classify_auth_failure("network unreachable", "") == (
        "Authentication error: network unreachable"
    )


def test_stdout_only_is_unexpected_output() -> None:
    assert classify_auth_failure("", "{}") == "Unexpected output during authentication check."


@pytest.mark.parametrize("stderr, stdout", [("", ""), (None, None)])
def test_no_output_is_unknown_error(stderr, stdout) -> None:
    assert classify_auth_failure(stderr, stdout) == "Unknown authentication error."


@pytest.mark.parametrize(
    "stderr",
    [
        "DefaultAzureCredential: EnvironmentCredential authentication unavailable",
        "error: failed to acquire a token for scope management.azure.com",
    ],
)
def test_credential_failure_gets_login_guidance(stderr: str) -> None:
    result = ExecutionResult(stdout="partial", stderr=stderr, succeeded=False, return_code=1)

    annotated = annotate_credential_failure(result)

    assert annotated.succeeded is False
    assert annotated.stdout == "partial"
    assert annotated.stderr.startswith("Azure authentication failed. Please ensure")
    assert annotated.stderr.endswith(f"Error details:\n{stderr}")


def test_other_failures_pass_through() -> None:
    result = ExecutionResult(stdout="", stderr="invalid flag --foo", succeeded=False)

    assert annotate_credential_failure(result) is result


def test_success_passes_through_even_with_marker() -> None:
    result = ExecutionResult(stdout="[]", stderr="DefaultAzureCredential warning", succeeded=True)

    assert annotate_credential_failure(result) is result
