# backend/cloudtools/errors.py
from __future__ import annotations

"""
Exception hierarchy for tool invocation.

Only failures that prevent a tool from producing output are raised. A tool
that runs and exits non-zero is reported as data (``succeeded=False``) so
the UI can render the tool's own diagnostics.

Every message is meant to be shown to a user as-is: it names the tool and,
where possible, says how to fix the problem.
"""


class ToolInvocationError(Exception):
    """Base class for errors surfaced by the invocation subsystem."""

    status_code: int = 500


class UnknownToolError(ToolInvocationError):
    """The requested tool id is not in the registry."""

    status_code = 404

    def __init__(self, tool_id: str):
        self.tool_id = tool_id
        super().__init__(f"Unknown tool: {tool_id}")


class ToolUnavailableError(ToolInvocationError):
    """Discovery found no usable executable for the tool."""

    status_code = 404

    def __init__(self, tool_id: str, guidance: str | None = None):
        self.tool_id = tool_id
        self.guidance = guidance or f"{tool_id} not available"
        super().__init__(self.guidance)


class ExecutionError(ToolInvocationError):
    """A process-level failure: the program could not be run to completion."""

    status_code = 502


class SpawnError(ExecutionError):
    """The executable could not be launched (missing, not permitted, ...)."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to execute {executable}: {reason}")


class ToolTimeoutError(ExecutionError, TimeoutError):
    """The process exceeded its deadline and was killed."""

    status_code = 504

    def __init__(self, executable: str, timeout: float):
        self.executable = executable
        self.timeout = timeout
        super().__init__(
            f"{executable} did not finish within {timeout:g} seconds and was terminated."
        )


class HttpProxyError(ToolInvocationError):
    """The HTTP passthrough could not produce a JSON response."""

    status_code = 502
