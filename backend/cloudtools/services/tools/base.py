from __future__ import annotations

"""backend/cloudtools/services/tools/base.py

Shared types and the process runner for the wrapped command-line tools.

This module provides:

- Platform: the two platform families the tool layout differs between
- ToolDescriptor: static discovery policy for one known tool
- ToolResolution: outcome of a single discovery call
- ExecutionRequest / ExecutionResult: the contract for every invocation
- run_command: low-level helper that executes a request and captures output
- run: convenience wrapper taking path, args and env directly

Higher-level modules (registry, repl, azure) build on top of these helpers.

NOTE: Nothing here reads or writes ``os.environ``. Callers pass the child
environment explicitly (see ``environment.build_environment``).
"""

import enum
import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from cloudtools.errors import SpawnError, ToolTimeoutError

logger = logging.getLogger(__name__)


class Platform(str, enum.Enum):
    WINDOWS = "windows"
    UNIX = "unix"

    @property
    def path_separator(self) -> str:
        return ";" if self is Platform.WINDOWS else ":"

    @property
    def home_variable(self) -> str:
        return "USERPROFILE" if self is Platform.WINDOWS else "HOME"


def current_platform() -> Platform:
    """Return the platform family of the running interpreter."""
    return Platform.WINDOWS if os.name == "nt" else Platform.UNIX


@dataclass(frozen=True)
class ToolDescriptor:
    """Static discovery policy for a known tool.

    Candidate paths may contain a ``{home}`` placeholder; it is expanded at
    discovery time from the environment handed to the registry.
    """

    id: str
    display_name: str
    search_name: str
    candidate_paths: tuple[str, ...] = ()
    windows_candidate_paths: tuple[str, ...] = ()
    not_found_message: str = ""

    def paths_for(self, platform: Platform) -> tuple[str, ...]:
        if platform is Platform.WINDOWS:
            return self.windows_candidate_paths
        return self.candidate_paths


@dataclass
class ToolResolution:
    """Result of discovering a tool. Never cached."""

    name: str
    available: bool
    path: str | None = None
    error: str | None = None


@dataclass
class ExecutionRequest:
    executable_path: str
    arguments: List[str] = field(default_factory=list)
    environment: Dict[str, str] | None = None

    @property
    def command(self) -> list[str]:
        return [self.executable_path, *self.arguments]


@dataclass
class ExecutionResult:
    """Raw capture of one tool invocation."""

    stdout: str
    stderr: str
    succeeded: bool
    return_code: int | None = None


def run_command(
    request: ExecutionRequest,
    *,
    timeout: float | None = None,
    stdin_text: str | None = None,
) -> ExecutionResult:
    """Run a request to completion and capture stdout/stderr as text.

    A non-zero exit is returned as ``succeeded=False``; only a failure to
    launch the executable raises (``SpawnError``). With ``timeout`` the
    child is killed once the deadline passes and ``ToolTimeoutError`` is
    raised. When ``stdin_text`` is given it is written to the child's stdin,
    which is then closed.
    """
    cmd = request.command
    logger.debug("Spawning %s", cmd)
    try:
        proc = subprocess.run(
            cmd,
            input=stdin_text,
            stdin=subprocess.DEVNULL if stdin_text is None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
            env=dict(request.environment) if request.environment is not None else None,
        )
    except subprocess.TimeoutExpired as exc:
        logger.warning("%s timed out after %ss", request.executable_path, timeout)
        raise ToolTimeoutError(request.executable_path, timeout or 0) from exc
    except OSError as exc:
        logger.warning("Could not spawn %s: %s", request.executable_path, exc)
        raise SpawnError(request.executable_path, exc.strerror or str(exc)) from exc

    logger.debug("%s exited with %s", request.executable_path, proc.returncode)
    return ExecutionResult(
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        succeeded=proc.returncode == 0,
        return_code=proc.returncode,
    )


def run(
    path: str,
    args: Sequence[str],
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> ExecutionResult:
    """Run ``path`` with ``args`` in ``env``; see ``run_command``."""
    request = ExecutionRequest(
        executable_path=path,
        arguments=[str(a) for a in args],
        environment=dict(env) if env is not None else None,
    )
    return run_command(request, timeout=timeout)
