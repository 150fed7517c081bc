from __future__ import annotations

"""backend/cloudtools/services/tools/repl.py

One-shot driver for the Ruchy REPL.

Each call is its own interpreter process: the statement is written to the
REPL's stdin followed by `:quit`, stdin is closed, and the combined output
is filtered down to the statement's result. Nothing persists between calls,
so a variable defined in one call is gone in the next.

The REPL reports the value of a `return` as an error line:

    Error: return: 42

Lines with that prefix are results, not failures. Every other `Error:`
line is a genuine error and decides the outcome when it comes first.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from cloudtools.services.tools.base import (
    ExecutionRequest,
    ExecutionResult,
    run_command,
)

logger = logging.getLogger(__name__)

REPL_SUBCOMMAND = "repl"
QUIT_DIRECTIVE = ":quit"
PROMPT_MARKER = "ruchy>"
RETURN_SENTINEL = "Error: return:"
ERROR_PREFIX = "Error:"

# Substrings identifying banner lines printed around every session.
BANNER_MARKERS: tuple[str, ...] = (
    "Welcome to Ruchy REPL",
    "Type :help",
    "Goodbye!",
)


@dataclass
class REPLExchange:
    """One statement and everything the REPL printed while handling it."""

    statement: str
    raw_output: str = ""

    @property
    def stdin_text(self) -> str:
        return f"{self.statement}\n{QUIT_DIRECTIVE}\n"


def _is_noise(line: str) -> bool:
    if not line.strip():
        return True
    if line.startswith(PROMPT_MARKER):
        return True
    return any(marker in line for marker in BANNER_MARKERS)


def filter_repl_output(raw: str) -> tuple[str, bool]:
    """Strip REPL noise from ``raw`` and decide whether the statement failed.

    Returns the cleaned text and a success flag. The flag is False only
    when the cleaned text starts with ``Error:`` and that text is not a
    rewritten return value.
    """
    kept: list[str] = []
    first_from_sentinel: bool | None = None

    for line in raw.splitlines():
        if _is_noise(line):
            continue
        from_sentinel = line.startswith(RETURN_SENTINEL)
        value = line[len(RETURN_SENTINEL):].strip() if from_sentinel else line
        if first_from_sentinel is None and value.strip():
            first_from_sentinel = from_sentinel
        kept.append(value)

    text = "\n".join(kept).strip()
    return text, bool(first_from_sentinel) or not text.startswith(ERROR_PREFIX)


def run_statement(
    tool_path: str,
    statement: str,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> ExecutionResult:
    """Evaluate ``statement`` in a fresh REPL process at ``tool_path``."""
    exchange = REPLExchange(statement=statement)
    request = ExecutionRequest(
        executable_path=tool_path,
        arguments=[REPL_SUBCOMMAND],
        environment=dict(env) if env is not None else None,
    )
    raw = run_command(request, timeout=timeout, stdin_text=exchange.stdin_text)

    # The REPL prints results on either stream.
    exchange.raw_output = f"{raw.stdout}{raw.stderr}"
    text, succeeded = filter_repl_output(exchange.raw_output)
    logger.debug("REPL statement %r -> succeeded=%s", statement, succeeded)

    return ExecutionResult(
        stdout=text,
        stderr="" if succeeded else raw.stderr,
        succeeded=succeeded,
        return_code=raw.return_code,
    )
