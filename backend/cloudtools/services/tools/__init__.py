from __future__ import annotations

"""backend/cloudtools/services/tools/__init__.py

Tool invocation building blocks.

- base: shared types and the process runner
- paths: `where` / `which` lookup and candidate existence checks
- registry: the known tools and `discover`
- environment: child-process environment shaping
- repl: the one-shot Ruchy REPL driver
"""

from cloudtools.services.tools.base import (  # noqa: F401
    ExecutionRequest,
    ExecutionResult,
    Platform,
    ToolDescriptor,
    ToolResolution,
    current_platform,
    run,
    run_command,
)
from cloudtools.services.tools.environment import build_environment  # noqa: F401
from cloudtools.services.tools.registry import discover, get_descriptor  # noqa: F401
from cloudtools.services.tools.repl import filter_repl_output, run_statement  # noqa: F401
