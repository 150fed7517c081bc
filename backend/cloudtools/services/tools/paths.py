from __future__ import annotations

"""backend/cloudtools/services/tools/paths.py

Executable lookup primitives.

- resolve_by_search: ask the OS search utility (`where` / `which`)
- path_exists: literal existence check for a candidate path

`path_exists` does not check the execute bit; a candidate that exists but
cannot be run surfaces later as a SpawnError from the process runner.
"""

import logging
import subprocess
from pathlib import Path
from typing import Mapping

from cloudtools.errors import ExecutionError
from cloudtools.services.tools.base import Platform, current_platform

logger = logging.getLogger(__name__)


def search_utility(platform: Platform) -> str:
    return "where" if platform is Platform.WINDOWS else "which"


def resolve_by_search(
    name: str,
    platform: Platform | None = None,
    env: Mapping[str, str] | None = None,
) -> str | None:
    """Return the first path the OS search utility reports for ``name``.

    Returns None when the search runs but finds nothing. Raises
    ExecutionError only when the search utility itself cannot be spawned.
    """
    command = search_utility(platform or current_platform())
    try:
        proc = subprocess.run(
            [command, name],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            env=dict(env) if env is not None else None,
        )
    except OSError as exc:
        raise ExecutionError(f"Failed to execute {command}: {exc}") from exc

    if proc.returncode != 0:
        return None

    # `where` lists every match, one per line
    for line in (proc.stdout or "").splitlines():
        line = line.strip()
        if line:
            logger.debug("%s %s -> %s", command, name, line)
            return line
    return None


def path_exists(path: str) -> bool:
    return Path(path).exists()
