from __future__ import annotations

"""backend/cloudtools/services/tools/registry.py

Known tools and their discovery.

`discover` is deliberately uncached: users install tools while the desktop
app is open, and a lookup is cheap next to the subprocess that follows it.

Resolution order, first match wins:
1. configured override path (Settings.tool_path_overrides), if it exists
2. the tool's platform-specific candidate paths, in order
3. the OS search utility (`where` / `which`)
Otherwise the resolution carries the tool's install guidance as `error`.
"""

import logging
from typing import Dict, Iterator, Mapping

from cloudtools.errors import ExecutionError, UnknownToolError
from cloudtools.services.tools import paths
from cloudtools.services.tools.base import (
    Platform,
    ToolDescriptor,
    ToolResolution,
    current_platform,
)
from cloudtools.services.tools.environment import home_directory

logger = logging.getLogger(__name__)

AZURE_RESOURCE_FINDER = ToolDescriptor(
    id="azure-resource-finder",
    display_name="Azure Resource Finder",
    search_name="azure-resource-finder",
    candidate_paths=(
        "/usr/local/bin/azure-resource-finder",
        "/opt/homebrew/bin/azure-resource-finder",
    ),
    windows_candidate_paths=(
        "C:\\Program Files\\azure-resource-finder\\azure-resource-finder.exe",
        "C:\\azure-resource-finder\\azure-resource-finder.exe",
    ),
    not_found_message=(
        "Azure Resource Finder not found. Please install it or configure the path in settings."
    ),
)

RUCHY = ToolDescriptor(
    id="ruchy",
    display_name="Ruchy",
    search_name="ruchy",
    candidate_paths=(
        "{home}/.cargo/bin/ruchy",
        "/usr/local/bin/ruchy",
        "/opt/homebrew/bin/ruchy",
    ),
    windows_candidate_paths=(
        "{home}\\.cargo\\bin\\ruchy.exe",
        "C:\\cargo\\bin\\ruchy.exe",
    ),
    not_found_message=(
        "Ruchy not found. Please install it with 'cargo install ruchy' "
        "or configure the path in settings."
    ),
)

AZURE_CLI = ToolDescriptor(
    id="az",
    display_name="Azure CLI",
    search_name="az",
    candidate_paths=(
        "/usr/local/bin/az",
        "/opt/homebrew/bin/az",
    ),
    windows_candidate_paths=(
        "C:\\Program Files (x86)\\Microsoft SDKs\\Azure\\CLI2\\wbin\\az.cmd",
        "C:\\Program Files\\Microsoft SDKs\\Azure\\CLI2\\wbin\\az.cmd",
    ),
    not_found_message=(
        "Azure CLI not found. Please install it from "
        "https://docs.microsoft.com/en-us/cli/azure/install-azure-cli"
    ),
)

TOOLS: Dict[str, ToolDescriptor] = {
    tool.id: tool for tool in (AZURE_RESOURCE_FINDER, RUCHY, AZURE_CLI)
}


def get_descriptor(tool_id: str) -> ToolDescriptor:
    try:
        return TOOLS[tool_id]
    except KeyError:
        raise UnknownToolError(tool_id) from None


def list_descriptors() -> list[ToolDescriptor]:
    return list(TOOLS.values())


def expand_candidates(
    descriptor: ToolDescriptor,
    platform: Platform,
    env: Mapping[str, str],
) -> Iterator[str]:
    """Yield the descriptor's candidate paths with ``{home}`` filled in.

    Entries needing a home directory are skipped when none is known.
    """
    home = home_directory(env, platform)
    for candidate in descriptor.paths_for(platform):
        if "{home}" in candidate:
            if not home:
                continue
            candidate = candidate.replace("{home}", home)
        yield candidate


def discover(
    tool_id: str,
    *,
    env: Mapping[str, str],
    platform: Platform | None = None,
    overrides: Mapping[str, str] | None = None,
) -> ToolResolution:
    """Locate ``tool_id`` and report where (or why not).

    ``env`` is the environment the tool will run in; its home directory
    fills candidate templates and its PATH is what the search utility scans.
    """
    descriptor = get_descriptor(tool_id)
    platform = platform or current_platform()

    override = (overrides or {}).get(tool_id)
    if override and paths.path_exists(override):
        logger.info("Resolved %s from configured path %s", tool_id, override)
        return ToolResolution(name=tool_id, available=True, path=override)

    for candidate in expand_candidates(descriptor, platform, env):
        if paths.path_exists(candidate):
            logger.info("Resolved %s at %s", tool_id, candidate)
            return ToolResolution(name=tool_id, available=True, path=candidate)

    try:
        found = paths.resolve_by_search(descriptor.search_name, platform, env=env)
    except ExecutionError as exc:
        logger.warning("Search for %s failed: %s", descriptor.search_name, exc)
        return ToolResolution(
            name=tool_id,
            available=False,
            error=f"Failed to search for {descriptor.search_name}: {exc}",
        )

    if found:
        logger.info("Resolved %s on PATH at %s", tool_id, found)
        return ToolResolution(name=tool_id, available=True, path=found)

    logger.info("%s not found", tool_id)
    return ToolResolution(name=tool_id, available=False, error=descriptor.not_found_message)
