from __future__ import annotations

"""backend/cloudtools/services/tools/environment.py

Child-process environment shaping.

`build_environment` takes the caller's environment as an explicit mapping
and returns a new dict:

- PATH extended with well-known install directories (package-manager
  prefixes on macOS/Linux, the Azure CLI `wbin` folders on Windows)
- AZURE_CONFIG_DIR pointed at `{home}/.azure` when a home directory is known

The input mapping is never modified and `os.environ` is never read, so the
result depends only on its arguments. Applying it to its own output yields
the same mapping.
"""

from typing import Dict, Mapping

from cloudtools.services.tools.base import Platform

UNIX_BIN_DIRS: tuple[str, ...] = (
    "/opt/homebrew/bin",
    "/opt/homebrew/sbin",
    "/usr/local/bin",
    "/usr/local/sbin",
)

WINDOWS_BIN_DIRS: tuple[str, ...] = (
    "C:\\Program Files (x86)\\Microsoft SDKs\\Azure\\CLI2\\wbin",
    "C:\\Program Files\\Microsoft SDKs\\Azure\\CLI2\\wbin",
)

AZURE_CONFIG_DIR_VAR = "AZURE_CONFIG_DIR"
AZURE_CONFIG_DIR_NAME = ".azure"


def well_known_bin_dirs(platform: Platform) -> tuple[str, ...]:
    return WINDOWS_BIN_DIRS if platform is Platform.WINDOWS else UNIX_BIN_DIRS


def home_directory(env: Mapping[str, str], platform: Platform) -> str | None:
    """Return the home directory recorded in ``env``, if any."""
    home = env.get(platform.home_variable)
    return home or None


def azure_config_dir(home: str) -> str:
    return f"{home}/{AZURE_CONFIG_DIR_NAME}"


def extend_path(path_value: str, directories: tuple[str, ...], separator: str) -> str:
    """Append each directory that is not already present in ``path_value``.

    Presence is a substring test, matching how the PATH is inspected by the
    tools themselves; it keeps repeated application from growing the value.
    """
    new_path = path_value
    for directory in directories:
        if directory in new_path:
            continue
        if new_path:
            new_path += separator
        new_path += directory
    return new_path


def build_environment(base: Mapping[str, str], platform: Platform) -> Dict[str, str]:
    """Return a copy of ``base`` shaped for running the wrapped tools."""
    env: Dict[str, str] = dict(base)

    env["PATH"] = extend_path(
        env.get("PATH", ""),
        well_known_bin_dirs(platform),
        platform.path_separator,
    )

    home = home_directory(env, platform)
    if home:
        config_dir = azure_config_dir(home)
        if env.get(AZURE_CONFIG_DIR_VAR) != config_dir:
            env[AZURE_CONFIG_DIR_VAR] = config_dir

    return env
