import os
import subprocess

import pytest

from cloudtools.errors import ExecutionError, UnknownToolError
from cloudtools.services.tools import paths, registry
from cloudtools.services.tools.base import Platform
from tests.conftest import posix_only


@pytest.fixture
def nothing_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "path_exists", lambda path: False)
    monkeypatch.setattr(paths, "resolve_by_search", lambda name, platform=None, env=None: None)


def test_discover_unknown_tool_raises() -> None:
    with pytest.raises(UnknownToolError, match="Unknown tool: terraform"):
        registry.discover("terraform", platform=Platform.UNIX, env={})


def test_discover_prefers_first_existing_candidate(monkeypatch: pytest.MonkeyPatch) -> None:
    existing = {"/opt/homebrew/bin/az", "/usr/local/bin/az"}
    monkeypatch.setattr(paths, "path_exists", lambda path: path in existing)

    def _no_search(*args, **kwargs):
        raise AssertionError("search should not run when a candidate exists")

    monkeypatch.setattr(paths, "resolve_by_search", _no_search)

    resolution = registry.discover("az", platform=Platform.UNIX, env={})

    assert resolution.available is True
    assert resolution.path == "/usr/local/bin/az"
    assert resolution.error is None


def test_discover_only_checks_platform_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    checked: list[str] = []

    def _exists(path: str) -> bool:
        checked.append(path)
        return False

    monkeypatch.setattr(paths, "path_exists", _exists)
    monkeypatch.setattr(paths, "resolve_by_search", lambda name, platform=None, env=None: None)

    registry.discover("azure-resource-finder", platform=Platform.WINDOWS, env={})

    assert checked == list(registry.AZURE_RESOURCE_FINDER.windows_candidate_paths)


def test_discover_expands_home_in_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "path_exists", lambda path: path == "/home/dev/.cargo/bin/ruchy")

    resolution = registry.discover("ruchy", platform=Platform.UNIX, env={"HOME": "/home/dev"})

    assert resolution.path == "/home/dev/.cargo/bin/ruchy"


def test_discover_skips_home_candidates_without_home(monkeypatch: pytest.MonkeyPatch) -> None:
    checked: list[str] = []
    monkeypatch.setattr(paths, "path_exists", lambda path: checked.append(path) or False)
    monkeypatch.setattr(paths, "resolve_by_search", lambda name, platform=None, env=None: None)

    registry.discover("ruchy", platform=Platform.UNIX, env={})

    assert not any("{home}" in p for p in checked)
    assert checked == ["/usr/local/bin/ruchy", "/opt/homebrew/bin/ruchy"]


def test_discover_falls_back_to_search(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "path_exists", lambda path: False)
    monkeypatch.setattr(
        paths,
        "resolve_by_search",
        lambda name, platform=None, env=None: f"/home/dev/bin/{name}",
    )

    resolution = registry.discover("azure-resource-finder", platform=Platform.UNIX, env={})

    assert resolution.available is True
    assert resolution.path == "/home/dev/bin/azure-resource-finder"


@pytest.mark.parametrize("tool_id", ["azure-resource-finder", "ruchy", "az"])
def test_discover_not_found_carries_guidance(nothing_installed, tool_id: str) -> None:
    resolution = registry.discover(tool_id, platform=Platform.UNIX, env={})

    assert resolution.available is False
    assert resolution.path is None
    assert resolution.error == registry.get_descriptor(tool_id).not_found_message
    assert "Please install" in resolution.error


def test_discover_reports_search_spawn_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "path_exists", lambda path: False)

    def _broken(name, platform=None, env=None):
        raise ExecutionError("Failed to execute which: [Errno 2] No such file or directory")

    monkeypatch.setattr(paths, "resolve_by_search", _broken)

    resolution = registry.discover("az", platform=Platform.UNIX, env={})

    assert resolution.available is False
    assert resolution.error.startswith("Failed to search for az: ")


def test_discover_uses_configured_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "path_exists", lambda path: path in {"/custom/az", "/usr/local/bin/az"})

    resolution = registry.discover(
        "az", platform=Platform.UNIX, env={}, overrides={"az": "/custom/az"}
    )

    assert resolution.path == "/custom/az"


def test_discover_ignores_missing_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "path_exists", lambda path: path == "/usr/local/bin/az")

    resolution = registry.discover(
        "az", platform=Platform.UNIX, env={}, overrides={"az": "/gone/az"}
    )

    assert resolution.path == "/usr/local/bin/az"


def test_resolve_by_search_takes_first_non_empty_line(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[list[str]] = []

    def _run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(
            cmd, 0, stdout="\nC:\\tools\\az.cmd\r\nC:\\other\\az.cmd\r\n", stderr=""
        )

    monkeypatch.setattr(paths.subprocess, "run", _run)

    assert paths.resolve_by_search("az", Platform.WINDOWS) == "C:\\tools\\az.cmd"
    assert calls == [["where", "az"]]


def test_resolve_by_search_returns_none_when_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        paths.subprocess,
        "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 1, stdout="", stderr=""),
    )

    assert paths.resolve_by_search("ruchy", Platform.UNIX) is None


def test_resolve_by_search_returns_none_on_empty_output(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        paths.subprocess,
        "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0, stdout="  \n", stderr=""),
    )

    assert paths.resolve_by_search("ruchy", Platform.UNIX) is None


def test_resolve_by_search_raises_when_utility_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    def _run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(paths.subprocess, "run", _run)

    with pytest.raises(ExecutionError, match="Failed to execute which"):
        paths.resolve_by_search("az", Platform.UNIX)


def test_path_exists_is_existence_only(tmp_path) -> None:
    not_executable = tmp_path / "az"
    not_executable.write_text("", encoding="utf-8")

    assert paths.path_exists(str(not_executable)) is True
    assert paths.path_exists(str(tmp_path / "missing")) is False


@posix_only
def test_discover_searches_the_injected_path(make_script, tmp_path, monkeypatch) -> None:
    (tmp_path / "bin").mkdir()
    finder = make_script("bin/azure-resource-finder", "print('ok')\n")
    monkeypatch.setattr(paths, "path_exists", lambda path: False)
    env = {"PATH": f"{tmp_path / 'bin'}:{os.environ.get('PATH', '')}", "HOME": str(tmp_path)}

    resolution = registry.discover("azure-resource-finder", platform=Platform.UNIX, env=env)

    assert resolution.available is True
    assert resolution.path == finder


@posix_only
def test_discover_does_not_search_the_host_path(make_script, tmp_path, monkeypatch) -> None:
    original_path = os.environ.get("PATH", "")
    (tmp_path / "host-bin").mkdir()
    make_script("host-bin/azure-resource-finder", "print('ok')\n")
    monkeypatch.setenv("PATH", f"{tmp_path / 'host-bin'}:{original_path}")
    monkeypatch.setattr(paths, "path_exists", lambda path: False)
    env = {"PATH": original_path, "HOME": str(tmp_path)}

    resolution = registry.discover("azure-resource-finder", platform=Platform.UNIX, env=env)

    assert resolution.available is False
    assert resolution.error == registry.AZURE_RESOURCE_FINDER.not_found_message
