import os
import sys
import textwrap
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cloudtools.config import Settings, get_settings
from cloudtools.services.tools.base import Platform

posix_only = pytest.mark.skipif(os.name == "nt", reason="uses shebang scripts")


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_script(tmp_path: Path):
    """Write an executable Python script standing in for a wrapped tool."""

    def _make(name: str, body: str) -> str:
        path = tmp_path / name
        path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body), encoding="utf-8")
        path.chmod(0o755)
        return str(path)

    return _make


@pytest.fixture
def base_env(tmp_path: Path) -> dict[str, str]:
    return {"PATH": os.environ.get("PATH", ""), "HOME": str(tmp_path)}


@pytest.fixture
def unix() -> Platform:
    return Platform.UNIX


@pytest.fixture
def settings_for():
    def _settings(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _settings


@pytest.fixture
def client() -> TestClient:
    from cloudtools.main import app

    return TestClient(app)
