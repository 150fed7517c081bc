from __future__ import annotations

"""backend/cloudtools/config/settings.py

Application configuration using environment-driven settings.

This module centralizes:
- CORS configuration for the desktop UI
- Log level for the `cloudtools` logger
- Per-call deadlines for tool, REPL and HTTP passthrough invocations
- Optional per-tool path overrides ("configure the path in settings")
- Logical ids of the tools used for the REPL and the auth checks
"""
from functools import lru_cache
from typing import Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
  app_name: str = "cloud-tools-backend"
  environment: str = "development"
  log_level: str = "INFO"

  # CORS (Vite dev server and the packaged desktop webview)
  allowed_origins: List[str] = [
      "http://localhost:1420",
      "http://127.0.0.1:1420",
      "http://localhost:5173",
      "http://127.0.0.1:5173",
      "tauri://localhost",
  ]

  # Deadlines (seconds). None means the call may block indefinitely.
  tool_timeout_seconds: int | None = None
  repl_timeout_seconds: int | None = 30
  http_timeout_seconds: float = 30.0

  # tool id -> absolute path, checked before the built-in candidate paths
  tool_path_overrides: Dict[str, str] = {}

  azure_tool_id: str = "az"
  repl_tool_id: str = "ruchy"

  model_config = SettingsConfigDict(
      env_file=".env", env_file_encoding="utf-8", env_prefix="CLOUDTOOLS_"
  )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
