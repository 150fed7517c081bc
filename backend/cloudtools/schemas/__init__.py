# backend/cloudtools/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for request/response models.

This module is the API contract layer between the desktop UI and the
service layer. Response models mirror the service dataclasses and are
built from them with ``from_attributes``.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ---------- Tool Schemas ----------


class ToolInfo(BaseModel):
    id: str
    name: str
    search_name: str


class ToolResolutionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    available: bool
    path: Optional[str] = None
    error: Optional[str] = None


class ToolRunRequest(BaseModel):
    args: List[str] = Field(default_factory=list)


class ExecutionResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    stdout: str
    stderr: str
    success: bool = Field(validation_alias=AliasChoices("succeeded", "success"))
    return_code: Optional[int] = None


# ---------- REPL Schemas ----------


class ReplRequest(BaseModel):
    statement: str


# ---------- Azure Schemas ----------


class AuthDiagnosisRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    azure_cli_available: bool = Field(
        validation_alias=AliasChoices("cli_available", "azure_cli_available")
    )
    is_logged_in: bool = Field(validation_alias=AliasChoices("logged_in", "is_logged_in"))
    account_info: Any = None
    error: Optional[str] = None
    debug_info: Dict[str, Any] = Field(default_factory=dict)


class AzureCliReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    version_available: bool
    version_info: str
    account_available: bool
    account_info: Any = None
    error: Optional[str] = None
    debug_info: Dict[str, Any] = Field(default_factory=dict)


# ---------- HTTP Passthrough Schemas ----------


class HttpProxyRequest(BaseModel):
    url: str
    method: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None
