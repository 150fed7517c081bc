# backend/cloudtools/api/tools.py
from __future__ import annotations

from fastapi import APIRouter

from cloudtools import schemas
from cloudtools.services import invocation
from cloudtools.services.tools.registry import list_descriptors

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=list[schemas.ToolInfo])
def list_tools() -> list[schemas.ToolInfo]:
    """Return the tools this backend knows how to find and run."""
    return [
        schemas.ToolInfo(id=d.id, name=d.display_name, search_name=d.search_name)
        for d in list_descriptors()
    ]


@router.get("/{tool_id}", response_model=schemas.ToolResolutionRead)
def discover_tool(tool_id: str) -> schemas.ToolResolutionRead:
    """
    Locate a tool on this machine.

    Discovery runs on every request; a tool installed while the app is open
    shows up on the next call.
    """
    resolution = invocation.discover_tool(tool_id)
    return schemas.ToolResolutionRead.model_validate(resolution)


@router.post("/{tool_id}/run", response_model=schemas.ExecutionResultRead)
def run_tool(tool_id: str, payload: schemas.ToolRunRequest) -> schemas.ExecutionResultRead:
    """
    Run a tool with the given arguments.

    A tool that exits non-zero still yields 200 with `success: false`;
    its stdout/stderr are what the UI shows.
    """
    result = invocation.run_tool(tool_id, payload.args)
    return schemas.ExecutionResultRead.model_validate(result)
