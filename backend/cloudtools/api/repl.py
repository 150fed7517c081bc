# backend/cloudtools/api/repl.py
from __future__ import annotations

from fastapi import APIRouter

from cloudtools import schemas
from cloudtools.services import invocation

router = APIRouter(prefix="/repl", tags=["repl"])


@router.post("", response_model=schemas.ExecutionResultRead)
def run_repl_statement(payload: schemas.ReplRequest) -> schemas.ExecutionResultRead:
    """
    Evaluate one statement in a fresh Ruchy REPL.

    Each request is its own interpreter; definitions do not carry over.
    """
    result = invocation.run_repl_statement(payload.statement)
    return schemas.ExecutionResultRead.model_validate(result)
