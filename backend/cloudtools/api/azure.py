# backend/cloudtools/api/azure.py
from __future__ import annotations

from fastapi import APIRouter

from cloudtools import schemas
from cloudtools.services import invocation

router = APIRouter(prefix="/azure", tags=["azure"])


@router.get("/auth", response_model=schemas.AuthDiagnosisRead)
def auth_status() -> schemas.AuthDiagnosisRead:
    diagnosis = invocation.get_auth_diagnosis()
    return schemas.AuthDiagnosisRead.model_validate(diagnosis)


@router.get("/cli", response_model=schemas.AzureCliReportRead)
def cli_report() -> schemas.AzureCliReportRead:
    report = invocation.check_azure_cli()
    return schemas.AzureCliReportRead.model_validate(report)
