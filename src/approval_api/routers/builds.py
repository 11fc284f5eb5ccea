"""Build registration, report and approval endpoints."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from fastapi import APIRouter, Request, Response

from src.approval_api.models import (
    ApprovalRequest,
    ApprovalResponse,
    BuildRegistration,
    QualityLineReportModel,
)
from src.quality_gate.build import BuildContext, FileLineSource, TextLineSource
from src.quality_gate.config import build_quality_line
from src.quality_gate.run import QualityLineRun
from src.shared.errors import NotFoundError, ValidationError
from src.shared.logging import build_id_var

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/builds", tags=["builds"])


def _build_context(body: BuildRegistration) -> BuildContext:
    if body.log_path and body.log_text is not None:
        raise ValidationError("Give either log_path or log_text, not both")
    log = None
    if body.log_path:
        log = FileLineSource(body.log_path)
    elif body.log_text is not None:
        log = TextLineSource(body.log_text)
    return BuildContext(
        build_id=body.build_id,
        result=body.build_result,
        log=log,
        workspace=Path(body.workspace),
    )


@router.post("", response_model=QualityLineReportModel, status_code=201)
async def register_build(body: BuildRegistration, request: Request) -> QualityLineReportModel:
    """Register a completed build and evaluate its quality line."""
    build_id_var.set(body.build_id)
    # Each build gets its own step instances, manual approvals included.
    quality_line = build_quality_line(
        request.app.state.quality_line_config, request.app.state.step_registry
    )
    run = request.app.state.runs.register(
        QualityLineRun(quality_line, _build_context(body))
    )
    report = await asyncio.to_thread(run.evaluate)
    return QualityLineReportModel.from_report(report)


@router.get("/{build_id}/report", response_model=QualityLineReportModel)
async def get_report(build_id: str, request: Request) -> QualityLineReportModel:
    """Return the latest report of a build."""
    build_id_var.set(build_id)
    run = request.app.state.runs.get(build_id)
    report = await asyncio.to_thread(run.latest_report)
    if report is None:
        raise NotFoundError(f"Build '{build_id}' has not been evaluated yet")
    return QualityLineReportModel.from_report(report)


@router.post("/{build_id}/evaluate", response_model=QualityLineReportModel)
async def evaluate_build(build_id: str, request: Request) -> QualityLineReportModel:
    """Run the quality line of a registered build again."""
    build_id_var.set(build_id)
    run = request.app.state.runs.get(build_id)
    report = await asyncio.to_thread(run.evaluate)
    return QualityLineReportModel.from_report(report)


@router.post("/{build_id}/approve", response_model=ApprovalResponse)
async def approve(build_id: str, body: ApprovalRequest, request: Request) -> ApprovalResponse:
    """Approve the pending manual step addressed by the token.

    A token that addresses nothing is not an error: the response says
    ``approved: false`` and nothing changes.
    """
    build_id_var.set(build_id)
    run = request.app.state.runs.get(build_id)
    outcome = await asyncio.to_thread(run.approve, body.token, body.approver)
    if outcome.report is None:
        return ApprovalResponse(approved=outcome.approved)
    return ApprovalResponse(
        approved=outcome.approved,
        result=outcome.report.result,
        report=QualityLineReportModel.from_report(outcome.report),
    )


@router.delete("/{build_id}", status_code=204)
async def forget_build(build_id: str, request: Request) -> Response:
    """Drop a build and its pending approvals from the service."""
    build_id_var.set(build_id)
    request.app.state.runs.remove(build_id)
    logger.info("Build %s removed", build_id)
    return Response(status_code=204)
