"""Request and response schemas of the approval service."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from src.quality_gate.report import QualityLineReport
from src.quality_gate.results import Result


class StepReportModel(BaseModel):
    name: str
    kind: str
    description: str
    result: Result
    reason: str = ""


class GateReportModel(BaseModel):
    name: str
    result: Result
    steps: list[StepReportModel] = Field(default_factory=list)


class QualityLineReportModel(BaseModel):
    name: str
    build_id: str
    result: Result
    gates: list[GateReportModel] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: QualityLineReport) -> "QualityLineReportModel":
        return cls.model_validate(report.to_dict())


class BuildRegistration(BaseModel):
    """A completed build handed over by the build system."""
    build_id: str = Field(min_length=1)
    build_result: Result = Result.SUCCESS
    log_path: Optional[str] = None
    log_text: Optional[str] = None
    workspace: str = "."


class ApprovalRequest(BaseModel):
    token: str = Field(min_length=1)
    approver: Optional[str] = None


class ApprovalResponse(BaseModel):
    approved: bool
    result: Optional[Result] = None
    report: Optional[QualityLineReportModel] = None
