"""Document instance API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from docflow.application.dtos.approval import ApprovalDecisionResult
from docflow.application.dtos.document import (
    DocumentCreate,
    DocumentDetailResult,
    DocumentUpdate,
)
from docflow.schemas.document_type import DocumentTypeResponse


class DocumentCreateRequest(BaseModel):
    """Request body for creating a document. Keys of data and lines are field keys."""

    data: dict[str, Any] = Field(default_factory=dict)
    lines: list[dict[str, Any]] | None = None
    project_id: str | None = None
    warehouse_id: str | None = None

    def to_dto(self) -> DocumentCreate:
        return DocumentCreate(
            data=self.data,
            lines=self.lines,
            project_id=self.project_id,
            warehouse_id=self.warehouse_id,
        )


class DocumentUpdateRequest(BaseModel):
    """Request body for PATCH. Supplied lines replace all existing lines."""

    data: dict[str, Any] | None = None
    lines: list[dict[str, Any]] | None = None
    project_id: str | None = None
    warehouse_id: str | None = None

    def to_dto(self) -> DocumentUpdate:
        return DocumentUpdate(
            data=self.data,
            lines=self.lines,
            project_id=self.project_id,
            warehouse_id=self.warehouse_id,
        )


class TransitionRequest(BaseModel):
    """Request body for a status transition."""

    to_status: str = Field(..., min_length=1, max_length=100)
    comment: str | None = Field(default=None, max_length=2000)


class ApprovalDecisionRequest(BaseModel):
    """Request body for approve/reject."""

    notes: str | None = Field(default=None, max_length=2000)


class DocumentLineResponse(BaseModel):
    id: str
    line_number: int
    data: dict[str, Any]

    model_config = ConfigDict(from_attributes=True)


class DocumentResponse(BaseModel):
    """Document header with lines ordered by line_number."""

    id: str
    document_type_id: str
    document_number: str
    status: str
    data: dict[str, Any]
    lines: list[DocumentLineResponse]
    project_id: str | None
    warehouse_id: str | None
    created_by: str | None
    updated_by: str | None
    version: int
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class DocumentListResponse(BaseModel):
    """Page of documents (newest first)."""

    items: list[DocumentResponse]
    total: int


class HistoryEntryResponse(BaseModel):
    id: str
    document_id: str
    from_status: str | None
    to_status: str
    performed_by_id: str | None
    comment: str | None
    performed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApprovalStepResponse(BaseModel):
    id: str
    document_type_tag: str
    document_id: str
    level: int
    approver_role: str
    status: str
    approver_id: str | None
    notes: str | None
    decided_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class DocumentDetailResponse(DocumentResponse):
    """Document with its type, history (newest first) and approval steps."""

    document_type: DocumentTypeResponse
    history: list[HistoryEntryResponse]
    approval_steps: list[ApprovalStepResponse]

    @classmethod
    def from_result(cls, detail: DocumentDetailResult) -> "DocumentDetailResponse":
        base = DocumentResponse.model_validate(detail.document)
        return cls(
            **base.model_dump(),
            document_type=DocumentTypeResponse.from_result(detail.document_type),
            history=[HistoryEntryResponse.model_validate(h) for h in detail.history],
            approval_steps=[
                ApprovalStepResponse.model_validate(s) for s in detail.approval_steps
            ],
        )


class ApprovalDecisionResponse(BaseModel):
    """Outcome of an approve or reject call."""

    document_id: str
    level: int
    approver_role: str
    decision: str
    all_approved: bool
    rejected: bool
    remaining_levels: int
    steps: list[ApprovalStepResponse]

    @classmethod
    def from_result(cls, r: ApprovalDecisionResult) -> "ApprovalDecisionResponse":
        return cls(
            document_id=r.document_id,
            level=r.level,
            approver_role=r.approver_role,
            decision=r.decision.value,
            all_approved=r.all_approved,
            rejected=r.rejected,
            remaining_levels=r.remaining_levels,
            steps=[ApprovalStepResponse.model_validate(s) for s in r.steps],
        )
