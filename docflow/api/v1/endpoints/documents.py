"""Document instance endpoints: CRUD, transitions and approvals per type code.

Writes return the document version in the ETag header; send it back as
If-Match to have stale updates and transitions rejected.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from docflow.api.v1.dependencies import (
    get_actor_id,
    get_document_lifecycle_service,
    get_document_lifecycle_service_for_write,
    get_expected_version,
)
from docflow.application.dtos.document import DocumentFilters
from docflow.application.use_cases import DocumentLifecycleService
from docflow.core.limiter import limit_writes
from docflow.schemas.document import (
    ApprovalDecisionRequest,
    ApprovalDecisionResponse,
    ApprovalStepResponse,
    DocumentCreateRequest,
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdateRequest,
    HistoryEntryResponse,
    TransitionRequest,
)

router = APIRouter()


def _set_etag(response: Response, version: int) -> None:
    response.headers["ETag"] = f'"{version}"'


@router.get("/{type_code}", response_model=DocumentListResponse)
async def list_documents(
    type_code: str,
    service: Annotated[DocumentLifecycleService, Depends(get_document_lifecycle_service)],
    status: str | None = Query(None, max_length=100),
    project_id: str | None = Query(None),
    warehouse_id: str | None = Query(None),
    search: str | None = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List documents of a type, newest first. search matches the document number."""
    page = await service.list_documents(
        type_code,
        DocumentFilters(
            status=status, project_id=project_id, warehouse_id=warehouse_id, search=search
        ),
        skip=skip,
        limit=limit,
    )
    return DocumentListResponse(
        items=[DocumentResponse.model_validate(d) for d in page.items],
        total=page.total,
    )


@router.post("/{type_code}", response_model=DocumentResponse, status_code=201)
@limit_writes
async def create_document(
    request: Request,
    response: Response,
    type_code: str,
    body: DocumentCreateRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    service: Annotated[
        DocumentLifecycleService, Depends(get_document_lifecycle_service_for_write)
    ],
):
    """Validate, number and create a document in the type's initial status."""
    created = await service.create_document(type_code, body.to_dto(), actor_id)
    _set_etag(response, created.version)
    return DocumentResponse.model_validate(created)


@router.get("/{type_code}/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    response: Response,
    type_code: str,
    document_id: str,
    service: Annotated[DocumentLifecycleService, Depends(get_document_lifecycle_service)],
):
    """Document with lines, type definition, history and approval steps."""
    detail = await service.get_document(document_id, type_code)
    _set_etag(response, detail.document.version)
    return DocumentDetailResponse.from_result(detail)


@router.patch("/{type_code}/{document_id}", response_model=DocumentResponse)
@limit_writes
async def update_document(
    request: Request,
    response: Response,
    type_code: str,
    document_id: str,
    body: DocumentUpdateRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    expected_version: Annotated[int | None, Depends(get_expected_version)],
    service: Annotated[
        DocumentLifecycleService, Depends(get_document_lifecycle_service_for_write)
    ],
):
    """Update header data and/or replace lines while the status is editable."""
    result = await service.update_document(
        document_id,
        body.to_dto(),
        actor_id,
        type_code=type_code,
        expected_version=expected_version,
    )
    _set_etag(response, result.updated.version)
    return DocumentResponse.model_validate(result.updated)


@router.post("/{type_code}/{document_id}/transition", response_model=DocumentResponse)
@limit_writes
async def transition_document(
    request: Request,
    response: Response,
    type_code: str,
    document_id: str,
    body: TransitionRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    expected_version: Annotated[int | None, Depends(get_expected_version)],
    service: Annotated[
        DocumentLifecycleService, Depends(get_document_lifecycle_service_for_write)
    ],
):
    """Move the document to to_status along the type's status flow."""
    updated = await service.transition(
        type_code,
        document_id,
        body.to_status,
        actor_id,
        body.comment,
        expected_version=expected_version,
    )
    _set_etag(response, updated.version)
    return DocumentResponse.model_validate(updated)


@router.post("/{type_code}/{document_id}/approve", response_model=ApprovalDecisionResponse)
@limit_writes
async def approve_document(
    request: Request,
    type_code: str,
    document_id: str,
    body: ApprovalDecisionRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    service: Annotated[
        DocumentLifecycleService, Depends(get_document_lifecycle_service_for_write)
    ],
):
    """Approve the lowest pending approval level."""
    result = await service.approve(type_code, document_id, actor_id, body.notes)
    return ApprovalDecisionResponse.from_result(result)


@router.post("/{type_code}/{document_id}/reject", response_model=ApprovalDecisionResponse)
@limit_writes
async def reject_document(
    request: Request,
    type_code: str,
    document_id: str,
    body: ApprovalDecisionRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    service: Annotated[
        DocumentLifecycleService, Depends(get_document_lifecycle_service_for_write)
    ],
):
    """Reject the lowest pending approval level."""
    result = await service.reject(type_code, document_id, actor_id, body.notes)
    return ApprovalDecisionResponse.from_result(result)


@router.get("/{type_code}/{document_id}/history", response_model=list[HistoryEntryResponse])
async def get_document_history(
    type_code: str,
    document_id: str,
    service: Annotated[DocumentLifecycleService, Depends(get_document_lifecycle_service)],
):
    """History entries, newest first."""
    entries = await service.get_history(document_id, type_code)
    return [HistoryEntryResponse.model_validate(e) for e in entries]


@router.get("/{type_code}/{document_id}/approvals", response_model=list[ApprovalStepResponse])
async def get_document_approvals(
    type_code: str,
    document_id: str,
    service: Annotated[DocumentLifecycleService, Depends(get_document_lifecycle_service)],
):
    """Approval steps ordered by level."""
    steps = await service.get_approval_steps(type_code, document_id)
    return [ApprovalStepResponse.model_validate(s) for s in steps]
