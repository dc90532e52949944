"""Document type registry and field schema endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from docflow.api.v1.dependencies import (
    get_actor_id,
    get_document_type_service,
    get_document_type_service_for_write,
    get_request_role,
)
from docflow.application.dtos.document_type import DocumentTypeFilters
from docflow.application.use_cases import DocumentTypeService
from docflow.core.limiter import limit_definition_writes
from docflow.schemas.document_type import (
    DocumentTypeCreateRequest,
    DocumentTypeListItemResponse,
    DocumentTypeListResponse,
    DocumentTypeResponse,
    DocumentTypeUpdateRequest,
    FieldDefinitionCreateRequest,
    FieldDefinitionResponse,
    FieldDefinitionUpdateRequest,
    FieldReorderRequest,
)

router = APIRouter()


@router.get("", response_model=DocumentTypeListResponse)
async def list_document_types(
    service: Annotated[DocumentTypeService, Depends(get_document_type_service)],
    search: str | None = Query(None, max_length=255),
    category: str | None = Query(None, max_length=100),
    is_active: bool | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List document types with field and document counts."""
    page = await service.list_types(
        DocumentTypeFilters(search=search, category=category, is_active=is_active),
        skip=skip,
        limit=limit,
    )
    return DocumentTypeListResponse(
        items=[DocumentTypeListItemResponse.from_item(i) for i in page.items],
        total=page.total,
    )


@router.post("", response_model=DocumentTypeResponse, status_code=201)
@limit_definition_writes
async def create_document_type(
    request: Request,
    body: DocumentTypeCreateRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    """Create a document type. Omitted attributes get registry defaults."""
    created = await service.create_type(body.to_dto(), actor_id)
    return DocumentTypeResponse.from_result(created)


@router.get("/active", response_model=list[DocumentTypeResponse])
async def list_active_document_types(
    role: Annotated[str, Depends(get_request_role)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service)],
):
    """Active types visible to role (or to everyone), by category then name."""
    types = await service.get_active_types_for_role(role)
    return [DocumentTypeResponse.from_result(t) for t in types]


@router.get("/by-code/{code}", response_model=DocumentTypeResponse)
async def get_document_type_by_code(
    code: str,
    service: Annotated[DocumentTypeService, Depends(get_document_type_service)],
):
    return DocumentTypeResponse.from_result(await service.get_by_code(code))


@router.get("/{type_id}", response_model=DocumentTypeResponse)
async def get_document_type(
    type_id: str,
    service: Annotated[DocumentTypeService, Depends(get_document_type_service)],
):
    """Full definition with fields ordered by sort_order."""
    return DocumentTypeResponse.from_result(await service.get_by_id(type_id))


@router.patch("/{type_id}", response_model=DocumentTypeResponse)
@limit_definition_writes
async def update_document_type(
    request: Request,
    type_id: str,
    body: DocumentTypeUpdateRequest,
    _actor: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    """Partial update; only keys present in the body are written."""
    _, updated = await service.update_type(type_id, body.to_dto())
    return DocumentTypeResponse.from_result(updated)


@router.delete("/{type_id}", status_code=204)
@limit_definition_writes
async def delete_document_type(
    request: Request,
    type_id: str,
    _actor: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    """Delete a type that has no documents."""
    await service.delete_type(type_id)
    return Response(status_code=204)


# ---- Fields ----


@router.get("/{type_id}/fields", response_model=list[FieldDefinitionResponse])
async def list_fields(
    type_id: str,
    service: Annotated[DocumentTypeService, Depends(get_document_type_service)],
):
    fields = await service.list_fields(type_id)
    return [FieldDefinitionResponse.model_validate(f) for f in fields]


@router.post("/{type_id}/fields", response_model=FieldDefinitionResponse, status_code=201)
@limit_definition_writes
async def add_field(
    request: Request,
    type_id: str,
    body: FieldDefinitionCreateRequest,
    _actor: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    """Add a field; sort_order defaults to the end of the list."""
    created = await service.add_field(type_id, body.to_dto())
    return FieldDefinitionResponse.model_validate(created)


@router.put("/{type_id}/fields/reorder", status_code=204)
@limit_definition_writes
async def reorder_fields(
    request: Request,
    type_id: str,
    body: FieldReorderRequest,
    _actor: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    """Set each field's sort_order to its position in field_ids."""
    await service.reorder_fields(type_id, body.field_ids)
    return Response(status_code=204)


@router.patch("/{type_id}/fields/{field_id}", response_model=FieldDefinitionResponse)
@limit_definition_writes
async def update_field(
    request: Request,
    type_id: str,
    field_id: str,
    body: FieldDefinitionUpdateRequest,
    _actor: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    updated = await service.update_field(field_id, body.to_dto())
    return FieldDefinitionResponse.model_validate(updated)


@router.delete("/{type_id}/fields/{field_id}", status_code=204)
@limit_definition_writes
async def delete_field(
    request: Request,
    type_id: str,
    field_id: str,
    _actor: Annotated[str, Depends(get_actor_id)],
    service: Annotated[DocumentTypeService, Depends(get_document_type_service_for_write)],
):
    await service.delete_field(field_id)
    return Response(status_code=204)
