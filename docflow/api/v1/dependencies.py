"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for caller identity and application use cases.
Use cases are built here from infrastructure implementations; routes
depend only on these dependencies. Every repository and adapter built for
one request shares that request's session, so a write endpoint commits or
rolls back all of its writes together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.application.services import (
    ApprovalWorkflowEngine,
    HistoryLedger,
    NoOpRejectionPolicy,
)
from docflow.application.use_cases import DocumentLifecycleService, DocumentTypeService
from docflow.core.config import get_settings
from docflow.domain.exceptions import ValidationException
from docflow.infrastructure.persistence.database import get_db, get_db_transactional
from docflow.infrastructure.persistence.repositories import (
    ApprovalStepRepository,
    DocumentHistoryRepository,
    DocumentRepository,
    DocumentTypeRepository,
    FieldDefinitionRepository,
)
from docflow.infrastructure.services import (
    DatabaseSequenceGenerator,
    RoleApprovalAuthorizer,
)


# ---- Caller identity ----


def get_actor_id(request: Request) -> str:
    """Actor id from the configured header (default X-User-ID). Required on writes."""
    header = get_settings().actor_header_name
    actor_id = (request.headers.get(header) or "").strip()
    if not actor_id:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    return actor_id


def get_request_role(
    request: Request,
    role: Annotated[str | None, Query(max_length=100)] = None,
) -> str:
    """Role from ?role= or the configured header (default X-User-Role)."""
    header = get_settings().role_header_name
    value = (role or request.headers.get(header) or "").strip()
    if not value:
        raise HTTPException(
            status_code=400, detail=f"Provide ?role= or the {header} header"
        )
    return value


def get_expected_version(
    if_match: Annotated[str | None, Header(alias="If-Match")] = None,
) -> int | None:
    """Expected document version from If-Match ("3", "\"3\"" or W/"3"); None when absent."""
    if if_match is None or not if_match.strip():
        return None
    raw = if_match.strip()
    if raw.startswith("W/"):
        raw = raw[2:]
    raw = raw.strip('"')
    if not raw.isdigit():
        raise ValidationException("If-Match must be a document version number", field="If-Match")
    return int(raw)


# ---- Document types ----


def _build_document_type_service(db: AsyncSession) -> DocumentTypeService:
    return DocumentTypeService(
        type_repo=DocumentTypeRepository(db),
        field_repo=FieldDefinitionRepository(db),
        default_visible_roles=get_settings().default_visible_roles_list,
    )


async def get_document_type_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentTypeService:
    """Registry service for read operations."""
    return _build_document_type_service(db)


async def get_document_type_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DocumentTypeService:
    """Registry service for write operations (transactional session)."""
    return _build_document_type_service(db)


# ---- Documents ----


def _build_lifecycle_service(db: AsyncSession) -> DocumentLifecycleService:
    settings = get_settings()
    history = HistoryLedger(DocumentHistoryRepository(db))
    approvals = ApprovalWorkflowEngine(
        step_repo=ApprovalStepRepository(db),
        authorizer=RoleApprovalAuthorizer(db),
        history=history,
        tag_prefix=settings.approval_tag_prefix,
    )
    return DocumentLifecycleService(
        type_repo=DocumentTypeRepository(db),
        document_repo=DocumentRepository(db),
        approvals=approvals,
        history=history,
        sequence=DatabaseSequenceGenerator(db, padding=settings.document_number_padding),
        rejection_policy=NoOpRejectionPolicy(),
        number_namespace=settings.document_number_namespace,
    )


async def get_document_lifecycle_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentLifecycleService:
    """Lifecycle service for read operations."""
    return _build_lifecycle_service(db)


async def get_document_lifecycle_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DocumentLifecycleService:
    """Lifecycle service for write operations (one transaction per request)."""
    return _build_lifecycle_service(db)
