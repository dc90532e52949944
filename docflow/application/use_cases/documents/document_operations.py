"""Document lifecycle: create, read, update, transition, approve and reject.

Every operation interprets the owning type's definition at call time:
fields drive validation, the status flow drives editability and legal
transitions, and the approval config (when present) gates transitions
behind the approval chain. Each successful mutation appends one history
entry. Callers run each operation inside one transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docflow.application.dtos.approval import ApprovalDecisionResult, ApprovalStepResult
from docflow.application.dtos.document import (
    DocumentCreate,
    DocumentDetailResult,
    DocumentFilters,
    DocumentResult,
    DocumentToPersist,
    DocumentUpdate,
    DocumentUpdateResult,
)
from docflow.application.dtos.document_type import DocumentTypeResult, PageResult
from docflow.application.dtos.history import HistoryEntryCreate, HistoryEntryResult
from docflow.application.services.field_validator import validate_document
from docflow.application.services.rejection_policy import NoOpRejectionPolicy
from docflow.domain.entities.document import DocumentEntity
from docflow.domain.exceptions import (
    BusinessRuleException,
    DocumentValidationException,
    ResourceNotFoundException,
)
from docflow.shared.enums import ApprovalStepStatus
from docflow.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from docflow.application.interfaces.repositories import (
        IDocumentRepository,
        IDocumentTypeRepository,
    )
    from docflow.application.interfaces.services import (
        IRejectionPolicy,
        ISequenceGenerator,
    )
    from docflow.application.services.approval_workflow import ApprovalWorkflowEngine
    from docflow.application.services.history_ledger import HistoryLedger

logger = get_logger(__name__)

DEFAULT_NUMBER_NAMESPACE = "dyn"


def _document_to_entity(d: DocumentResult) -> DocumentEntity:
    """Map DocumentResult (application DTO) to DocumentEntity (domain entity)."""
    return DocumentEntity(
        id=d.id,
        document_type_id=d.document_type_id,
        document_number=d.document_number,
        status=d.status,
        version=d.version,
    )


class DocumentLifecycleService:
    """Runs the per-type state machine for document instances."""

    def __init__(
        self,
        type_repo: IDocumentTypeRepository,
        document_repo: IDocumentRepository,
        approvals: ApprovalWorkflowEngine,
        history: HistoryLedger,
        sequence: ISequenceGenerator,
        rejection_policy: IRejectionPolicy | None = None,
        *,
        number_namespace: str = DEFAULT_NUMBER_NAMESPACE,
    ) -> None:
        self.type_repo = type_repo
        self.document_repo = document_repo
        self.approvals = approvals
        self.history = history
        self.sequence = sequence
        self.rejection_policy = rejection_policy or NoOpRejectionPolicy()
        self.number_namespace = number_namespace

    async def _get_type_by_code(self, type_code: str) -> DocumentTypeResult:
        doc_type = await self.type_repo.get_by_code(type_code)
        if not doc_type:
            raise ResourceNotFoundException("document_type", type_code)
        return doc_type

    async def _load(
        self, document_id: str, type_code: str | None = None
    ) -> tuple[DocumentResult, DocumentTypeResult]:
        """Load a document and its type; a type_code mismatch counts as not found."""
        document = await self.document_repo.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        doc_type = await self.type_repo.get_by_id(document.document_type_id)
        if not doc_type or (type_code is not None and doc_type.code != type_code):
            raise ResourceNotFoundException("document", document_id)
        return document, doc_type

    # ---- Read ----

    async def list_documents(
        self,
        type_code: str,
        filters: DocumentFilters,
        skip: int = 0,
        limit: int = 100,
    ) -> PageResult[DocumentResult]:
        doc_type = await self._get_type_by_code(type_code)
        return await self.document_repo.list_by_type(
            doc_type.id, filters, skip=skip, limit=limit
        )

    async def get_document(
        self, document_id: str, type_code: str | None = None
    ) -> DocumentDetailResult:
        """Document with type (fields ordered), history (newest first) and approval steps."""
        document, doc_type = await self._load(document_id, type_code)
        history = await self.history.list(document_id)
        steps = await self.approvals.get_steps(
            self.approvals.tag_for(doc_type.code), document_id
        )
        return DocumentDetailResult(
            document=document,
            document_type=doc_type,
            history=history,
            approval_steps=steps,
        )

    async def get_history(
        self, document_id: str, type_code: str | None = None
    ) -> list[HistoryEntryResult]:
        await self._load(document_id, type_code)
        return await self.history.list(document_id)

    async def get_approval_steps(
        self, type_code: str, document_id: str
    ) -> list[ApprovalStepResult]:
        await self._load(document_id, type_code)
        return await self.approvals.get_steps(self.approvals.tag_for(type_code), document_id)

    # ---- Write ----

    async def create_document(
        self, type_code: str, data: DocumentCreate, actor_id: str
    ) -> DocumentResult:
        """Validate, number, persist with the initial status, and open the approval chain.

        Raises:
            ResourceNotFoundException: Unknown type code.
            DocumentValidationException: Header or line data fails the field
                rules; nothing is persisted and no number is consumed.
        """
        doc_type = await self._get_type_by_code(type_code)
        report = validate_document(list(doc_type.fields), data.data, data.lines)
        if not report.is_valid:
            raise DocumentValidationException([e.to_dict() for e in report.errors])

        document_number = await self.sequence.generate(
            f"{self.number_namespace}:{doc_type.code}", doc_type.number_prefix
        )
        initial_status = doc_type.status_flow.initial_status
        document = await self.document_repo.create_document(
            DocumentToPersist(
                document_type_id=doc_type.id,
                document_number=document_number,
                status=initial_status,
                data=dict(data.data),
                lines=[dict(line) for line in data.lines or []],
                project_id=data.project_id,
                warehouse_id=data.warehouse_id,
                created_by=actor_id,
            )
        )
        await self.history.append(
            HistoryEntryCreate(
                document_id=document.id,
                from_status=None,
                to_status=initial_status,
                performed_by_id=actor_id,
                comment="Document created",
            )
        )
        if doc_type.approval_config:
            await self.approvals.materialize(
                doc_type.code, document.id, doc_type.approval_config
            )
        logger.info("Created %s document: %s", doc_type.code, document.document_number)
        return document

    async def update_document(
        self,
        document_id: str,
        data: DocumentUpdate,
        actor_id: str,
        *,
        type_code: str | None = None,
        expected_version: int | None = None,
    ) -> DocumentUpdateResult:
        """Update header data and/or replace all lines while the status is editable.

        Raises:
            BusinessRuleException: Current status is not editable.
            DocumentValidationException: Supplied data or lines fail the field rules.
            DocumentVersionConflictException: expected_version is stale.
        """
        existing, doc_type = await self._load(document_id, type_code)
        entity = _document_to_entity(existing)
        entity.ensure_version(expected_version)
        entity.ensure_editable(doc_type.status_flow)

        report = validate_document(list(doc_type.fields), data.data, data.lines)
        if not report.is_valid:
            raise DocumentValidationException([e.to_dict() for e in report.errors])

        updated = await self.document_repo.update_document(
            document_id,
            updated_by=actor_id,
            data=dict(data.data) if data.data is not None else None,
            lines=[dict(line) for line in data.lines] if data.lines is not None else None,
            project_id=data.project_id,
            warehouse_id=data.warehouse_id,
        )
        await self.history.append(
            HistoryEntryCreate(
                document_id=document_id,
                from_status=existing.status,
                to_status=existing.status,
                performed_by_id=actor_id,
                comment="Document updated",
            )
        )
        return DocumentUpdateResult(existing=existing, updated=updated)

    async def transition(
        self,
        type_code: str,
        document_id: str,
        to_status: str,
        actor_id: str,
        comment: str | None = None,
        *,
        expected_version: int | None = None,
    ) -> DocumentResult:
        """Move the document along its status flow.

        Leaving the initial status submits the document into its approval
        chain. From any later status the transition is refused while steps
        are pending or the chain was rejected. The one way out of a rejected
        chain is back to the initial status, which reopens every step.

        Raises:
            BusinessRuleException: Target not allowed from the current status,
                approval steps still pending, or the chain was rejected.
                Nothing is written then.
            DocumentVersionConflictException: expected_version is stale.
        """
        document, doc_type = await self._load(document_id, type_code)
        flow = doc_type.status_flow
        entity = _document_to_entity(document)
        entity.ensure_version(expected_version)
        entity.ensure_can_transition(flow, to_status)

        if doc_type.approval_config and document.status == flow.initial_status:
            # Submission is never gated, so a flow whose initial status
            # leads straight to a final one bypasses approval entirely.
            logger.info(
                "%s:%s submitted for approval (%s → %s, gate not applied)",
                doc_type.code,
                document.document_number,
                document.status,
                to_status,
            )
        elif doc_type.approval_config:
            chain = await self.approvals.get_chain(doc_type.code, document_id)
            if to_status == flow.initial_status and chain.rejected_step() is not None:
                await self.approvals.reopen(doc_type.code, document_id)
            else:
                chain.ensure_cleared()

        updated = await self.document_repo.update_document(
            document_id, updated_by=actor_id, status=to_status
        )
        await self.history.append(
            HistoryEntryCreate(
                document_id=document_id,
                from_status=document.status,
                to_status=to_status,
                performed_by_id=actor_id,
                comment=comment,
            )
        )
        logger.info(
            "%s:%s %s → %s",
            doc_type.code,
            document.document_number,
            document.status,
            to_status,
        )
        return updated

    async def _decide(
        self,
        type_code: str,
        document_id: str,
        actor_id: str,
        decision: ApprovalStepStatus,
        notes: str | None,
    ) -> tuple[ApprovalDecisionResult, DocumentResult, DocumentTypeResult]:
        document, doc_type = await self._load(document_id, type_code)
        if not doc_type.approval_config:
            raise BusinessRuleException(
                f"Document type '{type_code}' does not have approval configuration",
                "no_approval_config",
                code=type_code,
            )
        result = await self.approvals.decide(
            doc_type.code, document_id, document.status, actor_id, decision, notes
        )
        return result, document, doc_type

    async def approve(
        self,
        type_code: str,
        document_id: str,
        actor_id: str,
        notes: str | None = None,
    ) -> ApprovalDecisionResult:
        """Approve the current (lowest pending) step."""
        result, _, _ = await self._decide(
            type_code, document_id, actor_id, ApprovalStepStatus.APPROVED, notes
        )
        return result

    async def reject(
        self,
        type_code: str,
        document_id: str,
        actor_id: str,
        notes: str | None = None,
    ) -> ApprovalDecisionResult:
        """Reject the current step, then hand the outcome to the rejection policy."""
        result, document, doc_type = await self._decide(
            type_code, document_id, actor_id, ApprovalStepStatus.REJECTED, notes
        )
        step = next(s for s in result.steps if s.level == result.level)
        await self.rejection_policy.on_rejected(doc_type, document, step, actor_id)
        return result
