"""DocumentLifecycleService tests against in-memory repositories.

Covers creation (validation, numbering, approval materialization), editing,
status transitions gated by the approval chain, and approve/reject.
"""

from unittest.mock import AsyncMock

import pytest

from docflow.application.dtos.document import DocumentCreate, DocumentFilters, DocumentUpdate
from docflow.application.dtos.document_type import DocumentTypeCreate, FieldDefinitionCreate
from docflow.domain.exceptions import (
    BusinessRuleException,
    DocumentValidationException,
    DocumentVersionConflictException,
    ResourceNotFoundException,
)
from tests.fakes import build_services

WO_FLOW = {
    "initialStatus": "draft",
    "statuses": [
        {"key": "draft", "label": "Draft"},
        {"key": "submitted", "label": "Submitted"},
        {"key": "approved", "label": "Approved"},
    ],
    "transitions": {"draft": ["submitted"], "submitted": ["approved", "draft"]},
}

WO_APPROVAL = {"levels": [{"role": "manager", "level": 1}, {"role": "director", "level": 2}]}

ROLES = {"u-manager": "manager", "u-director": "director", "u-admin": "admin"}


async def _setup_work_order(registry, *, approval=WO_APPROVAL, code="WO"):
    doc_type = await registry.create_type(
        DocumentTypeCreate(
            code=code, name="Work Order", status_flow=WO_FLOW, approval_config=approval
        ),
        "u-admin",
    )
    await registry.add_field(
        doc_type.id,
        FieldDefinitionCreate(field_key="title", label="Title", field_type="text", is_required=True),
    )
    await registry.add_field(
        doc_type.id,
        FieldDefinitionCreate(
            field_key="qty",
            label="Qty",
            field_type="number",
            is_line_item=True,
            validation_rules={"min": 1},
        ),
    )
    return doc_type


@pytest.fixture
async def services():
    registry, lifecycle, store = build_services(roles=ROLES)
    await _setup_work_order(registry)
    return registry, lifecycle, store


def _wo(title: str = "Replace pump seal", lines=None) -> DocumentCreate:
    return DocumentCreate(data={"title": title}, lines=lines)


class TestCreateDocument:
    async def test_creates_in_initial_status_with_number_and_steps(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(lines=[{"qty": 2}]), "u-clerk")
        assert doc.status == "draft"
        assert doc.document_number == "WO-2026-0001"
        assert doc.version == 1
        assert doc.created_by == "u-clerk"
        assert [(line.line_number, line.data) for line in doc.lines] == [(1, {"qty": 2})]

        steps = await lifecycle.get_approval_steps("WO", doc.id)
        assert [(s.level, s.approver_role, s.status) for s in steps] == [
            (1, "manager", "pending"),
            (2, "director", "pending"),
        ]
        assert {s.document_type_tag for s in steps} == {"dynamic_WO"}

        history = await lifecycle.get_history(doc.id)
        assert len(history) == 1
        assert history[0].from_status is None
        assert history[0].to_status == "draft"
        assert history[0].comment == "Document created"

    async def test_numbers_increase_per_type(self, services) -> None:
        _, lifecycle, _ = services
        first = await lifecycle.create_document("WO", _wo(), "u1")
        second = await lifecycle.create_document("WO", _wo(), "u1")
        assert first.document_number == "WO-2026-0001"
        assert second.document_number == "WO-2026-0002"

    async def test_number_prefix_setting(self, services) -> None:
        registry, lifecycle, _ = services
        await registry.create_type(
            DocumentTypeCreate(code="pr", name="Purchase", settings={"numberPrefix": "PRQ"}),
            None,
        )
        doc = await lifecycle.create_document("pr", DocumentCreate(data={}), "u1")
        assert doc.document_number == "PRQ-2026-0001"
        assert await lifecycle.get_approval_steps("pr", doc.id) == []

    async def test_invalid_data_persists_nothing(self, services) -> None:
        _, lifecycle, store = services
        with pytest.raises(DocumentValidationException) as exc_info:
            await lifecycle.create_document("WO", _wo(title="", lines=[{"qty": 0}]), "u1")
        assert exc_info.value.errors == [
            {"field": "title", "message": "Title is required"},
            {"field": "lines[0].qty", "message": "Qty must be at least 1"},
        ]
        assert store.documents == {}
        assert store.steps == {}
        assert store.history == []
        assert lifecycle.sequence.counters == {}

    async def test_unknown_type(self, services) -> None:
        _, lifecycle, _ = services
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await lifecycle.create_document("NOPE", _wo(), "u1")
        assert exc_info.value.details["resource_id"] == "NOPE"


class TestUpdateDocument:
    async def test_update_replaces_lines_and_bumps_version(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(lines=[{"qty": 1}, {"qty": 2}]), "u1")
        result = await lifecycle.update_document(
            doc.id, DocumentUpdate(lines=[{"qty": 5}]), "u2", type_code="WO"
        )
        assert result.existing.version == 1
        assert result.updated.version == 2
        assert result.updated.data == {"title": "Replace pump seal"}
        assert [(line.line_number, line.data) for line in result.updated.lines] == [
            (1, {"qty": 5})
        ]
        assert result.updated.updated_by == "u2"

        history = await lifecycle.get_history(doc.id)
        assert history[0].comment == "Document updated"
        assert history[0].from_status == history[0].to_status == "draft"

    async def test_update_validates_supplied_data(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        with pytest.raises(DocumentValidationException):
            await lifecycle.update_document(doc.id, DocumentUpdate(data={"title": ""}), "u1")

    async def test_terminal_status_not_editable(self, services) -> None:
        registry, lifecycle, _ = services
        await _setup_work_order(registry, approval=None, code="WO2")
        doc = await lifecycle.create_document("WO2", _wo(), "u1")
        await lifecycle.transition("WO2", doc.id, "submitted", "u1")
        await lifecycle.transition("WO2", doc.id, "approved", "u1")
        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.update_document(doc.id, DocumentUpdate(data={"title": "x"}), "u1")
        assert exc_info.value.rule == "not_editable"
        assert "'approved'" in exc_info.value.message

    async def test_stale_expected_version(self, services) -> None:
        _, lifecycle, store = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.update_document(doc.id, DocumentUpdate(data={"title": "v2"}), "u1")
        with pytest.raises(DocumentVersionConflictException):
            await lifecycle.update_document(
                doc.id, DocumentUpdate(data={"title": "v3"}), "u1", expected_version=1
            )
        assert store.documents[doc.id].data == {"title": "v2"}

    async def test_type_code_mismatch_is_not_found(self, services) -> None:
        registry, lifecycle, _ = services
        await registry.create_type(DocumentTypeCreate(code="MEMO", name="Memo"), None)
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        with pytest.raises(ResourceNotFoundException):
            await lifecycle.get_document(doc.id, "MEMO")


class TestWorkOrderApprovalFlow:
    """Submit, two-level approval, then the approved transition."""

    async def test_full_flow(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(), "u-clerk")

        submitted = await lifecycle.transition("WO", doc.id, "submitted", "u-clerk", "Ready")
        assert submitted.status == "submitted"
        assert submitted.version == 2

        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.transition("WO", doc.id, "approved", "u-clerk")
        assert exc_info.value.rule == "pending_approvals"
        assert exc_info.value.details["pending_levels"] == [1, 2]

        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.approve("WO", doc.id, "u-director")
        assert exc_info.value.rule == "not_authorized"
        assert exc_info.value.details["required_role"] == "manager"

        first = await lifecycle.approve("WO", doc.id, "u-manager", "Looks fine")
        assert first.level == 1
        assert first.remaining_levels == 1
        assert not first.all_approved
        assert first.steps[0].approver_id == "u-manager"
        assert first.steps[0].notes == "Looks fine"

        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.transition("WO", doc.id, "approved", "u-clerk")
        assert exc_info.value.details["pending_levels"] == [2]

        second = await lifecycle.approve("WO", doc.id, "u-director")
        assert second.level == 2
        assert second.all_approved

        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.approve("WO", doc.id, "u-admin")
        assert exc_info.value.rule == "no_pending_steps"

        approved = await lifecycle.transition("WO", doc.id, "approved", "u-clerk")
        assert approved.status == "approved"

        detail = await lifecycle.get_document(doc.id, "WO")
        assert [h.comment for h in detail.history] == [
            None,
            "All approval levels completed (level 2 approved)",
            "Approval level 1 approved by manager",
            "Ready",
            "Document created",
        ]
        assert [(h.from_status, h.to_status) for h in detail.history][0] == (
            "submitted",
            "approved",
        )
        assert [s.status for s in detail.approval_steps] == ["approved", "approved"]

    async def test_leaving_initial_status_is_ungated_and_logged(self, services, caplog) -> None:
        registry, lifecycle, store = services
        await registry.create_type(
            DocumentTypeCreate(
                code="QA",
                name="Quick Approval",
                status_flow={
                    "initialStatus": "draft",
                    "statuses": [
                        {"key": "draft", "label": "Draft"},
                        {"key": "approved", "label": "Approved"},
                    ],
                    "transitions": {"draft": ["approved"]},
                },
                approval_config=WO_APPROVAL,
            ),
            "u-admin",
        )
        doc = await lifecycle.create_document("QA", DocumentCreate(data={}), "u1")

        with caplog.at_level("INFO", logger="docflow"):
            approved = await lifecycle.transition("QA", doc.id, "approved", "u1")

        assert approved.status == "approved"
        assert [s.status for s in store.steps.values() if s.document_id == doc.id] == [
            "pending",
            "pending",
        ]
        assert "submitted for approval (draft → approved, gate not applied)" in caplog.text

    async def test_transition_not_in_flow(self, services) -> None:
        _, lifecycle, store = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.transition("WO", doc.id, "approved", "u1")
        assert exc_info.value.rule == "invalid_transition"
        assert exc_info.value.message == (
            "Invalid status transition: 'draft' → 'approved'. Allowed: submitted"
        )
        assert store.documents[doc.id].status == "draft"
        assert len(store.history) == 1

    async def test_invalid_transition_lists_every_allowed_target(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.transition("WO", doc.id, "submitted", "u1")
        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.transition("WO", doc.id, "submitted", "u1")
        assert exc_info.value.message == (
            "Invalid status transition: 'submitted' → 'submitted'. Allowed: approved, draft"
        )
        assert exc_info.value.details["allowed"] == ["approved", "draft"]

    async def test_admin_may_approve_any_level(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        result = await lifecycle.approve("WO", doc.id, "u-admin")
        assert result.approver_role == "manager"

    async def test_approve_without_approval_config(self, services) -> None:
        registry, lifecycle, _ = services
        await registry.create_type(DocumentTypeCreate(code="MEMO", name="Memo"), None)
        doc = await lifecycle.create_document("MEMO", DocumentCreate(data={}), "u1")
        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.approve("MEMO", doc.id, "u-admin")
        assert exc_info.value.rule == "no_approval_config"
        assert "'MEMO' does not have approval configuration" in exc_info.value.message


class TestReject:
    async def test_reject_closes_chain_and_calls_policy(self) -> None:
        policy = AsyncMock()
        registry, lifecycle, store = build_services(roles=ROLES, rejection_policy=policy)
        await _setup_work_order(registry)
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.transition("WO", doc.id, "submitted", "u1")

        result = await lifecycle.reject("WO", doc.id, "u-manager", "Missing quote")
        assert result.rejected
        assert not result.all_approved
        assert result.remaining_levels == 0
        assert [s.status for s in result.steps] == ["rejected", "skipped"]
        assert store.documents[doc.id].status == "submitted"

        policy.on_rejected.assert_awaited_once()
        doc_type, document, step, actor = policy.on_rejected.await_args.args
        assert doc_type.code == "WO"
        assert document.id == doc.id
        assert step.level == 1
        assert step.status == "rejected"
        assert actor == "u-manager"

        history = await lifecycle.get_history(doc.id, "WO")
        assert history[0].comment == "Approval level 1 rejected by manager"

    async def test_rejected_chain_blocks_approval_and_transition(self, services) -> None:
        _, lifecycle, store = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.transition("WO", doc.id, "submitted", "u1")
        await lifecycle.reject("WO", doc.id, "u-manager")

        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.approve("WO", doc.id, "u-director")
        assert exc_info.value.rule == "chain_rejected"

        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.transition("WO", doc.id, "approved", "u1")
        assert exc_info.value.rule == "chain_rejected"
        assert exc_info.value.details["rejected_level"] == 1
        assert store.documents[doc.id].status == "submitted"
        steps = await lifecycle.get_approval_steps("WO", doc.id)
        assert [s.status for s in steps] == ["rejected", "skipped"]

    async def test_return_to_initial_status_reopens_chain(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.transition("WO", doc.id, "submitted", "u1")
        await lifecycle.reject("WO", doc.id, "u-manager", "Missing quote")

        reworked = await lifecycle.transition("WO", doc.id, "draft", "u1", "Adding quote")
        assert reworked.status == "draft"
        steps = await lifecycle.get_approval_steps("WO", doc.id)
        assert [(s.status, s.approver_id, s.notes) for s in steps] == [
            ("pending", None, None),
            ("pending", None, None),
        ]

        await lifecycle.transition("WO", doc.id, "submitted", "u1")
        await lifecycle.approve("WO", doc.id, "u-manager")
        await lifecycle.approve("WO", doc.id, "u-director")
        approved = await lifecycle.transition("WO", doc.id, "approved", "u1")
        assert approved.status == "approved"

    async def test_return_to_initial_status_still_gated_while_pending(self, services) -> None:
        _, lifecycle, _ = services
        doc = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.transition("WO", doc.id, "submitted", "u1")
        with pytest.raises(BusinessRuleException) as exc_info:
            await lifecycle.transition("WO", doc.id, "draft", "u1")
        assert exc_info.value.rule == "pending_approvals"


class TestListDocuments:
    async def test_filters_and_newest_first(self, services) -> None:
        _, lifecycle, _ = services
        a = await lifecycle.create_document("WO", _wo(), "u1")
        b = await lifecycle.create_document("WO", _wo(), "u1")
        await lifecycle.transition("WO", b.id, "submitted", "u1")

        page = await lifecycle.list_documents("WO", DocumentFilters())
        assert [d.id for d in page.items] == [b.id, a.id]
        assert page.total == 2

        drafts = await lifecycle.list_documents("WO", DocumentFilters(status="draft"))
        assert [d.id for d in drafts.items] == [a.id]

        found = await lifecycle.list_documents("WO", DocumentFilters(search="0002"))
        assert [d.document_number for d in found.items] == ["WO-2026-0002"]
