"""Repository integration tests. Require Postgres; session is rolled back after each test."""

import pytest

from docflow.application.dtos.document import DocumentFilters, DocumentToPersist
from docflow.application.dtos.history import HistoryEntryCreate
from docflow.infrastructure.persistence.repositories import (
    ApprovalStepRepository,
    DocumentHistoryRepository,
    DocumentRepository,
    DocumentTypeRepository,
    FieldDefinitionRepository,
)
from docflow.infrastructure.services import DatabaseSequenceGenerator
from docflow.shared.utils.datetime import utc_now


def _type_values(code: str) -> dict:
    return {
        "code": code,
        "name": f"Type {code}",
        "description": None,
        "icon": None,
        "category": "custom",
        "is_active": True,
        "status_flow": {
            "initialStatus": "draft",
            "statuses": [{"key": "draft", "label": "Draft"}, {"key": "done", "label": "Done"}],
            "transitions": {"draft": ["done"]},
        },
        "approval_config": None,
        "permission_config": None,
        "settings": {},
        "visible_to_roles": ["*"],
        "created_by": "u-test",
    }


def _field_values(key: str, sort_order: int) -> dict:
    return {
        "field_key": key,
        "label": key.title(),
        "field_type": "text",
        "options": None,
        "section_name": None,
        "sort_order": sort_order,
        "validation_rules": None,
        "default_value": None,
        "conditional_display": None,
        "is_required": False,
        "show_in_grid": False,
        "show_in_form": True,
        "col_span": 2,
        "is_line_item": False,
        "is_read_only": False,
    }


@pytest.mark.requires_db
async def test_type_fields_ordered_and_reordered(db_session) -> None:
    types = DocumentTypeRepository(db_session)
    fields = FieldDefinitionRepository(db_session)
    created = await types.create_type(_type_values("repo-test-fields"))
    a = await fields.create_field(created.id, _field_values("a", 0))
    b = await fields.create_field(created.id, _field_values("b", 1))

    await fields.reorder(created.id, [b.id, a.id])
    loaded = await types.get_by_code("repo-test-fields")
    assert [f.field_key for f in loaded.fields] == ["b", "a"]
    assert await fields.max_sort_order(created.id) == 1

    updated = await types.update_type(created.id, {"approval_config": None, "name": "Renamed"})
    assert updated.version == 2
    assert updated.name == "Renamed"
    assert updated.approval_config is None


@pytest.mark.requires_db
async def test_document_lines_replaced_on_update(db_session) -> None:
    types = DocumentTypeRepository(db_session)
    docs = DocumentRepository(db_session)
    doc_type = await types.create_type(_type_values("repo-test-docs"))
    number = await DatabaseSequenceGenerator(db_session).generate("test:repo-test-docs")
    assert number.endswith(f"-{utc_now().year}-0001")

    created = await docs.create_document(
        DocumentToPersist(
            document_type_id=doc_type.id,
            document_number=number,
            status="draft",
            data={"title": "x"},
            lines=[{"qty": 1}, {"qty": 2}],
            project_id=None,
            warehouse_id=None,
            created_by="u-test",
        )
    )
    assert [line.line_number for line in created.lines] == [1, 2]

    updated = await docs.update_document(created.id, updated_by="u2", lines=[{"qty": 9}])
    assert updated.version == 2
    assert [(line.line_number, line.data) for line in updated.lines] == [(1, {"qty": 9})]
    assert updated.data == {"title": "x"}

    page = await docs.list_by_type(doc_type.id, DocumentFilters(search=number[-4:]))
    assert page.total == 1
    assert await types.count_documents(doc_type.id) == 1

    history = DocumentHistoryRepository(db_session)
    await history.append(
        HistoryEntryCreate(document_id=created.id, to_status="draft", performed_by_id="u-test")
    )
    await history.append(
        HistoryEntryCreate(
            document_id=created.id, from_status="draft", to_status="done", performed_by_id="u2"
        )
    )
    entries = await history.list_by_document(created.id)
    assert [e.to_status for e in entries] == ["done", "draft"]


@pytest.mark.requires_db
async def test_steps_ordered_by_level(db_session) -> None:
    steps = ApprovalStepRepository(db_session)
    created = await steps.create_steps("dynamic_repo", "doc-1", [(2, "director"), (1, "manager")])
    assert len(created) == 2

    ordered = await steps.get_steps("dynamic_repo", "doc-1")
    assert [s.level for s in ordered] == [1, 2]
    await steps.record_decision(ordered[0].id, "approved", "u1", None, utc_now())
    pending = await steps.get_pending_steps("dynamic_repo", "doc-1")
    assert [s.level for s in pending] == [2]



@pytest.mark.requires_db
async def test_rejection_skips_then_reopen_resets(db_session) -> None:
    steps = ApprovalStepRepository(db_session)
    created = await steps.create_steps(
        "dynamic_repo", "doc-2", [(1, "manager"), (2, "director"), (3, "cfo")]
    )
    await steps.record_decision(created[0].id, "rejected", "u1", "No", utc_now())
    assert await steps.skip_pending_after("dynamic_repo", "doc-2", 1) == 2
    assert [s.status for s in await steps.get_steps("dynamic_repo", "doc-2")] == [
        "rejected",
        "skipped",
        "skipped",
    ]

    assert await steps.reopen_steps("dynamic_repo", "doc-2") == 3
    reopened = await steps.get_steps("dynamic_repo", "doc-2")
    assert {(s.status, s.approver_id, s.decided_at) for s in reopened} == {("pending", None, None)}
