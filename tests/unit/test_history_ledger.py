"""HistoryLedger unit tests."""

from unittest.mock import AsyncMock

import pytest

from docflow.application.dtos.history import HistoryEntryCreate
from docflow.application.services import HistoryLedger
from docflow.domain.exceptions import ValidationException


async def test_append_delegates_to_repo() -> None:
    repo = AsyncMock()
    ledger = HistoryLedger(repo)
    entry = HistoryEntryCreate(document_id="d1", to_status="draft", performed_by_id="u1")
    await ledger.append(entry)
    repo.append.assert_awaited_once_with(entry)


@pytest.mark.parametrize(
    ("document_id", "to_status", "field"),
    [("", "draft", "documentId"), ("d1", "", "toStatus")],
)
async def test_append_requires_document_and_status(document_id, to_status, field) -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException) as exc_info:
        await HistoryLedger(repo).append(
            HistoryEntryCreate(document_id=document_id, to_status=to_status, performed_by_id=None)
        )
    assert exc_info.value.details == {"field": field}
    repo.append.assert_not_awaited()


async def test_list_returns_repo_order() -> None:
    repo = AsyncMock()
    repo.list_by_document = AsyncMock(return_value=[])
    assert await HistoryLedger(repo).list("d1") == []
    repo.list_by_document.assert_awaited_once_with("d1")
