"""DTOs for the document history ledger."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HistoryEntryCreate:
    """Entry to append. from_status is None only for the creation entry."""

    document_id: str
    to_status: str
    performed_by_id: str | None
    from_status: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class HistoryEntryResult:
    """Immutable history entry."""

    id: str
    document_id: str
    from_status: str | None
    to_status: str
    performed_by_id: str | None
    comment: str | None
    performed_at: datetime
