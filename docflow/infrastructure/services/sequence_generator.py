"""Database-backed document number generator (implements ISequenceGenerator).

One counter row per (scope, year). The row is locked with SELECT ... FOR
UPDATE inside the caller's transaction, so concurrent creates of the same
type get distinct numbers and a rolled-back create gives its number back.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from docflow.infrastructure.persistence.models.document_sequence import DocumentSequence
from docflow.shared.utils.datetime import utc_now

DEFAULT_PADDING = 4


def format_document_number(prefix: str, year: int, value: int, padding: int = DEFAULT_PADDING) -> str:
    """Render '{PREFIX}-{YYYY}-{NNNN}' (value zero-padded to padding digits)."""
    return f"{prefix}-{year:04d}-{value:0{padding}d}"


def default_prefix(scope: str) -> str:
    """Prefix derived from scope: the part after the last ':' upper-cased."""
    return scope.rsplit(":", 1)[-1].upper()


class DatabaseSequenceGenerator:
    """Issues document numbers from the document_sequence table."""

    def __init__(self, db: AsyncSession, *, padding: int = DEFAULT_PADDING) -> None:
        self.db = db
        self.padding = padding

    async def generate(self, scope: str, prefix: str | None = None) -> str:
        """Return the next number for scope in the current year."""
        year = utc_now().year
        await self.db.execute(
            insert(DocumentSequence)
            .values(scope=scope, year=year, last_value=0)
            .on_conflict_do_nothing(index_elements=["scope", "year"])
        )
        counter = await self.db.scalar(
            select(DocumentSequence)
            .where(DocumentSequence.scope == scope, DocumentSequence.year == year)
            .with_for_update()
        )
        counter.last_value = counter.last_value + 1
        await self.db.flush()
        return format_document_number(
            prefix or default_prefix(scope), year, counter.last_value, self.padding
        )
