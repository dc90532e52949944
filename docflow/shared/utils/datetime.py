"""UTC clock for docflow.

Every stored timestamp is timezone-aware UTC: history performed_at,
approval decided_at, delegation windows and the sequence year.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a value read from the database to aware UTC.

    Naive values are taken to be UTC already; None passes through.
    """
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
