from datetime import datetime, timezone

from sqlalchemy import DateTime

# column type for every stored timestamp
UTCDateTime = DateTime(timezone=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to timestamps read back without tzinfo (SQLite drops it)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
