from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current time in UTC, used for every timestamp column."""
    return datetime.now(timezone.utc)
