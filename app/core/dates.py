from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso_timestamp(value: datetime | None = None) -> str:
    """Canonical UTC text timestamp, e.g. ``2026-10-19T08:15:30.123Z``.

    History rows are ordered by comparing these strings, so every writer must
    go through this function to keep the zero-padded layout.
    """
    if value is None:
        value = utc_now()
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
