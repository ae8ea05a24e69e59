from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_epoch_millis(millis: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=millis)


def parse_iso8601(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp.

    A trailing ``Z`` is accepted as UTC on every supported interpreter.

    :raises ValueError: If value is not valid ISO-8601
    """
    if value.endswith(('Z', 'z')):
        value = f'{value[:-1]}+00:00'
    return datetime.fromisoformat(value)


def to_iso8601(dt: datetime) -> str:
    return dt.isoformat()
