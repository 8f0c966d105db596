import re
import time
from datetime import datetime, timezone

from src.webhook_verifier.errors import WebhookVerificationError

WEBHOOK_TOLERANCE_IN_SECONDS = 300  # 5 minutes

_TIMESTAMP_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


def verify_timestamp(value: str, now: float | None = None) -> datetime:
    """Parse a timestamp header and check it against the tolerance window.

    Args:
        value: Seconds since the epoch, as a base-10 integer string.
        now: Current time in seconds. Defaults to the wall clock.

    Returns:
        The timestamp as a timezone-aware UTC datetime.

    Raises:
        WebhookVerificationError: if the value is not an integer, or lies more
            than WEBHOOK_TOLERANCE_IN_SECONDS away from now.
    """
    if not isinstance(value, str) or not _TIMESTAMP_RE.fullmatch(value):
        raise WebhookVerificationError("Invalid Signature Headers")
    try:
        timestamp = int(value)
    except ValueError as e:
        # digit count beyond the interpreter's int conversion limit
        raise WebhookVerificationError("Invalid Signature Headers") from e

    current = int(time.time() if now is None else now)
    if current - timestamp > WEBHOOK_TOLERANCE_IN_SECONDS:
        raise WebhookVerificationError("Message timestamp too old")
    if timestamp - current > WEBHOOK_TOLERANCE_IN_SECONDS:
        raise WebhookVerificationError("Message timestamp too new")
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def to_seconds(timestamp: datetime | int | float) -> int:
    """Whole seconds since the epoch. Naive datetimes are taken as UTC."""
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return int(timestamp.timestamp() // 1)
    return int(timestamp // 1)
