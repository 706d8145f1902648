"""
Pact time decoding and the name expiry rule.

A name stays usable for a 31-day grace period after its nominal expiry.
Only once the current time is strictly past expiry + grace is the name
treated as expired.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

GRACE_PERIOD = timedelta(days=31)


def transform_pact_date(value: Any) -> Optional[datetime]:
    """
    Decode a Pact time object into a UTC datetime.

    Accepted shapes are {"timep": <epoch ms>} and {"time": <epoch ms>};
    anything else (missing, strings, other keys) yields None.
    """
    if not isinstance(value, dict):
        return None

    for key in ("timep", "time"):
        millis = value.get(key)
        if isinstance(millis, (int, float)) and not isinstance(millis, bool):
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)

    return None


def is_name_expired(expiry_date: datetime, now: Optional[datetime] = None) -> bool:
    """True once `now` is strictly later than expiry_date + GRACE_PERIOD."""
    if now is None:
        now = datetime.now(timezone.utc)
    return now > expiry_date + GRACE_PERIOD
