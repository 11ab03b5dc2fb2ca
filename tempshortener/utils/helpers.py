"""Time helpers shared by the registry and its scheduler.

All timestamps in the application are timezone-aware UTC datetimes.

Functions:
    utc_now() -> datetime
        Current wall-clock time in UTC
    seconds_until(moment: datetime) -> float
        Seconds left until a moment (never negative)
"""

from datetime import datetime, UTC


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def seconds_until(moment: datetime) -> float:
    """Compute how many seconds are left until `moment`.

    Args:
        moment (datetime): timezone-aware point in time

    Returns:
        float: remaining seconds, 0.0 if `moment` already passed.

    Example:
        >>> seconds_until(utc_now() - timedelta(minutes=1))
        0.0
    """
    return max((moment - utc_now()).total_seconds(), 0.0)
