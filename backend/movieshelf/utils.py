import datetime as dt


def now_utc() -> dt.datetime:
    """Current time as an aware UTC datetime, matching the timezone-aware columns."""
    return dt.datetime.now(dt.timezone.utc)
