from datetime import datetime, timezone


def utc_now():
    """
    Returns the current time as a naive UTC datetime, the form stored in the database
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_iso(dt):
    """
    Formats a stored (naive UTC) datetime as an ISO-8601 string with a UTC offset
    """
    if dt is None:
        return None
    return dt.replace(tzinfo=timezone.utc).isoformat()

