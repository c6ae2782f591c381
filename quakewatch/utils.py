import re
from datetime import date, datetime, timedelta

# Naive UTC epoch, rendered times carry no offset
EPOCH = datetime(1970, 1, 1)

ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def format_date(day):
    """Render a date as an ISO calendar date, e.g. '2024-01-01'."""
    return day.isoformat()


def event_window(day):
    """Return the half-open [day, day+1) query window as ISO date strings."""
    return format_date(day), format_date(day + timedelta(days=1))


def parse_date(value):
    """
    Accepts a date, a datetime or an ISO 'YYYY-MM-DD' string.
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat also takes basic and week dates on newer Pythons
        if not ISO_DATE.fullmatch(text):
            raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
        return date.fromisoformat(text)
    raise ValueError(f"Not a date: {value!r}")


def format_timestamp(epoch_ms):
    """
    Converts epoch in milliseconds (e.g., 1704067200000)
    to its UTC calendar representation: '2024-01-01T00:00'.
    Seconds and milliseconds are only shown when non-zero.
    Timestamps outside the datetime range are returned as raw millis.
    """
    try:
        dt = EPOCH + timedelta(milliseconds=int(epoch_ms))
    except OverflowError as e:
        print(f"Error formatting timestamp {epoch_ms}: {e}")
        return str(epoch_ms)
    if dt.microsecond:
        return dt.isoformat(timespec="milliseconds")
    if dt.second:
        return dt.isoformat(timespec="seconds")
    return dt.isoformat(timespec="minutes")
