"""
TIME INFORMATION UTILITY
========================

Returns the current time as an ISO-8601 string. Used for message timestamps
and for the "time" field of GET /api/health.
"""

import datetime


def get_iso_timestamp() -> str:
    """Return the current UTC time, e.g. 2026-02-05T10:15:30.123Z."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
