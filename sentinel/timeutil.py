"""Duration formatting and calendar interval helpers.

Timestamps throughout Sentinel are integer epoch milliseconds, matching what
is written to disk. Calendar math happens in local time.
"""

import time
from datetime import date, datetime, timedelta
from typing import Optional

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS

# Weeks run Sunday..Saturday (datetime.weekday() numbering, Monday == 0)
WEEK_STARTS_ON = 6


def now_ms() -> int:
    return int(time.time() * 1000)


def from_ms(timestamp: int) -> datetime:
    """Local naive datetime for an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp / 1000)


def to_ms(moment: datetime) -> int:
    """Epoch milliseconds for a datetime (naive values are taken as local time)."""
    return int(moment.timestamp() * 1000)


def day_key(timestamp: int) -> str:
    """Calendar-day partition key (YYYY-MM-DD, local time) for a timestamp."""
    return from_ms(timestamp).date().isoformat()


def format_duration(duration: int) -> str:
    """Format a millisecond span as ``Xh Ym Zs``."""
    hours = duration // HOUR_MS
    minutes = (duration % HOUR_MS) // MINUTE_MS
    seconds = (duration % MINUTE_MS) // SECOND_MS
    return f"{hours}h {minutes}m {seconds}s"


def session_duration(session, now: Optional[int] = None) -> int:
    """Elapsed milliseconds of a session; ongoing sessions run until ``now``."""
    end = session.session_end
    if end is None:
        end = now if now is not None else now_ms()
    return end - session.session_start


def format_datetime(timestamp: int) -> str:
    return from_ms(timestamp).strftime("%a %b %d %Y %H:%M:%S")


def start_of_week(day: date) -> date:
    return day - timedelta(days=(day.weekday() - WEEK_STARTS_ON) % 7)


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    if day.month == 12:
        return date(day.year, 12, 31)
    return date(day.year, day.month + 1, 1) - timedelta(days=1)
