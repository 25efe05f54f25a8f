"""
Date and time utility functions for Caregiver Co-Pilot.

Analysis timestamps are integer epoch milliseconds.
"""

import time
from datetime import datetime, timezone, tzinfo
from typing import Optional


def current_timestamp_ms() -> int:
    """Get current time as epoch milliseconds."""
    return int(time.time() * 1000)


def from_timestamp_ms(timestamp_ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=tz or timezone.utc)


def _clock(d: datetime) -> str:
    return d.strftime("%I:%M %p")


def format_visit_date(
    timestamp_ms: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Format a visit timestamp for headers and exports.

    Same-day visits read "Today at 09:05 AM"; older ones
    "Mon, Jan 6, 2025, 09:05 AM".
    """
    tz = tz or timezone.utc
    d = from_timestamp_ms(timestamp_ms, tz)
    now = (now or datetime.now(tz)).astimezone(tz)
    if d.date() == now.date():
        return f"Today at {_clock(d)}"
    return f"{d.strftime('%a')}, {d.strftime('%b')} {d.day}, {d.year}, {_clock(d)}"


def format_card_date(
    timestamp_ms: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Short date for insight cards: "Today" or "Jan 6"."""
    tz = tz or timezone.utc
    d = from_timestamp_ms(timestamp_ms, tz)
    now = (now or datetime.now(tz)).astimezone(tz)
    if d.date() == now.date():
        return "Today"
    return f"{d.strftime('%b')} {d.day}"
