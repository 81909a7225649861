"""
Duration Utilities
Conversion between "1d5h"-style text and milliseconds
"""

import re
from datetime import datetime
from enum import IntEnum
from typing import Optional


class Milliseconds(IntEnum):
    """Common durations expressed in milliseconds."""

    SECOND = 1000
    MINUTE = SECOND * 60
    HOUR = MINUTE * 60
    DAY = HOUR * 24
    WEEK = DAY * 7


# One "<amount><unit>" token, e.g. "5h"
DURATION_TOKEN = re.compile(r"(\d+)([wdhms])", re.IGNORECASE)

UNIT_MULTIPLIERS = {
    "w": Milliseconds.WEEK,
    "d": Milliseconds.DAY,
    "h": Milliseconds.HOUR,
    "m": Milliseconds.MINUTE,
    "s": Milliseconds.SECOND,
}


def parse_duration(text: str) -> Optional[int]:
    """
    Convert a string like 1d5h to milliseconds.

    Every "<amount><unit>" token found in the text is added up; units may
    repeat ("1h2h" is three hours). Text around the tokens is ignored.

    Args:
        text: Duration text, units w/d/h/m/s (any case)

    Returns:
        Total milliseconds, or None when no token matched or an amount is zero
    """
    if not text or not isinstance(text, str):
        return None

    matches = DURATION_TOKEN.findall(text)
    if not matches:
        return None

    total = 0
    for number, letter in matches:
        amount = int(number)
        if not amount:
            return None
        total += amount * UNIT_MULTIPLIERS[letter.lower()]

    return total


def format_duration(milliseconds: float) -> str:
    """
    Convert milliseconds to a human readable format like 1d 5h.

    Args:
        milliseconds: Duration in milliseconds

    Returns:
        Formatted duration; "1s" for any positive sub-second value, "" for zero
    """
    if milliseconds <= 0:
        return ""

    seconds_total = int(milliseconds // 1000)
    if seconds_total < 1:
        return "1s"

    days, remainder = divmod(seconds_total, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    for amount, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (seconds, "s")):
        if amount:
            parts.append(f"{amount}{unit}")

    return " ".join(parts)


def format_clock_time(now: Optional[datetime] = None) -> str:
    """
    Format a wall-clock time as "HH:MM AM/PM".

    Args:
        now: Time to format (default: current local time)

    Returns:
        Zero-padded 12-hour clock string
    """
    if now is None:
        now = datetime.now()

    am_or_pm = "PM" if now.hour >= 12 else "AM"
    hour = now.hour % 12 or 12

    return f"{hour:02d}:{now.minute:02d} {am_or_pm}"
