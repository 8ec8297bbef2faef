"""
Time bases and clock/date formatting.

Day counts are fractional days since noon on 2000-01-01. UTC day counts are
shifted to TAI and then TT by fixed offsets valid for 2023.
"""
import math
import re
from datetime import datetime, timedelta

# 00:00 UTC on 2023-01-01, in days since the J2000 epoch
EPOCH_2023 = 8400.5

SECONDS_PER_DAY = 24 * 60 * 60
MINUTES_PER_DAY = 24 * 60

# TAI was 37 seconds ahead of UTC in 2023
TAI_MINUS_UTC = 37.0
# https://aa.usno.navy.mil/faq/TT
TT_MINUS_TAI = 32.184

_CLOCK_RE = re.compile(r"^\s*([0-9]+)(?::([0-9]*))?\s*$")


# -----------------------------
# Time scales
# -----------------------------

def utc_to_tai(d_utc: float) -> float:
    return d_utc + TAI_MINUS_UTC / SECONDS_PER_DAY


def tai_to_tt(d_tai: float) -> float:
    return d_tai + TT_MINUS_TAI / SECONDS_PER_DAY


def utc_to_tt(d_utc: float) -> float:
    return tai_to_tt(utc_to_tai(d_utc))


def civil_instant(day: float, minutes: float) -> float:
    """
    UTC day count for a civil day index (0..364 of 2023) and minutes since 00:00 UTC.
    """
    return EPOCH_2023 + day + minutes / MINUTES_PER_DAY


# -----------------------------
# Formatting and parsing
# -----------------------------

def minutes_to_clock_string(minutes: float) -> str:
    """Format minutes from midnight as HH:MM. Values outside a day wrap around."""
    hours = math.floor((((minutes / 60) % 24) + 24) % 24)
    mins = math.floor(((minutes % 60) + 60) % 60)
    return f"{hours:02d}:{mins:02d}"


def clock_string_to_minutes(text: str) -> float:
    """
    Parse 'H', 'H:MM' or 'HH:MM' into minutes from midnight.
    Returns NaN when the text does not parse or a field is out of range.
    """
    m = _CLOCK_RE.match(text)
    if not m:
        return math.nan

    hours = int(m.group(1))
    if hours < 0 or hours > 23:
        return math.nan

    mins = 0
    if m.group(2):
        mins = int(m.group(2))
        if mins < 0 or mins > 59:
            return math.nan

    return hours * 60 + mins


def day_to_date_string(day: int) -> str:
    """Day index of a non-leap year (0..364) as e.g. 'January 1'."""
    date = datetime(2001, 1, 1) + timedelta(days=day)
    return f"{date:%B} {date.day}"


def time_zone_to_string(time_zone: float) -> str:
    """Minutes offset from UTC as '+1', '-3:30', '+1:05', or '±0'."""
    if time_zone > 0:
        symbol = "+"
    elif time_zone < 0:
        symbol = "-"
    else:
        symbol = "±"
    hours = abs(math.trunc(time_zone / 60))
    mins = abs(math.fmod(time_zone, 60))
    result = f"{symbol}{hours}"
    if mins != 0:
        result += f":{mins:02g}"
    return result


def longitude_to_time_zone(longitude: float) -> int:
    """Nearest whole-hour zone for a longitude in degrees, in minutes."""
    return math.floor(longitude / 360 * 24 + 0.5) * 60
