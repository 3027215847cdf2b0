"""
Parsing of free-text schedule fragments.

Recreation program listings describe their schedules loosely:

- days:   "Mon/Wed/Fri", "Monday-Friday", "Tue"
- times:  "12:30-3:30pm", "6-8:30pm", "Noon-4pm", "7pm-Midnight"
- dates:  "4/6-6/12"

Every parser here returns None (or an empty list) for text it does not
recognize. Callers drop the affected event instead of guessing.

Known approximations (kept on purpose, published schedules depend on them):
- A start hour from 1 to 7 without am/pm is read as PM ("6-8pm" is 6pm).
- Ranges ending after midnight are clamped to 23:59 of the same day.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, NamedTuple, Optional

from hoopfinder.config import SEASON_YEAR


logger = logging.getLogger(__name__)


# Sunday-first, matching the index used by the calendar day codes
DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
DAY_ABBR = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
RRULE_DAYS = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")


class TimeRange(NamedTuple):
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int


class DateRange(NamedTuple):
    start: date
    end: date


# ---------------------------------------------------------------------------
# Days
# ---------------------------------------------------------------------------

_DAY_RANGE_RE = re.compile(r"^(\w+)\s*[-–]\s*(\w+)$")


def resolve_day(token: Optional[str]) -> Optional[str]:
    """
    Resolve one day token ("mon", "Tues.", "THURSDAY") to its canonical name.

    Only the first three letters matter.
    """
    if not token:
        return None
    letters = re.sub(r"[^a-z]", "", token.lower())
    if not letters:
        return None
    prefix = letters[:3]
    for day in DAYS:
        if day.lower().startswith(prefix):
            return day
    return None


def day_index(token: Optional[str]) -> int:
    """
    Return the Sunday-first index of a day token, or -1.
    """
    day = resolve_day(token)
    return DAYS.index(day) if day else -1


def resolve_days(text: Optional[str]) -> List[str]:
    """
    Expand a day expression into canonical weekday names.

    - "Monday-Friday" expands the inclusive range in week order. A range
      running backwards ("Fri-Mon") does not wrap and yields nothing.
    - "Mon/Wed/Fri" keeps the source order and skips unknown parts.
    - anything else is a single day or nothing.
    """
    s = (text or "").strip()
    if not s:
        return []

    range_match = _DAY_RANGE_RE.match(s)
    if range_match:
        start_idx = day_index(range_match.group(1))
        end_idx = day_index(range_match.group(2))
        if start_idx >= 0 and end_idx >= 0:
            return [DAYS[i] for i in range(start_idx, end_idx + 1)]

    if "/" in s:
        resolved = [resolve_day(part.strip()) for part in s.split("/")]
        return [day for day in resolved if day]

    day = resolve_day(s)
    return [day] if day else []


# ---------------------------------------------------------------------------
# Times
# ---------------------------------------------------------------------------

_NOON_RE = re.compile(r"^noon\s*-\s*(\d{1,2}):?(\d{2})?\s*(am|pm)?", re.IGNORECASE)
_TIME_RANGE_RE = re.compile(
    r"(\d{1,2}):?(\d{2})?\s*(am|pm)?\s*-\s*(\d{1,2}):?(\d{2})?\s*(am|pm)?",
    re.IGNORECASE,
)
_END_WORDS = (
    (re.compile(r"-\s*midnight\b", re.IGNORECASE), "-12am"),
    (re.compile(r"-\s*noon\b", re.IGNORECASE), "-12pm"),
)


def _apply_meridiem(hour: int, meridiem: str) -> int:
    if meridiem == "pm" and hour < 12:
        return hour + 12
    if meridiem == "am" and hour == 12:
        return 0
    return hour


def parse_time_range(text: Optional[str]) -> Optional[TimeRange]:
    """
    Parse a time span into 24-hour start/end values.

    "6-8:30pm"     -> 18:00-20:30
    "Noon-4pm"     -> 12:00-16:00
    "7pm-Midnight" -> 19:00-23:59

    Returns None when no range is recognized.
    """
    if not text:
        return None

    cleaned = text.replace(".", "").strip()
    for pattern, replacement in _END_WORDS:
        cleaned = pattern.sub(replacement, cleaned)

    noon_match = _NOON_RE.match(cleaned)
    if noon_match:
        start_hour, start_minute = 12, 0
        end_minute = int(noon_match.group(2) or 0)
        end_hour = _apply_meridiem(int(noon_match.group(1)), (noon_match.group(3) or "pm").lower())
    else:
        match = _TIME_RANGE_RE.search(cleaned)
        if not match:
            logger.debug("Unrecognized time range: %r", text)
            return None

        start_hour = int(match.group(1))
        start_minute = int(match.group(2) or 0)
        start_meridiem = (match.group(3) or "").lower()
        end_hour = int(match.group(4))
        end_minute = int(match.group(5) or 0)
        end_meridiem = (match.group(6) or "").lower()

        end_hour = _apply_meridiem(end_hour, end_meridiem)

        if start_meridiem:
            start_hour = _apply_meridiem(start_hour, start_meridiem)
        elif start_hour < 8:
            # "6-8pm" means 6pm; morning starts before 8 are rare for these programs
            start_hour += 12

    # Late sessions: "7pm-1am" / "7pm-Midnight"
    if end_hour < start_hour and end_hour <= 6:
        end_hour += 24

    # Never spill into the next calendar day
    if end_hour >= 24:
        end_hour, end_minute = 23, 59

    return _checked(TimeRange(start_hour, start_minute, end_hour, end_minute), text)


def _checked(parsed: TimeRange, text: str) -> Optional[TimeRange]:
    hours_ok = parsed.start_hour <= 23 and parsed.end_hour <= 23
    minutes_ok = parsed.start_minute <= 59 and parsed.end_minute <= 59
    if not (hours_ok and minutes_ok):
        logger.debug("Out-of-range time values in %r", text)
        return None
    return parsed


_START_TIME_RE = re.compile(r"(\d{1,2}):?(\d{2})?\s*(am|pm|a\.m\.|p\.m\.)?", re.IGNORECASE)


def start_minutes(text: Optional[str]) -> int:
    """
    Minutes after midnight of the first time in a range ("12:30-3:30pm" -> 750).

    Only used to order events within a day. Unparseable text sorts first (0).
    """
    if not text:
        return 0
    start = text.split("-")[0].strip()
    match = _START_TIME_RE.search(start)
    if not match:
        return 0
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    meridiem = (match.group(3) or "").replace(".", "").lower()
    hour = _apply_meridiem(hour, meridiem)
    if not meridiem and 1 <= hour < 8:
        hour += 12
    return hour * 60 + minute


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_DATE_RANGE_RE = re.compile(r"(\d{1,2})/(\d{1,2})\s*-\s*(\d{1,2})/(\d{1,2})")


def parse_date_range(text: Optional[str], season_year: int = SEASON_YEAR) -> Optional[DateRange]:
    """
    Parse "M/D-M/D" into concrete dates within the season year.

    Returns None when the text has any other shape or names an
    impossible date.
    """
    if not text:
        return None
    match = _DATE_RANGE_RE.fullmatch(text.strip())
    if not match:
        logger.debug("Unrecognized date range: %r", text)
        return None
    m1, d1, m2, d2 = (int(g) for g in match.groups())
    try:
        return DateRange(date(season_year, m1, d1), date(season_year, m2, d2))
    except ValueError:
        logger.debug("Invalid calendar date in %r", text)
        return None
