"""
iCalendar (.ics) export.

Each FlatEvent becomes one weekly recurring VEVENT that starts on the
first matching weekday of its date range and repeats until the last
day of the range. The file can be imported into or subscribed from:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from hoopfinder.config import (
    CITY_SUFFIX,
    DEFAULT_CAL_NAME,
    PRODID,
    SEASON_YEAR,
    TIMEZONE,
)
from hoopfinder.filters import FilterSet, cost_label, event_matches
from hoopfinder.model import FlatEvent
from hoopfinder.parse import DAYS, RRULE_DAYS, parse_date_range, parse_time_range


logger = logging.getLogger(__name__)

# Same Sunday-first order as parse.DAYS
_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)

MAX_LINE_LENGTH = 75


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS TEXT values (backslash, semicolon, comma, newline).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _fold(line: str) -> List[str]:
    """
    Fold a content line at 75 UTF-8 octets, continuation lines start with a space.

    Breaks fall between characters, never inside a multi-byte sequence.
    """
    if len(line.encode("utf-8")) <= MAX_LINE_LENGTH:
        return [line]
    out: List[str] = []
    current = ""
    size = 0
    for ch in line:
        width = len(ch.encode("utf-8"))
        if size + width > MAX_LINE_LENGTH:
            out.append(current)
            # the leading space counts toward the continuation line
            current, size = " ", 1
        current += ch
        size += width
    out.append(current)
    return out


def _dt_local(day: date, hour: int, minute: int) -> str:
    return f"{day:%Y%m%d}T{hour:02d}{minute:02d}00"


def first_occurrence(start: date, day_idx: int) -> date:
    """
    First date on or after `start` that falls on the Sunday-first weekday index.
    """
    return start + relativedelta(weekday=_WEEKDAYS[day_idx])


def _vevent(ev: FlatEvent, count: int, season_year: int, dtstamp: str) -> Optional[List[str]]:
    """
    Build the VEVENT lines for one event, or None if it cannot be scheduled.
    """
    if not ev.date_range or not ev.time:
        return None

    dates = parse_date_range(ev.date_range, season_year)
    times = parse_time_range(ev.time)
    if dates is None or times is None:
        logger.debug("Skipping %s on %s: cannot parse %r / %r", ev.program, ev.day, ev.date_range, ev.time)
        return None

    if ev.day not in DAYS:
        return None
    day_idx = DAYS.index(ev.day)

    anchor = first_occurrence(dates.start, day_idx)
    if anchor > dates.end:
        logger.debug("Skipping %s on %s: no %s within %s", ev.program, ev.day, ev.day, ev.date_range)
        return None

    uid = f"{ev.code or 'hf'}-{ev.day[:3].lower()}-{count}@hoopfinder"
    summary = f"{ev.program} @ {ev.location_name}"
    description = f"Ages: {ev.ages}\nCost: {cost_label(ev.cost)}\nDates: {ev.date_range}"
    location = ", ".join(part for part in (ev.location_name, ev.address, CITY_SUFFIX) if part)

    return [
        "BEGIN:VEVENT",
        f"UID:{_ics_escape(uid)}",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART;TZID={TIMEZONE}:{_dt_local(anchor, times.start_hour, times.start_minute)}",
        f"DTEND;TZID={TIMEZONE}:{_dt_local(anchor, times.end_hour, times.end_minute)}",
        f"RRULE:FREQ=WEEKLY;BYDAY={RRULE_DAYS[day_idx]};UNTIL={dates.end:%Y%m%d}T235900",
        f"SUMMARY:{_ics_escape(summary)}",
        f"DESCRIPTION:{_ics_escape(description)}",
        f"LOCATION:{_ics_escape(location)}",
        "END:VEVENT",
    ]


def build_calendar(
    events: Iterable[FlatEvent],
    cal_name: str = DEFAULT_CAL_NAME,
    season_year: int = SEASON_YEAR,
    dtstamp: Optional[datetime] = None,
) -> Tuple[str, int]:
    """
    Render events as an iCalendar document.

    Returns the document text and the number of exported events.
    Events that cannot be scheduled are skipped.
    """
    stamp = (dtstamp or datetime.now(timezone.utc)).astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    lines: List[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        f"X-WR-CALNAME:{_ics_escape(cal_name)}",
        f"X-WR-TIMEZONE:{TIMEZONE}",
    ]

    count = 0
    for ev in events:
        block = _vevent(ev, count, season_year, stamp)
        if block is None:
            continue
        lines.extend(block)
        count += 1

    lines.append("END:VCALENDAR")

    folded: List[str] = []
    for line in lines:
        folded.extend(_fold(line))

    # ICS standard uses CRLF
    return "\r\n".join(folded) + "\r\n", count


def export_events_to_ics(
    events: Iterable[FlatEvent],
    out_path: str | Path,
    cal_name: str = DEFAULT_CAL_NAME,
    season_year: int = SEASON_YEAR,
    dtstamp: Optional[datetime] = None,
) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    text, count = build_calendar(events, cal_name, season_year=season_year, dtstamp=dtstamp)
    out.write_bytes(text.encode("utf-8"))
    return count


# ---------------------------------------------------------------------------
# Subscription feeds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CalendarPreset:
    slug: str
    label: str
    filters: FilterSet


PRESETS: Tuple[CalendarPreset, ...] = (
    CalendarPreset("all", "HoopFinder - All Events", FilterSet()),
    CalendarPreset("free", "HoopFinder - Free Events", FilterSet(costs=frozenset({"free"}))),
    CalendarPreset("youth", "HoopFinder - Youth Events", FilterSet(ages=frozenset({"youth"}))),
    CalendarPreset("womens", "HoopFinder - Women's Events", FilterSet(genders=frozenset({"womens"}))),
)


def write_calendar_files(
    events: List[FlatEvent],
    cal_dir: Path,
    season_year: int = SEASON_YEAR,
    presets: Iterable[CalendarPreset] = PRESETS,
    dtstamp: Optional[datetime] = None,
) -> dict[str, int]:
    """
    Write one subscription feed per preset into cal_dir/<slug>.ics.

    Feeds cover the whole season, past weeks included; calendar clients
    handle the dates themselves.

    Returns a mapping slug -> number of exported events.
    """
    counts: dict[str, int] = {}
    for preset in presets:
        selected = [ev for ev in events if event_matches(ev, preset.filters)]
        counts[preset.slug] = export_events_to_ics(
            selected,
            cal_dir / f"{preset.slug}.ics",
            cal_name=preset.label,
            season_year=season_year,
            dtstamp=dtstamp,
        )
    return counts
