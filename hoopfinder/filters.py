"""
Classification and filtering.

Free-text program fields are mapped to small tag sets:
- ages   -> subset of {"adult", "teen", "youth", "all"}
- gender -> "womens" | "mens" | "open"
- cost   -> "free" | "paid"

Unrecognized text always classifies permissively, so an event is never
hidden just because its listing is written in an unexpected way.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, Iterable, List, Optional

from hoopfinder.config import SEASON_YEAR, TODAY
from hoopfinder.model import Cost, FlatEvent, Location, Program
from hoopfinder.parse import parse_date_range


ALL_AGE_GROUPS: FrozenSet[str] = frozenset({"adult", "teen", "youth", "all"})
ALL_GENDERS: FrozenSet[str] = frozenset({"open", "womens", "mens"})
ALL_COSTS: FrozenSet[str] = frozenset({"free", "paid"})
ALL_KINDS: FrozenSet[str] = frozenset({"outdoor", "indoor"})

# Location.kind -> filter chip value
KIND_FILTER = {
    "outdoor_court": "outdoor",
    "community_center": "indoor",
}


# ---------------------------------------------------------------------------
# Classifiers
# ---------------------------------------------------------------------------

_OLDER_RE = re.compile(r"(\d+)\s+and\s+older")
_AGE_SPAN_RE = re.compile(r"(\d+)\s*[-–]\s*(\d+)")
_SMALL_AGE_RE = re.compile(r"\b[5-9]\b")
_MEN_RE = re.compile(r"\bmen\b")


def classify_age_groups(ages: Optional[str]) -> FrozenSet[str]:
    """
    Map an ages text ("18 and older", "13-17", "All Ages") to age brackets.
    """
    if not ages:
        return ALL_AGE_GROUPS
    s = ages.lower()
    if "all ages" in s:
        return ALL_AGE_GROUPS
    if "18 and older" in s or "18+" in s:
        return frozenset({"adult"})

    older = _OLDER_RE.search(s)
    if older:
        age = int(older.group(1))
        if age <= 10:
            return ALL_AGE_GROUPS
        if age <= 17:
            return frozenset({"teen", "adult"})
        return frozenset({"adult"})

    span = _AGE_SPAN_RE.search(s)
    if span:
        low, high = int(span.group(1)), int(span.group(2))
        if low >= 11 and high <= 19:
            return frozenset({"teen"})
        if high <= 12:
            return frozenset({"youth"})

    if "5 and under" in s or _SMALL_AGE_RE.search(s) or "little" in s or "mini" in s:
        return frozenset({"youth"})

    return ALL_AGE_GROUPS


def classify_gender(program: Optional[str]) -> str:
    """
    Derive the gender category from a program name.
    """
    if not program:
        return "open"
    s = program.lower()
    # "women" has to be checked first, it contains "men"
    if "women" in s:
        return "womens"
    if "men's" in s or _MEN_RE.search(s):
        return "mens"
    return "open"


def is_free(cost: Cost) -> bool:
    """
    Absent, "FREE", "$0" or numeric zero count as free.
    """
    if cost is None or cost == "" or cost in ("FREE", "$0"):
        return True
    if isinstance(cost, (int, float)) and not isinstance(cost, bool):
        return cost == 0
    return False


def classify_cost(cost: Cost) -> str:
    return "free" if is_free(cost) else "paid"


def cost_label(cost: Cost) -> str:
    return "Free" if is_free(cost) else str(cost)


# ---------------------------------------------------------------------------
# Active programs
# ---------------------------------------------------------------------------


def is_program_active(
    date_range: Optional[str],
    today: date = TODAY,
    season_year: int = SEASON_YEAR,
) -> bool:
    """
    True if today lies within the program's date range (inclusive).

    Programs without a date range, or with one that cannot be parsed,
    are always considered current.
    """
    if not date_range:
        return True
    parsed = parse_date_range(date_range, season_year)
    if parsed is None:
        return True
    return parsed.start <= today <= parsed.end


def is_season_expired(
    events: Iterable[FlatEvent],
    today: date = TODAY,
    season_year: int = SEASON_YEAR,
) -> bool:
    """
    True if there are events and none of them is still running.
    """
    events = list(events)
    return bool(events) and not any(is_program_active(ev.date_range, today, season_year) for ev in events)


# ---------------------------------------------------------------------------
# Filter sets
# ---------------------------------------------------------------------------


@dataclass
class FilterSet:
    """
    Active filter values. A value missing from a set hides what it tags.
    """

    kinds: FrozenSet[str] = ALL_KINDS
    ages: FrozenSet[str] = ALL_AGE_GROUPS
    genders: FrozenSet[str] = ALL_GENDERS
    costs: FrozenSet[str] = ALL_COSTS
    require_schedule: bool = False


def _matches(ages: Optional[str], program: Optional[str], cost: Cost, filters: FilterSet) -> bool:
    return (
        bool(classify_age_groups(ages) & filters.ages)
        and classify_gender(program) in filters.genders
        and classify_cost(cost) in filters.costs
    )


def program_matches(prog: Program, filters: FilterSet) -> bool:
    return _matches(prog.ages, prog.program, prog.cost, filters)


def event_matches(event: FlatEvent, filters: FilterSet) -> bool:
    return _matches(event.ages, event.program, event.cost, filters)


def active_programs(
    location: Location,
    today: date = TODAY,
    season_year: int = SEASON_YEAR,
) -> List[Program]:
    return [p for p in location.programs if is_program_active(p.date_range, today, season_year)]


def location_passes_filter(
    location: Location,
    filters: FilterSet,
    today: date = TODAY,
    season_year: int = SEASON_YEAR,
) -> bool:
    """
    Decide whether a location stays on the map.

    Locations without current programs pass on their kind alone, unless
    the filter asks for scheduled locations only.
    """
    # kinds without a toggle are never hidden by it
    kind_toggle = KIND_FILTER.get(location.kind)
    if kind_toggle is not None and kind_toggle not in filters.kinds:
        return False

    current = active_programs(location, today, season_year)
    if filters.require_schedule and not current:
        return False
    if not current:
        return True
    return any(program_matches(p, filters) for p in current)


def select_events(
    events: Iterable[FlatEvent],
    filters: FilterSet,
    today: date = TODAY,
    season_year: int = SEASON_YEAR,
) -> List[FlatEvent]:
    """
    Current events matching the age, gender and cost filters, in input order.
    """
    return [
        ev
        for ev in events
        if is_program_active(ev.date_range, today, season_year) and event_matches(ev, filters)
    ]


def events_for_day(
    events: Iterable[FlatEvent],
    day: str,
    filters: FilterSet,
    today: date = TODAY,
    season_year: int = SEASON_YEAR,
) -> List[FlatEvent]:
    return select_events((ev for ev in events if ev.day == day), filters, today, season_year)
