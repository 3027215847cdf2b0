"""
Flattening of nested location -> program -> session records.

A session like {"day": "Mon/Wed/Fri", "time": "6-8pm"} becomes three
FlatEvents, one per weekday, so the schedule view and the calendar
export can work on single days only.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from hoopfinder.model import FlatEvent, Location
from hoopfinder.parse import resolve_days, start_minutes


logger = logging.getLogger(__name__)

DEFAULT_AGES = "All Ages"
DEFAULT_COST = "FREE"


def flatten_events(locations: Iterable[Location]) -> List[FlatEvent]:
    """
    Expand every session of every program into one event per weekday.

    Sessions whose day text cannot be resolved contribute nothing.
    The result is ordered by start time; events starting at the same
    minute keep their input order.
    """
    result: List[FlatEvent] = []

    for loc in locations:
        for prog in loc.programs:
            for session in prog.sessions:
                days = resolve_days(session.day)
                if not days:
                    logger.debug("Dropping session with unknown day %r (%s)", session.day, prog.program)
                    continue

                for day in days:
                    result.append(
                        FlatEvent(
                            location_name=loc.name,
                            address=loc.address,
                            program=prog.program,
                            ages=prog.ages or DEFAULT_AGES,
                            cost=prog.cost or DEFAULT_COST,
                            day=day,
                            time=session.time,
                            date_range=prog.date_range,
                            code=prog.code,
                            program_type=prog.type,
                        )
                    )

    # sorted() is stable, so ties keep source order
    return sorted(result, key=lambda ev: start_minutes(ev.time))
