"""
Merging (GeoJSON + curated schedules -> dataset).

- Converts court points and community center features into Locations
- Attaches curated schedule entries to the center they name
- Produces the mapping written to data/hoop-finder.json

Schedule entries name their center loosely ("Garfield CC",
"International District/Chinatown"), so center lookup tries a list of
matching strategies in order and takes the first hit.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from hoopfinder.model import Location, Program


logger = logging.getLogger(__name__)

WEEKDAY_KEYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
LOCAL_AREA_CODE = "206"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def normalize_center_name(name: str) -> str:
    """
    Reduce a center name to the part that identifies it.

    "Jefferson Park Community Center" -> "jefferson"
    """
    s = name.lower()
    s = s.replace("community center", "")
    s = s.replace("c.c.", "")
    s = re.sub(r"\bpark\b", "", s)
    s = s.replace("/", " ")
    return re.sub(r"\s+", " ", s).strip()


def _coords(feature: Dict[str, Any]) -> tuple[Optional[float], Optional[float]]:
    # GeoJSON points are [lng, lat]
    coords = (feature.get("geometry") or {}).get("coordinates") or []
    if len(coords) < 2:
        return None, None
    return coords[1], coords[0]


def _features(geojson: Any) -> List[Dict[str, Any]]:
    if not isinstance(geojson, dict):
        return []
    features = geojson.get("features") or []
    return [f for f in features if isinstance(f, dict)]


# ---------------------------------------------------------------------------
# Sources -> Locations
# ---------------------------------------------------------------------------


def process_courts(geojson: Any) -> List[Location]:
    """
    Convert court point features into outdoor court locations.
    """
    out: List[Location] = []
    for feature in _features(geojson):
        p = feature.get("properties") or {}
        lat, lng = _coords(feature)
        out.append(
            Location(
                id=f"court-{p.get('PMAID') or p.get('OBJECTID')}",
                kind="outdoor_court",
                name=p.get("PARKNAME") or "Unknown Court",
                address=p.get("ADDRESS") or "",
                lat=lat,
                lng=lng,
                indoor=False,
                cost="free",
                court_type=str(p.get("TYPE") or "unknown").lower(),
                court_count=p.get("NUMBEROFCOURTS") or 1,
            )
        )
    return out


def _center_hours(p: Dict[str, Any]) -> Optional[Dict[str, str]]:
    hours: Dict[str, str] = {}
    for day in WEEKDAY_KEYS:
        open_flag = p.get(f"DAY_{day.upper()}")
        day_hours = p.get(f"HOURS_{day.upper()}")
        if open_flag == "Yes" and day_hours:
            hours[day] = day_hours
        elif open_flag == "No":
            hours[day] = "closed"
    return hours or None


def _normalize_phone(phone: Optional[str]) -> str:
    # Some entries only carry the last 7 digits
    phone = phone or ""
    if phone and not phone.startswith(LOCAL_AREA_CODE):
        phone = f"{LOCAL_AREA_CODE}-{phone}"
    return phone


def process_centers(geojson: Any) -> List[Location]:
    """
    Convert community center features into indoor locations.
    """
    out: List[Location] = []
    for feature in _features(geojson):
        p = feature.get("properties") or {}
        lat, lng = _coords(feature)
        out.append(
            Location(
                id=f"center-{slugify(p.get('NAME') or '')}",
                kind="community_center",
                name=p.get("NAME") or "Unknown Center",
                address=p.get("ADDRESS") or "",
                lat=lat,
                lng=lng,
                indoor=True,
                cost="varies",
                phone=_normalize_phone(p.get("PHONE")),
                center_hours=_center_hours(p),
                website=p.get("WEBSITE_LINK") or None,
                basketball_link=p.get("BASKETBALL_LINK") or None,
            )
        )
    return out


# ---------------------------------------------------------------------------
# Center matching
# ---------------------------------------------------------------------------

CenterLookup = Dict[str, Location]
MatchStrategy = Callable[[str, CenterLookup], Optional[Location]]


def _match_exact(key: str, lookup: CenterLookup) -> Optional[Location]:
    return lookup.get(key)


def _match_substring(key: str, lookup: CenterLookup) -> Optional[Location]:
    if not key:
        return None
    for loc_key, loc in lookup.items():
        if loc_key and (key in loc_key or loc_key in key):
            return loc
    return None


def _significant_words(text: str) -> List[str]:
    return [w for w in text.split(" ") if len(w) > 2]


def _match_word_overlap(key: str, lookup: CenterLookup) -> Optional[Location]:
    key_words = _significant_words(key)
    for loc_key, loc in lookup.items():
        loc_words = _significant_words(loc_key)
        overlap = [w for w in key_words if w in loc_words]
        if overlap and len(overlap) >= min(len(key_words), len(loc_words)) * 0.5:
            return loc
    return None


MATCH_STRATEGIES: tuple[MatchStrategy, ...] = (_match_exact, _match_substring, _match_word_overlap)


def build_center_lookup(locations: List[Location]) -> CenterLookup:
    return {normalize_center_name(loc.name): loc for loc in locations if loc.kind == "community_center"}


def find_center(name: str, lookup: CenterLookup) -> Optional[Location]:
    """
    Return the center a schedule entry refers to, or None.
    """
    key = normalize_center_name(name)
    for strategy in MATCH_STRATEGIES:
        loc = strategy(key, lookup)
        if loc is not None:
            return loc
    return None


@dataclass
class MatchReport:
    matched: int = 0
    unmatched: int = 0
    unmatched_names: List[str] = field(default_factory=list)


def match_schedules(locations: List[Location], schedules: Any) -> MatchReport:
    """
    Attach curated schedule entries to their centers as Programs.

    Entries naming an unknown center are counted and reported, not raised.
    """
    lookup = build_center_lookup(locations)
    report = MatchReport()

    entries = schedules.get("events") if isinstance(schedules, dict) else None
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        center_name = str(entry.get("center") or "")
        loc = find_center(center_name, lookup)
        if loc is None:
            report.unmatched += 1
            if center_name not in report.unmatched_names:
                report.unmatched_names.append(center_name)
            continue
        loc.programs.append(Program.from_dict(entry))
        report.matched += 1

    for name in report.unmatched_names:
        logger.warning("No center matches schedule entry %r", name)

    return report


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_dataset(
    courts_geo: Any,
    centers_geo: Any,
    schedules: Any,
    generated_at: str,
) -> tuple[Dict[str, Any], MatchReport]:
    """
    Merge all sources into the published dataset mapping.
    """
    locations = process_courts(courts_geo) + process_centers(centers_geo)
    report = match_schedules(locations, schedules)

    seasons = schedules.get("seasons") if isinstance(schedules, dict) else None
    dataset = {
        "generated_at": generated_at,
        "seasons": seasons,
        "locations": [loc.to_dict() for loc in locations],
    }
    return dataset, report
