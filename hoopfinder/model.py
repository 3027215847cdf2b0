"""
Central data model definitions used across the project.

This module defines the canonical structure of the records so that:
- the merge step, the flattener, the filters and the exporter share the same field names
- JSON written by the build step can be read back without loss

JSON keys follow the published data file: a location's kind is stored
under "type", its programs under "events".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


Cost = Union[str, int, float, None]


@dataclass
class Session:
    """
    One weekly time slot, e.g. day="Mon/Wed/Fri", time="6-8:30pm".
    """

    day: str
    time: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(day=str(data.get("day") or ""), time=str(data.get("time") or ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"day": self.day, "time": self.time}


@dataclass
class Program:
    """
    A scheduled activity (drop-in, league, open gym) offered at one location.
    """

    program: str
    type: Optional[str] = None
    ages: Optional[str] = None
    code: Optional[str] = None
    date_range: Optional[str] = None
    cost: Cost = None
    sessions: List[Session] = field(default_factory=list)
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Program":
        sessions = data.get("sessions") or []
        return cls(
            program=str(data.get("program") or ""),
            type=data.get("type"),
            ages=data.get("ages"),
            code=data.get("code"),
            date_range=data.get("date_range"),
            cost=data.get("cost"),
            sessions=[Session.from_dict(s) for s in sessions if isinstance(s, dict)],
            notes=data.get("notes") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "program": self.program,
            "type": self.type,
            "ages": self.ages,
            "code": self.code,
            "date_range": self.date_range,
            "cost": self.cost,
            "sessions": [s.to_dict() for s in self.sessions],
            "notes": self.notes,
        }


@dataclass
class Location:
    """
    A physical site: an outdoor court or a community center.

    Court-only fields (court_type, court_count) and center-only fields
    (phone, center_hours, website, basketball_link) stay None on the
    other kind.
    """

    id: str
    kind: str
    name: str
    address: str
    lat: Optional[float]
    lng: Optional[float]
    indoor: bool = False
    cost: Optional[str] = None
    court_type: Optional[str] = None
    court_count: Optional[int] = None
    phone: Optional[str] = None
    center_hours: Optional[Dict[str, str]] = None
    website: Optional[str] = None
    basketball_link: Optional[str] = None
    programs: List[Program] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        programs = data.get("events") or []
        return cls(
            id=str(data.get("id") or ""),
            kind=str(data.get("type") or ""),
            name=str(data.get("name") or ""),
            address=str(data.get("address") or ""),
            lat=data.get("lat"),
            lng=data.get("lng"),
            indoor=bool(data.get("indoor", False)),
            cost=data.get("cost"),
            court_type=data.get("court_type"),
            court_count=data.get("court_count"),
            phone=data.get("phone"),
            center_hours=data.get("center_hours"),
            website=data.get("website"),
            basketball_link=data.get("basketball_link"),
            programs=[Program.from_dict(p) for p in programs if isinstance(p, dict)],
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "type": self.kind,
            "name": self.name,
            "address": self.address,
            "lat": self.lat,
            "lng": self.lng,
            "indoor": self.indoor,
            "cost": self.cost,
        }
        if self.kind == "outdoor_court":
            out["court_type"] = self.court_type
            out["court_count"] = self.court_count
        else:
            out["phone"] = self.phone
            out["center_hours"] = self.center_hours
            out["website"] = self.website
            out["basketball_link"] = self.basketball_link
        out["events"] = [p.to_dict() for p in self.programs]
        return out


@dataclass(frozen=True)
class FlatEvent:
    """
    One program occurrence on exactly one canonical weekday.

    Derived from Location x Program x Session; never stored.
    """

    location_name: str
    address: str
    program: str
    ages: str
    cost: Cost
    day: str
    time: str
    date_range: Optional[str]
    code: Optional[str]
    program_type: Optional[str]


def locations_from_payload(payload: Any) -> List[Location]:
    """
    Read the "locations" list of a dataset mapping.

    Anything that is not a mapping with a list of location dicts
    yields an empty list.
    """
    if not isinstance(payload, dict):
        return []
    raw = payload.get("locations") or []
    if not isinstance(raw, list):
        return []
    return [Location.from_dict(item) for item in raw if isinstance(item, dict)]
