from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import parse_timestamp, to_iso


@dataclass(frozen=True)
class GeoPoint:
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None

    @classmethod
    def from_body(cls, body: Optional[Dict[str, Any]]) -> Optional["GeoPoint"]:
        if not body:
            return None
        return cls(
            latitude=body.get("latitude"),
            longitude=body.get("longitude"),
            address=body.get("address"),
        )


@dataclass(frozen=True)
class TimeEntry:
    """One clock session. Created on clock-in, closed on clock-out."""

    entry_id: str
    company_id: str
    profile_id: Optional[str]
    user_id: Optional[str]
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    is_break: bool = False
    project_id: Optional[str] = None
    clock_in_photo_url: Optional[str] = None
    clock_out_photo_url: Optional[str] = None
    clock_in_location: Optional[GeoPoint] = None
    clock_out_location: Optional[GeoPoint] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "TimeEntry":
        def _location(prefix: str) -> Optional[GeoPoint]:
            lat = row.get(f"{prefix}_latitude")
            lng = row.get(f"{prefix}_longitude")
            address = row.get(f"{prefix}_address")
            if lat is None and lng is None and not address:
                return None
            return GeoPoint(latitude=lat, longitude=lng, address=address)

        return cls(
            entry_id=str(row["id"]),
            company_id=str(row["company_id"]),
            profile_id=row.get("profile_id"),
            user_id=row.get("user_id"),
            start_time=parse_timestamp(row["start_time"]),
            end_time=parse_timestamp(row.get("end_time")),
            duration_minutes=row.get("duration_minutes"),
            is_break=bool(row.get("is_break", False)),
            project_id=row.get("project_id"),
            clock_in_photo_url=row.get("clock_in_photo_url"),
            clock_out_photo_url=row.get("clock_out_photo_url"),
            clock_in_location=_location("clock_in"),
            clock_out_location=_location("clock_out"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.entry_id,
            "company_id": self.company_id,
            "profile_id": self.profile_id,
            "user_id": self.user_id,
            "start_time": to_iso(self.start_time),
            "end_time": to_iso(self.end_time) if self.end_time else None,
            "duration_minutes": self.duration_minutes,
            "is_break": self.is_break,
            "project_id": self.project_id,
            "clock_in_photo_url": self.clock_in_photo_url,
            "clock_out_photo_url": self.clock_out_photo_url,
        }
        for prefix, loc in (("clock_in", self.clock_in_location), ("clock_out", self.clock_out_location)):
            out[f"{prefix}_latitude"] = loc.latitude if loc else None
            out[f"{prefix}_longitude"] = loc.longitude if loc else None
            out[f"{prefix}_address"] = loc.address if loc else None
        return out
