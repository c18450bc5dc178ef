from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import to_iso
from ..core.exceptions import BackendError
from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchone
from .model import GeoPoint, TimeEntry
from .repository import TimeEntryRepository


def _location_columns(prefix: str, location: Optional[GeoPoint]) -> Dict[str, Any]:
    if not location:
        return {}
    return {
        f"{prefix}_latitude": location.latitude,
        f"{prefix}_longitude": location.longitude,
        f"{prefix}_address": location.address,
    }


class SupabaseTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self):
        return self._conn.client().table("time_entries")

    def get_open_entry(
        self,
        *,
        company_id: str,
        profile_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Optional[TimeEntry]:
        query = self._table().select("*").eq("company_id", company_id).is_("end_time", "null")
        if profile_id:
            query = query.eq("profile_id", profile_id)
        else:
            query = query.eq("user_id", user_id)
        query = query.order("start_time", desc=True).limit(1)
        row = fetchone(query, context="time_entries.get_open_entry")
        return TimeEntry.from_row(row) if row else None

    def get_by_id(self, *, entry_id: str, company_id: str) -> Optional[TimeEntry]:
        query = self._table().select("*").eq("id", entry_id).eq("company_id", company_id).limit(1)
        row = fetchone(query, context="time_entries.get_by_id")
        return TimeEntry.from_row(row) if row else None

    def create(
        self,
        *,
        company_id: str,
        profile_id: str,
        user_id: str,
        start_time: datetime,
        end_time: Optional[datetime] = None,
        duration_minutes: Optional[int] = None,
        is_break: bool = False,
        photo_url: Optional[str] = None,
        location: Optional[GeoPoint] = None,
    ) -> TimeEntry:
        payload: Dict[str, Any] = {
            "company_id": company_id,
            "profile_id": profile_id,
            "user_id": user_id,
            "start_time": to_iso(start_time),
            "end_time": to_iso(end_time) if end_time else None,
            "duration_minutes": duration_minutes,
            "is_break": is_break,
            "clock_in_photo_url": photo_url,
        }
        payload.update(_location_columns("clock_in", location))
        row = fetchone(self._table().insert(payload), context="time_entries.create")
        if not row:
            raise BackendError("Failed to create time entry")
        return TimeEntry.from_row(row)

    def close(
        self,
        *,
        entry_id: str,
        end_time: datetime,
        duration_minutes: int,
        photo_url: Optional[str] = None,
        location: Optional[GeoPoint] = None,
    ) -> TimeEntry:
        payload: Dict[str, Any] = {
            "end_time": to_iso(end_time),
            "duration_minutes": duration_minutes,
            "clock_out_photo_url": photo_url,
        }
        payload.update(_location_columns("clock_out", location))
        row = fetchone(self._table().update(payload).eq("id", entry_id), context="time_entries.close")
        if not row:
            raise BackendError("Failed to update time entry")
        return TimeEntry.from_row(row)
