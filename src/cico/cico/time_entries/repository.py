from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import GeoPoint, TimeEntry


class TimeEntryRepository(Protocol):
    def get_open_entry(
        self,
        *,
        company_id: str,
        profile_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Optional[TimeEntry]:
        """Latest entry without `end_time` for the profile (preferred) or user."""

        raise NotImplementedError

    def get_by_id(self, *, entry_id: str, company_id: str) -> Optional[TimeEntry]:
        raise NotImplementedError

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
        raise NotImplementedError

    def close(
        self,
        *,
        entry_id: str,
        end_time: datetime,
        duration_minutes: int,
        photo_url: Optional[str] = None,
        location: Optional[GeoPoint] = None,
    ) -> TimeEntry:
        raise NotImplementedError
