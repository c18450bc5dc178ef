from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.exceptions import NotFoundError, ValidationError
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository
from .model import GeoPoint, TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class ClockService:
    """Use cases: clock in, clock out, breaks and "am I clocked in?"."""

    def __init__(self, entries: TimeEntryRepository, profiles: ProfileRepository):
        self._entries = entries
        self._profiles = profiles

    def _active_profile(self, profile_id: str, company_id: str) -> Profile:
        profile = self._profiles.get_in_company(profile_id, company_id)
        if not profile:
            raise NotFoundError("Employee not found or not in this company")
        if not profile.is_active:
            raise ValidationError("Employee is not active")
        return profile

    def clock_in(
        self,
        *,
        profile_id: str,
        company_id: str,
        photo_url: Optional[str] = None,
        location: Optional[GeoPoint] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        now = now or now_utc()
        profile = self._active_profile(profile_id, company_id)

        if self._entries.get_open_entry(company_id=company_id, profile_id=profile_id):
            raise ValidationError("Already clocked in. Please clock out first.")

        entry = self._entries.create(
            company_id=company_id,
            profile_id=profile_id,
            # Employees without an auth account are tracked by profile id.
            user_id=profile.user_id or profile_id,
            start_time=now,
            photo_url=photo_url,
            location=location,
        )
        logger.info("Clock in successful: entry=%s profile=%s", entry.entry_id, profile_id)
        return entry

    def clock_out(
        self,
        *,
        profile_id: str,
        company_id: str,
        time_entry_id: Optional[str] = None,
        photo_url: Optional[str] = None,
        location: Optional[GeoPoint] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        now = now or now_utc()
        self._active_profile(profile_id, company_id)

        if time_entry_id:
            entry = self._entries.get_by_id(entry_id=time_entry_id, company_id=company_id)
            if entry and entry.profile_id != profile_id:
                logger.warning(
                    "[SECURITY] Clock out of another employee's entry refused: entry=%s, profile=%s",
                    time_entry_id,
                    profile_id,
                )
                entry = None
        else:
            entry = self._entries.get_open_entry(company_id=company_id, profile_id=profile_id)
        if not entry or not entry.is_open:
            raise NotFoundError("No active time entry found. Are you clocked in?")

        duration = int((now - entry.start_time).total_seconds() // 60)
        closed = self._entries.close(
            entry_id=entry.entry_id,
            end_time=now,
            duration_minutes=max(duration, 0),
            photo_url=photo_url,
            location=location,
        )
        logger.info("Clock out successful: entry=%s minutes=%s", closed.entry_id, closed.duration_minutes)
        return closed

    def record_break(self, *, profile_id: str, company_id: str, now: Optional[datetime] = None) -> TimeEntry:
        now = now or now_utc()
        profile = self._active_profile(profile_id, company_id)
        entry = self._entries.create(
            company_id=company_id,
            profile_id=profile_id,
            user_id=profile.user_id or profile_id,
            start_time=now,
            end_time=now,
            duration_minutes=0,
            is_break=True,
        )
        logger.info("Break recorded: entry=%s", entry.entry_id)
        return entry

    def clock_status(
        self,
        *,
        company_id: str,
        profile_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Optional[TimeEntry]:
        if not company_id or not (profile_id or user_id):
            raise ValidationError("user_id or profile_id and company_id are required")
        return self._entries.get_open_entry(company_id=company_id, profile_id=profile_id, user_id=user_id)
