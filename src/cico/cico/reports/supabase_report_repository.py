from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_timestamp, to_iso
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import ExecutionStatus
from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone, run
from .model import ReportConfig, ReportRow, ScheduledReport
from .repository import COMPLETED_STATUSES, ReportRepository

REPORT_SELECT = "*, companies(company_name, timezone), scheduled_report_recipients(id, email)"

ENTRY_SELECT = """
    id,
    start_time,
    end_time,
    duration_minutes,
    is_break,
    profiles!inner(
        id,
        first_name,
        last_name,
        display_name,
        department_id
    ),
    projects(
        id,
        name
    )
"""


def _to_row(row: Dict[str, Any]) -> ReportRow:
    profile = row.get("profiles") or {}
    project = row.get("projects") or {}
    return ReportRow(
        entry_id=str(row["id"]),
        start_time=parse_timestamp(row["start_time"]),
        end_time=parse_timestamp(row.get("end_time")),
        duration_minutes=row.get("duration_minutes"),
        is_break=bool(row.get("is_break", False)),
        profile_id=str(profile.get("id")),
        first_name=profile.get("first_name"),
        last_name=profile.get("last_name"),
        display_name=profile.get("display_name"),
        department_id=profile.get("department_id"),
        project_id=project.get("id"),
        project_name=project.get("name"),
    )


class SupabaseReportRepository(ReportRepository):
    def __init__(self, conn: SupabaseConnection, *, default_timezone: str = DEFAULT_TIMEZONE):
        self._conn = conn
        self._default_timezone = default_timezone

    def list_active_reports(self) -> Sequence[ScheduledReport]:
        query = self._conn.client().table("scheduled_reports").select(REPORT_SELECT).eq("is_active", True)
        rows = fetchall(query, context="scheduled_reports.list_active")
        return [ScheduledReport.from_row(r, default_timezone=self._default_timezone) for r in rows]

    def get_report(self, report_id: str) -> Optional[ScheduledReport]:
        query = self._conn.client().table("scheduled_reports").select(REPORT_SELECT).eq("id", report_id).limit(1)
        row = fetchone(query, context="scheduled_reports.get_report")
        return ScheduledReport.from_row(row, default_timezone=self._default_timezone) if row else None

    def fetch_entries(
        self,
        *,
        company_id: str,
        start: datetime,
        end: datetime,
        config: ReportConfig,
    ) -> Sequence[ReportRow]:
        query = (
            self._conn.client()
            .table("time_entries")
            .select(ENTRY_SELECT)
            .eq("company_id", company_id)
            .gte("start_time", to_iso(start))
            .lte("start_time", to_iso(end))
        )
        if config.filters_departments:
            query = query.in_("profiles.department_id", list(config.department_ids))
        if config.filters_projects:
            query = query.in_("project_id", list(config.project_ids))
        query = query.order("start_time")
        return [_to_row(r) for r in fetchall(query, context="time_entries.fetch_entries")]

    def has_completed_run_since(self, *, report_id: str, since: datetime) -> bool:
        query = (
            self._conn.client()
            .table("report_execution_log")
            .select("id")
            .eq("scheduled_report_id", report_id)
            .in_("status", list(COMPLETED_STATUSES))
            .gte("executed_at", to_iso(since))
            .limit(1)
        )
        return fetchone(query, context="report_execution_log.has_completed_run_since") is not None

    def log_execution(
        self,
        *,
        report_id: str,
        status: ExecutionStatus,
        recipients_count: int,
        error_message: Optional[str] = None,
    ) -> None:
        payload = {
            "scheduled_report_id": report_id,
            "recipients_count": recipients_count,
            "status": status.value,
            "error_message": error_message,
        }
        run(self._conn.client().table("report_execution_log").insert(payload), context="report_execution_log.insert")
