from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import ExecutionStatus, ReportType
from ..profiles.model import display_name_for

SCOPE_COMPANY = "company"
SCOPE_DEPARTMENT = "department"

REPORT_TYPE_NAMES = {
    ReportType.EMPLOYEE_TIMECARD.value: "Employee Timecard",
    ReportType.PROJECT_TIMECARD.value: "Project Timecard",
    ReportType.WEEKLY_PAYROLL.value: "Weekly Payroll",
    ReportType.MONTHLY_PROJECT_BILLING.value: "Monthly Project Billing",
}


def report_type_name(report_type: str) -> str:
    return REPORT_TYPE_NAMES.get(report_type, report_type)


@dataclass(frozen=True)
class ReportConfig:
    """Filters persisted in `scheduled_reports.report_config`."""

    scope: str = SCOPE_COMPANY
    department_ids: Tuple[str, ...] = ()
    project_ids: Tuple[str, ...] = ()

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "ReportConfig":
        data = data or {}
        return cls(
            scope=data.get("scope") or SCOPE_COMPANY,
            department_ids=tuple(data.get("department_ids") or ()),
            project_ids=tuple(data.get("project_ids") or ()),
        )

    @property
    def filters_departments(self) -> bool:
        return self.scope == SCOPE_DEPARTMENT and bool(self.department_ids)

    @property
    def filters_projects(self) -> bool:
        return bool(self.project_ids)


@dataclass(frozen=True)
class ScheduledReport:
    report_id: str
    company_id: str
    company_name: str
    timezone: str
    name: Optional[str]
    report_type: str
    frequency: str
    schedule_time: str
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    config: ReportConfig = field(default_factory=ReportConfig)
    recipients: Tuple[str, ...] = ()

    @property
    def schedule_hour(self) -> int:
        return int(self.schedule_time.split(":")[0])

    @property
    def title(self) -> str:
        return self.name or f"{report_type_name(self.report_type)} Report"

    @classmethod
    def from_row(cls, row: Dict[str, Any], *, default_timezone: str = DEFAULT_TIMEZONE) -> "ScheduledReport":
        company = row.get("companies") or {}
        recipients = row.get("scheduled_report_recipients") or []
        return cls(
            report_id=str(row["id"]),
            company_id=str(row["company_id"]),
            company_name=company.get("company_name") or "Unknown Company",
            timezone=company.get("timezone") or default_timezone,
            name=row.get("name"),
            report_type=row.get("report_type") or ReportType.EMPLOYEE_TIMECARD.value,
            frequency=row.get("schedule_frequency") or "daily",
            schedule_time=row.get("schedule_time") or "00:00",
            day_of_week=row.get("schedule_day_of_week"),
            day_of_month=row.get("schedule_day_of_month"),
            config=ReportConfig.from_json(row.get("report_config")),
            recipients=tuple(r["email"] for r in recipients if r.get("email")),
        )


@dataclass(frozen=True)
class ReportRow:
    """A time entry joined with its profile and project."""

    entry_id: str
    start_time: datetime
    end_time: Optional[datetime]
    duration_minutes: Optional[int]
    is_break: bool
    profile_id: str
    first_name: Optional[str]
    last_name: Optional[str]
    display_name: Optional[str]
    department_id: Optional[str]
    project_id: Optional[str] = None
    project_name: Optional[str] = None

    @property
    def employee_name(self) -> str:
        return display_name_for(self.display_name, self.first_name, self.last_name)

    @property
    def minutes(self) -> int:
        return int(self.duration_minutes or 0)


@dataclass(frozen=True)
class DateRange:
    """Reporting window; `start`/`end` are aware datetimes at local day boundaries."""

    start: datetime
    end: datetime

    @property
    def start_label(self) -> str:
        return f"{self.start.strftime('%a, %b')} {self.start.day}, {self.start.year}"

    @property
    def end_label(self) -> str:
        return f"{self.end.strftime('%a, %b')} {self.end.day}, {self.end.year}"


@dataclass(frozen=True)
class ExecutionResult:
    report_id: str
    report_name: Optional[str]
    status: ExecutionStatus
    recipients: int = 0
    entries: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "report_id": self.report_id,
            "report_name": self.report_name,
            "status": self.status.value,
        }
        if self.status == ExecutionStatus.FAILED:
            out["error"] = self.error
        else:
            out["recipients"] = self.recipients
            out["entries"] = self.entries
        return out
