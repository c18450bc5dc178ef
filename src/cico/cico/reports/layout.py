"""Tabular layout of a report, shared by the PDF and email renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import format_date, format_duration, format_time
from ..core.enums import ReportType
from .aggregation import group_by_employee, group_by_project, payroll_summary, total_minutes
from .model import DateRange, ReportRow, ScheduledReport

EMPTY_MESSAGE = "No time entries found for this period."
OPEN_ENTRY = "Open"


@dataclass(frozen=True)
class TableRow:
    cells: Sequence[str]
    # Group header rows span the full table width.
    is_group: bool = False


@dataclass
class ReportTable:
    title: str
    company_name: str
    period_label: str
    total_label: str
    total_minutes: int
    headers: List[str]
    rows: List[TableRow] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def total(self) -> str:
        return format_duration(self.total_minutes)


def _local(value, tz: ZoneInfo):
    return value.astimezone(tz)


def _entry_cells(r: ReportRow, tz: ZoneInfo) -> List[str]:
    start = _local(r.start_time, tz)
    return [
        format_date(start),
        format_time(start),
        format_time(_local(r.end_time, tz)) if r.end_time else OPEN_ENTRY,
        "Break" if r.is_break else format_duration(r.minutes),
    ]


def _employee_rows(rows: Sequence[ReportRow], tz: ZoneInfo) -> List[TableRow]:
    out = []
    for g in group_by_employee(rows):
        for r in g.rows:
            out.append(TableRow([g.name, r.project_name or "No Project"] + _entry_cells(r, tz)))
    return out


def _project_rows(rows: Sequence[ReportRow], tz: ZoneInfo) -> List[TableRow]:
    out = []
    for g in group_by_project(rows):
        out.append(TableRow([f"{g.name} - Total: {format_duration(g.total_minutes)}"], is_group=True))
        for r in g.rows:
            out.append(TableRow([r.employee_name] + _entry_cells(r, tz)))
    return out


def _payroll_rows(rows: Sequence[ReportRow], timezone: str) -> List[TableRow]:
    return [
        TableRow(
            [
                line.name,
                str(line.days_worked),
                format_duration(line.regular_minutes),
                format_duration(line.overtime_minutes),
                format_duration(line.break_minutes),
                format_duration(line.total_minutes),
            ]
        )
        for line in payroll_summary(rows, timezone=timezone)
    ]


def build_table(
    report: ScheduledReport,
    rows: Sequence[ReportRow],
    date_range: DateRange,
    *,
    title: Optional[str] = None,
) -> ReportTable:
    tz = ZoneInfo(report.timezone)
    period = f"{date_range.start_label} - {date_range.end_label}"
    period_label = f"Period: {period}"
    total_label = "Total Hours"

    if report.report_type == ReportType.PROJECT_TIMECARD.value:
        headers = ["Employee", "Date", "Clock In", "Clock Out", "Hours"]
        body = _project_rows(rows, tz)
    elif report.report_type in (ReportType.WEEKLY_PAYROLL.value, ReportType.MONTHLY_PROJECT_BILLING.value):
        headers = ["Employee", "Days Worked", "Regular Hours", "Overtime", "Breaks", "Total"]
        period_label = f"Pay Period: {period}"
        total_label = "Total Payable Hours"
        body = _payroll_rows(rows, report.timezone)
    else:
        headers = ["Employee", "Project", "Date", "Clock In", "Clock Out", "Hours"]
        body = _employee_rows(rows, tz)

    return ReportTable(
        title=title or report.title,
        company_name=report.company_name,
        period_label=period_label,
        total_label=total_label,
        total_minutes=total_minutes(rows),
        headers=headers,
        rows=body,
    )
