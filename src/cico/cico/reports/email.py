from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..common.datetime_utils import now_utc
from ..core.constants import APP_NAME
from ..core.enums import ReportType
from .layout import EMPTY_MESSAGE, ReportTable
from .model import DateRange, ScheduledReport, report_type_name

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

ACCENTS = {
    ReportType.EMPLOYEE_TIMECARD.value: "#1d4ed8",
    ReportType.PROJECT_TIMECARD.value: "#059669",
    ReportType.WEEKLY_PAYROLL.value: "#6d28d9",
    ReportType.MONTHLY_PROJECT_BILLING.value: "#6d28d9",
}

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_report_html(
    report: ScheduledReport,
    table: ReportTable,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    generated_at = generated_at or now_utc()
    return _env.get_template("report_email.html").render(
        table=table,
        accent=ACCENTS.get(report.report_type, ACCENTS[ReportType.EMPLOYEE_TIMECARD.value]),
        empty_message=EMPTY_MESSAGE,
        app_name=APP_NAME,
        generated_at=generated_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


def report_subject(report: ScheduledReport, date_range: DateRange) -> str:
    return f"{report_type_name(report.report_type)}: {report.name or report.company_name} - {date_range.start_label}"
