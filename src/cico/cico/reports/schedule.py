"""When a scheduled report is due, and which window it covers."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from ..core.enums import ReportFrequency
from .model import DateRange, ScheduledReport

logger = logging.getLogger(__name__)


def local_now(now: datetime, timezone: str) -> datetime:
    return now.astimezone(ZoneInfo(timezone))


def sunday_based_weekday(d: date) -> int:
    """Day of week with Sunday = 0, matching `schedule_day_of_week`."""

    return (d.weekday() + 1) % 7


def is_due(report: ScheduledReport, now: datetime) -> bool:
    local = local_now(now, report.timezone)
    logger.debug(
        "Report %s: schedule=%s:00, local=%s:00 (%s)",
        report.name or report.report_id,
        report.schedule_hour,
        local.hour,
        report.timezone,
    )
    if report.schedule_hour != local.hour:
        return False

    if report.frequency == ReportFrequency.DAILY.value:
        return True
    if report.frequency == ReportFrequency.WEEKLY.value:
        return report.day_of_week == sunday_based_weekday(local.date())
    if report.frequency == ReportFrequency.MONTHLY.value:
        return report.day_of_month == local.day
    return False


def _window(first: date, last: date, tz: ZoneInfo) -> DateRange:
    return DateRange(
        start=datetime.combine(first, time.min, tzinfo=tz),
        end=datetime.combine(last, time.max, tzinfo=tz),
    )


def date_range(frequency: str, timezone: str, now: datetime) -> DateRange:
    """Previous local day / Sunday-Saturday week / calendar month."""

    tz = ZoneInfo(timezone)
    today = now.astimezone(tz).date()

    if frequency == ReportFrequency.WEEKLY.value:
        dow = sunday_based_weekday(today)
        last_saturday = today - timedelta(days=dow + 1)
        return _window(last_saturday - timedelta(days=6), last_saturday, tz)

    if frequency == ReportFrequency.MONTHLY.value:
        last_of_prev = today.replace(day=1) - timedelta(days=1)
        return _window(last_of_prev.replace(day=1), last_of_prev, tz)

    yesterday = today - timedelta(days=1)
    return _window(yesterday, yesterday, tz)


def run_day_start(report: ScheduledReport, now: datetime) -> datetime:
    local = local_now(now, report.timezone)
    return datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)


def run_key(report: ScheduledReport, now: datetime) -> str:
    """Dedupe token for one scheduled run: the report id and its local run date."""

    return f"{report.report_id}:{local_now(now, report.timezone).date().isoformat()}"
