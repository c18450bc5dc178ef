from __future__ import annotations

from datetime import datetime, time
from zoneinfo import ZoneInfo

import pytest
from postgrest.exceptions import APIError

from conftest import COMPANY, RecordingConnection, utc

from src.cico.cico.core.enums import ExecutionStatus
from src.cico.cico.core.exceptions import BackendError
from src.cico.cico.reports.model import ReportConfig
from src.cico.cico.reports.supabase_report_repository import SupabaseReportRepository

LA = ZoneInfo("America/Los_Angeles")
START = datetime(2026, 1, 6, 0, 0, tzinfo=LA)
END = datetime.combine(START.date(), time.max, tzinfo=LA)


def _fetch(config, data=()):
    conn = RecordingConnection(data)
    rows = SupabaseReportRepository(conn).fetch_entries(company_id=COMPANY, start=START, end=END, config=config)
    return conn.calls, rows


def _in_filters(calls):
    return [c[1:] for c in calls if c[0] == "in_"]


def test_entries_are_scoped_to_tenant_and_window_in_start_order():
    calls, _ = _fetch(ReportConfig())

    assert calls[0] == ("table", "time_entries")
    assert ("eq", "company_id", COMPANY) in calls
    assert ("gte", "start_time", "2026-01-06T00:00:00-08:00") in calls
    assert ("lte", "start_time", "2026-01-06T23:59:59.999999-08:00") in calls
    assert calls[-1] == ("order", "start_time")
    assert _in_filters(calls) == []


def test_department_filter_needs_department_scope():
    company_scope, _ = _fetch(ReportConfig(scope="company", department_ids=("d-1",)))
    empty_departments, _ = _fetch(ReportConfig(scope="department"))
    department_scope, _ = _fetch(ReportConfig(scope="department", department_ids=("d-1", "d-2")))

    assert _in_filters(company_scope) == []
    assert _in_filters(empty_departments) == []
    assert _in_filters(department_scope) == [("profiles.department_id", ["d-1", "d-2"])]


@pytest.mark.parametrize("scope", ["company", "department"])
def test_project_filter_applies_whenever_projects_are_set(scope):
    calls, _ = _fetch(ReportConfig(scope=scope, project_ids=("pr-1",)))

    assert ("project_id", ["pr-1"]) in _in_filters(calls)


def test_joined_rows_are_mapped():
    data = [
        {
            "id": "e-1",
            "start_time": "2026-01-06T16:00:00+00:00",
            "end_time": None,
            "duration_minutes": None,
            "is_break": False,
            "profiles": {
                "id": "p-1",
                "first_name": "Ana",
                "last_name": "Lopez",
                "display_name": None,
                "department_id": "d-1",
            },
            "projects": None,
        }
    ]

    _, rows = _fetch(ReportConfig(), data)

    assert rows[0].start_time == utc(2026, 1, 6, 16, 0)
    assert rows[0].end_time is None
    assert rows[0].employee_name == "Ana Lopez"
    assert rows[0].project_id is None


def test_completed_run_lookup_counts_only_finished_statuses_since_run_day_start():
    conn = RecordingConnection([{"id": "log-1"}])

    found = SupabaseReportRepository(conn).has_completed_run_since(report_id="r-1", since=START)

    assert found is True
    assert conn.calls[0] == ("table", "report_execution_log")
    assert ("eq", "scheduled_report_id", "r-1") in conn.calls
    assert ("in_", "status", ["success", "no_recipients"]) in conn.calls
    assert ("gte", "executed_at", "2026-01-06T00:00:00-08:00") in conn.calls


def test_no_logged_run_means_not_completed():
    assert SupabaseReportRepository(RecordingConnection()).has_completed_run_since(report_id="r-1", since=START) is False


def test_execution_is_logged():
    conn = RecordingConnection()

    SupabaseReportRepository(conn).log_execution(
        report_id="r-1",
        status=ExecutionStatus.FAILED,
        recipients_count=0,
        error_message="boom",
    )

    assert conn.calls == [
        ("table", "report_execution_log"),
        (
            "insert",
            {"scheduled_report_id": "r-1", "recipients_count": 0, "status": "failed", "error_message": "boom"},
        ),
    ]


def test_backend_error_carries_backend_message():
    error = APIError({"message": "permission denied for table time_entries", "code": "42501"})
    conn = RecordingConnection(error=error)

    with pytest.raises(BackendError, match="permission denied for table time_entries"):
        SupabaseReportRepository(conn).fetch_entries(company_id=COMPANY, start=START, end=END, config=ReportConfig())
