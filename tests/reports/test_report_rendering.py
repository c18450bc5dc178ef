from __future__ import annotations

from dataclasses import replace

from conftest import COMPANY, utc

from src.cico.cico.reports.email import render_report_html, report_subject
from src.cico.cico.reports.layout import EMPTY_MESSAGE, build_table
from src.cico.cico.reports.model import ReportRow, ScheduledReport
from src.cico.cico.reports.pdf import pdf_filename, render_report_pdf
from src.cico.cico.reports.schedule import date_range

LA = "America/Los_Angeles"
# Wednesday 2026-01-07, 08:00 in Los Angeles; daily window is Tue Jan 6.
NOW = utc(2026, 1, 7, 16, 0)
WINDOW = date_range("daily", LA, NOW)


def report(report_type="employee_timecard", name="Crew Hours"):
    return ScheduledReport(
        report_id="r-1",
        company_id=COMPANY,
        company_name="Acme Steel",
        timezone=LA,
        name=name,
        report_type=report_type,
        frequency="daily",
        schedule_time="08:00",
    )


def entry(**overrides):
    base = ReportRow(
        entry_id="e-1",
        start_time=utc(2026, 1, 6, 16, 0),
        end_time=utc(2026, 1, 7, 0, 0),
        duration_minutes=480,
        is_break=False,
        profile_id="p-1",
        first_name="Ana",
        last_name="Lopez",
        display_name=None,
        department_id="d-1",
    )
    return replace(base, **overrides)


def test_employee_timecard_rows_use_company_local_time():
    table = build_table(report(), [entry()], WINDOW)

    assert table.headers == ["Employee", "Project", "Date", "Clock In", "Clock Out", "Hours"]
    assert table.rows[0].cells == ["Ana Lopez", "No Project", "Tue, Jan 6, 2026", "08:00 AM", "04:00 PM", "8h 0m"]
    assert table.period_label == "Period: Tue, Jan 6, 2026 - Tue, Jan 6, 2026"
    assert table.total == "8h 0m"


def test_open_entry_and_break_cells():
    rows = [
        entry(end_time=None, duration_minutes=None),
        entry(entry_id="e-2", is_break=True, duration_minutes=30),
    ]
    table = build_table(report(), rows, WINDOW)

    assert table.rows[0].cells[4] == "Open"
    assert table.rows[1].cells[5] == "Break"
    assert table.total == "0h 0m"


def test_project_timecard_groups_rows_under_project_headers():
    rows = [entry(project_id="pr-1", project_name="Tower A"), entry(entry_id="e-2", duration_minutes=90)]
    table = build_table(report("project_timecard"), rows, WINDOW)

    groups = [r.cells[0] for r in table.rows if r.is_group]
    assert groups == ["Tower A - Total: 8h 0m", "No Project - Total: 1h 30m"]


def test_payroll_layout_labels():
    table = build_table(report("weekly_payroll"), [entry()], WINDOW)

    assert table.period_label.startswith("Pay Period: ")
    assert table.total_label == "Total Payable Hours"
    assert table.rows[0].cells == ["Ana Lopez", "1", "8h 0m", "0h 0m", "0h 0m", "8h 0m"]


def test_pdf_is_rendered_for_empty_and_populated_periods():
    for rows in ([], [entry()]):
        for report_type in ("employee_timecard", "project_timecard", "weekly_payroll"):
            content = render_report_pdf(report(report_type), rows, WINDOW, generated_at=NOW)
            assert content.startswith(b"%PDF")


def test_pdf_filename_is_slugged():
    assert pdf_filename(report(name="Crew Hours / North"), WINDOW) == "crew_hours___north_2026-01-06_2026-01-06.pdf"


def test_html_escapes_names_and_shows_empty_message():
    r = report(name="<script>x</script>")
    html = render_report_html(r, build_table(r, [], WINDOW), generated_at=NOW)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert EMPTY_MESSAGE in html
    assert "Generated by CICO on 2026-01-07 16:00 UTC" in html


def test_subject_names_type_report_and_period():
    assert report_subject(report(), WINDOW) == "Employee Timecard: Crew Hours - Tue, Jan 6, 2026"
    assert report_subject(report(name=None), WINDOW) == "Employee Timecard: Acme Steel - Tue, Jan 6, 2026"
