from __future__ import annotations

from conftest import utc

from src.cico.cico.reports.aggregation import group_by_employee, group_by_project, payroll_summary, total_minutes
from src.cico.cico.reports.model import ReportRow


def row(entry_id, profile_id, start, minutes, *, is_break=False, project=None, name=None):
    first, last = (name or f"Emp {profile_id}").split(" ", 1)
    return ReportRow(
        entry_id=entry_id,
        start_time=start,
        end_time=None,
        duration_minutes=minutes,
        is_break=is_break,
        profile_id=profile_id,
        first_name=first,
        last_name=last,
        display_name=None,
        department_id="d-1",
        project_id=project,
        project_name=f"Project {project}" if project else None,
    )


def test_breaks_do_not_count_toward_totals():
    rows = [row("1", "a", utc(2026, 1, 5, 16), 480), row("2", "a", utc(2026, 1, 5, 20), 30, is_break=True)]

    assert total_minutes(rows) == 480
    assert group_by_employee(rows)[0].total_minutes == 480


def test_group_by_employee_keeps_first_seen_order():
    rows = [
        row("1", "b", utc(2026, 1, 5, 16), 60, name="Zed Z"),
        row("2", "a", utc(2026, 1, 5, 17), 30, name="Amy A"),
        row("3", "b", utc(2026, 1, 5, 18), 15, name="Zed Z"),
    ]

    groups = group_by_employee(rows)

    assert [g.name for g in groups] == ["Zed Z", "Amy A"]
    assert [r.entry_id for r in groups[0].rows] == ["1", "3"]
    assert groups[0].total_minutes == 75


def test_group_by_project_buckets_missing_project():
    rows = [
        row("1", "a", utc(2026, 1, 5, 16), 60, project="p1"),
        row("2", "a", utc(2026, 1, 5, 17), 30),
        row("3", "b", utc(2026, 1, 5, 18), 15, project="p1"),
    ]

    groups = {g.project_id: g for g in group_by_project(rows)}

    assert groups["p1"].total_minutes == 75
    assert groups["no-project"].name == "No Project"


def test_payroll_caps_regular_hours_at_forty():
    rows = [row(str(i), "a", utc(2026, 1, 5 + i, 16), 600) for i in range(5)]

    (line,) = payroll_summary(rows, timezone="America/Los_Angeles")

    assert line.total_minutes == 3000
    assert line.regular_minutes == 2400
    assert line.overtime_minutes == 600
    assert line.days_worked == 5


def test_payroll_counts_local_days_and_breaks():
    rows = [
        # 09:00 and 23:00 on Jan 5 in Los Angeles fall on different UTC days.
        row("1", "a", utc(2026, 1, 5, 17), 60),
        row("2", "a", utc(2026, 1, 6, 7), 60),
        row("3", "a", utc(2026, 1, 5, 20), 45, is_break=True),
    ]

    (line,) = payroll_summary(rows, timezone="America/Los_Angeles")

    assert line.days_worked == 1
    assert line.break_minutes == 45
    assert line.overtime_minutes == 0


def test_payroll_sorted_by_name():
    rows = [row("1", "b", utc(2026, 1, 5, 16), 60, name="zed Z"), row("2", "a", utc(2026, 1, 5, 16), 60, name="Amy A")]

    assert [line.name for line in payroll_summary(rows)] == ["Amy A", "zed Z"]
