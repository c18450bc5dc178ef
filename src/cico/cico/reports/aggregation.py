from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set
from zoneinfo import ZoneInfo

from ..core.constants import REGULAR_WEEKLY_MINUTES
from .model import ReportRow

NO_PROJECT = "No Project"
NO_PROJECT_KEY = "no-project"


@dataclass
class EmployeeGroup:
    profile_id: str
    name: str
    rows: List[ReportRow] = field(default_factory=list)
    total_minutes: int = 0


@dataclass
class ProjectGroup:
    project_id: str
    name: str
    rows: List[ReportRow] = field(default_factory=list)
    total_minutes: int = 0


@dataclass(frozen=True)
class PayrollLine:
    profile_id: str
    name: str
    days_worked: int
    regular_minutes: int
    overtime_minutes: int
    break_minutes: int
    total_minutes: int


def total_minutes(rows: Iterable[ReportRow]) -> int:
    """Worked minutes; break entries do not count."""

    return sum(r.minutes for r in rows if not r.is_break)


def group_by_employee(rows: Sequence[ReportRow]) -> List[EmployeeGroup]:
    """Groups in first-seen order; rows keep their `start_time` order."""

    groups: dict[str, EmployeeGroup] = {}
    for r in rows:
        g = groups.get(r.profile_id)
        if not g:
            g = EmployeeGroup(profile_id=r.profile_id, name=r.employee_name)
            groups[r.profile_id] = g
        g.rows.append(r)
        if not r.is_break:
            g.total_minutes += r.minutes
    return list(groups.values())


def group_by_project(rows: Sequence[ReportRow]) -> List[ProjectGroup]:
    groups: dict[str, ProjectGroup] = {}
    for r in rows:
        key = r.project_id or NO_PROJECT_KEY
        g = groups.get(key)
        if not g:
            g = ProjectGroup(project_id=key, name=r.project_name or NO_PROJECT)
            groups[key] = g
        g.rows.append(r)
        if not r.is_break:
            g.total_minutes += r.minutes
    return list(groups.values())


def payroll_summary(rows: Sequence[ReportRow], *, timezone: Optional[str] = None) -> List[PayrollLine]:
    """Per-employee payroll lines sorted by name.

    Regular time is capped at 40 hours; anything above is overtime. Days
    worked counts distinct local calendar days with a non-break entry.
    """

    tz = ZoneInfo(timezone) if timezone else None
    totals: dict[str, dict] = {}
    for r in rows:
        s = totals.get(r.profile_id)
        if not s:
            s = {"name": r.employee_name, "worked": 0, "breaks": 0, "days": set()}
            totals[r.profile_id] = s
        if r.is_break:
            s["breaks"] += r.minutes
            continue
        s["worked"] += r.minutes
        start = r.start_time.astimezone(tz) if tz else r.start_time
        days: Set = s["days"]
        days.add(start.date())

    lines = []
    for profile_id, s in totals.items():
        worked = int(s["worked"])
        lines.append(
            PayrollLine(
                profile_id=profile_id,
                name=s["name"],
                days_worked=len(s["days"]),
                regular_minutes=min(worked, REGULAR_WEEKLY_MINUTES),
                overtime_minutes=max(0, worked - REGULAR_WEEKLY_MINUTES),
                break_minutes=int(s["breaks"]),
                total_minutes=worked,
            )
        )

    lines.sort(key=lambda x: x.name.lower())
    return lines
