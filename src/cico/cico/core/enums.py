from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles stored in `user_roles`, used for route gating."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    EMPLOYEE = "employee"
    FOREMAN = "foreman"
    MANAGER = "manager"


class TaskActionType(str, Enum):
    START = "start"
    FINISH = "finish"


class ClockAction(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK = "break"


class ReportFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ReportType(str, Enum):
    """Layouts the report renderer knows about."""

    EMPLOYEE_TIMECARD = "employee_timecard"
    PROJECT_TIMECARD = "project_timecard"
    WEEKLY_PAYROLL = "weekly_payroll"
    MONTHLY_PROJECT_BILLING = "monthly_project_billing"


class ExecutionStatus(str, Enum):
    """Outcome written to `report_execution_log` for each scheduled run."""

    SUCCESS = "success"
    FAILED = "failed"
    NO_RECIPIENTS = "no_recipients"
    SKIPPED = "skipped"


class ReviewDecision(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
