from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Optional

import pytest

from src.cico.cico.auth.cron import CronAuthenticator
from src.cico.cico.auth.model import PinIdentity
from src.cico.cico.auth.pin import PinAuthService
from src.cico.cico.auth.roles import UserContextResolver
from src.cico.cico.badges.service import BadgeService
from src.cico.cico.container import Container
from src.cico.cico.core.exceptions import BackendError, DeliveryError
from src.cico.cico.face_verifications.model import FaceVerification
from src.cico.cico.face_verifications.service import FaceVerificationService
from src.cico.cico.photos.service import PhotoService
from src.cico.cico.profiles.model import EmployeeMatch, Profile
from src.cico.cico.profiles.service import EmployeeService
from src.cico.cico.reports.repository import COMPLETED_STATUSES
from src.cico.cico.reports.service import ScheduledReportService
from src.cico.cico.task_activities.model import TaskActivity
from src.cico.cico.task_activities.service import TaskActivityService
from src.cico.cico.time_entries.model import TimeEntry
from src.cico.cico.time_entries.service import ClockService

COMPANY = "company-1"
CRON_SECRET = "abc123"


class FakeAuthRepo:
    def __init__(self, *, pins=None, tokens=None, roles=None, companies=None, fail=False):
        self.pins: dict[tuple[str, str], list[PinIdentity]] = pins or {}
        self.tokens: dict[str, str] = tokens or {}
        self.roles: dict[str, list[str]] = roles or {}
        # Users not listed here belong to COMPANY.
        self.companies: dict[str, Optional[str]] = companies or {}
        self.fail = fail

    def authenticate_pin(self, company_id, pin):
        if self.fail:
            raise BackendError("rpc failed")
        return self.pins.get((company_id, pin), [])

    def get_user_id_for_token(self, token):
        return self.tokens.get(token)

    def get_roles(self, user_id):
        return self.roles.get(user_id, [])

    def get_company_id(self, user_id):
        return self.companies.get(user_id, COMPANY)


class FakeProfiles:
    def __init__(self, profiles=(), matches=None, company_names=None):
        self.profiles = {(p.profile_id, p.company_id): p for p in profiles}
        self.matches: dict[tuple[str, str], EmployeeMatch] = matches or {}
        self.company_names = company_names or {COMPANY: "Acme Steel"}

    def get_in_company(self, profile_id, company_id):
        return self.profiles.get((profile_id, company_id))

    def lookup_by_identifier(self, company_id, identifier):
        return self.matches.get((company_id, identifier))

    def get_company_name(self, company_id):
        return self.company_names.get(company_id)


class FakeTimeEntries:
    def __init__(self, entries=()):
        self.entries: dict[str, TimeEntry] = {e.entry_id: e for e in entries}
        self._next_id = len(self.entries) + 1

    def get_open_entry(self, *, company_id, profile_id=None, user_id=None):
        open_entries = [
            e
            for e in self.entries.values()
            if e.company_id == company_id
            and e.is_open
            and (e.profile_id == profile_id if profile_id else e.user_id == user_id)
        ]
        open_entries.sort(key=lambda e: e.start_time, reverse=True)
        return open_entries[0] if open_entries else None

    def get_by_id(self, *, entry_id, company_id):
        e = self.entries.get(entry_id)
        return e if e and e.company_id == company_id else None

    def create(
        self,
        *,
        company_id,
        profile_id,
        user_id,
        start_time,
        end_time=None,
        duration_minutes=None,
        is_break=False,
        photo_url=None,
        location=None,
    ):
        entry = TimeEntry(
            entry_id=f"entry-{self._next_id}",
            company_id=company_id,
            profile_id=profile_id,
            user_id=user_id,
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes,
            is_break=is_break,
            clock_in_photo_url=photo_url,
            clock_in_location=location,
        )
        self._next_id += 1
        self.entries[entry.entry_id] = entry
        return entry

    def close(self, *, entry_id, end_time, duration_minutes, photo_url=None, location=None):
        closed = replace(
            self.entries[entry_id],
            end_time=end_time,
            duration_minutes=duration_minutes,
            clock_out_photo_url=photo_url,
            clock_out_location=location,
        )
        self.entries[entry_id] = closed
        return closed


class FakeTaskActivities:
    def __init__(self, *, other_task_type_id: Optional[str] = None, insert_error: Optional[str] = None):
        self.other_task_type_id = other_task_type_id
        self.insert_error = insert_error
        self.inserted: list[TaskActivity] = []

    def find_other_task_type_id(self, company_id):
        return self.other_task_type_id

    def insert(self, **kwargs):
        if self.insert_error:
            raise BackendError(self.insert_error)
        activity = TaskActivity(activity_id=f"act-{len(self.inserted) + 1}", **kwargs)
        self.inserted.append(activity)
        return activity


class FakeFaceVerifications:
    def __init__(self, rows=()):
        self.rows: list[FaceVerification] = list(rows)
        self.list_calls = 0

    def list_for_entries(self, company_id, entry_ids):
        self.list_calls += 1
        return [r for r in self.rows if r.company_id == company_id and r.time_entry_id in set(entry_ids)]

    def count_flagged(self, company_id):
        return sum(1 for r in self.rows if r.company_id == company_id and r.is_flagged)

    def set_review(self, *, verification_id, company_id, decision, reviewed_by, reviewed_at):
        for i, r in enumerate(self.rows):
            if r.verification_id == verification_id and r.company_id == company_id:
                self.rows[i] = replace(r, review_decision=decision)
                return self.rows[i]
        return None


class FakeReports:
    def __init__(self, reports=(), rows=(), *, executions=(), fetch_error: Optional[str] = None):
        self.reports = list(reports)
        self.rows = list(rows)
        # (report_id, status, executed_at) rows already in report_execution_log.
        self.executions: list[tuple[str, str, datetime]] = list(executions)
        self.fetch_error = fetch_error
        self.fetch_calls: list[dict] = []
        self.logged: list[dict] = []

    def list_active_reports(self):
        return list(self.reports)

    def get_report(self, report_id):
        return next((r for r in self.reports if r.report_id == report_id), None)

    def fetch_entries(self, *, company_id, start, end, config):
        self.fetch_calls.append({"company_id": company_id, "start": start, "end": end, "config": config})
        if self.fetch_error:
            raise BackendError(self.fetch_error)
        return [r for r in self.rows if start <= r.start_time <= end]

    def has_completed_run_since(self, *, report_id, since):
        return any(
            rid == report_id and status in COMPLETED_STATUSES and executed_at >= since
            for rid, status, executed_at in self.executions
        )

    def log_execution(self, *, report_id, status, recipients_count, error_message=None):
        self.logged.append(
            {
                "report_id": report_id,
                "status": status,
                "recipients_count": recipients_count,
                "error_message": error_message,
            }
        )


class FakeMailer:
    def __init__(self, *, fail_with: Optional[str] = None):
        self.fail_with = fail_with
        self.sent: list[dict] = []

    def send(self, *, to, subject, html, attachments=(), idempotency_key=None):
        if self.fail_with:
            raise DeliveryError(self.fail_with)
        self.sent.append(
            {
                "to": list(to),
                "subject": subject,
                "html": html,
                "attachments": list(attachments),
                "idempotency_key": idempotency_key,
            }
        )
        return {"id": f"email-{len(self.sent)}"}


class FakePhotoStorage:
    def __init__(self, *, fail=False):
        self.fail = fail
        self.requested: list[tuple[str, int]] = []

    def create_signed_url(self, path, expires_in):
        if self.fail:
            raise BackendError("storage unavailable")
        self.requested.append((path, expires_in))
        return f"https://storage.test/{path}?token=t"


def make_profile(profile_id="p-1", *, company_id=COMPANY, status="active", **kwargs) -> Profile:
    defaults = dict(
        first_name="Ana",
        last_name="Lopez",
        display_name=None,
        department_id="dept-1",
        employee_id="E-100",
        user_id=None,
    )
    defaults.update(kwargs)
    return Profile(profile_id=profile_id, company_id=company_id, status=status, **defaults)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def build_test_container(
    *,
    auth=None,
    profiles=None,
    entries=None,
    activities=None,
    faces=None,
    reports=None,
    mailer=None,
    storage=None,
    cron_secret: Optional[str] = CRON_SECRET,
) -> Container:
    auth = auth or FakeAuthRepo()
    profiles = profiles or FakeProfiles()
    entries = entries or FakeTimeEntries()
    activities = activities or FakeTaskActivities()
    faces = faces or FakeFaceVerifications()
    reports = reports or FakeReports()
    return Container(
        conn=None,
        auth_repo=auth,
        profiles_repo=profiles,
        time_entries_repo=entries,
        task_activities_repo=activities,
        face_verifications_repo=faces,
        reports_repo=reports,
        cron=CronAuthenticator(cron_secret),
        user_context_resolver=UserContextResolver(auth),
        pin_auth_service=PinAuthService(auth),
        employee_service=EmployeeService(profiles),
        clock_service=ClockService(entries, profiles),
        task_activity_service=TaskActivityService(activities),
        face_verification_service=FaceVerificationService(faces),
        photo_service=PhotoService(storage or FakePhotoStorage()),
        badge_service=BadgeService("https://cico.test"),
        scheduled_report_service=ScheduledReportService(reports, mailer or FakeMailer()),
    )


@pytest.fixture
def make_client(monkeypatch):
    """Flask test client over a container of in-memory fakes."""

    monkeypatch.setenv("APP_ENV", "testing")

    def _make(container: Optional[Container] = None):
        from src.cico.cico.main import create_app

        app = create_app(container or build_test_container())
        return app.test_client()

    return _make


class RecordingQuery:
    """Stand-in for a postgrest builder: records each chained call, returns canned rows."""

    def __init__(self, calls, data, error=None):
        self.calls = calls
        self.data = data
        self.error = error

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, *args))
            return self

        return method

    def execute(self):
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data, count=len(self.data))


class RecordingConnection:
    def __init__(self, data=(), *, error=None):
        self.calls: list[tuple] = []
        self.data = list(data)
        self.error = error

    def client(self):
        return self

    def table(self, name):
        self.calls.append(("table", name))
        return RecordingQuery(self.calls, self.data, self.error)
