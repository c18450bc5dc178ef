from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .auth.cron import CronAuthenticator
from .auth.pin import PinAuthService
from .auth.repository import AuthRepository
from .auth.roles import UserContextResolver
from .auth.supabase_auth_repository import SupabaseAuthRepository
from .badges.service import BadgeService
from .core.constants import DEFAULT_REPORT_SENDER, DEFAULT_TIMEZONE, PHOTO_BUCKET, SIGNED_URL_EXPIRES_IN
from .database.connection import SupabaseConfig, SupabaseConnection
from .face_verifications.repository import FaceVerificationRepository
from .face_verifications.service import FaceVerificationService
from .face_verifications.supabase_face_verification_repository import SupabaseFaceVerificationRepository
from .photos.service import PhotoService
from .photos.supabase_photo_storage import SupabasePhotoStorage
from .profiles.repository import ProfileRepository
from .profiles.service import EmployeeService
from .profiles.supabase_profile_repository import SupabaseProfileRepository
from .reports.mailer import ResendMailer
from .reports.repository import ReportRepository
from .reports.service import ScheduledReportService
from .reports.supabase_report_repository import SupabaseReportRepository
from .task_activities.repository import TaskActivityRepository
from .task_activities.service import TaskActivityService
from .task_activities.supabase_task_activity_repository import SupabaseTaskActivityRepository
from .time_entries.repository import TimeEntryRepository
from .time_entries.service import ClockService
from .time_entries.supabase_time_entry_repository import SupabaseTimeEntryRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[SupabaseConnection]

    auth_repo: AuthRepository
    profiles_repo: ProfileRepository
    time_entries_repo: TimeEntryRepository
    task_activities_repo: TaskActivityRepository
    face_verifications_repo: FaceVerificationRepository
    reports_repo: ReportRepository

    cron: CronAuthenticator
    user_context_resolver: UserContextResolver
    pin_auth_service: PinAuthService
    employee_service: EmployeeService
    clock_service: ClockService
    task_activity_service: TaskActivityService
    face_verification_service: FaceVerificationService
    photo_service: PhotoService
    badge_service: BadgeService
    scheduled_report_service: ScheduledReportService


def build_container(settings: Any) -> Container:
    """Wire Supabase repositories and services from a settings module."""

    config = SupabaseConfig(
        url=str(getattr(settings, "SUPABASE_URL")),
        service_role_key=str(getattr(settings, "SUPABASE_SERVICE_ROLE_KEY")),
    )
    conn = SupabaseConnection.get_instance(config)
    bucket = getattr(settings, "PHOTO_BUCKET", PHOTO_BUCKET)

    auth_repo = SupabaseAuthRepository(conn)
    profiles_repo = SupabaseProfileRepository(conn)
    time_entries_repo = SupabaseTimeEntryRepository(conn)
    task_activities_repo = SupabaseTaskActivityRepository(conn)
    face_verifications_repo = SupabaseFaceVerificationRepository(conn)
    reports_repo = SupabaseReportRepository(
        conn, default_timezone=getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)
    )

    mailer = ResendMailer(
        getattr(settings, "RESEND_API_KEY", None),
        sender=getattr(settings, "REPORT_FROM_EMAIL", DEFAULT_REPORT_SENDER),
    )

    return Container(
        conn=conn,
        auth_repo=auth_repo,
        profiles_repo=profiles_repo,
        time_entries_repo=time_entries_repo,
        task_activities_repo=task_activities_repo,
        face_verifications_repo=face_verifications_repo,
        reports_repo=reports_repo,
        cron=CronAuthenticator(getattr(settings, "CRON_SECRET", None)),
        user_context_resolver=UserContextResolver(auth_repo),
        pin_auth_service=PinAuthService(auth_repo),
        employee_service=EmployeeService(profiles_repo),
        clock_service=ClockService(time_entries_repo, profiles_repo),
        task_activity_service=TaskActivityService(task_activities_repo),
        face_verification_service=FaceVerificationService(face_verifications_repo),
        photo_service=PhotoService(
            SupabasePhotoStorage(conn, bucket),
            bucket=bucket,
            expires_in=int(getattr(settings, "SIGNED_URL_EXPIRES_IN", SIGNED_URL_EXPIRES_IN)),
        ),
        badge_service=BadgeService(str(getattr(settings, "BADGE_BASE_URL", ""))),
        scheduled_report_service=ScheduledReportService(reports_repo, mailer),
    )
