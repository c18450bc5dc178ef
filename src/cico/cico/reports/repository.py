from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ExecutionStatus
from .model import ReportConfig, ReportRow, ScheduledReport

# A logged run with one of these statuses blocks a rerun on the same local day.
COMPLETED_STATUSES = (ExecutionStatus.SUCCESS.value, ExecutionStatus.NO_RECIPIENTS.value)


class ReportRepository(Protocol):
    def list_active_reports(self) -> Sequence[ScheduledReport]:
        raise NotImplementedError

    def get_report(self, report_id: str) -> Optional[ScheduledReport]:
        raise NotImplementedError

    def fetch_entries(
        self,
        *,
        company_id: str,
        start: datetime,
        end: datetime,
        config: ReportConfig,
    ) -> Sequence[ReportRow]:
        """Tenant's entries with `start <= start_time <= end`, oldest first."""

        raise NotImplementedError

    def has_completed_run_since(self, *, report_id: str, since: datetime) -> bool:
        """True if a run in `COMPLETED_STATUSES` was logged at or after `since`."""

        raise NotImplementedError

    def log_execution(
        self,
        *,
        report_id: str,
        status: ExecutionStatus,
        recipients_count: int,
        error_message: Optional[str] = None,
    ) -> None:
        raise NotImplementedError
