from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import now_utc, to_iso
from ..core.enums import ExecutionStatus
from ..core.exceptions import BackendError, NotFoundError, ValidationError
from .email import render_report_html, report_subject
from .layout import build_table
from .mailer import Attachment, Mailer, recipient_list
from .model import ExecutionResult, ScheduledReport
from .pdf import pdf_filename, render_table_pdf
from .repository import ReportRepository
from .schedule import date_range, is_due, run_day_start, run_key

logger = logging.getLogger(__name__)

NO_RECIPIENTS_MESSAGE = "No recipients configured"
NO_TEST_RECIPIENT_MESSAGE = "No recipient email provided and no recipients configured for this report"


class ScheduledReportService:
    """Use case: build and email the scheduled reports that are due this hour."""

    def __init__(self, reports: ReportRepository, mailer: Mailer):
        self._reports = reports
        self._mailer = mailer

    def process_due(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or now_utc()
        logger.info("Processing scheduled reports at %s", to_iso(now))

        active = self._reports.list_active_reports()
        if not active:
            logger.info("No active scheduled reports found")
            return {"message": "No active reports to process", "processed": 0, "results": []}

        results = []
        for report in active:
            try:
                due = is_due(report, now)
            except Exception as e:
                logger.exception("Cannot evaluate schedule of report %s", report.report_id)
                message = f"Invalid schedule: {e}"
                self._log_failure(report, message)
                failed = ExecutionResult(report.report_id, report.name, ExecutionStatus.FAILED, error=message)
                results.append(failed.to_dict())
                continue
            if due:
                results.append(self._process_one(report, now).to_dict())

        logger.info("Finished processing %d reports", len(results))
        return {"message": f"Processed {len(results)} reports", "processed": len(results), "results": results}

    def _process_one(self, report: ScheduledReport, now: datetime) -> ExecutionResult:
        logger.info("Processing report: %s (%s)", report.name or report.report_id, report.report_type)
        try:
            if self._reports.has_completed_run_since(report_id=report.report_id, since=run_day_start(report, now)):
                logger.info("Report %s already executed today, skipping", report.report_id)
                return ExecutionResult(report.report_id, report.name, ExecutionStatus.SKIPPED)

            window = date_range(report.frequency, report.timezone, now)
            rows = self._reports.fetch_entries(
                company_id=report.company_id,
                start=window.start,
                end=window.end,
                config=report.config,
            )
            logger.info("Found %d time entries for report %s", len(rows), report.report_id)

            recipients = recipient_list(report.recipients)
            if not recipients:
                logger.info("No recipients for report %s, skipping email", report.report_id)
                self._reports.log_execution(
                    report_id=report.report_id,
                    status=ExecutionStatus.NO_RECIPIENTS,
                    recipients_count=0,
                    error_message=NO_RECIPIENTS_MESSAGE,
                )
                return ExecutionResult(report.report_id, report.name, ExecutionStatus.NO_RECIPIENTS, entries=len(rows))

            table = build_table(report, rows, window)
            self._mailer.send(
                to=recipients,
                subject=report_subject(report, window),
                html=render_report_html(report, table, generated_at=now),
                attachments=[Attachment(pdf_filename(report, window), render_table_pdf(table, generated_at=now))],
                idempotency_key=run_key(report, now),
            )
            self._reports.log_execution(
                report_id=report.report_id,
                status=ExecutionStatus.SUCCESS,
                recipients_count=len(recipients),
            )
            return ExecutionResult(
                report.report_id,
                report.name,
                ExecutionStatus.SUCCESS,
                recipients=len(recipients),
                entries=len(rows),
            )
        except Exception as e:
            logger.exception("Error processing report %s", report.report_id)
            self._log_failure(report, str(e) or "Unknown error")
            return ExecutionResult(report.report_id, report.name, ExecutionStatus.FAILED, error=str(e) or "Unknown error")

    def _log_failure(self, report: ScheduledReport, message: str) -> None:
        try:
            self._reports.log_execution(
                report_id=report.report_id,
                status=ExecutionStatus.FAILED,
                recipients_count=0,
                error_message=message,
            )
        except BackendError as e:
            logger.error("Could not record failed run of report %s: %s", report.report_id, e)

    def send_test_report(
        self,
        *,
        report_id: Optional[str],
        recipient: Optional[str] = None,
        preview_only: bool = False,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Render a report for its current window and send it to one address."""

        if not report_id:
            raise ValidationError("report_id is required")
        report = self._reports.get_report(report_id)
        if not report:
            raise NotFoundError("Report not found")

        now = now or now_utc()
        window = date_range(report.frequency, report.timezone, now)
        rows = self._reports.fetch_entries(
            company_id=report.company_id,
            start=window.start,
            end=window.end,
            config=report.config,
        )
        table = build_table(report, rows, window)
        html = render_report_html(report, table, generated_at=now)
        if preview_only:
            return {"success": True, "html": html}

        to = recipient_list([recipient] if recipient else list(report.recipients)[:1])
        if not to:
            raise ValidationError(NO_TEST_RECIPIENT_MESSAGE)

        response = self._mailer.send(
            to=to,
            subject=f"[TEST] {report_subject(report, window)}",
            html=html,
            attachments=[Attachment(pdf_filename(report, window), render_table_pdf(table, generated_at=now))],
        )
        logger.info("Test report %s sent to %s", report.report_id, to[0])
        return {"success": True, "email_response": response}
