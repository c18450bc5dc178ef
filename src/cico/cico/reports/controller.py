from __future__ import annotations

import logging

from flask import Flask, request

from ..common.http import error_response, function_view, json_response, request_json
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    reports = container.scheduled_report_service

    @app.route(
        "/functions/process-scheduled-reports",
        methods=["GET", "POST", "OPTIONS"],
        endpoint="process_scheduled_reports",
    )
    @container.cron.protect
    @function_view()
    def process_scheduled_reports():
        return json_response(reports.process_due())

    @app.route("/functions/send-test-report", methods=["POST", "OPTIONS"], endpoint="send_test_report")
    @function_view()
    def send_test_report():
        if not request.headers.get("Authorization"):
            return error_response("Authorization header required", 401)

        body = request_json()
        result = reports.send_test_report(
            report_id=body.get("scheduled_report_id") or body.get("report_id"),
            recipient=body.get("recipient_email") or body.get("test_email"),
            preview_only=bool(body.get("preview_only", False)),
        )
        return json_response(result)
