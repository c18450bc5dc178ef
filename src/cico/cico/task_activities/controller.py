from __future__ import annotations

from flask import Flask

from ..common.http import function_view, json_response, request_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/functions/record-task-activity", methods=["POST", "OPTIONS"], endpoint="record_task_activity")
    @function_view(backend_status=400)
    def record_task_activity():
        outcome = container.task_activity_service.record(request_json())
        return json_response(outcome.to_dict())
