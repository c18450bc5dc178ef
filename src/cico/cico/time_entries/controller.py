from __future__ import annotations

from flask import Flask

from ..common.http import function_view, json_response, request_json
from ..core.enums import ClockAction
from ..core.exceptions import ValidationError
from ..container import Container
from .model import GeoPoint

INVALID_ACTION_MESSAGE = "Invalid action. Use: clock_in, clock_out, or break"


def register(app: Flask, container: Container) -> None:
    clock = container.clock_service

    @app.route("/functions/clock-in-out", methods=["POST", "OPTIONS"], endpoint="clock_in_out")
    @function_view(error_extra={"success": False})
    def clock_in_out():
        body = request_json()
        action = body.get("action")
        profile_id = body.get("profile_id")
        company_id = body.get("company_id")
        if not action or not profile_id or not company_id:
            raise ValidationError("Missing required fields: action, profile_id, company_id")

        location = GeoPoint.from_body(body.get("location"))
        photo_url = body.get("photo_url")

        if action == ClockAction.CLOCK_IN.value:
            entry = clock.clock_in(profile_id=profile_id, company_id=company_id, photo_url=photo_url, location=location)
            message = "Clocked in successfully"
        elif action == ClockAction.CLOCK_OUT.value:
            entry = clock.clock_out(
                profile_id=profile_id,
                company_id=company_id,
                time_entry_id=body.get("time_entry_id"),
                photo_url=photo_url,
                location=location,
            )
            message = "Clocked out successfully"
        elif action == ClockAction.BREAK.value:
            entry = clock.record_break(profile_id=profile_id, company_id=company_id)
            message = "Break recorded"
        else:
            raise ValidationError(INVALID_ACTION_MESSAGE)

        return json_response({"success": True, "data": entry.to_dict(), "message": message})

    @app.route("/functions/check-clock-status", methods=["POST", "OPTIONS"], endpoint="check_clock_status")
    @function_view()
    def check_clock_status():
        body = request_json()
        entry = clock.clock_status(
            company_id=body.get("company_id"),
            profile_id=body.get("profile_id"),
            user_id=body.get("user_id"),
        )
        active = entry.to_dict() if entry else None
        return json_response(
            {
                "is_clocked_in": entry is not None,
                "clocked_in": entry is not None,
                "active_entry": active,
                "time_entry": active,
            }
        )
