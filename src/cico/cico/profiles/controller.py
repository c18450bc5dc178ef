from __future__ import annotations

from flask import Flask

from ..common.http import function_view, json_response, request_json
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/functions/lookup-employee", methods=["POST", "OPTIONS"], endpoint="lookup_employee")
    @function_view()
    def lookup_employee():
        body = request_json()
        company_id = body.get("company_id")
        identifier = str(body.get("identifier") or "").strip()
        if not company_id or not identifier:
            raise ValidationError("company_id and identifier are required")

        try:
            match = container.employee_service.lookup_employee(company_id=company_id, identifier=identifier)
        except NotFoundError as e:
            return json_response({"found": False, "error": str(e)})

        return json_response(
            {
                "found": True,
                "employee": {
                    "id": match.profile_id,
                    "user_id": match.user_id,
                    "display_name": match.display_name,
                    "first_name": match.first_name,
                    "last_name": match.last_name,
                },
            }
        )

    @app.route("/functions/verify-badge", methods=["POST", "OPTIONS"], endpoint="verify_badge")
    @function_view()
    def verify_badge():
        body = request_json()
        profile_id = body.get("profile_id")
        company_id = body.get("company_id")
        if not profile_id or not company_id:
            raise ValidationError("profile_id and company_id are required")
        return json_response(container.employee_service.verify_badge(company_id=company_id, profile_id=profile_id))
