from __future__ import annotations

import logging

from flask import Flask, g, request

from ..common.http import client_ip, function_view, json_response, request_json
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from .roles import resolve_route

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    resolver = container.user_context_resolver

    @app.route("/functions/authenticate-pin", methods=["POST", "OPTIONS"], endpoint="authenticate_pin")
    @function_view()
    def authenticate_pin():
        body = request_json()
        company_id = body.get("company_id")
        pin = body.get("pin")
        if not company_id or not pin:
            raise ValidationError("company_id and pin are required")

        identity = container.pin_auth_service.verify_pin(company_id=company_id, pin=str(pin), client_ip=client_ip())

        # Kiosk callers send the employee they picked; the PIN must resolve to that profile.
        expected = body.get("employee_id") or body.get("profile_id")
        if expected and identity.profile_id != expected:
            logger.warning("[AUDIT] PIN resolved to another employee: company=%s, expected=%s", company_id, expected)
            raise AuthenticationError("Invalid PIN")

        return json_response({"success": True, "user": identity.to_dict()})

    @app.route("/api/route-access", methods=["GET", "OPTIONS"], endpoint="route_access")
    @function_view()
    def route_access():
        context = resolver.from_headers(request.headers)
        decision = resolve_route(context, request.args.get("path", "/"))
        return json_response(
            {
                "allowed": decision.allowed,
                "redirect_to": decision.redirect_to,
                "read_only": decision.read_only,
                "roles": sorted(r.value for r in context.roles),
            }
        )

    @app.route("/api/me", methods=["GET", "OPTIONS"], endpoint="current_user")
    @function_view()
    @resolver.roles_required()
    def current_user():
        context = g.user_context
        return json_response(
            {
                "user_id": context.user_id,
                "company_id": context.company_id,
                "roles": sorted(r.value for r in context.roles),
                "is_admin": context.is_admin,
                "is_foreman": context.is_foreman,
                "can_manage_time": any(context.has_role(r) for r in (Role.ADMIN, Role.SUPERVISOR, Role.MANAGER)),
            }
        )
