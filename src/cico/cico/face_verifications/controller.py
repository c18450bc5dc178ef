from __future__ import annotations

from flask import Flask, g, request

from ..auth.roles import tenant_company_id
from ..common.http import function_view, json_response, request_json
from ..core.enums import Role
from ..container import Container

VIEW_ROLES = (Role.ADMIN, Role.SUPERVISOR, Role.MANAGER, Role.FOREMAN)
REVIEW_ROLES = (Role.ADMIN, Role.SUPERVISOR, Role.MANAGER)


def register(app: Flask, container: Container) -> None:
    roles_required = container.user_context_resolver.roles_required
    service = container.face_verification_service

    @app.route("/api/face-verifications", methods=["GET", "OPTIONS"], endpoint="face_verifications")
    @function_view()
    @roles_required(*VIEW_ROLES)
    def face_verifications():
        company_id = tenant_company_id(g.user_context, request.args.get("company_id"))
        raw = request.args.get("entry_ids", "")
        entry_ids = [e.strip() for e in raw.split(",") if e.strip()]
        latest = service.latest_for_entries(company_id, entry_ids)
        return json_response({"verifications": {k: v.to_dict() for k, v in latest.items()}})

    @app.route("/api/face-verifications/flagged-count", methods=["GET", "OPTIONS"], endpoint="face_flagged_count")
    @function_view()
    @roles_required(*VIEW_ROLES)
    def face_flagged_count():
        company_id = tenant_company_id(g.user_context, request.args.get("company_id"))
        return json_response({"count": service.flagged_count(company_id)})

    @app.route(
        "/api/face-verifications/<verification_id>/review",
        methods=["POST", "OPTIONS"],
        endpoint="face_review",
    )
    @function_view()
    @roles_required(*REVIEW_ROLES)
    def face_review(verification_id: str):
        body = request_json()
        updated = service.review(
            verification_id=verification_id,
            company_id=tenant_company_id(g.user_context, body.get("company_id")),
            decision=body.get("decision") or "",
            reviewed_by=g.user_context.user_id,
        )
        return json_response({"success": True, "verification": updated.to_dict()})
