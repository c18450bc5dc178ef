from __future__ import annotations

import binascii

from flask import Flask, g, request

from ..auth.roles import tenant_company_id
from ..common.http import function_view, json_response, request_json
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .service import decode_data_url, encode_data_url, rotate_image

PHOTO_ROLES = (Role.ADMIN, Role.SUPERVISOR, Role.MANAGER, Role.FOREMAN)


def register(app: Flask, container: Container) -> None:
    roles_required = container.user_context_resolver.roles_required
    photos = container.photo_service

    @app.route("/api/photos/signed-url", methods=["GET", "OPTIONS"], endpoint="photo_signed_url")
    @function_view()
    @roles_required(*PHOTO_ROLES)
    def photo_signed_url():
        url = photos.signed_url(request.args.get("path"), tenant_company_id(g.user_context))
        return json_response({"url": url})

    @app.route("/api/photos/base64", methods=["GET", "OPTIONS"], endpoint="photo_base64")
    @function_view()
    @roles_required(*PHOTO_ROLES)
    def photo_base64():
        data_url = photos.fetch_as_base64(request.args.get("path"), tenant_company_id(g.user_context))
        return json_response({"data_url": data_url})

    @app.route("/api/photos/rotate", methods=["POST", "OPTIONS"], endpoint="photo_rotate")
    @function_view()
    @roles_required(Role.ADMIN, Role.SUPERVISOR, Role.MANAGER)
    def photo_rotate():
        body = request_json()
        image = body.get("image")
        if not image:
            raise ValidationError("image is required")
        try:
            degrees = float(body.get("degrees", 90))
            data = decode_data_url(image)
        except (AttributeError, TypeError, ValueError, binascii.Error):
            raise ValidationError("image must be base64 and degrees a number")
        return json_response({"image": encode_data_url(rotate_image(data, degrees))})
