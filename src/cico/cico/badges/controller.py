from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import function_view, json_response
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/badges/<profile_id>/qr.png", methods=["GET"], endpoint="badge_qr")
    @function_view()
    def badge_qr(profile_id: str):
        png = container.badge_service.render_badge_qr(profile_id)
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"badge_{profile_id}.png")

    @app.route("/api/badges/decode", methods=["POST", "OPTIONS"], endpoint="badge_decode")
    @function_view()
    def badge_decode():
        upload = request.files.get("image")
        if not upload:
            raise ValidationError("image file is required")
        profile_id = container.badge_service.decode_badge_image(upload.stream)
        return json_response({"profile_id": profile_id, "badge_url": container.badge_service.badge_url(profile_id)})
