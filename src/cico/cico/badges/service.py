from __future__ import annotations

import io
from typing import BinaryIO, Optional

import qrcode
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError

BADGE_PATH = "/badge/"


class BadgeService:
    """QR badges: each badge encodes a public URL keyed by the profile id."""

    def __init__(self, base_url: str):
        self._base_url = base_url.rstrip("/")

    def badge_url(self, profile_id: str) -> str:
        return f"{self._base_url}{BADGE_PATH}{profile_id}"

    def render_badge_qr(self, profile_id: str) -> bytes:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=2,
        )
        qr.add_data(self.badge_url(profile_id))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def profile_id_from_payload(self, payload: str) -> Optional[str]:
        """Profile id from a scanned badge payload (full badge URL or bare id)."""

        payload = (payload or "").strip()
        if not payload:
            return None
        if BADGE_PATH in payload:
            payload = payload.rsplit(BADGE_PATH, 1)[1]
        return payload.split("?", 1)[0].strip("/") or None

    def decode_badge_image(self, stream: BinaryIO) -> str:
        try:
            img = Image.open(stream).convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise ValidationError("image is not a readable picture") from e

        # Needs the zbar shared library at runtime.
        from pyzbar.pyzbar import decode as pyzbar_decode

        decoded = pyzbar_decode(img)
        if not decoded:
            raise ValidationError("No QR code detected in image")

        profile_id = self.profile_id_from_payload(decoded[0].data.decode("utf-8"))
        if not profile_id:
            raise ValidationError("QR code is not a valid badge")
        return profile_id
