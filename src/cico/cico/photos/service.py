from __future__ import annotations

import base64
import io
import logging
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from ..core.constants import HTTP_TIMEOUT_SECONDS, PHOTO_BUCKET, SIGNED_URL_EXPIRES_IN
from ..core.exceptions import AuthorizationError, ValidationError
from .repository import PhotoStorage

logger = logging.getLogger(__name__)

NOT_AN_IMAGE_MESSAGE = "image is not a readable picture"


class PhotoService:
    """Clock-in/out photos: time-limited links, base64 embedding, rotation.

    Objects are stored under `<company_id>/...`; callers may only sign paths
    inside their own company.
    """

    def __init__(
        self,
        storage: PhotoStorage,
        *,
        bucket: str = PHOTO_BUCKET,
        expires_in: int = SIGNED_URL_EXPIRES_IN,
    ):
        self._storage = storage
        self._bucket = bucket
        self._expires_in = int(expires_in)

    def clean_path(self, photo_path: str) -> str:
        prefix = f"{self._bucket}/"
        if photo_path.startswith(prefix):
            return photo_path[len(prefix):]
        return photo_path

    def tenant_path(self, photo_path: str, company_id: str) -> str:
        path = self.clean_path(photo_path)
        parts = path.split("/")
        if len(parts) < 2 or parts[0] != company_id or ".." in parts:
            logger.warning("[SECURITY] Photo path outside company %s rejected: %s", company_id, photo_path)
            raise AuthorizationError("Forbidden")
        return path

    def signed_url(self, photo_path: Optional[str], company_id: str) -> Optional[str]:
        if not photo_path:
            return None
        path = self.tenant_path(photo_path, company_id)
        try:
            return self._storage.create_signed_url(path, self._expires_in)
        except Exception as e:
            logger.error("Error fetching photo URL for %s: %s", photo_path, e)
            return None

    def fetch_as_base64(self, photo_path: Optional[str], company_id: str) -> Optional[str]:
        url = self.signed_url(photo_path, company_id)
        if not url:
            return None
        try:
            resp = requests.get(url, timeout=HTTP_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            logger.error("Error downloading photo %s: %s", photo_path, e)
            return None
        if not resp.ok:
            return None
        content_type = resp.headers.get("Content-Type", "image/jpeg")
        encoded = base64.b64encode(resp.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"


def rotate_image(data: bytes, degrees: float, *, quality: int = 90) -> bytes:
    """Rotate clockwise by `degrees`, growing the canvas to fit, and re-encode as JPEG."""

    try:
        with Image.open(io.BytesIO(data)) as img:
            # PIL rotates counter-clockwise.
            rotated = img.convert("RGB").rotate(-degrees, expand=True)
    except (UnidentifiedImageError, OSError) as e:
        logger.info("Rejected image for rotation: %s", e)
        raise ValidationError(NOT_AN_IMAGE_MESSAGE) from e
    buf = io.BytesIO()
    rotated.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def decode_data_url(value: str) -> bytes:
    """Bytes of a `data:...;base64,` URL (or of bare base64)."""

    if value.startswith("data:"):
        value = value.split(",", 1)[1]
    return base64.b64decode(value)


def encode_data_url(data: bytes, mimetype: str = "image/jpeg") -> str:
    return f"data:{mimetype};base64,{base64.b64encode(data).decode('ascii')}"
