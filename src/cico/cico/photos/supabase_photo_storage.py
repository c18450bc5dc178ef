from __future__ import annotations

from typing import Optional

from ..database.connection import SupabaseConnection
from .repository import PhotoStorage


class SupabasePhotoStorage(PhotoStorage):
    def __init__(self, conn: SupabaseConnection, bucket: str):
        self._conn = conn
        self._bucket = bucket

    def create_signed_url(self, path: str, expires_in: int) -> Optional[str]:
        data = self._conn.client().storage.from_(self._bucket).create_signed_url(path, expires_in)
        # storage3 has returned both spellings across releases.
        return data.get("signedURL") or data.get("signedUrl")
