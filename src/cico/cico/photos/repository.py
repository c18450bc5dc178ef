from __future__ import annotations

from typing import Optional, Protocol


class PhotoStorage(Protocol):
    def create_signed_url(self, path: str, expires_in: int) -> Optional[str]:
        raise NotImplementedError
