from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import FaceVerification


class FaceVerificationRepository(Protocol):
    def list_for_entries(self, company_id: str, entry_ids: Sequence[str]) -> Sequence[FaceVerification]:
        raise NotImplementedError

    def count_flagged(self, company_id: str) -> int:
        """Non-matching verifications that nobody has reviewed yet."""

        raise NotImplementedError

    def set_review(
        self,
        *,
        verification_id: str,
        company_id: str,
        decision: str,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> Optional[FaceVerification]:
        raise NotImplementedError
