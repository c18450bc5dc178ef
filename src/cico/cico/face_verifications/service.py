from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_choice, require_non_empty
from ..core.enums import ReviewDecision
from ..core.exceptions import NotFoundError
from .model import FaceVerification
from .reconcile import reduce_verifications
from .repository import FaceVerificationRepository


class FaceVerificationService:
    def __init__(self, verifications: FaceVerificationRepository):
        self._verifications = verifications

    def latest_for_entries(self, company_id: str, entry_ids: Sequence[str]) -> Dict[str, FaceVerification]:
        require_non_empty(company_id, "company_id")
        ids = [e for e in entry_ids if e]
        if not ids:
            return {}
        return reduce_verifications(self._verifications.list_for_entries(company_id, ids))

    def flagged_count(self, company_id: str) -> int:
        require_non_empty(company_id, "company_id")
        return self._verifications.count_flagged(company_id)

    def review(
        self,
        *,
        verification_id: str,
        company_id: str,
        decision: str,
        reviewed_by: str,
        now: Optional[datetime] = None,
    ) -> FaceVerification:
        require_choice(decision, (d.value for d in ReviewDecision), "decision must be approved or rejected")
        updated = self._verifications.set_review(
            verification_id=verification_id,
            company_id=company_id,
            decision=decision,
            reviewed_by=reviewed_by,
            reviewed_at=now or now_utc(),
        )
        if not updated:
            raise NotFoundError("Verification not found")
        return updated
