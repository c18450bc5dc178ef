from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_iso
from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchcount, fetchone
from .model import FaceVerification
from .repository import FaceVerificationRepository


class SupabaseFaceVerificationRepository(FaceVerificationRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def _table(self):
        return self._conn.client().table("face_verifications")

    def list_for_entries(self, company_id: str, entry_ids: Sequence[str]) -> Sequence[FaceVerification]:
        query = self._table().select("*").eq("company_id", company_id).in_("time_entry_id", list(entry_ids))
        return [FaceVerification.from_row(r) for r in fetchall(query, context="face_verifications.list_for_entries")]

    def count_flagged(self, company_id: str) -> int:
        query = (
            self._table()
            .select("*", count="exact", head=True)
            .eq("company_id", company_id)
            .eq("is_match", False)
            .is_("review_decision", "null")
        )
        return fetchcount(query, context="face_verifications.count_flagged")

    def set_review(
        self,
        *,
        verification_id: str,
        company_id: str,
        decision: str,
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> Optional[FaceVerification]:
        query = (
            self._table()
            .update({"review_decision": decision, "reviewed_by": reviewed_by, "reviewed_at": to_iso(reviewed_at)})
            .eq("id", verification_id)
            .eq("company_id", company_id)
        )
        row = fetchone(query, context="face_verifications.set_review")
        return FaceVerification.from_row(row) if row else None
