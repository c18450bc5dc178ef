from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import parse_timestamp, to_iso


@dataclass(frozen=True)
class FaceVerification:
    """Result of one photo-match check against a time entry."""

    verification_id: str
    time_entry_id: str
    is_match: Optional[bool]
    created_at: datetime
    review_decision: Optional[str] = None
    profile_id: Optional[str] = None
    company_id: Optional[str] = None
    status: Optional[str] = None
    match_distance: Optional[float] = None

    @property
    def is_flagged(self) -> bool:
        return self.is_match is False and self.review_decision is None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "FaceVerification":
        return cls(
            verification_id=str(row["id"]),
            time_entry_id=str(row["time_entry_id"]),
            is_match=row.get("is_match"),
            created_at=parse_timestamp(row["created_at"]),
            review_decision=row.get("review_decision"),
            profile_id=row.get("profile_id"),
            company_id=row.get("company_id"),
            status=row.get("status"),
            match_distance=row.get("match_distance"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.verification_id,
            "time_entry_id": self.time_entry_id,
            "is_match": self.is_match,
            "created_at": to_iso(self.created_at),
            "review_decision": self.review_decision,
            "profile_id": self.profile_id,
            "company_id": self.company_id,
            "status": self.status,
            "match_distance": self.match_distance,
        }
