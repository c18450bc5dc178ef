from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import parse_timestamp, to_iso
from ..core.enums import TaskActionType


@dataclass(frozen=True)
class TaskActivity:
    activity_id: str
    user_id: str
    profile_id: str
    task_id: str
    project_id: Optional[str]
    company_id: str
    time_entry_id: str
    task_type_id: str
    action_type: TaskActionType
    timestamp: datetime

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "TaskActivity":
        return cls(
            activity_id=str(row["id"]),
            user_id=row["user_id"],
            profile_id=row["profile_id"],
            task_id=row["task_id"],
            project_id=row.get("project_id"),
            company_id=row["company_id"],
            time_entry_id=row["time_entry_id"],
            task_type_id=row["task_type_id"],
            action_type=TaskActionType(row["action_type"]),
            timestamp=parse_timestamp(row["timestamp"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.activity_id,
            "user_id": self.user_id,
            "profile_id": self.profile_id,
            "task_id": self.task_id,
            "project_id": self.project_id,
            "company_id": self.company_id,
            "time_entry_id": self.time_entry_id,
            "task_type_id": self.task_type_id,
            "action_type": self.action_type.value,
            "timestamp": to_iso(self.timestamp),
        }


@dataclass(frozen=True)
class RecordOutcome:
    """Either the stored activity or the reason the request was skipped."""

    activity: Optional[TaskActivity] = None
    skipped_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.activity is None:
            return {"success": True, "skipped": True, "reason": self.skipped_reason}
        return {"success": True, "activity": self.activity.to_dict()}
