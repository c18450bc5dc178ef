from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.constants import OTHER_TASK_CODES
from ..core.enums import TaskActionType
from ..core.exceptions import BackendError
from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchone
from .model import TaskActivity
from .repository import TaskActivityRepository


class SupabaseTaskActivityRepository(TaskActivityRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def find_other_task_type_id(self, company_id: str) -> Optional[str]:
        codes = ",".join(f"code.eq.{code}" for code in OTHER_TASK_CODES)
        query = (
            self._conn.client()
            .table("task_types")
            .select("id")
            .eq("company_id", company_id)
            .eq("is_active", True)
            .or_(codes)
            .limit(1)
        )
        row = fetchone(query, context="task_types.find_other")
        return str(row["id"]) if row else None

    def insert(
        self,
        *,
        user_id: str,
        profile_id: str,
        task_id: str,
        project_id: Optional[str],
        company_id: str,
        time_entry_id: str,
        task_type_id: str,
        action_type: TaskActionType,
        timestamp: datetime,
    ) -> TaskActivity:
        payload = {
            "user_id": user_id,
            "profile_id": profile_id,
            "task_id": task_id,
            "project_id": project_id,
            "company_id": company_id,
            "time_entry_id": time_entry_id,
            "task_type_id": task_type_id,
            "action_type": action_type.value,
            "timestamp": to_iso(timestamp),
        }
        row = fetchone(self._conn.client().table("task_activities").insert(payload), context="task_activities.insert")
        if not row:
            raise BackendError("Failed to record task activity")
        return TaskActivity.from_row(row)
