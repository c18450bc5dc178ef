from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import TaskActionType
from .model import TaskActivity


class TaskActivityRepository(Protocol):
    def find_other_task_type_id(self, company_id: str) -> Optional[str]:
        """Id of the company's active catch-all "Other" task type, if configured."""

        raise NotImplementedError

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
        raise NotImplementedError
