from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_choice, require_fields
from ..core.constants import AUTO_OTHER_TASK
from ..core.enums import TaskActionType
from .model import RecordOutcome
from .repository import TaskActivityRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "user_id",
    "profile_id",
    "task_id",
    "company_id",
    "time_entry_id",
    "task_type_id",
    "action_type",
)
MISSING_FIELDS_MESSAGE = "Required fields: " + ", ".join(REQUIRED_FIELDS)
INVALID_ACTION_MESSAGE = "action_type must be start or finish"


class TaskActivityService:
    """Use case: record a task start/finish against an open time entry."""

    def __init__(self, activities: TaskActivityRepository):
        self._activities = activities

    def record(self, body: Mapping[str, Any], *, now: Optional[datetime] = None) -> RecordOutcome:
        require_fields(body, REQUIRED_FIELDS, MISSING_FIELDS_MESSAGE)
        action = require_choice(body["action_type"], (a.value for a in TaskActionType), INVALID_ACTION_MESSAGE)

        task_id = body["task_id"]
        task_type_id = body["task_type_id"]
        if AUTO_OTHER_TASK in (task_id, task_type_id):
            other_id = self._activities.find_other_task_type_id(body["company_id"])
            if not other_id:
                logger.info("No Other task type for company %s; skipping activity", body["company_id"])
                return RecordOutcome(skipped_reason="No Other task type found")
            task_id = task_type_id = other_id

        activity = self._activities.insert(
            user_id=body["user_id"],
            profile_id=body["profile_id"],
            task_id=task_id,
            project_id=body.get("project_id") or None,
            company_id=body["company_id"],
            time_entry_id=body["time_entry_id"],
            task_type_id=task_type_id,
            action_type=TaskActionType(action),
            timestamp=now or now_utc(),
        )
        return RecordOutcome(activity=activity)
