from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError

from ..core.exceptions import BackendError

logger = logging.getLogger(__name__)


def run(query, *, context: str) -> Any:
    """Execute a postgrest/rpc builder, translating backend failures to `BackendError`."""

    try:
        return query.execute()
    except APIError as e:
        message = e.message or str(e)
        logger.error("%s failed: %s", context, message)
        raise BackendError(message) from e


def fetchall(query, *, context: str) -> List[Dict[str, Any]]:
    resp = run(query, context=context)
    return list(resp.data or [])


def fetchone(query, *, context: str) -> Optional[Dict[str, Any]]:
    rows = fetchall(query, context=context)
    return rows[0] if rows else None


def fetchcount(query, *, context: str) -> int:
    resp = run(query, context=context)
    return int(resp.count or 0)
