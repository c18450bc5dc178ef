"""Shared-secret guard for scheduled-job endpoints."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Mapping, Optional

from flask import request

from ..common.http import bearer_token, error_response, preflight_response

logger = logging.getLogger(__name__)

CRON_SECRET_HEADER = "X-Cron-Secret"
UNAUTHORIZED_MESSAGE = "Unauthorized - Invalid or missing cron secret"


class CronAuthenticator:
    """Pure predicate over request headers plus one configured secret."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None

    def is_authorized(self, headers: Mapping[str, str]) -> bool:
        if not self._secret:
            logger.warning("[SECURITY] CRON_SECRET not configured - cron endpoint is unprotected")
            return True

        if bearer_token(headers) == self._secret:
            return True

        if headers.get(CRON_SECRET_HEADER) == self._secret:
            return True

        return False

    def unauthorized_response(self):
        logger.warning("[SECURITY] Unauthorized cron request rejected")
        return error_response(UNAUTHORIZED_MESSAGE, 401)

    def protect(self, view):
        """Decorator: answer preflights, then reject with 401 unless `is_authorized`."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            if request.method == "OPTIONS":
                return preflight_response()
            if not self.is_authorized(request.headers):
                return self.unauthorized_response()
            return view(*args, **kwargs)

        return wrapper
