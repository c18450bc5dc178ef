"""JSON response helpers shared by the `/functions/*` controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Mapping, Optional

from flask import Response, current_app, jsonify, request

from ..core.constants import CORS_HEADERS
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_response(body: Any, status: int = 200, headers: Optional[Mapping[str, str]] = None) -> Response:
    resp = jsonify(body)
    resp.status_code = status
    resp.headers.update(CORS_HEADERS)
    if headers:
        resp.headers.update(headers)
    return resp


def error_response(
    message: str,
    status: int,
    headers: Optional[Mapping[str, str]] = None,
    *,
    extra: Optional[Mapping[str, Any]] = None,
) -> Response:
    body = dict(extra or {})
    body["error"] = message
    return json_response(body, status, headers)


def preflight_response() -> Response:
    resp = current_app.response_class(status=200)
    resp.headers.update(CORS_HEADERS)
    return resp


def request_json() -> dict:
    """Body of the current request as a dict; empty or malformed bodies become `{}`."""

    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    auth = headers.get("Authorization") or ""
    if auth.startswith("Bearer "):
        return auth[len("Bearer "):]
    return None


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def status_for(e: DomainError, *, backend_status: int = 500) -> int:
    if isinstance(e, ValidationError):
        return 400
    if isinstance(e, AuthenticationError):
        return 401
    if isinstance(e, AuthorizationError):
        return 403
    if isinstance(e, NotFoundError):
        return 404
    if isinstance(e, BackendError):
        return backend_status
    return 500


def domain_error_response(
    e: DomainError,
    *,
    backend_status: int = 500,
    extra: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Map a domain exception onto its HTTP status; backend failures use `backend_status`."""

    return error_response(str(e), status_for(e, backend_status=backend_status), extra=extra)


def function_view(*, backend_status: int = 500, error_extra: Optional[Mapping[str, Any]] = None):
    """Decorator for `/functions/*` views.

    Answers CORS preflights, maps `DomainError`s to their status and turns
    anything else into a 500 carrying the exception message.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if request.method == "OPTIONS":
                return preflight_response()
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return domain_error_response(e, backend_status=backend_status, extra=error_extra)
            except Exception as e:
                logger.exception("Unhandled error in %s", request.path)
                return error_response(str(e) or "Unknown error", 500, extra=error_extra)

        return wrapper

    return decorator
