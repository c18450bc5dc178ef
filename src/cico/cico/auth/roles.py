"""Role resolution and role-gated routing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Mapping, Optional

from flask import g, request

from ..common.http import bearer_token, error_response
from ..core.constants import FOREMAN_ALLOWED_PATHS, LOGIN_PATH, TIMECLOCK_PATH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import ANONYMOUS, UserContext
from .repository import AuthRepository

logger = logging.getLogger(__name__)

READ_ONLY_FOREMAN_PATHS = frozenset({"/time-tracking/admin"})


@dataclass(frozen=True)
class RouteDecision:
    allowed: bool
    redirect_to: Optional[str] = None
    read_only: bool = False


def resolve_route(context: UserContext, path: str) -> RouteDecision:
    if not context.is_authenticated:
        return RouteDecision(allowed=False, redirect_to=LOGIN_PATH)

    if context.is_foreman:
        if path not in FOREMAN_ALLOWED_PATHS:
            return RouteDecision(allowed=False, redirect_to=TIMECLOCK_PATH)
        return RouteDecision(allowed=True, read_only=path in READ_ONLY_FOREMAN_PATHS)

    return RouteDecision(allowed=True)


def tenant_company_id(context: UserContext, requested: Optional[str] = None) -> str:
    """The caller's own company. Naming any other tenant is refused."""

    if not context.company_id:
        raise AuthorizationError("No company associated with this user")
    if requested and requested != context.company_id:
        logger.warning(
            "[SECURITY] Cross-tenant request denied: user=%s, company=%s, requested=%s",
            context.user_id,
            context.company_id,
            requested,
        )
        raise AuthorizationError("Forbidden")
    return context.company_id


class UserContextResolver:
    """Build a `UserContext` from the request's bearer token and `user_roles`."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def from_headers(self, headers: Mapping[str, str]) -> UserContext:
        token = bearer_token(headers)
        if not token:
            return ANONYMOUS

        user_id = self._auth.get_user_id_for_token(token)
        if not user_id:
            return ANONYMOUS

        roles = set()
        for value in self._auth.get_roles(user_id):
            try:
                roles.add(Role(value))
            except ValueError:
                logger.warning("Ignoring unknown role %r for user %s", value, user_id)
        return UserContext(
            user_id=user_id,
            roles=frozenset(roles),
            company_id=self._auth.get_company_id(user_id),
        )

    def roles_required(self, *allowed: Role):
        """Decorator: 401 for anonymous callers, 403 unless one of `allowed` is held.

        The resolved context is exposed to the view as `g.user_context`.
        """

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                context = self.from_headers(request.headers)
                if not context.is_authenticated:
                    return error_response("Authorization header required", 401)
                if allowed and not any(context.has_role(r) for r in allowed):
                    return error_response("Forbidden", 403)
                g.user_context = context
                return view(*args, **kwargs)

            return wrapper

        return decorator
