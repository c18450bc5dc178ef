from __future__ import annotations

import pytest

from conftest import COMPANY, FakeAuthRepo, build_test_container

from src.cico.cico.auth.model import ANONYMOUS, UserContext
from src.cico.cico.auth.roles import UserContextResolver, resolve_route, tenant_company_id
from src.cico.cico.core.enums import Role
from src.cico.cico.core.exceptions import AuthorizationError

FOREMAN = UserContext(user_id="u-f", roles=frozenset({Role.FOREMAN}))
ADMIN = UserContext(user_id="u-a", roles=frozenset({Role.ADMIN}))


def test_anonymous_is_sent_to_login():
    decision = resolve_route(ANONYMOUS, "/dashboard")

    assert not decision.allowed
    assert decision.redirect_to == "/login"


def test_foreman_is_redirected_to_timeclock():
    decision = resolve_route(FOREMAN, "/reports")

    assert not decision.allowed
    assert decision.redirect_to == "/timeclock"


def test_foreman_can_open_timeclock_and_read_time_admin():
    assert resolve_route(FOREMAN, "/timeclock").allowed
    admin_view = resolve_route(FOREMAN, "/time-tracking/admin")
    assert admin_view.allowed
    assert admin_view.read_only


def test_admin_is_not_restricted():
    decision = resolve_route(ADMIN, "/reports")

    assert decision.allowed
    assert not decision.read_only


def test_resolver_builds_context_from_bearer_token():
    auth = FakeAuthRepo(tokens={"tok": "u-1"}, roles={"u-1": ["foreman", "unknown-role"]})

    context = UserContextResolver(auth).from_headers({"Authorization": "Bearer tok"})

    assert context.user_id == "u-1"
    assert context.roles == frozenset({Role.FOREMAN})
    assert context.company_id == COMPANY


def test_resolver_without_valid_token_is_anonymous():
    resolver = UserContextResolver(FakeAuthRepo())

    assert resolver.from_headers({}) is ANONYMOUS
    assert not resolver.from_headers({"Authorization": "Bearer nope"}).is_authenticated


def test_route_access_endpoint(make_client):
    auth = FakeAuthRepo(tokens={"tok": "u-1"}, roles={"u-1": ["foreman"]})
    client = make_client(build_test_container(auth=auth))

    resp = client.get("/api/route-access?path=/reports", headers={"Authorization": "Bearer tok"})

    assert resp.status_code == 200
    assert resp.get_json() == {"allowed": False, "redirect_to": "/timeclock", "read_only": False, "roles": ["foreman"]}


def test_me_requires_authorization(make_client):
    client = make_client()

    resp = client.get("/api/me")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authorization header required"}


def test_tenant_is_the_callers_company():
    context = UserContext(user_id="u-a", roles=frozenset({Role.ADMIN}), company_id=COMPANY)

    assert tenant_company_id(context) == COMPANY
    assert tenant_company_id(context, COMPANY) == COMPANY
    with pytest.raises(AuthorizationError, match="Forbidden"):
        tenant_company_id(context, "company-other")


def test_tenant_requires_a_company():
    with pytest.raises(AuthorizationError, match="No company associated with this user"):
        tenant_company_id(ADMIN)


def test_me_reports_company(make_client):
    auth = FakeAuthRepo(tokens={"tok": "u-1"}, roles={"u-1": ["admin"]})
    client = make_client(build_test_container(auth=auth))

    resp = client.get("/api/me", headers={"Authorization": "Bearer tok"})

    assert resp.status_code == 200
    assert resp.get_json()["company_id"] == COMPANY
