from __future__ import annotations

import pytest

from conftest import COMPANY, FakeProfiles, build_test_container, make_profile

from src.cico.cico.core.exceptions import NotFoundError
from src.cico.cico.profiles.model import EmployeeMatch
from src.cico.cico.profiles.service import EmployeeService

MATCH = EmployeeMatch(profile_id="p-1", user_id="u-1", display_name="Ana L.", first_name="Ana", last_name="Lopez")


def test_lookup_returns_match():
    svc = EmployeeService(FakeProfiles(matches={(COMPANY, "E-100"): MATCH}))

    assert svc.lookup_employee(company_id=COMPANY, identifier=" E-100 ") == MATCH


def test_lookup_not_found():
    with pytest.raises(NotFoundError, match="Employee not found"):
        EmployeeService(FakeProfiles()).lookup_employee(company_id=COMPANY, identifier="nobody")


def test_verify_badge_valid():
    svc = EmployeeService(FakeProfiles([make_profile("p-1", display_name="Ana L.", department_name="Shop")]))

    result = svc.verify_badge(company_id=COMPANY, profile_id="p-1")

    assert result == {
        "valid": True,
        "employee": {"name": "Ana L.", "employee_id": "E-100", "department": "Shop", "status": "active"},
        "company": "Acme Steel",
    }


def test_verify_badge_rejects_other_tenant_and_inactive():
    svc = EmployeeService(FakeProfiles([make_profile("p-1"), make_profile("p-2", status="terminated")]))

    assert svc.verify_badge(company_id="other", profile_id="p-1") == {"valid": False, "error": "Employee not found"}
    assert svc.verify_badge(company_id=COMPANY, profile_id="p-2") == {"valid": False, "error": "Employee is not active"}


def test_lookup_route_never_exposes_pin_state(make_client):
    client = make_client(build_test_container(profiles=FakeProfiles(matches={(COMPANY, "E-100"): MATCH})))

    resp = client.post("/functions/lookup-employee", json={"company_id": COMPANY, "identifier": "E-100"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["found"] is True
    assert body["employee"]["id"] == "p-1"
    assert "has_pin" not in body["employee"]


def test_lookup_route_not_found_is_200(make_client):
    resp = make_client().post("/functions/lookup-employee", json={"company_id": COMPANY, "identifier": "x"})

    assert resp.status_code == 200
    assert resp.get_json() == {"found": False, "error": "Employee not found"}


def test_lookup_route_requires_fields(make_client):
    resp = make_client().post("/functions/lookup-employee", json={"company_id": COMPANY})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "company_id and identifier are required"}


def test_verify_badge_route(make_client):
    client = make_client(build_test_container(profiles=FakeProfiles([make_profile("p-1")])))

    resp = client.post("/functions/verify-badge", json={"company_id": COMPANY, "profile_id": "p-1"})

    assert resp.status_code == 200
    assert resp.get_json()["valid"] is True
