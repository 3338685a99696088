import pytest

from electrocare.core.config import INITIAL_ADMIN_EMAIL, INITIAL_ADMIN_PASSWORD
from electrocare.models.activity_models import UserActivity
from electrocare.models.installation_models import Installation
from electrocare.models.user_models import UserRole
from electrocare.scripts.create_admin import create_admin

from tests import utils


def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_malformed_body_is_a_validation_error(client, customer_headers):
    response = client.post("/api/quotations/", json={"system_size": "huge"}, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "body.system_size"


def test_writes_are_audited(client, admin, admin_headers, customer):
    complaint = utils.seed_complaint(client, customer.id)

    client.put(f"/api/complaints/{complaint.id}", json={"status": "investigating"}, headers=admin_headers)

    response = client.get(f"/api/activities/?user_id={admin.id}&order=asc", headers=admin_headers)
    assert response.status_code == 200
    messages = [a["message"] for a in response.json()["data"]]
    assert messages == [
        f"Updated complaint #{complaint.id} by user '{admin.email}'",
        f"Performed PUT on /api/complaints/{complaint.id}",
    ]


def test_reads_and_failures_are_not_audited(client, customer, customer_headers):
    client.get("/api/complaints/", headers=customer_headers)
    client.post("/api/complaints/", json={"title": ""}, headers=customer_headers)

    assert utils.count(client, UserActivity, user_id=customer.id) == 0


def test_activity_log_is_admin_only_and_paginated(client, admin_headers, customer_headers):
    for name in ("A", "B", "C"):
        client.post("/api/services/", json={"name": name}, headers=admin_headers)

    page = client.get("/api/activities/?page=2&page_size=4", headers=admin_headers).json()

    assert page["total"] == 6
    assert len(page["data"]) == 2
    assert client.get("/api/activities/", headers=customer_headers).status_code == 403


def test_create_admin_script_is_idempotent(client):
    first = client.portal.call(create_admin)
    second = client.portal.call(create_admin)

    assert first.id == second.id
    assert first.email == INITIAL_ADMIN_EMAIL
    assert first.role == UserRole.ADMIN
    utils.login(client, INITIAL_ADMIN_EMAIL, INITIAL_ADMIN_PASSWORD)


def test_create_admin_promotes_existing_account(client):
    existing = utils.seed_user(client, INITIAL_ADMIN_EMAIL)

    promoted = client.portal.call(create_admin)

    assert promoted.id == existing.id
    assert promoted.role == UserRole.ADMIN


def test_promoting_technician_to_admin_drops_technician_record(client, customer):
    tech_user = utils.seed_user(client, INITIAL_ADMIN_EMAIL, role="technician", first_name="Tina")
    technician = utils.technician_of(client, tech_user.id)
    installation = utils.seed_installation(client, customer.id, technician_id=technician.id)

    promoted = client.portal.call(create_admin)

    assert promoted.role == UserRole.ADMIN
    assert utils.technician_of(client, tech_user.id) is None
    assert utils.fetch(client, Installation, installation.id).technician_id is None


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("post", "/api/calculator", {"lights": 2}),
        ("get", "/api/services", None),
        ("post", "/api/quotations", {"city": "Pune"}),
    ],
)
def test_collection_paths_answer_without_trailing_slash(client, customer_headers, method, path, body):
    kwargs = {"headers": customer_headers, "follow_redirects": False}
    if body is not None:
        kwargs["json"] = body

    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code in (200, 201), response.text
