import pytest

from electrocare.models.complaint_models import Complaint
from electrocare.models.installation_models import Installation
from electrocare.models.quotation_models import Quotation, QuotationStatus
from electrocare.services import quotation_service

from tests import utils


def test_customer_owns_their_quotation(client, admin, customer, customer_headers):
    response = client.post(
        "/api/quotations/",
        json={"customer_id": admin.id, "system_size": 5, "estimated_cost": 325000, "city": "Pune"},
        headers=customer_headers,
    )

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["customer_id"] == customer.id
    assert data["customer_name"] == "Ravi Kumar"
    assert data["status"] == "pending"


def test_admin_quotation_resolves_customer_by_name(client, admin_headers, customer):
    response = client.post(
        "/api/quotations/",
        json={"customer_name": "  ravi KUMAR ", "system_size": 3},
        headers=admin_headers,
    )

    assert response.json()["data"]["customer_id"] == customer.id


def test_admin_quotation_for_unknown_name_falls_back_to_admin(client, admin, admin_headers):
    response = client.post(
        "/api/quotations/",
        json={"customer_name": "Walk-in Visitor"},
        headers=admin_headers,
    )

    data = response.json()["data"]
    assert data["customer_id"] == admin.id
    assert data["customer_name"] == "Walk-in Visitor"


def test_technicians_cannot_create_quotations(client):
    tech_user = utils.seed_user(client, "tina@electrocare.com", role="technician", first_name="Tina")

    response = client.post("/api/quotations/", json={}, headers=utils.auth_headers(tech_user))

    assert response.status_code == 403


@pytest.mark.parametrize(
    "start, target, allowed",
    [
        (QuotationStatus.PENDING, "approved", True),
        (QuotationStatus.PENDING, "rejected", True),
        (QuotationStatus.APPROVED, "rejected", False),
        (QuotationStatus.APPROVED, "pending", False),
        (QuotationStatus.REJECTED, "approved", False),
        (QuotationStatus.CONVERTED, "pending", False),
        (QuotationStatus.PENDING, "converted", False),
    ],
)
def test_status_changes_follow_lifecycle(client, admin_headers, customer, start, target, allowed):
    quotation = utils.seed_quotation(client, customer.id, status=start)

    response = client.put(f"/api/quotations/{quotation.id}", json={"status": target}, headers=admin_headers)

    assert (response.status_code == 200) is allowed
    expected = target if allowed else start.value
    assert utils.fetch(client, Quotation, quotation.id).status.value == expected


def test_approve_and_reject_actions(client, admin_headers, customer):
    first = utils.seed_quotation(client, customer.id)
    second = utils.seed_quotation(client, customer.id)

    approved = client.post(f"/api/quotations/{first.id}/approve", headers=admin_headers)
    rejected = client.post(f"/api/quotations/{second.id}/reject", headers=admin_headers)

    assert approved.json()["data"]["status"] == "approved"
    assert rejected.json()["data"]["status"] == "rejected"
    assert client.post(f"/api/quotations/{second.id}/approve", headers=admin_headers).status_code == 400


def test_update_resyncs_linked_installation(client, admin_headers, customer):
    quotation = utils.seed_quotation(client, customer.id, customer_name="Ravi Kumar", system_size=3)
    installation = utils.seed_installation(
        client, customer.id, quotation_id=quotation.id, address="Old street", capacity=3, total_cost=100
    )

    response = client.put(
        f"/api/quotations/{quotation.id}",
        json={"property_address": "12 Sun Lane", "system_size": 6.5, "estimated_cost": 410000},
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    synced = utils.fetch(client, Installation, installation.id)
    assert synced.address == "12 Sun Lane"
    assert synced.capacity == 6.5
    assert synced.total_cost == 410000
    assert synced.notes.startswith(f"Updated from quotation {quotation.id[:8].upper()} - ")


def test_resync_falls_back_to_legacy_amount(client, admin_headers, customer):
    quotation = utils.seed_quotation(client, customer.id)
    installation = utils.seed_installation(client, customer.id, quotation_id=quotation.id, total_cost=100)

    client.put(f"/api/quotations/{quotation.id}", json={"amount": 250000}, headers=admin_headers)

    assert utils.fetch(client, Installation, installation.id).total_cost == 250000


def test_failed_resync_does_not_block_update(client, admin_headers, customer, monkeypatch):
    quotation = utils.seed_quotation(client, customer.id)
    installation = utils.seed_installation(client, customer.id, quotation_id=quotation.id, address="Old street")

    async def broken_sync(db, quotation, installation):
        installation.address = "half written"
        raise RuntimeError("sync exploded")

    monkeypatch.setattr(quotation_service, "sync_installation", broken_sync)

    response = client.put(f"/api/quotations/{quotation.id}", json={"notes": "call first"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["notes"] == "call first"
    assert utils.fetch(client, Installation, installation.id).address == "Old street"


def test_delete_removes_linked_installation_and_complaints(client, admin_headers, customer):
    quotation = utils.seed_quotation(client, customer.id)
    installation = utils.seed_installation(client, customer.id, quotation_id=quotation.id)
    complaint = utils.seed_complaint(client, customer.id, installation_id=installation.id)

    response = client.delete(f"/api/quotations/{quotation.id}", headers=admin_headers)

    assert response.status_code == 200
    assert utils.fetch(client, Quotation, quotation.id) is None
    assert utils.fetch(client, Installation, installation.id) is None
    assert utils.fetch(client, Complaint, complaint.id) is None


def test_customer_listing_and_access(client, admin, admin_headers, customer, customer_headers):
    mine = utils.seed_quotation(client, customer.id)
    theirs = utils.seed_quotation(client, admin.id)

    listed = client.get("/api/quotations/", headers=customer_headers).json()["data"]
    assert [q["id"] for q in listed] == [mine.id]

    assert client.get(f"/api/quotations/customer/{customer.id}", headers=customer_headers).status_code == 200
    assert client.get(f"/api/quotations/customer/{admin.id}", headers=customer_headers).status_code == 403
    assert client.get(f"/api/quotations/{theirs.id}", headers=customer_headers).status_code == 403
    assert client.get(f"/api/quotations/customer/{customer.id}", headers=admin_headers).status_code == 200


def test_status_filter(client, admin_headers, customer):
    utils.seed_quotation(client, customer.id, status=QuotationStatus.APPROVED)
    utils.seed_quotation(client, customer.id)

    data = client.get("/api/quotations/?status=approved", headers=admin_headers).json()["data"]

    assert [q["status"] for q in data] == ["approved"]


def test_edit_request_flow(client, admin_headers, customer, customer_headers):
    quotation = utils.seed_quotation(client, customer.id)

    created = client.post(
        "/api/quotation-edit-requests/",
        json={"quotation_id": quotation.id, "requested_changes": "Switch to a 10 kWh battery"},
        headers=customer_headers,
    )
    assert created.status_code == 201, created.text
    request_id = created.json()["data"]["id"]

    listed = client.get("/api/quotation-edit-requests/", headers=customer_headers).json()["data"]
    assert [r["id"] for r in listed] == [request_id]

    answered = client.put(
        f"/api/quotation-edit-requests/{request_id}",
        json={"status": "approved", "admin_response": "Updated the battery line"},
        headers=admin_headers,
    )
    assert answered.json()["data"]["status"] == "approved"

    flipped = client.put(
        f"/api/quotation-edit-requests/{request_id}", json={"status": "rejected"}, headers=admin_headers
    )
    assert flipped.status_code == 400


def test_edit_request_only_for_own_quotation(client, admin, customer_headers):
    quotation = utils.seed_quotation(client, admin.id)

    response = client.post(
        "/api/quotation-edit-requests/",
        json={"quotation_id": quotation.id, "requested_changes": "Cheaper please"},
        headers=customer_headers,
    )

    assert response.status_code == 403


def test_resync_failure_after_fields_copied_keeps_update(client, admin_headers, customer, monkeypatch):
    quotation = utils.seed_quotation(client, customer.id, property_address="Old street")
    installation = utils.seed_installation(client, customer.id, quotation_id=quotation.id, address="Old street")

    def clock_down():
        raise RuntimeError("clock unavailable")

    # sync copies the fields first and stamps the notes last
    monkeypatch.setattr(quotation_service, "utcnow", clock_down)

    response = client.put(
        f"/api/quotations/{quotation.id}", json={"property_address": "12 Sun Lane"}, headers=admin_headers
    )

    assert response.status_code == 200, response.text
    assert response.json()["data"]["property_address"] == "12 Sun Lane"
    assert utils.fetch(client, Quotation, quotation.id).property_address == "12 Sun Lane"
    synced = utils.fetch(client, Installation, installation.id)
    assert synced.address == "Old street"
    assert synced.notes is None


def test_resync_keeps_capacity_when_quotation_size_is_zero(client, admin_headers, customer):
    quotation = utils.seed_quotation(client, customer.id, system_size=4)
    installation = utils.seed_installation(client, customer.id, quotation_id=quotation.id, capacity=4)

    client.put(f"/api/quotations/{quotation.id}", json={"system_size": 0}, headers=admin_headers)

    assert utils.fetch(client, Quotation, quotation.id).system_size == 0
    assert utils.fetch(client, Installation, installation.id).capacity == 4
