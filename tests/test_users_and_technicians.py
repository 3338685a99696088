from electrocare.models.complaint_models import Complaint
from electrocare.models.installation_models import Installation
from electrocare.models.technician_models import Technician
from electrocare.models.ticket_models import Ticket
from electrocare.models.user_models import User, UserRole

from tests import utils


def test_role_change_to_technician_provisions_record(client, admin_headers, customer):
    response = client.put(f"/api/users/{customer.id}", json={"role": "technician"}, headers=admin_headers)

    assert response.status_code == 200, response.text
    technician = utils.technician_of(client, customer.id)
    assert technician is not None
    assert technician.name == "Ravi Kumar"
    assert technician.specializations == ["General Installation"]
    assert technician.experience_years == 1
    assert technician.is_available is True

    # a second save with the same role does not create a duplicate
    client.put(f"/api/users/{customer.id}", json={"role": "technician", "phone": "123"}, headers=admin_headers)
    assert utils.count(client, Technician, user_id=customer.id) == 1


def test_provisioned_name_falls_back_to_email(client, admin_headers):
    user = utils.seed_user(client, "solo@electrocare.com")

    client.put(f"/api/users/{user.id}", json={"role": "technician"}, headers=admin_headers)

    assert utils.technician_of(client, user.id).name == "solo"


def test_role_change_away_from_technician_removes_record(client, admin_headers, customer):
    tech_user = utils.seed_user(client, "tina@electrocare.com", role="technician", first_name="Tina")
    technician = utils.technician_of(client, tech_user.id)
    installation = utils.seed_installation(client, customer.id, technician_id=technician.id)

    response = client.put(f"/api/users/{tech_user.id}", json={"role": "customer"}, headers=admin_headers)

    assert response.status_code == 200
    assert utils.technician_of(client, tech_user.id) is None
    assert utils.fetch(client, Installation, installation.id).technician_id is None


def test_admin_created_technician_user_gets_record(client, admin_headers):
    response = client.post(
        "/api/users/",
        json={"email": "tom@electrocare.com", "first_name": "Tom", "last_name": "Watts", "role": "technician"},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    assert utils.technician_of(client, response.json()["data"]["id"]).name == "Tom Watts"


def test_deleting_technician_user_cascades(client, admin_headers, customer):
    tech_user = utils.seed_user(client, "tina@electrocare.com", role="technician", first_name="Tina")
    technician = utils.technician_of(client, tech_user.id)
    assigned = utils.seed_installation(client, customer.id, technician_id=technician.id)
    complaint = utils.seed_complaint(client, customer.id, assigned_technician_id=technician.id)
    ticket = utils.seed_ticket(client, customer.id, assigned_to_id=technician.id)
    own_ticket = utils.seed_ticket(client, tech_user.id)

    response = client.delete(f"/api/users/{tech_user.id}", headers=admin_headers)

    assert response.status_code == 200, response.text
    assert utils.fetch(client, User, tech_user.id) is None
    assert utils.fetch(client, Technician, technician.id) is None
    assert utils.fetch(client, Installation, assigned.id).technician_id is None
    assert utils.fetch(client, Complaint, complaint.id).assigned_technician_id is None
    assert utils.fetch(client, Ticket, ticket.id).assigned_to_id is None
    assert utils.fetch(client, Ticket, own_ticket.id) is None


def test_deleting_customer_removes_their_records(client, admin_headers, customer):
    installation = utils.seed_installation(client, customer.id)
    utils.seed_complaint(client, customer.id, installation_id=installation.id)
    utils.seed_ticket(client, customer.id)

    assert client.delete(f"/api/users/{customer.id}", headers=admin_headers).status_code == 200

    assert utils.count(client, Installation, customer_id=customer.id) == 0
    assert utils.count(client, Complaint, customer_id=customer.id) == 0
    assert utils.count(client, Ticket, customer_id=customer.id) == 0


def test_admin_cannot_delete_self(client, admin, admin_headers):
    assert client.delete(f"/api/users/{admin.id}", headers=admin_headers).status_code == 400


def test_user_management_is_admin_only(client, customer_headers):
    assert client.get("/api/users/", headers=customer_headers).status_code == 403
    assert client.get("/api/users/").status_code == 401


def test_create_technician_without_email_synthesizes_user(client, admin_headers):
    response = client.post(
        "/api/technicians/",
        json={"name": "Arjun Mehta", "certifications": "NABCEP, Electrical L2", "experience_years": 4},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["certifications"] == ["NABCEP", "Electrical L2"]
    assert data["specializations"] == ["General Installation"]
    assert data["email"].startswith("arjun.mehta.")
    assert data["email"].endswith("@solartech.local")

    user = utils.fetch(client, User, data["user_id"])
    assert user.role == UserRole.TECHNICIAN
    assert user.first_name == "Arjun"
    assert user.last_name == "Mehta"


def test_create_technician_promotes_existing_user(client, admin_headers, customer):
    response = client.post(
        "/api/technicians/",
        json={"name": "Ravi Kumar", "email": customer.email, "specializations": ["Batteries"]},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    assert response.json()["data"]["user_id"] == customer.id
    assert utils.fetch(client, User, customer.id).role == UserRole.TECHNICIAN

    again = client.post("/api/technicians/", json={"name": "Ravi", "email": customer.email}, headers=admin_headers)
    assert again.status_code == 400


def test_deleting_technician_keeps_user(client, admin_headers):
    tech_user = utils.seed_user(client, "tina@electrocare.com", role="technician", first_name="Tina")
    technician = utils.technician_of(client, tech_user.id)

    response = client.delete(f"/api/technicians/{technician.id}", headers=admin_headers)

    assert response.status_code == 200
    user = utils.fetch(client, User, tech_user.id)
    assert user is not None
    assert user.role == UserRole.CUSTOMER


def test_technician_listing_and_me(client, admin_headers):
    tech_user = utils.seed_user(client, "zara@electrocare.com", role="technician", first_name="Zara")
    utils.seed_technician(client, name="Aman")

    names = [t["name"] for t in client.get("/api/technicians/", headers=admin_headers).json()["data"]]
    assert names == sorted(names)

    me = client.get("/api/technicians/me", headers=utils.auth_headers(tech_user))
    assert me.status_code == 200
    assert me.json()["data"]["user_id"] == tech_user.id
