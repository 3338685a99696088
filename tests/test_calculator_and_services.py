from electrocare.models.calculator_models import CalculatorResult
from electrocare.models.service_models import Service
from electrocare.schemas.calculator_schemas import CalculatorRequest
from electrocare.services.calculator_service import calculate

from tests import utils


def test_calculation_formula():
    outcome = calculate(CalculatorRequest(lights=10, fans=4, acs=1))

    assert outcome.daily_consumption == 11.8
    assert outcome.recommended_capacity == 4
    assert outcome.estimated_cost == 200000


def test_kitchen_and_misc_are_watt_hours():
    outcome = calculate(CalculatorRequest(kitchen=4500, misc=900))

    assert outcome.daily_consumption == 5.4
    assert outcome.recommended_capacity == 2


def test_anonymous_calculation_is_not_saved(client):
    response = client.post("/api/calculator/", json={"lights": 10, "fans": 4, "acs": 1})

    assert response.status_code == 200
    assert response.json()["recommended_capacity"] == 4
    assert utils.count(client, CalculatorResult) == 0


def test_signed_in_calculation_is_saved_to_history(client, customer, customer_headers):
    client.post("/api/calculator/", json={"computers": 2}, headers=customer_headers)

    history = client.get("/api/calculator/history", headers=customer_headers).json()["data"]

    assert len(history) == 1
    assert history[0]["user_id"] == customer.id
    assert history[0]["computers"] == 2
    assert history[0]["daily_consumption"] == 4.8


def test_calculation_for_named_user_is_saved(client, customer):
    client.post("/api/calculator/", json={"fans": 1, "user_id": customer.id})
    client.post("/api/calculator/", json={"fans": 1, "user_id": "nobody"})

    assert utils.count(client, CalculatorResult) == 1
    assert utils.count(client, CalculatorResult, user_id=customer.id) == 1


def test_negative_counts_are_rejected(client):
    assert client.post("/api/calculator/", json={"lights": -1}).status_code == 400


def test_service_catalog_is_public_and_hides_inactive(client):
    utils.seed_service(client, name="Rooftop Install", price=45000)
    utils.seed_service(client, name="AMC Cleaning")
    retired = utils.seed_service(client, name="Legacy Panels", is_active=False)

    listed = client.get("/api/services/").json()["data"]

    assert [s["name"] for s in listed] == ["AMC Cleaning", "Rooftop Install"]
    assert client.get(f"/api/services/{retired.id}").status_code == 200


def test_service_management_is_admin_only(client, admin_headers, customer_headers):
    payload = {"name": "Battery Retrofit", "price": 60000}

    assert client.post("/api/services/", json=payload, headers=customer_headers).status_code == 403
    created = client.post("/api/services/", json=payload, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["data"]["category"] == "installation"
    assert created.json()["data"]["is_active"] is True


def test_service_delete_is_soft(client, admin_headers):
    service = utils.seed_service(client)

    response = client.delete(f"/api/services/{service.id}", headers=admin_headers)

    assert response.status_code == 200
    assert utils.fetch(client, Service, service.id).is_active is False
    assert client.get("/api/services/").json()["data"] == []


def test_service_update(client, admin_headers):
    service = utils.seed_service(client, price=100)

    data = client.put(f"/api/services/{service.id}", json={"price": 150, "duration": "2 days"}, headers=admin_headers).json()["data"]

    assert data["price"] == 150
    assert data["duration"] == "2 days"
