import pytest

from electrocare.models.installation_models import Installation
from electrocare.utils.enrichment import needs_enrichment

from tests import utils


@pytest.mark.parametrize("name", ["", "   ", None, "12345", "3f2b9c1e-8d4a-4c55-9a77-1b2c3d4e5f60", "deadbeef"])
def test_identifier_like_names_need_enrichment(name):
    assert needs_enrichment(name)


@pytest.mark.parametrize("name", ["Ravi Kumar", "O'Brien & Sons", "Flat 12", "abc", "Cafe-1234"])
def test_free_text_names_are_kept(name):
    assert not needs_enrichment(name)


def test_installation_list_substitutes_user_name_for_raw_ids(client, admin_headers, customer):
    utils.seed_installation(client, customer.id, customer_name=customer.id)
    utils.seed_installation(client, customer.id, customer_name="42")
    utils.seed_installation(client, customer.id, customer_name="Rooftop guest, Block B")

    data = client.get("/api/installations/", headers=admin_headers).json()["data"]

    names = sorted(item["customer_name"] for item in data)
    assert names == ["Ravi Kumar", "Ravi Kumar", "Rooftop guest, Block B"]


def test_enrichment_never_writes_back(client, admin_headers, customer):
    installation = utils.seed_installation(client, customer.id, customer_name="42")

    client.get("/api/installations/", headers=admin_headers)

    assert utils.fetch(client, Installation, installation.id).customer_name == "42"


def test_unknown_user_falls_back_to_stored_value(client, admin_headers, admin):
    utils.seed_quotation(client, "999", customer_name="999")
    utils.seed_quotation(client, "ghost-id", customer_name=None)

    data = client.get("/api/quotations/", headers=admin_headers).json()["data"]

    assert sorted(q["customer_name"] for q in data) == ["999", "ghost-id"]


def test_complaints_and_tickets_are_enriched(client, admin_headers, customer):
    utils.seed_complaint(client, customer.id, customer_name="7")
    utils.seed_ticket(client, customer.id, customer_name="")

    complaints = client.get("/api/complaints/", headers=admin_headers).json()["data"]
    tickets = client.get("/api/tickets/", headers=admin_headers).json()["data"]

    assert complaints[0]["customer_name"] == "Ravi Kumar"
    assert tickets[0]["customer_name"] == "Ravi Kumar"
