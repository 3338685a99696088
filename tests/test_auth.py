from datetime import timedelta

from electrocare.core.config import SESSION_COOKIE_NAME
from electrocare.core.security import create_access_token
from electrocare.models.common import utcnow
from electrocare.models.user_models import User, UserSession, UserStatus

from tests import utils


def test_register_creates_customer_and_signs_in(client):
    response = client.post(
        "/api/local-db-auth/register",
        json={
            "email": "Neha@Electrocare.com",
            "password": "sunshine1",
            "first_name": "Neha",
            "last_name": "Shah",
        },
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["data"]["role"] == "customer"
    assert body["data"]["email"] == "neha@electrocare.com"
    assert "password_hash" not in body["data"]
    assert client.cookies.get(SESSION_COOKIE_NAME)

    me = client.get("/api/local-db-auth/user")
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "neha@electrocare.com"


def test_register_ignores_requested_role(client):
    response = client.post(
        "/api/local-db-auth/register",
        json={
            "email": "sneaky@electrocare.com",
            "password": "sunshine1",
            "first_name": "Sly",
            "last_name": "Fox",
            "role": "admin",
        },
    )

    assert response.json()["data"]["role"] == "customer"


def test_duplicate_registration_is_rejected(client, customer):
    response = client.post(
        "/api/local-db-auth/register",
        json={"email": customer.email, "password": "sunshine1", "first_name": "A", "last_name": "B"},
    )

    assert response.status_code == 400


def test_login_session_and_logout(client, customer):
    body = utils.login(client, customer.email)
    assert body["access_token"]
    assert client.get("/api/local-db-auth/user").status_code == 200

    response = client.post("/api/local-db-auth/logout")
    assert response.status_code == 200
    assert utils.count(client, UserSession, user_id=customer.id) == 0

    client.cookies.clear()
    assert client.get("/api/local-db-auth/user").status_code == 401


def test_wrong_password_is_unauthenticated(client, customer):
    response = client.post("/api/local-db-auth/login", json={"email": customer.email, "password": "nope-nope"})

    assert response.status_code == 401


def test_inactive_user_cannot_log_in_or_use_tokens(client):
    user = utils.seed_user(client, "gone@electrocare.com", status=UserStatus.INACTIVE)

    response = client.post("/api/local-db-auth/login", json={"email": user.email, "password": utils.DEFAULT_PASSWORD})
    assert response.status_code == 401

    assert client.get("/api/local-db-auth/user", headers=utils.auth_headers(user)).status_code == 401


def test_legacy_bearer_claim_is_accepted(client, customer):
    response = client.get("/api/local-db-auth/user", headers=utils.auth_headers(customer))

    assert response.status_code == 200
    assert response.json()["data"]["id"] == customer.id


def test_legacy_token_header_is_accepted(client, customer):
    token = create_access_token({"sub": customer.id})

    response = client.get("/api/local-db-auth/user", headers={"token": token})

    assert response.json()["data"]["id"] == customer.id


def test_session_wins_over_legacy_claim(client, admin, customer):
    utils.login(client, customer.email)

    response = client.get("/api/local-db-auth/user", headers=utils.auth_headers(admin))

    assert response.json()["data"]["id"] == customer.id


def test_unknown_ids_are_unauthenticated(client):
    ghost = create_access_token({"sub": "no-such-user"})

    assert client.get("/api/local-db-auth/user", headers={"Authorization": f"Bearer {ghost}"}).status_code == 401
    assert client.get("/api/local-db-auth/user", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert client.get("/api/local-db-auth/user").status_code == 401


def test_expired_session_falls_through_to_claims(client, customer, admin):
    utils.add(client, UserSession(sid="stale-session", user_id=customer.id, expires_at=utcnow() - timedelta(minutes=1)))
    client.cookies.set(SESSION_COOKIE_NAME, "stale-session")

    assert client.get("/api/local-db-auth/user").status_code == 401
    response = client.get("/api/local-db-auth/user", headers=utils.auth_headers(admin))
    assert response.json()["data"]["id"] == admin.id


def test_profile_update(client, customer, customer_headers):
    response = client.put("/api/users/profile", json={"phone": "9876543210", "address": "Pune"}, headers=customer_headers)

    assert response.status_code == 200
    assert response.json()["data"]["phone"] == "9876543210"
    assert utils.fetch(client, User, customer.id).address == "Pune"


def test_expired_sessions_are_purged(client, customer):
    from electrocare.core.db import AsyncSessionLocal
    from electrocare.services.auth_service import purge_expired_sessions

    utils.add(client, UserSession(sid="old", user_id=customer.id, expires_at=utcnow() - timedelta(days=1)))
    utils.add(client, UserSession(sid="fresh", user_id=customer.id, expires_at=utcnow() + timedelta(days=1)))

    async def purge():
        async with AsyncSessionLocal() as db:
            return await purge_expired_sessions(db)

    assert client.portal.call(purge) == 1
    assert utils.fetch(client, UserSession, "fresh") is not None
    assert utils.fetch(client, UserSession, "old") is None
