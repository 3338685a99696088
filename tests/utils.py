"""Seeding and auth helpers shared by the API tests.

Everything that touches the database runs on the test client's own event
loop through ``client.portal`` so connections never cross loops.
"""
from sqlalchemy import func, select

from electrocare.core.db import AsyncSessionLocal
from electrocare.core.security import create_access_token, hash_password
from electrocare.models.complaint_models import Complaint
from electrocare.models.installation_models import Installation
from electrocare.models.quotation_models import Quotation
from electrocare.models.service_models import Service
from electrocare.models.technician_models import Technician
from electrocare.models.ticket_models import Ticket
from electrocare.models.user_models import User, UserRole

DEFAULT_PASSWORD = "secret123"


async def _add(instance):
    async with AsyncSessionLocal() as db:
        db.add(instance)
        await db.commit()
        await db.refresh(instance)
        return instance


def add(client, instance):
    return client.portal.call(_add, instance)


def seed_user(client, email, role="customer", password=DEFAULT_PASSWORD, **fields):
    user = User(email=email, role=UserRole(role), password_hash=hash_password(password), **fields)
    user = add(client, user)
    if user.role == UserRole.TECHNICIAN:
        add(client, Technician(user_id=user.id, name=user.full_name or email, email=email))
    return user


def seed_technician(client, name="Tara Tech", **fields):
    fields.setdefault("specializations", ["General Installation"])
    return add(client, Technician(name=name, **fields))


def seed_service(client, name="Rooftop Install", **fields):
    return add(client, Service(name=name, **fields))


def seed_quotation(client, customer_id, **fields):
    return add(client, Quotation(customer_id=customer_id, **fields))


def seed_installation(client, customer_id, **fields):
    return add(client, Installation(customer_id=customer_id, **fields))


def seed_complaint(client, customer_id, title="Inverter beeping", **fields):
    return add(client, Complaint(customer_id=customer_id, title=title, **fields))


def seed_ticket(client, customer_id, subject="Billing question", **fields):
    return add(client, Ticket(customer_id=customer_id, subject=subject, **fields))


async def _get(model, pk):
    async with AsyncSessionLocal() as db:
        return await db.get(model, pk)


def fetch(client, model, pk):
    return client.portal.call(_get, model, pk)


async def _count(model, criteria):
    async with AsyncSessionLocal() as db:
        stmt = select(func.count()).select_from(model)
        for column, value in criteria.items():
            stmt = stmt.where(getattr(model, column) == value)
        return (await db.execute(stmt)).scalar()


def count(client, model, **criteria):
    return client.portal.call(_count, model, criteria)


async def _technician_of(user_id):
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(Technician).where(Technician.user_id == user_id))
        return result.scalars().first()


def technician_of(client, user_id):
    return client.portal.call(_technician_of, user_id)


def auth_headers(user):
    """Legacy bearer identity for ``user``; avoids a bcrypt round-trip per request."""
    token = create_access_token({"sub": user.id, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


def login(client, email, password=DEFAULT_PASSWORD):
    response = client.post("/api/local-db-auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()
