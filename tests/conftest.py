import os
import tempfile
from collections.abc import Generator

import pytest

# Configuration is read at import time, so point it at a throwaway SQLite file first.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="electrocare-tests-")
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from electrocare.core.db import drop_models, init_models  # noqa: E402
from main import app  # noqa: E402

from tests import utils  # noqa: E402


async def _reset_schema():
    await drop_models()
    await init_models()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Test client over a fresh schema."""
    with TestClient(app) as c:
        c.portal.call(_reset_schema)
        yield c


@pytest.fixture(scope="function")
def admin(client):
    return utils.seed_user(client, "admin@electrocare.com", role="admin", first_name="Asha", last_name="Admin")


@pytest.fixture(scope="function")
def customer(client):
    return utils.seed_user(client, "ravi@electrocare.com", role="customer", first_name="Ravi", last_name="Kumar")


@pytest.fixture(scope="function")
def admin_headers(admin):
    return utils.auth_headers(admin)


@pytest.fixture(scope="function")
def customer_headers(customer):
    return utils.auth_headers(customer)
