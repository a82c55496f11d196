"""
pytest fixtures for integration tests.

Integration tests use:
- FastAPI's TestClient (in-process, no Docker needed)
- The real application lifespan and a real PostgreSQL database
- Dependency overrides to inject MockEmailGateway instead of SMTP
- Automatic cleanup between tests

Every test here is skipped when PostgreSQL is unreachable.
"""

import asyncio
import os

import asyncpg
import pytest
from fastapi.testclient import TestClient

from src.domain.credentials import Credentials
from src.infrastructure.database.connection import DatabaseConnection
from src.infrastructure.database.postgres_credential_repository import (
    PostgresCredentialRepository,
)
from src.main import app
from src.presentation.dependencies import get_email_gateway
from tests.mocks.mock_email_gateway import MockEmailGateway

DB_CONFIG = {
    "host": os.getenv("DATABASE_HOST", "localhost"),
    "port": int(os.getenv("DATABASE_PORT", "5432")),
    "database": os.getenv("DATABASE_NAME", "test_newsletter"),
    "user": os.getenv("DATABASE_USER", "postgres"),
    "password": os.getenv("DATABASE_PASSWORD", "postgres"),
}

OPERATOR_USERNAME = "operator"
OPERATOR_PASSWORD = "everythinghastostartsomewhere"


async def _database_is_reachable() -> bool:
    try:
        conn = await asyncpg.connect(**DB_CONFIG, timeout=2)
    except (OSError, asyncio.TimeoutError, asyncpg.PostgresError):
        return False
    await conn.close()
    return True


@pytest.fixture(scope="session")
def database_reachable() -> bool:
    return asyncio.run(_database_is_reachable())


@pytest.fixture(autouse=True)
def require_database(database_reachable: bool) -> None:
    if not database_reachable:
        pytest.skip(f"PostgreSQL is not reachable at {DB_CONFIG['host']}:{DB_CONFIG['port']}")


@pytest.fixture
def api_client(require_database):
    """
    Create FastAPI TestClient with MockEmailGateway dependency override.

    Decision: Using TestClient as a context manager ensures the app's
    lifespan events (startup/shutdown) are triggered, which initializes
    the database connection pool and the schema.
    """
    MockEmailGateway.clear()
    app.dependency_overrides[get_email_gateway] = lambda: MockEmailGateway()

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    MockEmailGateway.clear()


@pytest.fixture(autouse=True)
async def clean_database(require_database, api_client):
    """
    Clean database before each test.

    Depends on api_client so the lifespan has already created the schema.
    """
    conn = await asyncpg.connect(**DB_CONFIG)
    try:
        await conn.execute("TRUNCATE TABLE subscription_tokens, subscriptions, users CASCADE;")
    finally:
        await conn.close()

    yield


@pytest.fixture
async def db_connection():
    """
    Provide direct database connection for assertions.

    Yields:
        asyncpg Connection object
    """
    conn = await asyncpg.connect(**DB_CONFIG)
    yield conn
    await conn.close()


@pytest.fixture
async def operator(clean_database) -> Credentials:
    """Store an operator allowed to publish newsletters."""
    credentials = Credentials.create(username=OPERATOR_USERNAME, password=OPERATOR_PASSWORD)

    db = DatabaseConnection(**DB_CONFIG)
    await db.connect()
    try:
        await PostgresCredentialRepository(db).add(credentials)
    finally:
        await db.disconnect()

    return credentials


@pytest.fixture
def subscribe(api_client):
    """
    Helper fixture to submit the subscription form.

    Usage:
        def test_something(subscribe):
            response = subscribe("le guin", "ursula_le_guin@gmail.com")
            assert response.status_code == 200
    """

    def _subscribe(name: str | None, email: str | None):
        form = {key: value for key, value in {"name": name, "email": email}.items() if value}
        return api_client.post("/subscriptions", data=form)

    return _subscribe


@pytest.fixture
def confirmation_link():
    """Helper to get the confirmation link emailed to an address."""

    def _link(email: str) -> str:
        sent = MockEmailGateway.get_email_for(email)
        assert sent is not None, f"No email sent to {email}. Sent: {MockEmailGateway.get_sent_emails()}"
        return sent.confirmation_link()

    return _link
