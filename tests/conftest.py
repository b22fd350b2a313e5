"""
Shared pytest fixtures for Warehouse API tests.

Provides:
- Isolated file-backed SQLite database per test
- FastAPI TestClient with dependency overrides (DB, session verifier, rate limiter)
- Account fixtures (admin, warehouse, customer) with session tokens
- API key fixtures (courier, warehouse)
"""

from datetime import timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from warehouse_api.database import Base, get_db
from warehouse_api.dependencies import get_session_verifier
from warehouse_api.main import app
from warehouse_api.middleware.rate_limit import MemoryRateLimiterStore, RateLimiter, get_rate_limiter
from warehouse_api.models import APIKey, KeyPurpose, User
from warehouse_api.models.user import ROLE_ADMIN, ROLE_CUSTOMER, ROLE_WAREHOUSE
from warehouse_api.services.session import SessionVerifier

from tests.fixtures.factories import FakeClock, create_api_key, create_user

TEST_JWT_SECRET = "test-secret-do-not-use"


# ============================================
# Database Fixtures
# ============================================


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """
    Create an isolated SQLite database engine for each test.

    Uses a file-based database in tmp_path to avoid connection isolation
    issues with in-memory SQLite.
    """
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    return engine


@pytest.fixture(scope="function")
def test_db(test_engine) -> Generator[Session, None, None]:
    """
    Create database tables and provide a session.

    Tables are created before and dropped after.
    """
    from warehouse_api.models import access_log, api_key, user  # noqa: F401

    Base.metadata.create_all(bind=test_engine)

    TestingSessionLocal = sessionmaker(bind=test_engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


# ============================================
# Service Fixtures
# ============================================


@pytest.fixture
def session_verifier() -> SessionVerifier:
    return SessionVerifier(TEST_JWT_SECRET, lifetime=timedelta(hours=1))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    """Fresh in-memory limiter with default tiers and a fake clock"""
    return RateLimiter(MemoryRateLimiterStore(clock=clock))


@pytest.fixture(scope="function")
def client(
    test_db: Session, session_verifier: SessionVerifier, rate_limiter: RateLimiter
) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient with dependencies overridden.

    Uses the test_db session, the test session verifier and a per-test
    rate limiter instead of the ones built at startup.
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_verifier] = lambda: session_verifier
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================
# Account Fixtures
# ============================================


@pytest.fixture
def admin_user(test_db: Session) -> User:
    return create_user(test_db, role=ROLE_ADMIN, email="admin@example.com", user_code="ADM-001")


@pytest.fixture
def warehouse_user(test_db: Session) -> User:
    return create_user(test_db, role=ROLE_WAREHOUSE, email="floor@example.com", user_code="WH-001")


@pytest.fixture
def customer_user(test_db: Session) -> User:
    return create_user(test_db, role=ROLE_CUSTOMER, email="customer@example.com", user_code="CLEAN-0001")


def _bearer(verifier: SessionVerifier, user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {verifier.issue(user.id, user.role, user.user_code)}"}


@pytest.fixture
def admin_headers(session_verifier: SessionVerifier, admin_user: User) -> dict[str, str]:
    """
    HTTP headers with an admin session token.

    Usage:
        def test_endpoint(client, admin_headers):
            response = client.get("/api/admin/api-keys", headers=admin_headers)
    """
    return _bearer(session_verifier, admin_user)


@pytest.fixture
def warehouse_headers(session_verifier: SessionVerifier, warehouse_user: User) -> dict[str, str]:
    return _bearer(session_verifier, warehouse_user)


@pytest.fixture
def customer_headers(session_verifier: SessionVerifier, customer_user: User) -> dict[str, str]:
    return _bearer(session_verifier, customer_user)


# ============================================
# API Key Fixtures
# ============================================


@pytest.fixture
def courier_key(test_db: Session, admin_user: User) -> tuple[APIKey, str]:
    """
    Active courier key for CLEAN.

    Returns:
        Tuple of (APIKey model, plaintext key string)
    """
    return create_api_key(test_db, created_by=admin_user)


@pytest.fixture
def warehouse_key(test_db: Session, admin_user: User) -> tuple[APIKey, str]:
    return create_api_key(test_db, created_by=admin_user, purpose=KeyPurpose.WAREHOUSE)
