"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Must be set before any application module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from market_api.main import app
from market_api.models import Base, Member, Product
from shared.infrastructure.db import build_engine, get_db
from shared.security.auth import MemberContext, generate_access_token
from shared.security.password import hash_password


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = build_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def create_member(
    db_session,
    *,
    email: str,
    password: str,
    name: str = "Test Member",
    phone_number: str | None = None,
    role: str = "CUSTOMER",
) -> Member:
    """Insert a local member directly, bypassing the service."""
    hashed = hash_password(password)
    member = Member(
        email=email,
        name=name,
        phone_number=phone_number,
        password=hashed,
        pw_history=[hashed],
        role=role,
    )
    db_session.add(member)
    db_session.commit()
    db_session.refresh(member)
    return member


@pytest.fixture
def seed_member(db_session):
    """A local CUSTOMER member with a known password."""
    return create_member(
        db_session,
        email="member@test.com",
        password="member123",
        name="Kim Member",
        phone_number="010-1111-1111",
    )


@pytest.fixture
def seed_business_member(db_session):
    """A local BUSINESS member, used as 'someone else'."""
    return create_member(
        db_session,
        email="seller@test.com",
        password="seller123",
        name="Lee Seller",
        phone_number="010-2222-2222",
        role="BUSINESS",
    )


@pytest.fixture
def member_context(seed_member):
    return MemberContext(member_id=seed_member.id, email=seed_member.email)


@pytest.fixture
def business_context(seed_business_member):
    return MemberContext(
        member_id=seed_business_member.id,
        email=seed_business_member.email,
    )


@pytest.fixture
def auth_headers(client, seed_member):
    """Get authentication headers for API calls."""
    response = client.post(
        "/api/auth/login",
        json={"email": "member@test.com", "password": "member123"},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def business_auth_headers(seed_business_member):
    """Headers for the BUSINESS member, issued directly."""
    token = generate_access_token(seed_business_member.id, seed_business_member.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_product(db_session, seed_business_member):
    """A product owned by the BUSINESS member."""
    product = Product(
        member_id=seed_business_member.id,
        name="Desk Lamp",
        description="Warm white LED lamp",
        price=25000,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product
