"""Pytest fixtures for the catalog admin.

Provides reusable test fixtures for:
- Database session on an in-memory SQLite database
- Two test organizations
- Test users with different role sets (super_admin, organization_admin,
  both, none)
- Authenticated test clients with JWT tokens
- A product factory

Usage:
    def test_list_products(org_admin_client, make_product, acme_org):
        make_product(acme_org)
        response = org_admin_client.get("/api/v1/products")
        assert response.status_code == 200
"""

import sys
import os
from datetime import date
from decimal import Decimal
from pathlib import Path

# Set environment variables BEFORE any imports to ensure they take effect
# Set very high rate limits for testing (effectively disable rate limiting)
os.environ.setdefault("RATE_LIMIT_MAX_ATTEMPTS", "10000")
os.environ.setdefault("RATE_LIMIT_WINDOW", "1")
os.environ.setdefault("LOCKOUT_THRESHOLD", "10000")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper-secret-key-32-chars-long")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-key-256-bits-minimum-length-required-for-security")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from typing import Callable, Generator, Iterable

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from auth.jwt import create_access_token
from auth.password import hash_password
from auth.rate_limit import rate_limiter
from auth.roles import UserRole
from catalog.access import AccessScope
from database import build_engine, get_db as database_get_db
from dependencies import get_access_scope
from models import Base, Organization, Product, Role, User


# Separate in-memory database per test run; StaticPool keeps one connection
test_engine = build_engine("sqlite://")

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function", autouse=True)
def disable_rate_limiter(monkeypatch):
    """Run login tests without Redis backed rate limiting."""
    monkeypatch.setattr(rate_limiter, "redis", None)
    yield


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test.

    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def roles(db_session: Session) -> dict:
    """Create the built-in roles, keyed by label."""
    created = {role.value: Role(name=role.value) for role in UserRole}
    db_session.add_all(created.values())
    db_session.commit()
    return created


@pytest.fixture(scope="function")
def acme_org(db_session: Session) -> Organization:
    org = Organization(name="Acme Trading")
    db_session.add(org)
    db_session.commit()
    db_session.refresh(org)
    return org


@pytest.fixture(scope="function")
def globex_org(db_session: Session) -> Organization:
    org = Organization(name="Globex Supplies")
    db_session.add(org)
    db_session.commit()
    db_session.refresh(org)
    return org


@pytest.fixture(scope="function")
def make_user(db_session: Session, roles: dict) -> Callable[..., User]:
    """Factory creating an ACTIVE user with the given role labels."""

    def _make_user(
        email: str,
        organization: Organization = None,
        role_names: Iterable[str] = (),
        password: str = "SecureP@ss123",
        status: str = "ACTIVE",
    ) -> User:
        user = User(
            organization_id=organization.id if organization else None,
            email=email,
            name=email.split("@")[0].title(),
            password_hash=hash_password(password),
            status=status,
        )
        for role_name in role_names:
            user.roles.append(roles.get(role_name) or Role(name=role_name))

        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture(scope="function")
def super_admin_user(make_user) -> User:
    """super_admin without an organization."""
    return make_user("root@example.com", role_names=[UserRole.SUPER_ADMIN.value])


@pytest.fixture(scope="function")
def org_admin_user(make_user, acme_org: Organization) -> User:
    return make_user("admin@acme.com", acme_org, role_names=[UserRole.ORGANIZATION_ADMIN.value])


@pytest.fixture(scope="function")
def globex_admin_user(make_user, globex_org: Organization) -> User:
    return make_user("admin@globex.com", globex_org, role_names=[UserRole.ORGANIZATION_ADMIN.value])


@pytest.fixture(scope="function")
def roleless_user(make_user, acme_org: Organization) -> User:
    return make_user("clerk@acme.com", acme_org)


@pytest.fixture(scope="function")
def make_product(db_session: Session) -> Callable[..., Product]:
    """Factory creating a persisted product in the given organization."""

    def _make_product(organization: Organization, **overrides) -> Product:
        values = {
            "name": "Kopi Arabica 250g",
            "description": "Single origin arabica beans",
            "image": "products/kopi-arabica.png",
            "price": Decimal("85000.00"),
            "available_date": date(2024, 1, 15),
            "stock": 40,
        }
        values.update(overrides)
        product = Product(organization_id=organization.id, **values)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make_product


def auth_headers(user: User) -> dict:
    """Authorization header carrying a fresh token for `user`."""
    token = create_access_token(
        user_id=user.id,
        organization_id=user.organization_id,
        roles=user.role_names,
        email=user.email
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create an unauthenticated test client bound to the test session."""
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


def _client_for(client: TestClient, user: User) -> TestClient:
    client.headers.update(auth_headers(user))
    return client


@pytest.fixture(scope="function")
def super_admin_client(client: TestClient, super_admin_user: User) -> TestClient:
    return _client_for(client, super_admin_user)


@pytest.fixture(scope="function")
def org_admin_client(client: TestClient, org_admin_user: User) -> TestClient:
    return _client_for(client, org_admin_user)


@pytest.fixture(scope="function")
def roleless_client(client: TestClient, roleless_user: User) -> TestClient:
    return _client_for(client, roleless_user)


@pytest.fixture(scope="function")
def strict_list_scoping(client: TestClient):
    """Serve requests with STRICT_LIST_SCOPING turned on."""
    from main import app

    app.dependency_overrides[get_access_scope] = lambda: AccessScope(strict_list_scoping=True)
    yield


@pytest.fixture(scope="function")
def headers_for() -> Callable[[User], dict]:
    return auth_headers
