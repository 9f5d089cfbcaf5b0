import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_authz.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing")

import pytest
import pytest_asyncio
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from authz.database import get_db
from authz.config import settings
# Import all model classes to ensure they're registered with SQLAlchemy
from authz.models import Base
from authz.domain.records import Resource, Role, TenantNode
from authz.repositories.in_memory_store import InMemoryTenantStore
from authz.repositories.sqlalchemy_store import SqlAlchemyTenantStore
from authz.services.authorization_service import AuthorizationService
from authz.services.tenant_builder import TenantBuilder
# Import FastAPI app AFTER model imports
from authz.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def restaurant_tree() -> TenantNode:
    """saas -> chain -> branch"""
    return TenantNode(
        "saas",
        "Restaurant SaaS Platform",
        children=[
            TenantNode(
                "chain",
                "Restaurant Chain HQ",
                children=[TenantNode("branch", "Downtown Branch")],
            )
        ],
    )


SERVER_ROLE = Role(id="server", name="Server", permissions=["take-orders", "serve-food"])
PLATFORM_ADMIN_ROLE = Role(
    id="platform-admin",
    name="Platform Administrator",
    permissions=["platform-admin", "manage-all-tenants"],
)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request):
    """Every contract-level test runs against both store implementations"""
    if request.param == "memory":
        yield InMemoryTenantStore()
        return
    yield SqlAlchemyTenantStore(request.getfixturevalue("db_session"))


@pytest.fixture
def builder(store):
    return TenantBuilder(store)


@pytest.fixture
def service(store):
    return AuthorizationService(store)


@pytest_asyncio.fixture
async def restaurant(builder):
    """Restaurant tenant forest with the server role and a tablet owned by the chain"""
    await builder.create_tenant_tree(restaurant_tree())
    await builder.add_role(SERVER_ROLE)
    await builder.add_role(PLATFORM_ADMIN_ROLE)
    await builder.add_resource(Resource(id="tablet", type="device"), tenant_id="chain")
    return builder


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(caller_id: str = "ops-console", expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        caller_id: Caller ID to embed in 'sub' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": caller_id, "exp": exp, "iat": datetime.now(UTC)}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


@pytest.fixture
def auth_headers():
    """Authorization headers for authenticated requests"""
    return {"Authorization": f"Bearer {create_test_token()}"}
