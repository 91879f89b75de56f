"""
Pytest configuration and fixtures shared by all FamilyFolio tests.

Family layout used throughout:
- family "fam-rossi": u1 (Anna), u2 (Marco), u3 (Giulia, inactive)
- family "fam-bianchi": x1 (Luca)
"""
import pytest
import pytest_asyncio

# Setup test environment BEFORE importing app modules
from backend.test_scripts.test_db_config import TEST_PASSWORD, setup_test_database, create_test_engine

setup_test_database()

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import Family, User
from backend.app.db.session import get_session_generator
from backend.app.services import auth_service
from backend.app.services.auth_service import RequestingIdentity, hash_password

FAMILY_ID = "fam-rossi"
OTHER_FAMILY_ID = "fam-bianchi"

# bcrypt is slow on purpose: hash once per test run
_HASHED_PASSWORD = hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = await create_test_engine()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """Session bound to the per-test database."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def families(engine):
    """Seed both families and their members."""
    async with AsyncSession(engine, expire_on_commit=False) as seed:
        seed.add_all([
            Family(id=FAMILY_ID, name="Rossi"),
            Family(id=OTHER_FAMILY_ID, name="Bianchi"),
            ])
        await seed.flush()
        seed.add_all([
            User(id="u1", family_id=FAMILY_ID, name="Anna", email="anna@rossi.test", hashed_password=_HASHED_PASSWORD),
            User(id="u2", family_id=FAMILY_ID, name="Marco", email="marco@rossi.test", hashed_password=_HASHED_PASSWORD),
            User(id="u3", family_id=FAMILY_ID, name="Giulia", email="giulia@rossi.test",
                 hashed_password=_HASHED_PASSWORD, is_active=False),
            User(id="x1", family_id=OTHER_FAMILY_ID, name="Luca", email="luca@bianchi.test",
                 hashed_password=_HASHED_PASSWORD),
            ])
        await seed.commit()
    return {"family_id": FAMILY_ID, "other_family_id": OTHER_FAMILY_ID}


@pytest.fixture
def identity(families) -> RequestingIdentity:
    """Anna, acting for the Rossi family."""
    return RequestingIdentity(user_id="u1", family_id=FAMILY_ID)


@pytest.fixture
def other_identity(families) -> RequestingIdentity:
    """Luca, acting for the Bianchi family."""
    return RequestingIdentity(user_id="x1", family_id=OTHER_FAMILY_ID)


@pytest_asyncio.fixture
async def client(engine):
    """HTTP client against the FastAPI app, with the session dependency bound to the test database."""
    from backend.app.main import app

    async def override_session():
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session_generator] = override_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
    auth_service._sessions.clear()


@pytest.fixture
def login_as():
    """Attach a valid session cookie for the given user id to a client."""

    def _login(client: httpx.AsyncClient, user_id: str) -> str:
        session_id = auth_service.create_session(user_id)
        client.cookies.set("session", session_id)
        return session_id

    return _login
