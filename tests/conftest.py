"""Shared fixtures: in-memory database, API client, profiles and listings."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.enums import PropertyStatus, Role
from app.models.profile import Profile
from app.models.property import Property
from app.services.storage import ObjectStorage, get_storage
from tests.helpers import make_profile, make_property


@pytest.fixture
def test_db():
    """Create an in-memory test database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def storage(tmp_path):
    """Object storage rooted in a temporary directory."""
    return ObjectStorage(tmp_path, "property-images")


@pytest.fixture
def client(test_db, storage):
    """Create a test client with database and storage overrides."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def agent(test_db) -> Profile:
    return make_profile(test_db, "agent@example.com", Role.AGENT, "Amina Agent", "+254700000001")


@pytest.fixture
def other_agent(test_db) -> Profile:
    return make_profile(test_db, "other.agent@example.com", Role.AGENT, "Otto Agent", "0711222333")


@pytest.fixture
def seeker(test_db) -> Profile:
    return make_profile(test_db, "seeker@example.com", Role.SEEKER, "Sam Seeker", "+254799999999")


@pytest.fixture
def other_seeker(test_db) -> Profile:
    return make_profile(test_db, "other.seeker@example.com", Role.SEEKER, "Sue Seeker")


@pytest.fixture
def draft_property(test_db, agent) -> Property:
    return make_property(test_db, agent, title="Draft listing")


@pytest.fixture
def published_property(test_db, agent) -> Property:
    return make_property(
        test_db,
        agent,
        title="Published listing",
        status=PropertyStatus.PUBLISHED,
    )
