import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from salon_booking import models  # noqa: F401
from salon_booking.auth import ensure_admin
from salon_booking.db import get_session
from salon_booking.main import app


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="admin_client")
def admin_client_fixture(client, session):
    ensure_admin(session, "admin", "secret123")
    res = client.post("/auth/login", data={"username": "admin", "password": "secret123"})
    assert res.status_code == 200
    client.headers["Authorization"] = f"Bearer {res.json()['access_token']}"
    return client
