import pytest
from fastapi.testclient import TestClient

from helpportal.main import create_app
from helpportal.shared.database import init_db, make_engine, make_session_factory


@pytest.fixture
def SessionLocal():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(SessionLocal):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(SessionLocal):
    with TestClient(create_app(SessionLocal)) as c:
        yield c


@pytest.fixture
def register(client):
    def _register(name, contact, role, location="Maple St"):
        r = client.post(
            "/users/register",
            json={"name": name, "contact_info": contact, "location": location, "role": role},
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _register


@pytest.fixture
def alice(register):
    return register("Alice", "alice@example.com", "Resident")


@pytest.fixture
def bob(register):
    return register("Bob", "bob@example.com", "Helper")


@pytest.fixture
def carol(register):
    return register("Carol", "555-0100", "Helper")


@pytest.fixture
def couch_request(client, alice):
    r = client.post(
        "/requests",
        json={
            "resident_id": alice["id"],
            "title": "Move couch",
            "description": "Second floor to the curb",
            "category": "Home Repair",
        },
    )
    assert r.status_code == 201, r.text
    return r.json()
