# tests/conftest.py
import mongomock
import pytest
from fastapi.testclient import TestClient

from meditrack.database import CAMPS, USERS, get_db
from meditrack.main import app
from meditrack.utils.tokenJWT import create_access_token

ADMIN_EMAIL = "admin@meditrack.io"
USER_EMAIL = "alice@meditrack.io"
OTHER_EMAIL = "bob@meditrack.io"


def auth_headers(email: str) -> dict:
    token = create_access_token({"sub": email, "email": email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db():
    return mongomock.MongoClient()["meditrack_test"]


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(db):
    db[USERS].insert_one({"email": ADMIN_EMAIL, "name": "Admin", "role": "admin"})
    return auth_headers(ADMIN_EMAIL)


@pytest.fixture
def user_headers(db):
    db[USERS].insert_one({"email": USER_EMAIL, "name": "Alice", "role": "user"})
    return auth_headers(USER_EMAIL)


@pytest.fixture
def camp_id(db):
    result = db[CAMPS].insert_one({
        "campName": "Heart Health Checkup",
        "location": "Dhaka",
        "healthcareProfessional": "Dr. Rahman",
        "campFees": 25.0,
        "participantCount": 0,
        "organizerEmail": ADMIN_EMAIL,
    })
    return str(result.inserted_id)
