from pymongo.errors import PyMongoError

from meditrack.database import FEEDBACK, get_db
from meditrack.main import app
from tests.conftest import USER_EMAIL


def test_submit_and_list_feedback(client, db, user_headers):
    resp = client.post(
        "/feedback",
        json={"name": "Alice", "campName": "Heart Health Checkup", "rating": 4, "content": "Helpful doctors"},
        headers=user_headers,
    )
    assert resp.status_code == 200
    stored = db[FEEDBACK].find_one()
    assert stored["email"] == USER_EMAIL
    assert stored["createdAt"] is not None

    listed = client.get("/feedback").json()
    assert len(listed) == 1
    assert listed[0]["content"] == "Helpful doctors"


def test_feedback_requires_login(client):
    resp = client.post("/feedback", json={"content": "anonymous"})
    assert resp.status_code == 401


def test_feedback_requires_content(client, user_headers):
    resp = client.post("/feedback", json={"rating": 3}, headers=user_headers)
    assert resp.status_code == 400


def test_root(client):
    assert client.get("/").json() == {"message": "MediTrack server is running"}


class _FailingCollection:
    def find(self, *args, **kwargs):
        raise PyMongoError("connection refused by mongo-0.internal:27017")


class _FailingDatabase:
    def __getitem__(self, name):
        return _FailingCollection()


def test_database_failure_is_opaque(client):
    app.dependency_overrides[get_db] = lambda: _FailingDatabase()
    resp = client.get("/feedback")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
    assert "mongo-0" not in resp.text
