from bson import ObjectId

from meditrack.database import CAMPS, REGISTRATIONS
from tests.conftest import OTHER_EMAIL, USER_EMAIL, auth_headers


def _registration(camp_id, email=USER_EMAIL, **extra):
    return {
        "campId": camp_id,
        "campName": "Heart Health Checkup",
        "campFees": 25.0,
        "location": "Dhaka",
        "participantName": "Alice",
        "participantEmail": email,
        "age": 34,
        "phone": "01700000000",
        "gender": "female",
        "emergencyContact": "01800000000",
        **extra,
    }


def _insert(db, email=USER_EMAIL, **fields):
    doc = {"campId": str(ObjectId()), "participantEmail": email, "paymentStatus": "Unpaid", "status": "Pending"}
    doc.update(fields)
    return str(db[REGISTRATIONS].insert_one(doc).inserted_id)


def test_register_for_self(client, db, camp_id, user_headers):
    resp = client.post("/register-camp", json=_registration(camp_id), headers=user_headers)
    assert resp.status_code == 200
    doc = db[REGISTRATIONS].find_one({"_id": ObjectId(resp.json()["insertedId"])})
    assert doc["paymentStatus"] == "Unpaid"
    assert doc["status"] == "Pending"
    assert doc["participantEmail"] == USER_EMAIL


def test_register_someone_else_is_forbidden(client, db, camp_id, user_headers):
    resp = client.post("/register-camp", json=_registration(camp_id, email=OTHER_EMAIL), headers=user_headers)
    assert resp.status_code == 403
    assert db[REGISTRATIONS].count_documents({}) == 0


def test_register_with_malformed_camp_id(client, user_headers):
    resp = client.post("/register-camp", json=_registration("nope"), headers=user_headers)
    assert resp.status_code == 400


def test_registration_leaves_counter_alone(client, db, camp_id, user_headers):
    client.post("/register-camp", json=_registration(camp_id), headers=user_headers)
    assert db[CAMPS].find_one({"_id": ObjectId(camp_id)})["participantCount"] == 0


def test_list_own_registrations(client, db, user_headers):
    _insert(db)
    _insert(db)
    _insert(db, email=OTHER_EMAIL)
    resp = client.get(f"/registered-camps/{USER_EMAIL}", headers=user_headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_list_other_registrations_is_forbidden(client, user_headers):
    resp = client.get(f"/registered-camps/{OTHER_EMAIL}", headers=user_headers)
    assert resp.status_code == 403


def test_delete_registration_without_ownership_check(client, db):
    reg_id = _insert(db, email=OTHER_EMAIL)
    resp = client.delete(f"/delete-registered-camp/{reg_id}", headers=auth_headers(USER_EMAIL))
    assert resp.status_code == 200
    assert resp.json()["deletedCount"] == 1
    resp = client.delete(f"/delete-registered-camp/{reg_id}", headers=auth_headers(USER_EMAIL))
    assert resp.status_code == 404


def test_mark_paid(client, db, user_headers):
    reg_id = _insert(db)
    resp = client.patch(f"/update-payment/{reg_id}", json={"paymentId": "pi_123"}, headers=user_headers)
    assert resp.status_code == 200
    doc = db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})
    assert doc["paymentStatus"] == "Paid"
    assert doc["paymentId"] == "pi_123"
    assert doc["paymentTime"] is not None


def test_mark_paid_again_with_new_reference(client, db, user_headers):
    reg_id = _insert(db)
    client.patch(f"/update-payment/{reg_id}", json={"paymentId": "pi_123"}, headers=user_headers)
    resp = client.patch(f"/update-payment/{reg_id}", json={"paymentId": "pi_456"}, headers=user_headers)
    assert resp.status_code == 200
    doc = db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})
    assert doc["paymentStatus"] == "Paid"
    assert doc["paymentId"] == "pi_456"


def test_mark_paid_requires_reference(client, db, user_headers):
    reg_id = _insert(db)
    assert client.patch(f"/update-payment/{reg_id}", json={}, headers=user_headers).status_code == 400
    assert client.patch(f"/update-payment/{reg_id}", json={"paymentId": "  "}, headers=user_headers).status_code == 400
    assert db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})["paymentStatus"] == "Unpaid"


def test_mark_paid_bad_or_missing_id(client, user_headers):
    assert client.patch("/update-payment/xyz", json={"paymentId": "pi_1"}, headers=user_headers).status_code == 400
    resp = client.patch(f"/update-payment/{ObjectId()}", json={"paymentId": "pi_1"}, headers=user_headers)
    assert resp.status_code == 404


def test_feedback_is_set_once(client, db, user_headers):
    reg_id = _insert(db)
    resp = client.patch(f"/update-feedback/{reg_id}", json={"feedback": "Great camp", "rating": 5}, headers=user_headers)
    assert resp.status_code == 200
    doc = db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})
    assert doc["feedback"] == "Great camp"
    assert doc["rating"] == 5

    resp = client.patch(f"/update-feedback/{reg_id}", json={"feedback": "Changed my mind"}, headers=user_headers)
    assert resp.status_code == 400
    assert db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})["feedback"] == "Great camp"


def test_feedback_on_missing_registration(client, user_headers):
    resp = client.patch(f"/update-feedback/{ObjectId()}", json={"feedback": "hello"}, headers=user_headers)
    assert resp.status_code == 404


def test_admin_updates_status(client, db, admin_headers):
    reg_id = _insert(db)
    resp = client.patch(f"/update-registration-status/{reg_id}", json={"status": "Confirmed"}, headers=admin_headers)
    assert resp.status_code == 200
    assert db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})["status"] == "Confirmed"


def test_user_cannot_update_status(client, db, user_headers):
    reg_id = _insert(db)
    resp = client.patch(f"/update-registration-status/{reg_id}", json={"status": "Confirmed"}, headers=user_headers)
    assert resp.status_code == 403
    assert db[REGISTRATIONS].find_one({"_id": ObjectId(reg_id)})["status"] == "Pending"


def test_all_registrations_admin_only(client, db, admin_headers, user_headers):
    _insert(db)
    _insert(db, email=OTHER_EMAIL)
    assert client.get("/registrations", headers=user_headers).status_code == 403
    resp = client.get("/registrations", headers=admin_headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_manage_registrations_page(client, db, admin_headers):
    for i in range(7):
        _insert(db, campName=f"Dental Camp {i}" if i < 4 else f"Eye Camp {i}", participantName="Alice")
    body = client.get("/admin/manage-registrations", params={"limit": 3, "page": 2}, headers=admin_headers).json()
    assert body["totalRegistrations"] == 7
    assert body["totalPages"] == 3
    assert body["currentPage"] == 2
    assert len(body["registrations"]) == 3

    body = client.get("/admin/manage-registrations", params={"search": "dental"}, headers=admin_headers).json()
    assert body["totalRegistrations"] == 4
