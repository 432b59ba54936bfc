"""API tests: users endpoints."""
import pytest

pytestmark = pytest.mark.api

USER = {
    "email": "api-user@example.com",
    "first_name": "Katherine",
    "last_name": "Johnson",
    "phone_numbers": ["555-0123"],
}


def test_register_and_get_user(client):
    """POST /api/users returns 201; GET returns the profile."""
    r = client.post("/api/users", json=USER)
    assert r.status_code == 201
    assert r.json() == USER
    r = client.get(f"/api/users/{USER['email']}")
    assert r.status_code == 200
    assert r.json()["last_name"] == "Johnson"


def test_register_duplicate_user_conflict(client):
    """Registering the same email twice returns 409."""
    assert client.post("/api/users", json=USER).status_code == 201
    r = client.post("/api/users", json=USER)
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"


def test_register_user_missing_name(client):
    """Missing first_name returns 400 naming the field."""
    body = {k: v for k, v in USER.items() if k != "first_name"}
    r = client.post("/api/users", json=body)
    assert r.status_code == 400
    assert r.json()["field"] == "first_name"


def test_get_user_not_found(client):
    """GET /api/users/{email} returns 404 for unknown email."""
    r = client.get("/api/users/nobody@example.com")
    assert r.status_code == 404


def test_delete_user(client, make_user):
    """DELETE /api/users/{email} returns 204; user is gone."""
    user = make_user()
    r = client.delete(f"/api/users/{user.email}")
    assert r.status_code == 204
    assert client.get(f"/api/users/{user.email}").status_code == 404


def test_delete_user_with_active_ride_conflict(client, make_user, make_vehicle):
    """A user with an active ride cannot be deleted."""
    user = make_user()
    vehicle = make_vehicle()
    r = client.post(
        "/api/rides/start",
        json={"vehicleId": vehicle.id, "userId": user.email, "longitude": 2.35, "latitude": 48.85},
    )
    assert r.status_code == 200
    r = client.delete(f"/api/users/{user.email}")
    assert r.status_code == 409


def test_register_user_lost_race_conflict(client, db_session, make_user, monkeypatch):
    """An email registered between the existence check and the insert returns 409, not 500."""
    existing = make_user()
    email = existing.email
    db_session.expunge_all()
    # Existence check misses the row, as when another request inserts it concurrently.
    monkeypatch.setattr("api.users.repo_get_user", lambda db, email: None)
    r = client.post("/api/users", json={**USER, "email": email})
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"
