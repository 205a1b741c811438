import uuid
from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call


def test_signup_login_me_and_logout(client: TestClient):
    email = f"Learner-{uuid.uuid4().hex}@Test.com"
    created = api_call(client, "POST", "/auth/signup", json={
        "email": email,
        "password": "correct-horse",
        "full_name": "Ada Learner",
    }).json()["data"]
    assert created["email"] == email.lower()
    assert created["role"] == "user"

    response = client.post("/auth/signup", json={"email": email, "password": "correct-horse", "full_name": "Again"})
    assert response.status_code == 409

    token = api_call(client, "POST", "/auth/login", json={"email": email, "password": "correct-horse"}).json()["data"]["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    me = api_call(client, "GET", "/account/me", headers=headers).json()["data"]
    assert me["id"] == created["id"]

    unread = api_call(client, "GET", "/notifications/unread-count", headers=headers).json()["data"]
    assert unread == 1

    api_call(client, "POST", "/auth/logout", headers=headers)
    response = client.get("/account/me", headers=headers)
    assert response.status_code == 401


def test_login_with_wrong_password(client: TestClient, learner):
    response = client.post("/auth/login", json={"email": learner.email, "password": "wrong-password"})
    assert response.status_code == 401


def test_signup_validation(client: TestClient):
    response = client.post("/auth/signup", json={"email": "short@test.com", "password": "short", "full_name": "Shorty"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_inactive_user_is_forbidden(client: TestClient, user_factory, auth_headers):
    headers = auth_headers(user_factory(is_active=False))
    response = client.get("/account/me", headers=headers)
    assert response.status_code == 403
