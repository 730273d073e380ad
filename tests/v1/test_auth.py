"""Tests for authentication endpoints."""

from fastapi import status

from gridrr.core.security import create_refresh_token, decode_token
from gridrr.core.settings import settings

SIGNUP = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "password": "engine-no-2",
    "accepted_terms": True,
}


def test_signup_returns_token_and_refresh_cookie(client) -> None:
    response = client.post("/api/v1/auth/signup", json=SIGNUP)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["verified"] is False
    assert decode_token(body["access_token"]) == body["user"]["id"]
    assert settings.refresh_cookie_name in response.cookies


def test_signup_duplicate_email(client) -> None:
    assert client.post("/api/v1/auth/signup", json=SIGNUP).status_code == 201

    response = client.post("/api/v1/auth/signup", json={**SIGNUP, "email": "ADA@example.com"})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"detail": "User already exists"}


def test_signup_missing_fields(client) -> None:
    response = client.post("/api/v1/auth/signup", json={"email": "x@example.com"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "All fields are required"


def test_login(client) -> None:
    client.post("/api/v1/auth/signup", json=SIGNUP)

    ok = client.post(
        "/api/v1/auth/login",
        json={"email": SIGNUP["email"], "password": SIGNUP["password"]},
    )
    wrong = client.post(
        "/api/v1/auth/login",
        json={"email": SIGNUP["email"], "password": "nope"},
    )
    unknown = client.post(
        "/api/v1/auth/login",
        json={"email": "ghost@example.com", "password": "nope"},
    )

    assert ok.status_code == status.HTTP_200_OK
    assert ok.json()["message"] == "Login successful"
    assert wrong.status_code == status.HTTP_401_UNAUTHORIZED
    assert unknown.status_code == status.HTTP_404_NOT_FOUND


def test_refresh_issues_new_access_token(client, user) -> None:
    client.cookies.set(settings.refresh_cookie_name, create_refresh_token(user.id))

    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == status.HTTP_200_OK
    assert decode_token(response.json()["access_token"]) == user.id


def test_refresh_rejects_access_token(client, auth_headers) -> None:
    access_token = auth_headers["Authorization"].split()[1]
    client.cookies.set(settings.refresh_cookie_name, access_token)

    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_refresh_without_cookie(client) -> None:
    assert client.post("/api/v1/auth/refresh").status_code == status.HTTP_401_UNAUTHORIZED


def test_me_requires_token(client) -> None:
    response = client.get("/api/v1/auth/me")
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_me_rejects_garbage_token(client) -> None:
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_and_update(client, user, auth_headers) -> None:
    me = client.get("/api/v1/auth/me", headers=auth_headers)
    assert me.status_code == status.HTTP_200_OK
    assert me.json()["id"] == user.id

    updated = client.put(
        "/api/v1/auth/me",
        json={"first_name": "Augusta"},
        headers=auth_headers,
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["first_name"] == "Augusta"


def test_change_password(client, user, auth_headers, user_password) -> None:
    wrong = client.post(
        "/api/v1/auth/change-password",
        json={"current_password": "nope", "new_password": "fresh-secret"},
        headers=auth_headers,
    )
    assert wrong.status_code == status.HTTP_401_UNAUTHORIZED

    ok = client.post(
        "/api/v1/auth/change-password",
        json={"current_password": user_password, "new_password": "fresh-secret"},
        headers=auth_headers,
    )
    assert ok.status_code == status.HTTP_200_OK

    login = client.post(
        "/api/v1/auth/login",
        json={"email": user.email, "password": "fresh-secret"},
    )
    assert login.status_code == status.HTTP_200_OK


def test_logout_clears_cookie(client) -> None:
    response = client.post("/api/v1/auth/logout")

    assert response.status_code == status.HTTP_200_OK
    assert settings.refresh_cookie_name in response.headers.get("set-cookie", "")
