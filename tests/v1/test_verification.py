"""Tests for admin verification endpoints."""

from fastapi import status

from gridrr.models import User


def test_non_admin_is_forbidden(client, auth_headers) -> None:
    response = client.get("/api/v1/verification/requests", headers=auth_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_anonymous_is_rejected(client) -> None:
    response = client.post("/api/v1/verification/sweep")
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_request_review_flow(client, db_session, make_user, admin_headers) -> None:
    pending = make_user(verification_requested=True)
    declined = make_user(verification_requested=True)

    listed = client.get("/api/v1/verification/requests", headers=admin_headers)
    approve = client.post(f"/api/v1/verification/approve/{pending.id}", headers=admin_headers)
    reject = client.post(f"/api/v1/verification/reject/{declined.id}", headers=admin_headers)

    assert [u["id"] for u in listed.json()] == [pending.id, declined.id]
    assert approve.json() == {"success": True}
    assert reject.json() == {"success": True}
    db_session.expire_all()
    assert db_session.get(User, pending.id).verified is True
    assert db_session.get(User, declined.id).verification_requested is False


def test_verify_and_unverify(client, db_session, user, admin_headers) -> None:
    client.post(f"/api/v1/verification/verify/{user.id}", headers=admin_headers)
    db_session.expire_all()
    assert db_session.get(User, user.id).verified is True

    client.post(f"/api/v1/verification/unverify/{user.id}", headers=admin_headers)
    db_session.expire_all()
    assert db_session.get(User, user.id).verified is False


def test_unknown_user(client, admin_headers) -> None:
    response = client.post("/api/v1/verification/approve/55555", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_sweep_with_no_candidates(client, admin_headers) -> None:
    response = client.post("/api/v1/verification/sweep", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"flagged": []}
