"""Tests for profile and follow endpoints."""

from fastapi import status


def test_profile_upsert_and_read(client, user, auth_headers) -> None:
    blank = client.get("/api/v1/profiles/me", headers=auth_headers)
    assert blank.status_code == status.HTTP_200_OK
    assert blank.json()["user_id"] == user.id
    assert blank.json()["display_name"] is None
    assert client.get(f"/api/v1/profiles/{user.id}").status_code == status.HTTP_404_NOT_FOUND

    created = client.post(
        "/api/v1/profiles/me",
        json={"display_name": "Ada", "expertise": "Engines"},
        headers=auth_headers,
    )
    updated = client.post(
        "/api/v1/profiles/me",
        json={"bio": "First programmer"},
        headers=auth_headers,
    )

    assert created.status_code == status.HTTP_200_OK
    body = updated.json()
    assert body["user_id"] == user.id
    assert body["display_name"] == "Ada"
    assert body["bio"] == "First programmer"
    assert body["follower_count"] == 0


def test_public_profile_shows_follow_state(client, user, other_user, headers_for) -> None:
    client.post("/api/v1/profiles/me", json={"display_name": "Ada"}, headers=headers_for(user))
    follow = client.post(f"/api/v1/profiles/{user.id}/follow", headers=headers_for(other_user))

    as_follower = client.get(f"/api/v1/profiles/{user.id}", headers=headers_for(other_user))
    anonymous = client.get(f"/api/v1/profiles/{user.id}")

    assert follow.json() == {"following": True}
    assert as_follower.json()["is_following"] is True
    assert as_follower.json()["follower_count"] == 1
    assert anonymous.json()["is_following"] is False


def test_follow_self_is_bad_request(client, user, auth_headers) -> None:
    response = client.post(f"/api/v1/profiles/{user.id}/follow", headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Cannot follow yourself"}


def test_follow_unknown_user(client, auth_headers) -> None:
    response = client.post("/api/v1/profiles/424242/follow", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_unfollow_and_lists(client, user, other_user, headers_for) -> None:
    headers = headers_for(other_user)
    client.post(f"/api/v1/profiles/{user.id}/follow", headers=headers)

    followers = client.get(f"/api/v1/profiles/{user.id}/followers").json()
    following = client.get(f"/api/v1/profiles/{other_user.id}/following").json()
    unfollow = client.post(f"/api/v1/profiles/{user.id}/follow", headers=headers)

    assert [f["id"] for f in followers] == [other_user.id]
    assert followers[0]["first_name"] == "Grace"
    assert [f["id"] for f in following] == [user.id]
    assert unfollow.json() == {"following": False}
    assert client.get(f"/api/v1/profiles/{user.id}/followers").json() == []
