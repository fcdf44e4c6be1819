"""
Tests for authentication and the current-user endpoint.
"""

import uuid

from domain.models import AppUser
from test_fixtures import auth_headers, make_identity, make_token


def test_me_requires_a_token(api_client):
    response = api_client.get("/me")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_SIGNED_IN"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_me_creates_profile_on_first_request(api_client, db_session, identity, headers):
    response = api_client.get("/me", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == str(identity.user_id)
    assert data["email"] == identity.email
    assert data["full_name"] == "Sarah Martinez"
    assert db_session.get(AppUser, identity.user_id) is not None


def test_name_claim_is_used_when_full_name_missing(api_client):
    identity = make_identity()
    token = make_token(identity, user_metadata={"name": "Emma J."})

    response = api_client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["full_name"] == "Emma J."


def test_expired_token_is_rejected(api_client):
    response = api_client.get("/me", headers=auth_headers(expires_in=-60))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


def test_token_signed_with_wrong_secret_is_rejected(api_client):
    response = api_client.get("/me", headers=auth_headers(secret="not-the-secret"))

    assert response.status_code == 401


def test_wrong_audience_is_rejected(api_client):
    response = api_client.get("/me", headers=auth_headers(audience="someone-else"))

    assert response.status_code == 401


def test_non_uuid_subject_is_rejected(api_client):
    token = make_token(sub="not-a-uuid")

    response = api_client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token payload"


def test_profile_row_is_reused_across_requests(api_client, db_session, identity, headers):
    api_client.get("/me", headers=headers)
    api_client.get("/me", headers=headers)

    assert db_session.query(AppUser).filter(AppUser.user_id == identity.user_id).count() == 1
    assert db_session.get(AppUser, uuid.uuid4()) is None
