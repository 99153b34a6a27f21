"""
Tests for the reference backend endpoints.

Covers the wire contract and the server-side re-check of the
authorization rules.
"""

import json

import pytest
from fastapi.testclient import TestClient

from api import ReferenceBackend, create_app
from modules.moderation.models import BloodRequest
from modules.users.models import User

PREFIX = "/api/v1"


@pytest.fixture
def state(request_record, user_record) -> ReferenceBackend:
    return ReferenceBackend(
        requests=[
            BloodRequest.model_validate(request_record("req-1", "Pending")),
            BloodRequest.model_validate(request_record("req-2", "Rejected")),
            BloodRequest.model_validate(request_record("req-3", "Accepted")),
        ],
        users=[
            User.model_validate(user_record("admin-1", "Admin")),
            User.model_validate(user_record("user-2", "User")),
        ],
    )


@pytest.fixture
def client(state) -> TestClient:
    return TestClient(create_app(state))


class TestHealth:
    def test_health(self, client):
        response = client.get(f"{PREFIX}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["requests"] == 3


class TestGetAllRequest:
    def test_lists_requests_in_wire_format(self, client):
        response = client.get(f"{PREFIX}/bloodrequest/getAllRequest")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [r["id"] for r in data] == ["req-1", "req-2", "req-3"]
        assert data[0]["bloodTypeId"] == "O+"
        assert data[0]["userId"] == "owner-7"
        assert data[0]["status"] == "Pending"


class TestAcceptRequest:
    def test_admin_accepts(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-1", "userId": "admin-1", "isAccepted": True},
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Accepted"
        assert response.json()["data"]["isAccepted"] is True

    def test_admin_rejects(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-1", "userId": "admin-1", "isAccepted": False},
        )
        assert response.json()["data"]["status"] == "Rejected"

    def test_second_moderation_is_refused(self, client):
        """A request that already left Pending should be refused with a message."""
        body = {"requestId": "req-1", "userId": "admin-1", "isAccepted": True}
        client.post(f"{PREFIX}/acceptRequest/acceptRequest", json=body)

        response = client.post(f"{PREFIX}/acceptRequest/acceptRequest", json=body)

        assert response.status_code == 400
        assert response.json()["message"] == "Request already processed"

    def test_rejected_reaccept_refused_by_default(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-2", "userId": "admin-1", "isAccepted": True},
        )
        assert response.status_code == 400

    def test_rejected_reaccept_allowed_by_policy(self, request_record, user_record):
        state = ReferenceBackend(
            requests=[BloodRequest.model_validate(request_record("req-2", "Rejected"))],
            users=[User.model_validate(user_record("admin-1", "Admin"))],
            allow_rejected_reaccept=True,
        )
        client = TestClient(create_app(state))

        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-2", "userId": "admin-1", "isAccepted": True},
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Accepted"

    def test_non_admin_is_forbidden(self, client, state):
        """The backend should enforce the Admin requirement on its own."""
        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-1", "userId": "user-2", "isAccepted": True},
        )

        assert response.status_code == 403
        assert "message" in response.json()
        assert state.list_requests()[0].status.value == "Pending"

    def test_unknown_moderator_is_unauthenticated(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-1", "userId": "ghost", "isAccepted": True},
        )
        assert response.status_code == 401

    def test_unknown_request(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/acceptRequest",
            json={"requestId": "req-404", "userId": "admin-1", "isAccepted": True},
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Request not found: req-404"

    def test_malformed_body(self, client):
        response = client.post(f"{PREFIX}/acceptRequest/acceptRequest", json={"requestId": "req-1"})
        assert response.status_code == 422
        assert response.json()["message"] == "Invalid request body"


class TestGetAllUser:
    def test_admin_lists_users(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/getAllUser",
            headers={"Authorization": "Bearer admin-1"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert [u["id"] for u in data] == ["admin-1", "user-2"]
        assert "createdAt" in data[0]

    def test_missing_bearer(self, client):
        response = client.post(f"{PREFIX}/acceptRequest/getAllUser")
        assert response.status_code == 401
        assert response.json()["message"]

    def test_user_bearer_forbidden(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/getAllUser",
            headers={"Authorization": "Bearer user-2"},
        )
        assert response.status_code == 403


class TestChangeRole:
    def test_admin_promotes_user(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/changeRole",
            headers={"Authorization": "Bearer admin-1"},
            json={"userId": "user-2", "role": "Admin"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["role"] == "Admin"

    def test_promotion_is_idempotent(self, client):
        for _ in range(2):
            response = client.post(
                f"{PREFIX}/acceptRequest/changeRole",
                headers={"Authorization": "Bearer admin-1"},
                json={"userId": "user-2", "role": "Admin"},
            )
            assert response.status_code == 200

    def test_demotion_unsupported(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/changeRole",
            headers={"Authorization": "Bearer admin-1"},
            json={"userId": "admin-1", "role": "User"},
        )
        assert response.status_code == 400

    def test_user_cannot_promote(self, client, state):
        response = client.post(
            f"{PREFIX}/acceptRequest/changeRole",
            headers={"Authorization": "Bearer user-2"},
            json={"userId": "user-2", "role": "Admin"},
        )
        assert response.status_code == 403
        assert state.identity_for("user-2").role.value == "User"

    def test_unknown_user(self, client):
        response = client.post(
            f"{PREFIX}/acceptRequest/changeRole",
            headers={"Authorization": "Bearer admin-1"},
            json={"userId": "user-404", "role": "Admin"},
        )
        assert response.status_code == 404


class TestLogout:
    def test_logout(self, client):
        response = client.post(f"{PREFIX}/users/logout")
        assert response.status_code == 200


class TestSeedFile:
    def test_from_seed_file(self, tmp_path, request_record, user_record):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps({
            "requests": [request_record("req-1")],
            "users": [user_record("admin-1", "Admin")],
        }))

        state = ReferenceBackend.from_seed_file(seed)

        assert [r.id for r in state.list_requests()] == ["req-1"]
        assert state.identity_for("admin-1").is_admin
