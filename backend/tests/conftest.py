"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import json
from datetime import datetime, timezone, timedelta
from typing import Callable, Optional

import httpx
import jwt  # PyJWT
import pytest

from shared.config import get_settings
from shared.http import BackendClient
from shared.models import Role, SessionIdentity
from modules.session.service import reset_session_service


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"
TEST_BASE_URL = "http://backend.test/api/v1"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the session singleton around each test."""
    get_settings.cache_clear()
    reset_session_service()
    yield
    get_settings.cache_clear()
    reset_session_service()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """
    Factory for session tokens.

    Args (of the returned callable):
        subject_id: Value of the _id claim
        username: Username claim
        role: Role claim (any value, including unrecognized ones)
        expired: If True, the token expired an hour ago
        secret: Signing secret
    """

    def _make(
        subject_id: str = "admin-1",
        username: str = "alice",
        role: Optional[str] = "Admin",
        expired: bool = False,
        secret: str = TEST_JWT_SECRET,
        email: str = "alice@example.com",
    ) -> str:
        now = datetime.now(timezone.utc)
        exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
        payload = {
            "_id": subject_id,
            "username": username,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        if role is not None:
            payload["role"] = role
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def admin_identity() -> SessionIdentity:
    return SessionIdentity(subject_id="admin-1", username="alice", role=Role.ADMIN)


@pytest.fixture
def user_identity() -> SessionIdentity:
    return SessionIdentity(subject_id="user-2", username="bob", role=Role.USER)


@pytest.fixture
def request_record() -> Callable[..., dict]:
    """Factory for blood request records in the backend's wire format."""

    def _make(request_id: str = "req-1", status: str = "Pending", **overrides) -> dict:
        record = {
            "id": request_id,
            "bloodTypeId": "O+",
            "quantity": 2,
            "request_date": "2024-05-01T09:30:00Z",
            "required_by": "2024-05-03T00:00:00Z",
            "status": status,
            "delivery_address": "12 Harbour Road",
            "contact_number": "+1-555-0100",
            "reason_for_request": "Surgery",
            "hospital_name": "City General",
            "urgent": None,
            "isAccepted": None,
            "isQrSent": None,
            "isMailSent": None,
            "isApproved": None,
            "userId": "owner-7",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def user_record() -> Callable[..., dict]:
    """Factory for user records in the backend's wire format."""

    def _make(user_id: str = "user-2", role: str = "User", **overrides) -> dict:
        record = {
            "id": user_id,
            "email": f"{user_id}@example.com",
            "username": user_id,
            "createdAt": "2024-01-15T12:00:00Z",
            "role": role,
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def mock_backend() -> Callable[[Callable], BackendClient]:
    """Build a BackendClient whose calls go to ``handler`` instead of the network."""

    def _make(handler: Callable) -> BackendClient:
        return BackendClient(
            base_url=TEST_BASE_URL,
            timeout=5.0,
            transport=httpx.MockTransport(handler),
        )

    return _make


def json_body(request: httpx.Request) -> dict:
    """Decode a captured request's JSON body."""
    return json.loads(request.content or b"{}")


@pytest.fixture
def read_json() -> Callable[[httpx.Request], dict]:
    return json_body
