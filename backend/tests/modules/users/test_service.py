import asyncio
import json

import httpx
import pytest

from shared.exceptions import ErrorKind
from shared.models import Role
from modules.authorization import InsufficientRoleError, UnauthenticatedError
from modules.moderation import FetchFailedError
from modules.users import (
    IRoleElevationService,
    RoleElevationService,
    ElevationFailedError,
)

USERS_PATH = "/api/v1/acceptRequest/getAllUser"
CHANGE_ROLE_PATH = "/api/v1/acceptRequest/changeRole"


class FakeUserBackend:
    """Tracks user roles server-side and records change-role calls."""

    def __init__(self, records, change_status=200, change_body=None):
        self.records = records
        self.change_status = change_status
        self.change_body = change_body
        self.calls: list[httpx.Request] = []
        self.change_payloads: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.path == USERS_PATH:
            return httpx.Response(200, json={"data": self.records})
        if request.url.path == CHANGE_ROLE_PATH:
            self.change_payloads.append(json.loads(request.content))
            if self.change_body is None:
                return httpx.Response(self.change_status)
            return httpx.Response(self.change_status, json=self.change_body)
        return httpx.Response(404)


@pytest.fixture
def fake(user_record):
    return FakeUserBackend([
        user_record("admin-1", "Admin"),
        user_record("user-2", "User"),
        user_record("user-3", "User"),
    ])


@pytest.fixture
def service(fake, mock_backend):
    return RoleElevationService(mock_backend(fake))


class TestLoadUsers:
    def test_implements_interface(self, service):
        assert isinstance(service, IRoleElevationService)

    @pytest.mark.asyncio
    async def test_loads_users_with_bearer(self, service, fake, admin_identity):
        """Listing users should authenticate with the admin's subject ID."""
        users = await service.load_users(admin_identity)

        assert [u.id for u in users] == ["admin-1", "user-2", "user-3"]
        assert users[1].role is Role.USER
        assert users[1].created_at is not None
        request = fake.calls[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer admin-1"

    @pytest.mark.asyncio
    async def test_skips_malformed_users(self, mock_backend, user_record, admin_identity):
        fake = FakeUserBackend([user_record("user-2"), {"id": "broken"}, {"id": "user-5", "role": "User"}])
        service = RoleElevationService(mock_backend(fake))

        users = await service.load_users(admin_identity)

        assert [u.id for u in users] == ["user-2"]

    @pytest.mark.asyncio
    async def test_unrecognized_role_is_listed(self, mock_backend, user_record, admin_identity):
        """Users with an unknown role string are kept with no role."""
        fake = FakeUserBackend([user_record("user-4", "admin"), user_record("user-5", "Owner")])
        service = RoleElevationService(mock_backend(fake))

        users = await service.load_users(admin_identity)

        assert [u.id for u in users] == ["user-4", "user-5"]
        assert all(u.role is None for u in users)

    @pytest.mark.asyncio
    async def test_missing_role_defaults_to_user(self, mock_backend, user_record, admin_identity):
        record = user_record("user-6")
        del record["role"]
        service = RoleElevationService(mock_backend(FakeUserBackend([record])))

        users = await service.load_users(admin_identity)

        assert users[0].role is Role.USER

    @pytest.mark.asyncio
    async def test_requires_admin(self, service, fake, user_identity):
        with pytest.raises(InsufficientRoleError):
            await service.load_users(user_identity)
        assert fake.calls == []

    @pytest.mark.asyncio
    async def test_requires_session(self, service, fake):
        with pytest.raises(UnauthenticatedError):
            await service.load_users(None)
        assert fake.calls == []

    @pytest.mark.asyncio
    async def test_failure_fallback(self, mock_backend, admin_identity):
        service = RoleElevationService(mock_backend(lambda request: httpx.Response(500)))
        with pytest.raises(FetchFailedError) as exc_info:
            await service.load_users(admin_identity)
        assert exc_info.value.message == "Failed to fetch users."


class TestElevateToAdmin:
    @pytest.mark.asyncio
    async def test_promotes_user(self, service, fake, admin_identity):
        """Elevation should send the change and update only the role locally."""
        await service.load_users(admin_identity)
        before = service.get("user-2")

        updated = await service.elevate_to_admin("user-2", admin_identity)

        assert updated.role is Role.ADMIN
        assert service.get("user-2").role is Role.ADMIN
        assert updated.model_dump(exclude={"role"}) == before.model_dump(exclude={"role"})
        assert fake.change_payloads == [{"userId": "user-2", "role": "Admin"}]
        assert fake.calls[-1].headers["Authorization"] == "Bearer admin-1"

    @pytest.mark.asyncio
    async def test_other_users_untouched(self, service, admin_identity):
        await service.load_users(admin_identity)
        await service.elevate_to_admin("user-2", admin_identity)
        assert service.get("user-3").role is Role.USER

    @pytest.mark.asyncio
    async def test_is_idempotent(self, service, fake, admin_identity):
        """Elevating twice should succeed both times and leave the role Admin."""
        await service.load_users(admin_identity)

        await service.elevate_to_admin("user-2", admin_identity)
        second = await service.elevate_to_admin("user-2", admin_identity)

        assert second.role is Role.ADMIN
        assert len(fake.change_payloads) == 2

    @pytest.mark.asyncio
    async def test_already_admin_succeeds(self, service, admin_identity):
        await service.load_users(admin_identity)
        updated = await service.elevate_to_admin("admin-1", admin_identity)
        assert updated.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_backend_failure_leaves_role(self, mock_backend, user_record, admin_identity):
        fake = FakeUserBackend(
            [user_record("user-2")],
            change_status=403,
            change_body={"message": "Not allowed"},
        )
        service = RoleElevationService(mock_backend(fake))
        await service.load_users(admin_identity)

        with pytest.raises(ElevationFailedError) as exc_info:
            await service.elevate_to_admin("user-2", admin_identity)

        assert exc_info.value.message == "Not allowed"
        assert exc_info.value.kind is ErrorKind.ELEVATION_FAILED
        assert service.get("user-2").role is Role.USER

    @pytest.mark.asyncio
    async def test_backend_failure_fallback(self, mock_backend, user_record, admin_identity):
        fake = FakeUserBackend([user_record("user-2")], change_status=500)
        service = RoleElevationService(mock_backend(fake))
        await service.load_users(admin_identity)

        with pytest.raises(ElevationFailedError) as exc_info:
            await service.elevate_to_admin("user-2", admin_identity)

        assert exc_info.value.message == "Failed to change role."

    @pytest.mark.asyncio
    async def test_unknown_user(self, service, fake, admin_identity):
        await service.load_users(admin_identity)
        calls_before = len(fake.calls)

        with pytest.raises(ElevationFailedError):
            await service.elevate_to_admin("user-404", admin_identity)
        assert len(fake.calls) == calls_before

    @pytest.mark.asyncio
    async def test_requires_admin(self, service, fake, admin_identity, user_identity):
        await service.load_users(admin_identity)

        with pytest.raises(InsufficientRoleError):
            await service.elevate_to_admin("user-3", user_identity)

        assert fake.change_payloads == []
        assert service.get("user-3").role is Role.USER

    @pytest.mark.asyncio
    async def test_promotes_user_without_role(self, mock_backend, user_record, admin_identity):
        fake = FakeUserBackend([user_record("user-4", "admin")])
        service = RoleElevationService(mock_backend(fake))
        await service.load_users(admin_identity)

        updated = await service.elevate_to_admin("user-4", admin_identity)

        assert updated.role is Role.ADMIN
        assert fake.change_payloads == [{"userId": "user-4", "role": "Admin"}]

    @pytest.mark.asyncio
    async def test_reload_during_elevation(self, mock_backend, user_record, admin_identity):
        """A confirmed elevation succeeds even if the user list is reloaded mid-call."""
        started = asyncio.Event()
        release = asyncio.Event()
        listings = [
            [user_record("user-2", "User")],
            [user_record("user-3", "User")],
        ]

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == USERS_PATH:
                return httpx.Response(200, json={"data": listings.pop(0)})
            started.set()
            await release.wait()
            return httpx.Response(200, json={"message": "ok"})

        service = RoleElevationService(mock_backend(handler))
        await service.load_users(admin_identity)

        elevation = asyncio.create_task(service.elevate_to_admin("user-2", admin_identity))
        await asyncio.wait_for(started.wait(), timeout=5)
        await service.load_users(admin_identity)

        release.set()
        updated = await elevation

        assert updated.id == "user-2"
        assert updated.role is Role.ADMIN
        assert service.get("user-2") is None
        assert [u.id for u in service.users()] == ["user-3"]
