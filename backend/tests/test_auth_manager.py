"""
CarLookup Backend: Auth Manager Tests
======================================

What we test:
    ✅ Valid credentials return a bearer token carrying the user's roles
    ✅ Unknown user, wrong password and inactive account share one message
    ✅ Blank credentials fail validation before any lookup
"""

import pytest
import pytest_asyncio

from carlookup.exceptions import UnauthorizedError, ValidationError
from carlookup.managers import AuthManager
from carlookup.schemas.auth import LoginRequest


@pytest_asyncio.fixture
async def manager(uow_factory, password_service, token_service, seeded_users):
    uow = uow_factory()
    yield AuthManager(uow, password_service, token_service)
    await uow.close()


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, manager, token_service):
        result = await manager.authenticate(LoginRequest(username="admin", password="admin123"))

        assert result.token_type == "Bearer"
        assert result.expires_in == 3600
        assert result.roles == ["admin"]

        claims = token_service.read_claims(result.access_token)
        assert claims.username == "admin"
        assert claims.roles == ["admin"]

    @pytest.mark.asyncio
    async def test_username_is_trimmed(self, manager):
        result = await manager.authenticate(LoginRequest(username=" reader ", password="reader123"))
        assert result.roles == ["reader"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,password",
        [
            ("nobody", "whatever"),
            ("editor", "wrong-password"),
            ("retired", "retired123"),
        ],
    )
    async def test_failures_are_indistinguishable(self, manager, username, password):
        with pytest.raises(UnauthorizedError) as exc_info:
            await manager.authenticate(LoginRequest(username=username, password=password))
        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_blank_credentials(self, manager):
        with pytest.raises(ValidationError) as exc_info:
            await manager.authenticate(LoginRequest(username="  ", password=""))
        assert [e.message for e in exc_info.value.errors] == [
            "Username is required",
            "Password is required",
        ]
