"""
Tests for the API key authentication dependency.
"""
from uuid import uuid4

import pytest
import pytest_asyncio

from collegepath.auth import middleware
from collegepath.auth.api_keys import generate_api_key
from collegepath.auth.middleware import AuthenticationError, clear_auth_cache, get_current_user
from collegepath.infra.db.repositories.user import UserRepository


@pytest.fixture(autouse=True)
def _clean_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


@pytest_asyncio.fixture
async def keyed_user(session):
    user_id = str(uuid4())
    full_key, key_hash, key_prefix = generate_api_key(user_id)
    user = await UserRepository(session).create(
        id=user_id,
        email="keyed@example.com",
        api_key_hash=key_hash,
        api_key_prefix=key_prefix,
    )
    return user, full_key


class TestGetCurrentUser:

    @pytest.mark.asyncio
    async def test_valid_key(self, session, keyed_user):
        user, key = keyed_user
        resolved = await get_current_user(key, session)
        assert resolved.id == user.id
        assert key in middleware._auth_cache

    @pytest.mark.asyncio
    async def test_missing_key(self, session):
        with pytest.raises(AuthenticationError) as exc:
            await get_current_user(None, session)
        assert exc.value.status_code == 401
        assert exc.value.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_malformed_key(self, session):
        with pytest.raises(AuthenticationError):
            await get_current_user("hello", session)

    @pytest.mark.asyncio
    async def test_wrong_secret(self, session, keyed_user):
        user, key = keyed_user
        with pytest.raises(AuthenticationError):
            await get_current_user(f"cp_{user.id}_wrongsecret", session)

    @pytest.mark.asyncio
    async def test_unknown_user(self, session):
        key, _, _ = generate_api_key(str(uuid4()))
        with pytest.raises(AuthenticationError):
            await get_current_user(key, session)

    @pytest.mark.asyncio
    async def test_cached_key_skips_bcrypt(self, session, keyed_user, monkeypatch):
        user, key = keyed_user
        await get_current_user(key, session)

        def fail(*args, **kwargs):
            raise AssertionError("bcrypt should not run for a cached key")

        monkeypatch.setattr(middleware, "verify_api_key", fail)
        resolved = await get_current_user(key, session)
        assert resolved.id == user.id
