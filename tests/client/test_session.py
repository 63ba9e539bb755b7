"""Session and token store tests"""

from unittest.mock import AsyncMock

import httpx
import pytest
from prazos.client.exceptions import ApiError
from prazos.client.session import FileTokenStore, MemoryTokenStore, Session
from prazos.core.models import ErrorKind, User, UserProfile

USER_JSON = {"id": "u1", "name": "Ana", "email": "ana@example.com", "profile": "admin"}


class TestTokenStores:
    """load / save / clear"""

    def test_memory_store(self):
        store = MemoryTokenStore()
        assert store.load() is None
        store.save("t1")
        assert store.load() == "t1"
        store.clear()
        assert store.load() is None

    def test_file_store_absent(self, tmp_path):
        assert FileTokenStore(tmp_path / "missing").load() is None

    def test_file_store_roundtrip(self, tmp_path):
        path = tmp_path / "nested" / "token"
        store = FileTokenStore(path)
        store.save("t2")
        assert path.read_text() == "t2"
        assert FileTokenStore(path).load() == "t2"

    def test_file_store_clear_is_idempotent(self, tmp_path):
        store = FileTokenStore(tmp_path / "token")
        store.save("t3")
        store.clear()
        store.clear()
        assert store.load() is None

    def test_blank_file_is_absent(self, tmp_path):
        path = tmp_path / "token"
        path.write_text("  \n")
        assert FileTokenStore(path).load() is None


class TestSession:
    """Explicit authentication state"""

    def test_load_from_store(self):
        session = Session.load(MemoryTokenStore("t1"))
        assert session.token == "t1"
        assert session.is_authenticated is False

    def test_start_and_clear(self):
        store = MemoryTokenStore()
        session = Session(store=store)
        session.start("t9")
        assert store.load() == "t9"
        session.clear()
        assert session.token is None
        assert store.load() is None

    async def test_bootstrap_without_token(self):
        api = AsyncMock()
        assert await Session().bootstrap(api) is None
        api.get_current_user.assert_not_called()

    async def test_bootstrap_loads_user(self):
        api = AsyncMock()
        api.get_current_user.return_value = User.model_validate(USER_JSON)
        session = Session(token="t1")

        user = await session.bootstrap(api)

        assert user.profile == UserProfile.ADMIN
        assert session.is_authenticated is True

    async def test_rejected_token_clears_session(self):
        store = MemoryTokenStore("expired")
        session = Session.load(store)
        api = AsyncMock()
        api.get_current_user.side_effect = ApiError(ErrorKind.UNAUTHORIZED, "401", status_code=401)

        assert await session.bootstrap(api) is None
        assert session.token is None
        assert store.load() is None

    async def test_network_failure_keeps_token(self):
        session = Session(store=MemoryTokenStore("t1"), token="t1")
        api = AsyncMock()
        api.get_current_user.side_effect = ApiError(ErrorKind.NETWORK, "down")

        with pytest.raises(ApiError):
            await session.bootstrap(api)
        assert session.token == "t1"


class TestLoginFlow:
    """Session.login against the mock backend"""

    async def test_login_adopts_token_and_loads_user(self, api, backend):
        api.session.clear()
        backend.routes["POST /api/v1/auth/login"] = httpx.Response(200, json={"access_token": "fresh"})
        backend.routes["GET /api/v1/users/me"] = httpx.Response(200, json=USER_JSON)

        user = await api.session.login(api, "ana@example.com", "s3cret")

        assert user.id == "u1"
        assert api.session.token == "fresh"
        assert backend.requests[-1].headers["Authorization"] == "Bearer fresh"

    async def test_rejected_stored_token(self, api, backend):
        backend.routes["GET /api/v1/users/me"] = httpx.Response(401, json={"detail": "expired"})

        assert await api.session.bootstrap(api) is None
        assert api.session.token is None
