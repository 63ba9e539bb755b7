"""Session -- explicit authentication state

Replaces an ambient global token: callers create a Session from a
TokenStore (load-or-absent), pass it to DeadlineApiClient, and call
clear() on logout or when the backend rejects the token.
"""

from pathlib import Path
from typing import Protocol

import httpx
import structlog
from prazos.core.models.enums import ErrorKind
from prazos.core.models.user import User

from .exceptions import ApiError

log = structlog.get_logger()


class TokenStore(Protocol):
    """Where the access token survives between runs"""

    def load(self) -> str | None:
        """Stored token, or None when absent"""
        ...

    def save(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryTokenStore:
    """Process-local token store"""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Token kept in a single text file"""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> str | None:
        try:
            token = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class Session:
    """Current token and user

    is_authenticated is True only once the user has been fetched.
    """

    def __init__(self, store: TokenStore | None = None, token: str | None = None) -> None:
        self._store = store if store is not None else MemoryTokenStore()
        self.token = token
        self.user: User | None = None

    @classmethod
    def load(cls, store: TokenStore) -> "Session":
        """Session with the stored token, or an empty one"""
        return cls(store=store, token=store.load())

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def start(self, token: str) -> None:
        """Adopt a freshly issued token"""
        self._store.save(token)
        self.token = token
        self.user = None

    def clear(self) -> None:
        """Forget token and user (logout)"""
        self._store.clear()
        self.token = None
        self.user = None

    async def bootstrap(self, api) -> User | None:
        """Fetch the current user for the stored token

        A rejected token clears the session; other failures leave the token
        in place so a later retry can succeed.

        Args:
            api: DeadlineApiClient bound to this session

        Returns:
            The current user, or None when there is no usable token
        """
        if not self.token:
            return None
        try:
            self.user = await api.get_current_user()
        except ApiError as e:
            if e.kind == ErrorKind.UNAUTHORIZED:
                log.warning("session_token_rejected", status_code=e.status_code)
                self.clear()
                return None
            raise
        log.info("session_user_loaded", user_id=self.user.id, profile=self.user.profile)
        return self.user

    async def login(self, api, email: str, password: str) -> User | None:
        """Exchange credentials for a token, then load the user"""
        token = await api.login(email, password)
        self.start(token)
        return await self.bootstrap(api)


class SessionAuth(httpx.Auth):
    """Adds the session's bearer token to every request"""

    def __init__(self, session: Session) -> None:
        self._session = session

    def auth_flow(self, request: httpx.Request):
        if self._session.token:
            request.headers["Authorization"] = f"Bearer {self._session.token}"
        yield request
