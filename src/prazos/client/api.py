"""DeadlineApiClient -- record-oriented REST backend wrapper

Thin httpx.AsyncClient wrapper around the deadline backend. Every failure
leaves this module as ApiError(kind=...); httpx exceptions never leak.
"""

import time
from typing import Any

import httpx
import structlog
from prazos.core.models.deadline import AttachmentRef, Deadline, DeadlineCreate, DeadlineUpdate
from prazos.core.models.enums import ErrorKind
from prazos.core.models.filters import FilterState
from prazos.core.models.user import User
from prazos.core.quick_filters import to_query_params
from pydantic import BaseModel, ValidationError

from .config import ClientConfig
from .exceptions import ApiError, from_response, from_transport_error
from .session import Session, SessionAuth

log = structlog.get_logger()


def _payload(model: BaseModel | dict[str, Any], partial: bool = False) -> dict[str, Any]:
    if isinstance(model, dict):
        return model
    return model.model_dump(mode="json", exclude_unset=partial)


class DeadlineApiClient:
    """Deadline backend client

    The session's bearer token is attached to every request; swap tokens by
    mutating the Session, not the client.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: Session | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: backend location and timeout
            session: authentication state (a fresh in-memory one when None)
            transport: httpx transport override (tests use httpx.MockTransport)
        """
        self._config = config or ClientConfig()
        self.session = session or Session()
        self._http = httpx.AsyncClient(
            base_url=self._config.api_url,
            timeout=self._config.timeout_s,
            auth=SessionAuth(self.session),
            transport=transport,
        )

    async def __aenter__(self) -> "DeadlineApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        start_time = time.monotonic()
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            log.error(
                "api_unreachable",
                method=method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise from_transport_error(e, self._config.api_url) from e

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.is_error:
            error = from_response(response)
            log.warning(
                "api_request_failed",
                method=method,
                path=path,
                status_code=response.status_code,
                kind=error.kind,
                duration_ms=duration_ms,
            )
            raise error

        log.debug(
            "api_request_completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    @staticmethod
    def _json(response: httpx.Response, path: str) -> Any:
        """Decode a 2xx body; anything that is not JSON is a VALIDATION failure"""
        try:
            return response.json()
        except ValueError as e:
            log.warning(
                "api_invalid_body",
                path=path,
                status_code=response.status_code,
                content_type=response.headers.get("content-type", ""),
            )
            raise ApiError(
                ErrorKind.VALIDATION,
                f"Non-JSON body from {path} ({response.status_code})",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _parse(model: type[BaseModel], data: Any, path: str):
        try:
            if isinstance(data, list):
                return [model.model_validate(item) for item in data]
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(
                ErrorKind.VALIDATION,
                f"Unexpected {model.__name__} payload from {path}: {e.error_count()} error(s)",
            ) from e

    # -- deadlines -----------------------------------------------------------

    async def list_deadlines(self, filters: FilterState | None = None) -> list[Deadline]:
        """GET /deadlines with the non-empty filters as query parameters"""
        params = to_query_params(filters) if filters is not None else {}
        response = await self._request("GET", "/deadlines", params=params)
        return self._parse(Deadline, self._json(response, "/deadlines"), "/deadlines")

    async def get_deadline(self, deadline_id: str) -> Deadline:
        path = f"/deadlines/{deadline_id}"
        response = await self._request("GET", path)
        return self._parse(Deadline, self._json(response, path), path)

    async def create_deadline(self, payload: DeadlineCreate | dict[str, Any]) -> Deadline:
        response = await self._request("POST", "/deadlines", json=_payload(payload))
        return self._parse(Deadline, self._json(response, "/deadlines"), "/deadlines")

    async def update_deadline(
        self,
        deadline_id: str,
        patch: DeadlineUpdate | dict[str, Any],
    ) -> Deadline | None:
        """PUT /deadlines/{id} with only the fields set on the patch

        Returns:
            The updated record, or None when the backend answers with no body
            (204 No Content)
        """
        path = f"/deadlines/{deadline_id}"
        response = await self._request("PUT", path, json=_payload(patch, partial=True))
        if not response.content:
            return None
        return self._parse(Deadline, self._json(response, path), path)

    async def delete_deadline(self, deadline_id: str) -> None:
        await self._request("DELETE", f"/deadlines/{deadline_id}")

    # -- attachments ---------------------------------------------------------

    async def upload_attachment(
        self,
        deadline_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> AttachmentRef:
        """POST /deadlines/{id}/attachments as multipart form data"""
        path = f"/deadlines/{deadline_id}/attachments"
        response = await self._request(
            "POST",
            path,
            files={"file": (filename, content, content_type)},
            data={"deadline_id": deadline_id},
        )
        body = self._json(response, path)
        if isinstance(body, dict):
            body = {"filename": filename, **body}
        return self._parse(AttachmentRef, body, path)

    async def delete_attachment(self, deadline_id: str, attachment_id: str) -> None:
        await self._request("DELETE", f"/deadlines/{deadline_id}/attachments/{attachment_id}")

    # -- users and auth ------------------------------------------------------

    async def list_users(self) -> list[User]:
        response = await self._request("GET", "/users")
        return self._parse(User, self._json(response, "/users"), "/users")

    async def get_current_user(self) -> User:
        response = await self._request("GET", "/users/me")
        return self._parse(User, self._json(response, "/users/me"), "/users/me")

    async def login(self, email: str, password: str) -> str:
        """POST /auth/login (form encoded) and return the access token"""
        response = await self._request(
            "POST",
            "/auth/login",
            data={"username": email, "password": password},
        )
        body = self._json(response, "/auth/login")
        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise ApiError(ErrorKind.VALIDATION, "Login response without access_token")
        return token
