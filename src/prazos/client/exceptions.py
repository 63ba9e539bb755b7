"""Client exception hierarchy

Transport and HTTP failures are mapped into ApiError(kind=...) inside
prazos.client.api; callers only ever see ErrorKind, never httpx types.
"""

import httpx
from prazos.core.models.enums import ErrorKind

# Kinds worth retrying unchanged
RECOVERABLE_KINDS: frozenset[ErrorKind] = frozenset({ErrorKind.NETWORK, ErrorKind.CONFLICT})


class PrazosClientError(Exception):
    """Base exception of the client package"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: error description
            recoverable: whether a retry may succeed
        """
        super().__init__(message)
        self.recoverable = recoverable


class ApiError(PrazosClientError):
    """Backend call failed

    Attributes:
        kind: failure category
        status_code: HTTP status, None for transport failures
        detail: backend-provided detail, when any
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
        detail: object = None,
    ) -> None:
        super().__init__(message, recoverable=kind in RECOVERABLE_KINDS)
        self.kind = kind
        self.status_code = status_code
        self.detail = detail


def kind_for_status(status_code: int) -> ErrorKind:
    """Map an HTTP error status to an ErrorKind"""
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code == 409:
        return ErrorKind.CONFLICT
    if status_code in (401, 403):
        return ErrorKind.UNAUTHORIZED
    if status_code in (400, 422):
        return ErrorKind.VALIDATION
    if status_code >= 500:
        return ErrorKind.NETWORK
    return ErrorKind.VALIDATION


def _response_detail(response: httpx.Response) -> object:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict) and "detail" in body:
        return body["detail"]
    return body


def from_response(response: httpx.Response) -> ApiError:
    """Build an ApiError from a non-2xx response"""
    detail = _response_detail(response)
    kind = kind_for_status(response.status_code)
    message = f"{response.request.method} {response.request.url.path} -> {response.status_code}"
    if isinstance(detail, str):
        message = f"{message}: {detail}"
    return ApiError(kind, message, status_code=response.status_code, detail=detail)


def from_transport_error(error: httpx.TransportError, base_url: str) -> ApiError:
    """Build a network ApiError from a connect/timeout/protocol failure"""
    return ApiError(
        ErrorKind.NETWORK,
        f"Backend unreachable: {base_url} -- {error}",
    )
