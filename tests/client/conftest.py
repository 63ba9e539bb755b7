"""Client test fixtures -- mock backend transport and JSON builders"""

import json

import httpx
import pytest
import pytest_asyncio
from prazos.client.api import DeadlineApiClient
from prazos.client.config import ClientConfig
from prazos.client.session import MemoryTokenStore, Session


def deadline_json(id: str, due_date: str = "2025-03-12T17:00:00-03:00", **overrides) -> dict:
    """Backend-shaped deadline record"""
    record = {
        "id": id,
        "task_description": f"Prazo {id}",
        "due_date": due_date,
        "process_number": None,
        "type": "Recurso",
        "parties": None,
        "status": "pendente",
        "classification": "normal",
        "responsible_user_id": None,
        "responsible": None,
        "history": [],
        "created_at": "2025-03-01T09:00:00-03:00",
        "updated_at": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def deadline_record():
    return deadline_json


class RecordingBackend:
    """httpx.MockTransport handler that records requests

    Routes map "METHOD /path" to a response or a callable(request) -> response.
    """

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.method} {request.url.path}")
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        if callable(route):
            return route(request)
        return route

    def json_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def session() -> Session:
    return Session(store=MemoryTokenStore("tok-123"), token="tok-123")


@pytest_asyncio.fixture
async def api(backend, session):
    """DeadlineApiClient over the recording backend"""
    client = DeadlineApiClient(
        ClientConfig(api_base_url="http://backend.test"),
        session=session,
        transport=httpx.MockTransport(backend),
    )
    yield client
    await client.aclose()
