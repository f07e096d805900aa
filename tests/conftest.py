import json

import httpx
import pytest
import pytest_asyncio

from clue_chat.api.deps import get_pacing_policy
from clue_chat.assistant.streaming import PacingPolicy
from clue_chat.client.conversation import ConversationStateManager
from clue_chat.main import app
from clue_chat.memory.in_memory_store import InMemoryKeyValueStore


def parse_sse_body(body: str) -> list[dict]:
    """Splits a full event-stream body into decoded JSON payloads."""
    records = []
    for frame in body.split("\n\n"):
        if frame.startswith("data: "):
            records.append(json.loads(frame[len("data: "):]))
    return records


@pytest.fixture
def sse_records():
    return parse_sse_body


@pytest.fixture
def immediate_app():
    """The API app with all stream delays set to zero."""
    app.dependency_overrides[get_pacing_policy] = PacingPolicy.immediate
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def manager(store):
    return ConversationStateManager(store)


@pytest_asyncio.fixture
async def asgi_client(immediate_app):
    """An async HTTP client talking to the app in-process."""
    transport = httpx.ASGITransport(app=immediate_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
