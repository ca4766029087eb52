"""API test fixtures: FastAPI test client bound to the per-test relay.

Invariants:
    - get_relay_queue/get_tool_invoker overridden with the test fixtures
    - Overrides cleared after each test

Design Decisions:
    - httpx ASGITransport: requests run on the test's event loop, so a tool
      call and the plugin's poll/result requests can be interleaved with gather
"""

import pytest
from httpx import ASGITransport, AsyncClient

from studio_bridge.api.dependencies import get_relay_queue, get_tool_invoker
from studio_bridge.main import app


@pytest.fixture
async def client(relay, invoker):
    app.dependency_overrides[get_relay_queue] = lambda: relay
    app.dependency_overrides[get_tool_invoker] = lambda: invoker
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
