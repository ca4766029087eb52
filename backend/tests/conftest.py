"""Root conftest: shared fixtures for relay, invoker and a fake Studio plugin.

Invariants:
    - Every test gets a fresh RelayQueue with a short poll interval
    - fake_studio tasks are cancelled at teardown, never leak between tests
"""

import asyncio
import os

import pytest

os.environ.setdefault("LOG_FORMAT", "text")

from studio_bridge.core.command_record import CommandOutcome  # noqa: E402
from studio_bridge.services.relay_queue import RelayQueue  # noqa: E402
from studio_bridge.services.tool_invocation import ToolInvoker  # noqa: E402
from studio_bridge.services.tools_registry import build_default_registry  # noqa: E402

FAST_POLL_MS = 10


@pytest.fixture
def relay():
    return RelayQueue(poll_interval_ms=FAST_POLL_MS, default_timeout_ms=2_000)


@pytest.fixture
def invoker(relay):
    return ToolInvoker(relay, build_default_registry())


class FakeStudio:
    """Polls a relay like the plugin does and answers with a responder.

    responder(record) returns a CommandOutcome, or None to leave the
    command unanswered.
    """

    def __init__(self, relay: RelayQueue, responder):
        self.relay = relay
        self.responder = responder
        self.seen = []

    async def run(self):
        while True:
            for record in self.relay.claim_pending():
                self.seen.append(record)
                outcome = self.responder(record)
                if outcome is not None:
                    self.relay.resolve(record.id, outcome)
            await asyncio.sleep(0.005)


@pytest.fixture
async def fake_studio(relay):
    """Start a FakeStudio against the test relay: fake_studio(responder)."""
    tasks = []

    def start(responder=lambda r: CommandOutcome(result={"ok": True})):
        studio = FakeStudio(relay, responder)
        tasks.append(asyncio.create_task(studio.run()))
        return studio

    yield start
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
