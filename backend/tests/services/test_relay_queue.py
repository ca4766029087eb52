"""Relay Queue: verifies enqueue/claim/resolve/await semantics and timing.

Tests cover:
    - Ids are strictly increasing and unique
    - claim_pending returns each pending record exactly once, in enqueue order
    - resolve routes the outcome to the awaiting caller and removes the record
    - await_result times out within [T, T + poll interval] and removes the record
    - resolve on unknown/removed ids is a no-op
    - Concurrent awaits resolved in reverse order get their own outcomes
    - A cancelled wait removes its command so it is never dispatched
"""

import asyncio
import time

import pytest

from studio_bridge.core.command_record import CommandOutcome, CommandStatus
from studio_bridge.core.errors import CommandTimeoutError, CommandVanishedError
from studio_bridge.services.relay_queue import (
    DEFAULT_POLL_INTERVAL_MS, DEFAULT_TIMEOUT_MS, RelayQueue,
)


def test_defaults():
    relay = RelayQueue()
    assert relay.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS == 200
    assert relay.default_timeout_ms == DEFAULT_TIMEOUT_MS == 30_000
    assert relay.size == 0


def test_enqueue_ids_strictly_increasing(relay):
    ids = [relay.enqueue("run_script", {"code": str(i)}) for i in range(20)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 20
    assert ids[0] == 1
    assert relay.size == 20


def test_ids_not_reused_after_removal(relay):
    first = relay.enqueue("get_script", {"path": "game.X"})
    relay.resolve(first, CommandOutcome(result={}))
    relay._records.clear()
    second = relay.enqueue("get_script", {"path": "game.X"})
    assert second > first


def test_enqueue_creates_pending_record(relay):
    command_id = relay.enqueue("delete_instance", {"path": "game.Workspace.Part"})
    record = relay.get(command_id)
    assert record.status == CommandStatus.PENDING
    assert record.tool == "delete_instance"
    assert record.args == {"path": "game.Workspace.Part"}
    assert relay.pending_count == 1


def test_claim_pending_marks_sent_in_order(relay):
    a = relay.enqueue("run_script", {"code": "a"})
    b = relay.enqueue("run_script", {"code": "b"})
    claimed = relay.claim_pending()
    assert [r.id for r in claimed] == [a, b]
    assert all(r.status == CommandStatus.SENT for r in claimed)
    assert relay.pending_count == 0
    assert relay.size == 2


def test_claim_pending_never_returns_twice(relay):
    relay.enqueue("run_script", {"code": "a"})
    assert len(relay.claim_pending()) == 1
    assert relay.claim_pending() == []


def test_claim_pending_picks_up_later_enqueues(relay):
    a = relay.enqueue("run_script", {"code": "a"})
    first = relay.claim_pending()
    b = relay.enqueue("run_script", {"code": "b"})
    second = relay.claim_pending()
    assert [r.id for r in first] == [a]
    assert [r.id for r in second] == [b]


def test_claim_pending_empty_queue(relay):
    assert relay.claim_pending() == []


def test_claim_skips_done_records(relay):
    a = relay.enqueue("run_script", {"code": "a"})
    relay.resolve(a, CommandOutcome(result=1))
    assert relay.claim_pending() == []


def test_resolve_unknown_id_is_noop(relay):
    assert relay.resolve(999, CommandOutcome(result=1)) is False
    assert relay.size == 0


def test_resolve_marks_done(relay):
    command_id = relay.enqueue("run_script", {"code": "a"})
    relay.claim_pending()
    assert relay.resolve(command_id, CommandOutcome(result={"output": "2"})) is True
    assert relay.get(command_id).status == CommandStatus.DONE


def test_duplicate_resolve_keeps_first_outcome(relay):
    command_id = relay.enqueue("run_script", {"code": "a"})
    relay.resolve(command_id, CommandOutcome(result="first"))
    assert relay.resolve(command_id, CommandOutcome(result="second")) is False
    assert relay.get(command_id).outcome.result == "first"


async def test_await_result_returns_outcome_and_removes_record(relay):
    command_id = relay.enqueue("run_script", {"code": "return 1+1"})

    async def studio():
        await asyncio.sleep(0.02)
        relay.claim_pending()
        relay.resolve(command_id, CommandOutcome(result={"output": "2"}))

    outcome, _ = await asyncio.gather(relay.await_result(command_id), studio())
    assert outcome.result == {"output": "2"}
    assert not outcome.failed
    assert relay.get(command_id) is None
    assert relay.size == 0


async def test_await_result_returns_error_outcome(relay):
    command_id = relay.enqueue("run_script", {"code": "error('x')"})
    relay.claim_pending()
    relay.resolve(command_id, CommandOutcome.from_report(error="x"))
    outcome = await relay.await_result(command_id)
    assert outcome.failed
    assert outcome.error == "x"
    assert relay.size == 0


async def test_resolve_after_collection_is_noop(relay):
    command_id = relay.enqueue("run_script", {"code": "a"})
    relay.resolve(command_id, CommandOutcome(result=1))
    await relay.await_result(command_id)
    assert relay.resolve(command_id, CommandOutcome(result=2)) is False


async def test_await_result_timeout_bounds():
    relay = RelayQueue(poll_interval_ms=200)
    command_id = relay.enqueue("list_children", {"path": "game"})
    start = time.monotonic()
    with pytest.raises(CommandTimeoutError) as exc_info:
        await relay.await_result(command_id, timeout_ms=100)
    elapsed = time.monotonic() - start
    assert elapsed >= 0.1
    assert elapsed < 0.3 + 0.15
    assert relay.get(command_id) is None
    assert exc_info.value.context.command_id == command_id
    assert exc_info.value.context.tool_name == "list_children"


async def test_timeout_after_claim_removes_sent_record(relay):
    command_id = relay.enqueue("run_script", {"code": "while true do end"})
    relay.claim_pending()
    with pytest.raises(CommandTimeoutError):
        await relay.await_result(command_id, timeout_ms=30)
    assert relay.size == 0
    # Late completion from the plugin is discarded
    assert relay.resolve(command_id, CommandOutcome(result=1)) is False


async def test_await_result_uses_default_timeout():
    relay = RelayQueue(poll_interval_ms=10, default_timeout_ms=40)
    command_id = relay.enqueue("run_script", {"code": "a"})
    with pytest.raises(CommandTimeoutError) as exc_info:
        await relay.await_result(command_id)
    assert exc_info.value.context.timeout_ms == 40


async def test_await_result_vanished_record(relay):
    command_id = relay.enqueue("run_script", {"code": "a"})

    async def remove():
        await asyncio.sleep(0.015)
        relay._records.pop(command_id)

    with pytest.raises(CommandVanishedError):
        await asyncio.gather(relay.await_result(command_id), remove())


async def test_cancelled_wait_drops_pending_command(relay):
    command_id = relay.enqueue("delete_instance", {"path": "game.Workspace.Part"})
    waiter = asyncio.create_task(relay.await_result(command_id))
    await asyncio.sleep(0.02)

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert relay.size == 0
    assert relay.claim_pending() == []
    assert relay.resolve(command_id, CommandOutcome(result=1)) is False


async def test_cancelled_wait_drops_sent_command(relay):
    command_id = relay.enqueue("run_script", {"code": "wait(60)"})
    relay.claim_pending()
    waiter = asyncio.create_task(relay.await_result(command_id))
    await asyncio.sleep(0.02)

    waiter.cancel()
    await asyncio.gather(waiter, return_exceptions=True)

    assert relay.get(command_id) is None


async def test_await_result_unknown_id_vanishes(relay):
    with pytest.raises(CommandVanishedError):
        await relay.await_result(12345)


async def test_concurrent_awaits_resolved_in_reverse_order(relay):
    first = relay.enqueue("run_script", {"code": "return 'a'"})
    second = relay.enqueue("run_script", {"code": "return 'b'"})

    async def studio():
        await asyncio.sleep(0.01)
        claimed = relay.claim_pending()
        assert [r.id for r in claimed] == [first, second]
        relay.resolve(second, CommandOutcome(result={"output": "b"}))
        await asyncio.sleep(0.03)
        relay.resolve(first, CommandOutcome(result={"output": "a"}))

    out_first, out_second, _ = await asyncio.gather(
        relay.await_result(first), relay.await_result(second), studio(),
    )
    assert out_first.result == {"output": "a"}
    assert out_second.result == {"output": "b"}
    assert relay.size == 0


async def test_timeout_of_one_command_does_not_affect_another(relay):
    slow = relay.enqueue("run_script", {"code": "slow"})
    fast = relay.enqueue("run_script", {"code": "fast"})
    relay.resolve(fast, CommandOutcome(result="done"))

    results = await asyncio.gather(
        relay.await_result(slow, timeout_ms=50),
        relay.await_result(fast, timeout_ms=50),
        return_exceptions=True,
    )
    assert isinstance(results[0], CommandTimeoutError)
    assert results[1].result == "done"
