"""Relay Queue: in-memory command store bridging awaiting callers and a polling plugin.

Invariants:
    - Command ids are strictly increasing and never reused (first id is 1)
    - claim_pending() returns each PENDING record exactly once, in creation order
    - resolve() on an unknown or already-collected id is a no-op, never raises
    - await_result() removes its record on every exit path (done, timeout,
      cancellation)
    - enqueue/claim_pending/resolve are synchronous: on a single event loop they
      cannot interleave, so the live set needs no lock

Design Decisions:
    - await_result re-checks status every poll_interval_ms instead of waking on
      resolve. Worst-case added latency per call is one interval; with
      true threads this would need a lock around _records and could switch to
      an asyncio.Event per record without changing the timeout contract
    - dict keyed by id keeps insertion order, which doubles as dispatch order
"""

import asyncio
import logging
import time
from typing import Any

from studio_bridge.core.command_record import (
    CommandId, CommandOutcome, CommandRecord, CommandStatus,
)
from studio_bridge.core.errors import (
    CommandTimeoutError, CommandVanishedError, ErrorContext,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_POLL_INTERVAL_MS = 200


class RelayQueue:
    """Owns the live command records. One instance per process."""

    def __init__(
        self,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        self.poll_interval_ms = poll_interval_ms
        self.default_timeout_ms = default_timeout_ms
        self._records: dict[CommandId, CommandRecord] = {}
        self._last_id = 0

    @property
    def size(self) -> int:
        """Number of live records (pending, sent, or done but not collected)."""
        return len(self._records)

    @property
    def pending_count(self) -> int:
        return sum(
            1 for r in self._records.values()
            if r.status == CommandStatus.PENDING
        )

    def get(self, command_id: int) -> CommandRecord | None:
        return self._records.get(command_id)

    def enqueue(self, tool: str, args: dict[str, Any]) -> CommandId:
        """Create a PENDING record and return its id."""
        self._last_id += 1
        command_id = CommandId(self._last_id)
        self._records[command_id] = CommandRecord(
            id=command_id, tool=tool, args=args,
        )
        logger.debug(
            f"Enqueued command {command_id} ({tool})",
            extra={
                "command_id": command_id, "tool_name": tool,
                "queue_size": len(self._records),
            },
        )
        return command_id

    def claim_pending(self) -> list[CommandRecord]:
        """Mark every PENDING record SENT and return them in creation order."""
        claimed = [
            r for r in self._records.values()
            if r.status == CommandStatus.PENDING
        ]
        for record in claimed:
            record.mark_sent()
        if claimed:
            logger.info(
                f"Dispatched {len(claimed)} command(s) to Studio",
                extra={"queue_size": len(self._records)},
            )
        return claimed

    def resolve(self, command_id: int, outcome: CommandOutcome) -> bool:
        """Attach an outcome to a live record. Returns False if nothing was resolved."""
        record = self._records.get(command_id)
        if record is None:
            logger.debug(
                f"Discarding completion for unknown command {command_id}",
                extra={"command_id": command_id},
            )
            return False
        if record.status == CommandStatus.DONE:
            logger.warning(
                f"Ignoring duplicate completion for command {command_id}",
                extra={"command_id": command_id, "tool_name": record.tool},
            )
            return False
        record.mark_done(outcome)
        return True

    async def await_result(
        self, command_id: int, timeout_ms: int | None = None,
    ) -> CommandOutcome:
        """Suspend until the record is DONE, then remove it and return its outcome.

        Raises CommandTimeoutError once timeout_ms has elapsed without a
        completion, and CommandVanishedError if the record leaves the live set
        by any other path. If the waiting task is cancelled the record is
        dropped too, so a PENDING command is never dispatched afterwards.
        """
        timeout_ms = self.default_timeout_ms if timeout_ms is None else timeout_ms
        interval = self.poll_interval_ms / 1000
        start = time.monotonic()

        try:
            while True:
                await asyncio.sleep(interval)
                record = self._records.get(command_id)
                if record is None:
                    logger.error(
                        f"Command {command_id} vanished before resolution",
                        extra={"command_id": command_id, "error_code": "COMMAND_VANISHED"},
                    )
                    raise CommandVanishedError(command_id)
                if record.status == CommandStatus.DONE:
                    return record.outcome
                if (time.monotonic() - start) * 1000 >= timeout_ms:
                    logger.warning(
                        f"Command {command_id} ({record.tool}) timed out after {timeout_ms}ms "
                        f"in status {record.status.value}",
                        extra={
                            "command_id": command_id, "tool_name": record.tool,
                            "timeout_ms": timeout_ms, "error_code": "COMMAND_TIMEOUT",
                        },
                    )
                    raise CommandTimeoutError(
                        command_id, timeout_ms,
                        ErrorContext(tool_name=record.tool),
                    )
        except asyncio.CancelledError:
            logger.info(
                f"Wait for command {command_id} cancelled, dropping it",
                extra={"command_id": command_id},
            )
            raise
        finally:
            self._records.pop(command_id, None)
