"""Command Record: the relay's unit of work and its lifecycle state.

Invariants:
    - status only moves forward: PENDING -> SENT -> DONE
    - outcome is None until status is DONE
    - CommandOutcome.failed is True iff the plugin reported a non-empty error

Design Decisions:
    - Mutable dataclass: the relay queue is the only writer, records are never
      shared outside the queue except as read-only snapshots for dispatch
    - str Enum for status: serializes to JSON without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType
import json
import time


CommandId = NewType("CommandId", int)


class CommandStatus(str, Enum):
    """Command lifecycle. Transitions are one-way."""
    PENDING = "pending"
    SENT = "sent"
    DONE = "done"


@dataclass(frozen=True)
class CommandOutcome:
    """What the executing client reported for a command."""
    result: Any = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return bool(self.error)

    @classmethod
    def from_report(cls, result: Any = None, error: Any = None) -> "CommandOutcome":
        """Build from a completion push. A falsy error counts as success.

        String errors are kept verbatim, any other JSON value is encoded.
        """
        if error:
            if not isinstance(error, str):
                error = json.dumps(error, ensure_ascii=False)
            return cls(result=None, error=error)
        return cls(result=result, error=None)


@dataclass
class CommandRecord:
    """One in-flight tool call, identified by a process-unique id."""
    id: CommandId
    tool: str
    args: dict[str, Any]
    status: CommandStatus = CommandStatus.PENDING
    outcome: CommandOutcome | None = None
    created_at: float = field(default_factory=time.monotonic)

    def mark_sent(self) -> None:
        if self.status != CommandStatus.PENDING:
            raise ValueError(
                f"Command {self.id} cannot be sent from status {self.status.value}",
            )
        self.status = CommandStatus.SENT

    def mark_done(self, outcome: CommandOutcome) -> None:
        if self.status == CommandStatus.DONE:
            raise ValueError(f"Command {self.id} is already resolved")
        self.outcome = outcome
        self.status = CommandStatus.DONE

    def age_ms(self) -> int:
        return int((time.monotonic() - self.created_at) * 1000)

    def to_dispatch(self) -> dict[str, Any]:
        """Shape sent to the plugin on poll."""
        return {"id": self.id, "tool": self.tool, "args": self.args}
