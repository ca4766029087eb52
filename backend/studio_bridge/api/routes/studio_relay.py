"""Studio Relay Routes: the poll and completion endpoints used by the plugin.

Invariants:
    - GET /studio/poll returns each pending command exactly once, oldest first
    - GET /studio/poll with nothing pending returns [] (not an error)
    - POST /studio/result always acknowledges, even for unknown or late ids

Design Decisions:
    - Plugin cannot tell "accepted" from "too late": the ack carries no match
      flag, the mismatch is only logged
"""

import logging

from fastapi import APIRouter, Depends

from studio_bridge.api.dependencies import get_relay_queue
from studio_bridge.core.command_record import CommandOutcome
from studio_bridge.schemas.commands import Ack, CompletionReport, DispatchedCommand
from studio_bridge.services.relay_queue import RelayQueue

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/studio", tags=["studio"])


@router.get("/poll", response_model=list[DispatchedCommand])
async def poll_commands(relay: RelayQueue = Depends(get_relay_queue)):
    """Claim every pending command for the plugin."""
    return [record.to_dispatch() for record in relay.claim_pending()]


@router.post("/result", response_model=Ack)
async def post_result(
    body: CompletionReport, relay: RelayQueue = Depends(get_relay_queue),
):
    """Record the plugin's outcome for one command."""
    outcome = CommandOutcome.from_report(body.result, body.error)
    if not relay.resolve(body.id, outcome):
        logger.debug(
            f"Completion for command {body.id} matched no live command",
            extra={"command_id": body.id},
        )
    return Ack()
