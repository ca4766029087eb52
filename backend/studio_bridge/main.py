"""Studio Bridge API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - One RelayQueue per process, owned by app.state and shared by the plugin
      endpoints, the REST tool surface and the MCP server
    - Global error handlers map BridgeError -> structured JSON responses
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Relay objects built at import time rather than in lifespan, so test
      clients that skip lifespan still get a working app
    - Lifespan only configures logging
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studio_bridge.api.error_handlers import register_error_handlers
from studio_bridge.api.routes import health, studio_relay, tools
from studio_bridge.api.routes.health import SERVICE_VERSION
from studio_bridge.api.routes.mcp_sse import mount_mcp_sse
from studio_bridge.config import get_settings
from studio_bridge.infrastructure.observability import setup_logging
from studio_bridge.services.mcp_server import StudioMcpBridge
from studio_bridge.services.relay_queue import RelayQueue
from studio_bridge.services.tool_invocation import ToolInvoker
from studio_bridge.services.tools_registry import build_default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Studio Bridge started")
    yield
    logger.info(
        "Studio Bridge shutting down",
        extra={"queue_size": app.state.relay_queue.size},
    )


app = FastAPI(
    title="Studio Bridge", version=SERVICE_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── RELAY ──────────────────────────────────────────────────────

app.state.relay_queue = RelayQueue(
    poll_interval_ms=settings.poll_interval_ms,
    default_timeout_ms=settings.command_timeout_ms,
)
app.state.tool_invoker = ToolInvoker(
    app.state.relay_queue, build_default_registry(),
)

# ─── ROUTES ─────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(studio_relay.router)
app.include_router(tools.router)
mount_mcp_sse(
    app,
    StudioMcpBridge(app.state.tool_invoker).build_server(settings.mcp_server_name),
)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
