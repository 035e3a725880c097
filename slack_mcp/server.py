#!/usr/bin/env python3
"""
FastAPI Server for the Slack MCP adapter
Serves MCP over Server-Sent Events.

This server:
1. Opens one MCP session per GET /sse connection
2. Routes POST /messages?sessionId=... to the matching session
3. Forwards tool calls to the Slack Web API
4. Exposes health and debug endpoints
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import anyio
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from pydantic import ValidationError

import mcp.types as types

from .config import ServerConfig
from .exceptions import UnknownSessionError
from .log_manager import get_logger, get_logging_manager
from .mcp_server import SERVER_NAME, SERVER_VERSION, build_mcp_server, serve_session
from .sessions import ConnectionRegistry
from .slack_client import SlackClient
from .tool_registry import ToolRegistry

logger = get_logger('server')

# How often an idle SSE stream checks whether its client is still there
DISCONNECT_POLL_SECONDS = 1.0


def format_sse(event: str, data: str) -> str:
    """Format one Server-Sent Event"""
    return f"event: {event}\ndata: {data}\n\n"


def create_app(config: ServerConfig, slack_client: Optional[SlackClient] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Validated server configuration
        slack_client: Client to use instead of one built from config

    Returns:
        FastAPI app with state: slack, tools, mcp, connections
    """
    client = slack_client
    if client is None:
        client = SlackClient.from_credentials(config.credentials, base_url=config.api_base_url)
    registry = ToolRegistry(client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown of shared resources."""
        removed = get_logging_manager().cleanup_old_logs()
        if removed:
            logger.info(f"Removed {removed} old log files")
        logger.info(f"Slack MCP Server running on port {config.port}")

        yield

        logger.info("Shutting down Slack MCP Server...")
        app.state.connections.close_all()
        await app.state.slack.close()
        logger.info("Server shutdown complete")

    app = FastAPI(
        title="Slack MCP Server",
        description="MCP tools for the Slack Web API over Server-Sent Events",
        version=SERVER_VERSION,
        lifespan=lifespan
    )
    app.state.config = config
    app.state.slack = client
    app.state.tools = registry
    app.state.mcp = build_mcp_server(registry)
    app.state.connections = ConnectionRegistry()

    # ==============================================================================
    # Health & Status Endpoints
    # ==============================================================================

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Slack MCP Server is running"

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": SERVER_VERSION
        }

    @app.get("/debug")
    async def debug(request: Request):
        """Runtime configuration and session count (token masked)"""
        state = request.app.state
        return {
            "env": {
                "SLACK_BOT_TOKEN": state.config.credentials.masked_token(),
                "SLACK_TEAM_ID": state.config.credentials.team_id,
                "PORT": state.config.port
            },
            "transports": len(state.connections),
            "serverInfo": {
                "name": SERVER_NAME,
                "version": SERVER_VERSION
            }
        }

    # ==============================================================================
    # MCP over SSE
    # ==============================================================================

    @app.get("/sse")
    async def open_stream(request: Request):
        """
        Open an MCP session. The first event tells the client where to POST
        its messages; every server message follows as a "message" event.
        """
        state = request.app.state

        async def event_generator():
            # Registered only once the body is streamed, so the finally below
            # always runs for a registered session
            connection = state.connections.open()
            connection.task = asyncio.create_task(serve_session(state.mcp, connection))
            try:
                yield format_sse("endpoint", connection.endpoint)
                while True:
                    session_message = None
                    with anyio.move_on_after(DISCONNECT_POLL_SECONDS):
                        try:
                            session_message = await connection.write_stream_reader.receive()
                        except (anyio.EndOfStream, anyio.ClosedResourceError):
                            break
                    if session_message is None:
                        # Idle stream: nothing is sent, so check for a dropped client
                        if await request.is_disconnected():
                            break
                        continue
                    yield format_sse(
                        "message",
                        session_message.message.model_dump_json(by_alias=True, exclude_none=True)
                    )
            finally:
                # Client disconnected or the MCP loop ended
                connection.close()

        return StreamingResponse(
            event_generator(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "X-Accel-Buffering": "no",  # Disable Nginx buffering
            }
        )

    @app.post("/messages", status_code=202)
    async def post_message(
        request: Request,
        session_id: Optional[str] = Query(None, alias="sessionId")
    ):
        """Deliver one JSON-RPC message to an open session"""
        connections: ConnectionRegistry = request.app.state.connections

        if not session_id:
            raise HTTPException(status_code=400, detail="sessionId is required")

        body = await request.body()
        try:
            message = types.JSONRPCMessage.model_validate_json(body)
        except ValidationError as e:
            logger.warning(f"Could not parse message for session {session_id}: {e}")
            raise HTTPException(status_code=400, detail="Could not parse message")

        try:
            await connections.route(session_id, message)
        except UnknownSessionError as e:
            logger.warning(str(e))
            raise HTTPException(status_code=400, detail=str(e))

        return PlainTextResponse("Accepted", status_code=202)

    return app
