#!/usr/bin/env python3
"""
Connection registry for SSE sessions.

Every GET /sse opens one SessionConnection: a pair of in-memory streams that
carry JSON-RPC messages between the HTTP layer and that session's MCP server
loop. POST /messages looks the session up here by id to deliver the client's
message. An entry exists exactly while its connection is open.

All access happens on the event loop thread, so the mapping needs no lock.
"""

import asyncio
import math
from typing import Callable, Dict, List, Optional
from uuid import uuid4

import anyio
import mcp.types as types
from mcp.shared.message import SessionMessage

from .exceptions import UnknownSessionError
from .log_manager import get_logger


class SessionConnection:
    """
    One client's open SSE session.

    read_stream / write_stream are handed to mcp.server.Server.run();
    read_stream_writer receives posted client messages and
    write_stream_reader feeds the SSE response.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        # Unbounded on both sides: no backpressure
        self.read_stream_writer, self.read_stream = anyio.create_memory_object_stream(math.inf)
        self.write_stream, self.write_stream_reader = anyio.create_memory_object_stream(math.inf)
        self.task: Optional[asyncio.Task] = None
        self.closed = False
        self._close_callbacks: List[Callable[["SessionConnection"], None]] = []

    @property
    def endpoint(self) -> str:
        """Relative URL the client must POST its messages to"""
        return f"/messages?sessionId={self.session_id}"

    def on_close(self, callback: Callable[["SessionConnection"], None]):
        self._close_callbacks.append(callback)

    async def deliver(self, message: types.JSONRPCMessage):
        """Hand one client message to the session's MCP server loop"""
        await self.read_stream_writer.send(SessionMessage(message))

    def close(self):
        """
        Close the client side of the session and run close callbacks (idempotent).

        The MCP loop sees end of input, finishes any tool call already running
        and exits; responses it still writes are dropped.
        """
        if self.closed:
            return
        self.closed = True

        self.read_stream_writer.close()
        self.write_stream_reader.close()
        if self.task is None:
            self.close_server_side()

        for callback in self._close_callbacks:
            callback(self)

    def close_server_side(self):
        """Close the streams owned by the MCP loop"""
        self.read_stream.close()
        self.write_stream.close()

    def abort(self):
        """Close the session and cancel its MCP loop, in-flight calls included"""
        self.close()
        if self.task is not None and not self.task.done():
            self.task.cancel()


class ConnectionRegistry:
    """Maps session ids to open SessionConnections."""

    def __init__(self):
        self.logger = get_logger('ConnectionRegistry', component='transport')
        self._connections: Dict[str, SessionConnection] = {}

    def open(self) -> SessionConnection:
        """Register a new session; it unregisters itself when closed"""
        connection = SessionConnection(uuid4().hex)
        self._connections[connection.session_id] = connection
        connection.on_close(self._forget)
        self.logger.info(f"Opened session {connection.session_id} ({len(self)} open)")
        return connection

    def _forget(self, connection: SessionConnection):
        self._connections.pop(connection.session_id, None)
        self.logger.info(f"Closed session {connection.session_id} ({len(self)} open)")

    def get(self, session_id: str) -> SessionConnection:
        connection = self._connections.get(session_id)
        if connection is None:
            raise UnknownSessionError(session_id)
        return connection

    async def route(self, session_id: str, message: types.JSONRPCMessage):
        """
        Deliver a posted message to the matching open session.

        Raises:
            UnknownSessionError: If no session with this id is open
        """
        connection = self.get(session_id)
        self.logger.debug(f"Routing message to session {session_id}")
        await connection.deliver(message)

    def close(self, session_id: str) -> bool:
        """Close a session by id. Returns False if it was not open."""
        connection = self._connections.get(session_id)
        if connection is None:
            return False
        connection.close()
        return True

    def close_all(self):
        """Abort every session (server shutdown)"""
        for connection in list(self._connections.values()):
            connection.abort()

    def session_ids(self) -> List[str]:
        return list(self._connections)

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._connections
