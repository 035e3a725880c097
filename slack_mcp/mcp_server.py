"""
MCP protocol binding: a low-level mcp Server whose tools/list and tools/call
handlers delegate to the ToolRegistry.
"""

from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import Server

from .log_manager import get_logger
from .sessions import SessionConnection
from .tool_registry import ToolRegistry

SERVER_NAME = "slack-mcp-server"
SERVER_VERSION = "1.0.0"

logger = get_logger('mcp', component='transport')


def build_mcp_server(registry: ToolRegistry) -> Server:
    """Create the MCP server. One instance serves every session."""
    app = Server(SERVER_NAME, version=SERVER_VERSION)

    @app.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("Received listTools request")
        return registry.list_tools()

    # The registry checks required arguments itself and reports them by name
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        # Errors raised here come back to the client as isError tool results
        result = await registry.call_tool(name, arguments)
        return [
            types.TextContent(type="text", text=block["text"])
            for block in result["content"]
        ]

    return app


async def serve_session(app: Server, connection: SessionConnection):
    """Run the MCP loop for one session until its streams close."""
    try:
        await app.run(
            connection.read_stream,
            connection.write_stream,
            app.create_initialization_options()
        )
    except Exception as e:
        if connection.closed:
            # Client went away; late responses have nowhere to go
            logger.info(f"MCP session {connection.session_id} ended after disconnect: {e!r}")
        else:
            logger.error(f"MCP session {connection.session_id} failed: {e}", exc_info=True)
    finally:
        connection.close()
        connection.close_server_side()
