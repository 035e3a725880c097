#!/usr/bin/env python3
"""
Tool Registry for the Slack MCP server
Routes tool invocations to the Slack client and wraps results in the MCP
text content envelope. Separates MCP protocol handling from the Slack calls.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import mcp.types as types

from .exceptions import InvalidArgumentError, MissingArgumentError, UnknownToolError
from .log_manager import get_logger, get_logging_manager
from .slack_client import SlackClient
from .tools import TOOLS, TOOLS_BY_NAME, default_for, required_arguments

TOOL_PREFIX = "slack_"


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


class ToolRegistry:
    """
    Dispatches tool calls by name.

    Each catalog entry in tools.py has a matching handle_<name> method here,
    where <name> is the tool name without the "slack_" prefix. Required
    arguments are checked against the descriptor's schema before any handler
    runs, so a rejected call never reaches Slack.
    """

    def __init__(self, client: SlackClient):
        self.logger = get_logger('ToolRegistry', component='tools')
        self.client = client

    def list_tools(self) -> List[types.Tool]:
        """Return the static tool catalog"""
        return list(TOOLS)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Main entry point for tool execution.

        Args:
            name: Name of the MCP tool to execute
            arguments: Tool arguments from the MCP call

        Returns:
            {"content": [{"type": "text", "text": <serialized Slack response>}]}

        Raises:
            UnknownToolError: If the name is not in the catalog
            MissingArgumentError: If a required argument is absent
            InvalidArgumentError: If limit is not a number
            TransportError: If the Slack call fails
        """
        tool = TOOLS_BY_NAME.get(name)
        if tool is None:
            self.logger.warning(f"Rejected call to unknown tool: {name}")
            raise UnknownToolError(name)

        arguments = arguments or {}
        missing = [arg for arg in required_arguments(tool) if _is_missing(arguments.get(arg))]
        if missing:
            self.logger.warning(f"Rejected call to {name}: missing {missing}")
            raise MissingArgumentError(name, missing)

        get_logging_manager().log_with_context(
            self.logger, logging.INFO, f"Received tool call: {name}",
            {"arguments": sorted(arguments)}
        )

        handler = getattr(self, f"handle_{name[len(TOOL_PREFIX):]}")
        try:
            result = await handler(tool, arguments)
        except Exception as e:
            self.logger.error(f"Error executing tool {name}: {e}")
            raise

        return self._text_response(result)

    def _text_response(self, result: Any) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": json.dumps(result)}]}

    def _limit(self, tool: types.Tool, arguments: Dict[str, Any]) -> int:
        limit = arguments.get("limit")
        if limit is None:
            limit = default_for(tool, "limit")
        try:
            return int(limit)
        except (TypeError, ValueError):
            raise InvalidArgumentError(tool.name, "limit", limit)

    # ============================================================================
    # Channel Operations
    # ============================================================================

    async def handle_list_channels(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.get_channels(
            limit=self._limit(tool, args),
            cursor=args.get("cursor")
        )

    async def handle_get_channel_history(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.get_channel_history(
            args["channel_id"],
            limit=self._limit(tool, args)
        )

    async def handle_get_thread_replies(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.get_thread_replies(args["channel_id"], args["thread_ts"])

    # ============================================================================
    # Message Operations
    # ============================================================================

    async def handle_post_message(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.post_message(args["channel_id"], args["text"])

    async def handle_reply_to_thread(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.post_reply(args["channel_id"], args["thread_ts"], args["text"])

    async def handle_add_reaction(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.add_reaction(args["channel_id"], args["timestamp"], args["reaction"])

    # ============================================================================
    # User Operations
    # ============================================================================

    async def handle_get_users(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.get_users(
            limit=self._limit(tool, args),
            cursor=args.get("cursor")
        )

    async def handle_get_user_profile(self, tool: types.Tool, args: Dict) -> Any:
        return await self.client.get_user_profile(args["user_id"])
