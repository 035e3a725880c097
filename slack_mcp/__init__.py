"""
Slack MCP Server
Slack Web API operations exposed as MCP tools over Server-Sent Events.
"""

from .config import Config, ServerConfig, SlackCredentials
from .exceptions import (
    SlackMCPError,
    ConfigurationError,
    UnknownToolError,
    MissingArgumentError,
    InvalidArgumentError,
    UnknownSessionError,
    TransportError,
)
from .slack_client import SlackClient
from .tool_registry import ToolRegistry
from .sessions import ConnectionRegistry, SessionConnection

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ServerConfig",
    "SlackCredentials",
    "SlackMCPError",
    "ConfigurationError",
    "UnknownToolError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "UnknownSessionError",
    "TransportError",
    "SlackClient",
    "ToolRegistry",
    "ConnectionRegistry",
    "SessionConnection",
]
