"""
Exception classes for the Slack MCP server.
"""

from typing import Iterable


class SlackMCPError(Exception):
    """Base exception for all Slack MCP server errors."""
    pass


class ConfigurationError(SlackMCPError):
    """Raised when required startup configuration is missing or invalid."""
    pass


class UnknownToolError(SlackMCPError):
    """Raised when a tool invocation names a tool that is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class MissingArgumentError(SlackMCPError):
    """Raised when a required tool argument is absent."""

    def __init__(self, tool: str, missing: Iterable[str]):
        self.tool = tool
        self.missing = list(missing)
        super().__init__(
            f"Missing required arguments for {tool}: {', '.join(self.missing)}"
        )


class InvalidArgumentError(SlackMCPError):
    """Raised when a tool argument cannot be converted to its declared type."""

    def __init__(self, tool: str, argument: str, value):
        self.tool = tool
        self.argument = argument
        self.value = value
        super().__init__(f"Invalid value for {argument} in {tool}: {value!r}")


class UnknownSessionError(SlackMCPError):
    """Raised when a posted message references a session that is not open."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"No transport found for sessionId: {session_id}")


class TransportError(SlackMCPError):
    """Raised when the HTTP call to Slack fails or returns a non-JSON body."""
    pass
