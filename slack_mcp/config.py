"""
Configuration helpers for the Slack MCP server.
Reads everything from environment variables (optionally seeded from a .env file).
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_API_BASE_URL = "https://slack.com/api/"


@dataclass(frozen=True)
class SlackCredentials:
    """Bot token and workspace id, shared read-only by the Slack client."""
    bot_token: str
    team_id: str

    def masked_token(self) -> str:
        """Token with everything but the prefix hidden, safe for logs and /debug"""
        prefix = self.bot_token.split("-", 1)[0]
        return f"{prefix}-****" if prefix != self.bot_token else "****"


@dataclass(frozen=True)
class ServerConfig:
    credentials: SlackCredentials
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    api_base_url: str = DEFAULT_API_BASE_URL


class Config:
    """
    Configuration helper that reads from environment variables.

    Environment variables:
        SLACK_BOT_TOKEN: Bot token used as the bearer credential (required)
        SLACK_TEAM_ID: Workspace id sent on list calls (required)
        PORT: Listen port (default: 3000)
        HOST: Listen address (default: 0.0.0.0)
        SLACK_API_URL: Slack Web API base URL (default: https://slack.com/api/)
    """

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None,
                 dotenv: bool = True) -> ServerConfig:
        """
        Create configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            dotenv: Whether to load a .env file into os.environ first

        Returns:
            ServerConfig for create_app()

        Raises:
            ConfigurationError: If a required variable is missing or PORT is invalid
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        bot_token = environ.get("SLACK_BOT_TOKEN", "").strip()
        team_id = environ.get("SLACK_TEAM_ID", "").strip()

        missing = [
            name for name, value in (("SLACK_BOT_TOKEN", bot_token), ("SLACK_TEAM_ID", team_id))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Please set {' and '.join(missing)} environment variable"
                f"{'s' if len(missing) > 1 else ''}"
            )

        raw_port = environ.get("PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got {raw_port!r}")
        if not 0 < port < 65536:
            raise ConfigurationError(f"PORT out of range: {port}")

        return ServerConfig(
            credentials=SlackCredentials(bot_token=bot_token, team_id=team_id),
            host=environ.get("HOST") or DEFAULT_HOST,
            port=port,
            api_base_url=environ.get("SLACK_API_URL") or DEFAULT_API_BASE_URL,
        )
