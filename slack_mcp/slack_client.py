#!/usr/bin/env python3
"""
Slack Web API Client
One async method per supported operation. Every call attaches the bot token
and a JSON content type, and returns Slack's parsed JSON body untouched:
an {"ok": false, "error": ...} body is a normal return value, not an error.

Usage:
    client = SlackClient(bot_token="xoxb-...", team_id="T123")
    channels = await client.get_channels(limit=50)
    await client.close()
"""

import json
import asyncio
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import aiohttp

from .config import DEFAULT_API_BASE_URL, SlackCredentials
from .exceptions import TransportError
from .log_manager import get_logger

# Slack caps conversations.list / users.list pages at 200
MAX_PAGE_LIMIT = 200
DEFAULT_PAGE_LIMIT = 100
DEFAULT_HISTORY_LIMIT = 10


class SlackClient:
    """
    HTTP client for the Slack Web API.
    No retries, no rate-limit handling, no timeouts beyond aiohttp defaults.
    """

    def __init__(
        self,
        bot_token: str,
        team_id: str,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the Slack client.

        Args:
            bot_token: Bot token sent as the bearer credential
            team_id: Workspace id sent on list calls
            base_url: Slack Web API base URL (default: https://slack.com/api/)
            session: Existing aiohttp session to reuse (created lazily otherwise)
        """
        self.logger = get_logger('SlackClient', component='slack')
        # urljoin drops the last path segment unless the base ends in a slash
        self.base_url = (base_url or DEFAULT_API_BASE_URL).rstrip("/") + "/"
        self.team_id = team_id
        self.headers = {
            "Authorization": f"Bearer {bot_token}",
            "Content-Type": "application/json",
        }
        self.session = session
        self.logger.info("SlackClient initialized with token")

    @classmethod
    def from_credentials(cls, credentials: SlackCredentials,
                         base_url: Optional[str] = None) -> "SlackClient":
        return cls(credentials.bot_token, credentials.team_id, base_url=base_url)

    async def _ensure_session(self):
        """Ensure aiohttp session exists"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()

    async def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """Make one HTTP request to Slack and return the decoded JSON body"""
        await self._ensure_session()

        url = urljoin(self.base_url, endpoint)
        self.logger.debug(f"{method} {url}")

        try:
            async with self.session.request(method, url, headers=self.headers, **kwargs) as response:
                # Slack does not always label error bodies as application/json
                body = await response.json(content_type=None)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.error(f"Non-JSON response from {endpoint}: {e}")
            raise TransportError(f"Invalid JSON from Slack {endpoint}: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error(f"HTTP call to {endpoint} failed: {e}")
            raise TransportError(f"Request to Slack {endpoint} failed: {e}") from e

        if body is None:
            self.logger.error(f"Empty response body from {endpoint}")
            raise TransportError(f"Empty response from Slack {endpoint}")
        return body

    async def close(self):
        """Close the HTTP session"""
        if self.session and not self.session.closed:
            await self.session.close()

    # ==============================================================================
    # Channel Operations
    # ==============================================================================

    async def get_channels(self, limit: int = DEFAULT_PAGE_LIMIT,
                           cursor: Optional[str] = None) -> Dict[str, Any]:
        """List public, non-archived channels in the workspace"""
        params = {
            "types": "public_channel",
            "exclude_archived": "true",
            "limit": str(min(limit, MAX_PAGE_LIMIT)),
            "team_id": self.team_id,
        }
        if cursor:
            params["cursor"] = cursor

        return await self._request("GET", "conversations.list", params=params)

    async def get_channel_history(self, channel_id: str,
                                  limit: int = DEFAULT_HISTORY_LIMIT) -> Dict[str, Any]:
        """Get recent messages from a channel"""
        params = {
            "channel": channel_id,
            "limit": str(limit),
        }
        return await self._request("GET", "conversations.history", params=params)

    async def get_thread_replies(self, channel_id: str, thread_ts: str) -> Dict[str, Any]:
        """Get all replies in a message thread"""
        params = {
            "channel": channel_id,
            "ts": thread_ts,
        }
        return await self._request("GET", "conversations.replies", params=params)

    # ==============================================================================
    # Message Operations
    # ==============================================================================

    async def post_message(self, channel_id: str, text: str) -> Dict[str, Any]:
        """Post a new message to a channel"""
        return await self._request(
            "POST",
            "chat.postMessage",
            json={
                "channel": channel_id,
                "text": text,
            }
        )

    async def post_reply(self, channel_id: str, thread_ts: str, text: str) -> Dict[str, Any]:
        """Reply to a thread"""
        return await self._request(
            "POST",
            "chat.postMessage",
            json={
                "channel": channel_id,
                "thread_ts": thread_ts,
                "text": text,
            }
        )

    async def add_reaction(self, channel_id: str, timestamp: str, reaction: str) -> Dict[str, Any]:
        """Add an emoji reaction to a message"""
        return await self._request(
            "POST",
            "reactions.add",
            json={
                "channel": channel_id,
                "timestamp": timestamp,
                "name": reaction,
            }
        )

    # ==============================================================================
    # User Operations
    # ==============================================================================

    async def get_users(self, limit: int = DEFAULT_PAGE_LIMIT,
                        cursor: Optional[str] = None) -> Dict[str, Any]:
        """List workspace users"""
        params = {
            "limit": str(min(limit, MAX_PAGE_LIMIT)),
            "team_id": self.team_id,
        }
        if cursor:
            params["cursor"] = cursor

        return await self._request("GET", "users.list", params=params)

    async def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        """Get a user's full profile"""
        params = {
            "user": user_id,
            "include_labels": "true",
        }
        return await self._request("GET", "users.profile.get", params=params)
