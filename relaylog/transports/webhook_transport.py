"""
Webhook transport

Posts each record as a JSON message to an HTTP webhook (Discord-compatible
payload: content, username, avatar_url).
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import json
import time
from dataclasses import replace
from typing import Any, Dict, Optional

import requests

from relaylog.core.exceptions import WebhookError
from relaylog.core.level_gate import ALL, EnabledLevels
from relaylog.core.level_set import LevelSet
from relaylog.core.log_record import LogRecord
from relaylog.formatters.base_formatter import Formatter
from relaylog.transports.connection_stats import ConnectionStats
from relaylog.transports.format_transport import FormatTransport


class WebhookTransport(FormatTransport):
    """
    Send records to an HTTP webhook.

    The formatter may return a payload dict, or text which becomes the
    ``content`` field. Requests run on the event loop's default executor,
    one at a time, with a ``delay`` pause after each post to respect the
    endpoint's rate limits.

    Example:
        hook = WebhookTransport(
            DEFAULT_LEVELS,
            url="https://discord.com/api/webhooks/...",
            username="relaylog",
            enabled=["critical", "error"],
        )
        await logger.use(hook)
    """

    def __init__(
        self,
        levels: LevelSet,
        url: str,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
        delay: float = 0.2,
        timeout: float = 10.0,
        enabled: EnabledLevels = ALL,
        formatter: Optional[Formatter] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize webhook transport.

        Args:
            levels: Level set of the logger this transport will serve
            url: Webhook URL
            username: Username added to messages that have none
            avatar_url: Avatar URL added to messages that have none
            delay: Pause in seconds after every post
            timeout: HTTP request timeout in seconds
            enabled: Levels this transport writes (default: all)
            formatter: Returns a payload dict, str or bytes
            session: requests session to post with (default: a new one)
        """
        super().__init__(levels, enabled, formatter)
        if not url:
            raise ValueError("url is required")
        self.url = url
        self.username = username
        self.avatar_url = avatar_url
        self.delay = delay
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._stats = ConnectionStats()

    async def init(self) -> None:
        self._check_can_init()
        started = time.monotonic()
        if self._session is None:
            self._session = requests.Session()
        self._stats.record_connect(started)
        await super().init()

    async def _deliver(self, record: LogRecord) -> Any:
        payload = await self.build_payload(record)
        try:
            return await self._post(payload)
        finally:
            if self.delay > 0:
                await asyncio.sleep(self.delay)
                self._stats.record_throttle(self.delay)

    async def build_payload(self, record: LogRecord) -> Dict[str, Any]:
        """
        Build the JSON payload for a record.

        Args:
            record: Log record to send

        Returns:
            Payload dictionary
        """
        if self._formatter is None:
            message: Any = self.to_string(record)
        else:
            message = self._formatter(record)
            if inspect.isawaitable(message):
                message = await message

        if isinstance(message, (bytes, bytearray)):
            message = bytes(message).decode("utf-8", errors="replace")
        if isinstance(message, str):
            payload = {"content": message}
        else:
            payload = dict(message)

        if not payload.get("username") and self.username:
            payload["username"] = self.username
        if not payload.get("avatar_url") and self.avatar_url:
            payload["avatar_url"] = self.avatar_url
        return payload

    async def _post(self, payload: Dict[str, Any]) -> requests.Response:
        loop = asyncio.get_running_loop()
        post = functools.partial(
            self._session.post,
            self.url,
            json=payload,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        try:
            response = await loop.run_in_executor(None, post)
        except requests.RequestException as e:
            self._stats.record_failure(str(e))
            raise WebhookError(f"Webhook request failed: {e}") from e

        if response.status_code >= 400:
            reason = _error_message(response)
            self._stats.record_failure(reason)
            raise WebhookError(f"Webhook rejected message ({response.status_code}): {reason}")

        self._stats.record_sent(len(json.dumps(payload).encode("utf-8")))
        return response

    async def close(self) -> None:
        self._stats.record_disconnect()
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def get_stats(self) -> ConnectionStats:
        """Copy of the delivery statistics."""
        return replace(self._stats)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or ""
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text
