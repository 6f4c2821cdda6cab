"""
Notifier repository (Telegram Bot API).

One-shot message sink: each sale produces exactly one message to a single
fixed chat, rendered with Markdown formatting.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from repositories.errors import SinkError, StartupError

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE: str = "https://api.telegram.org"
PARSE_MODE: str = "Markdown"


class TelegramNotifier:
    """
    Sends sale notifications to a Telegram chat.

    The underlying httpx.Client is thread-safe and shared by all requests.
    """

    def __init__(
        self,
        token: str,
        chat_id: int,
        client: Optional[httpx.Client] = None,
        base_url: str = TELEGRAM_API_BASE,
        timeout: float = 30.0,
    ) -> None:
        if not token:
            raise StartupError("TELEGRAM_BOT_TOKEN environment variable is required")
        self.chat_id = chat_id
        self._endpoint = f"{base_url.rstrip('/')}/bot{token}"
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def _call(self, method: str, payload: Optional[dict] = None) -> Any:
        response = self._client.post(f"{self._endpoint}/{method}", json=payload or {})
        data = response.json() if response.content else {}
        if response.status_code >= 400 or not data.get("ok", False):
            description = data.get("description") or f"HTTP {response.status_code}"
            raise httpx.HTTPStatusError(
                f"Bot API {method} failed: {description}",
                request=response.request,
                response=response,
            )
        return data.get("result")

    def verify(self) -> None:
        """
        Check the bot token against the Bot API (getMe).

        Raises:
            StartupError: the token is rejected or the API is unreachable
        """

        try:
            me = self._call("getMe")
        except (httpx.HTTPError, ValueError) as e:
            raise StartupError(f"failed to create Telegram bot: {e}") from e
        logger.info("Authorized on Telegram account %s", (me or {}).get("username"))

    def send_message(self, text: str) -> None:
        """
        Send one message to the configured chat.

        Raises:
            SinkError: transport failure or the Bot API rejected the message
        """

        try:
            self._call(
                "sendMessage",
                {"chat_id": self.chat_id, "text": text, "parse_mode": PARSE_MODE},
            )
        except (httpx.HTTPError, ValueError) as e:
            raise SinkError(f"failed to send Telegram message: {e}") from e

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


__all__ = ["TelegramNotifier", "TELEGRAM_API_BASE"]
